# query_service.py

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any, Dict, List, Optional, Tuple
import logging

from brewhouse.core.exceptions import InvalidDate
from brewhouse.models import Measurement, ProcessSet
from brewhouse.sensors import MeasurementGenerator
from brewhouse.storage import TimeSeriesStore


logger = logging.getLogger(__name__)


class QueryService:
    """Read paths: current reading, live tail and one-day history."""

    def __init__(self,
                 generator: MeasurementGenerator,
                 store: TimeSeriesStore,
                 processes: ProcessSet,
                 *,
                 tail_limit: int = 50,
                 tz: Optional[tzinfo] = None):
        self.generator = generator
        self.store = store
        self.processes = processes
        self.tail_limit = tail_limit
        self.tz = tz or timezone.utc

    def current(self, process: str) -> Dict[str, Any]:
        """Live generator output; nothing is persisted."""
        data = self.generator.generate(process)
        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "process": process,
            "data": data,
        }

    async def live(self, process: str) -> List[Measurement]:
        return await self.store.tail(self.processes.require(process), self.tail_limit)

    async def history(self, process: str, day: str) -> List[Measurement]:
        self.processes.require(process)
        start, end = self.day_window(day)
        logger.info("history %s for %s: [%s, %s)", process, day, start.isoformat(), end.isoformat())
        return await self.store.range(process, start, end)

    def day_window(self, day: str) -> Tuple[datetime, datetime]:
        """``[day 00:00, day+1 00:00)`` in the reference zone, as UTC instants."""
        try:
            parsed = date.fromisoformat(day)
        except (TypeError, ValueError) as e:
            raise InvalidDate(day) from e
        try:
            start = datetime.combine(parsed, time.min, tzinfo=self.tz)
            end = datetime.combine(parsed + timedelta(days=1), time.min, tzinfo=self.tz)
            return start.astimezone(timezone.utc), end.astimezone(timezone.utc)
        except OverflowError as e:
            # first and last representable days have no complete UTC window
            raise InvalidDate(day) from e
