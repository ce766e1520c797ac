# timeseries.py

from datetime import datetime
from typing import Dict, List, Optional
import logging

from sqlalchemy import select

from brewhouse.models import Measurement, ProcessSet
from brewhouse.models.records import to_naive_utc
from .database import Database, SensorDataRow


logger = logging.getLogger(__name__)


class TimeSeriesStore:
    """
    Append-only store of sensor measurements.

    Results for a process are always ordered by (timestamp, id), so rows
    sharing a timestamp come back in insertion order on every call.
    """

    def __init__(self, db: Database, processes: ProcessSet, *, read_timeout: Optional[float] = 10.0):
        self.db = db
        self.processes = processes
        self.read_timeout = read_timeout

    async def append(self, process: str, values: Dict[str, float], at: datetime) -> int:
        """Store one measurement and return its id."""
        self.processes.require(process)
        row = SensorDataRow(process=process, values=dict(values), timestamp=to_naive_utc(at))

        def _insert(session) -> int:
            session.add(row)
            session.flush()
            return row.id

        return await self.db.run(_insert)

    async def tail(self, process: str, limit: int) -> List[Measurement]:
        """The ``limit`` most recent measurements, oldest first."""
        self.processes.require(process)
        if limit <= 0:
            raise ValueError(f"limit must be positive, got {limit}")
        stmt = (
            select(SensorDataRow)
            .where(SensorDataRow.process == process)
            .order_by(SensorDataRow.timestamp.desc(), SensorDataRow.id.desc())
            .limit(limit)
        )

        def _read(session) -> List[Measurement]:
            rows = session.scalars(stmt).all()
            return [Measurement.from_row(r) for r in reversed(rows)]

        result = await self.db.run(_read, timeout=self.read_timeout)
        logger.debug("tail(%s, %d) -> %d rows", process, limit, len(result))
        return result

    async def range(self, process: str, start: datetime, end: datetime) -> List[Measurement]:
        """All measurements with ``start <= timestamp < end``, oldest first."""
        self.processes.require(process)
        stmt = (
            select(SensorDataRow)
            .where(
                SensorDataRow.process == process,
                SensorDataRow.timestamp >= to_naive_utc(start),
                SensorDataRow.timestamp < to_naive_utc(end),
            )
            .order_by(SensorDataRow.timestamp.asc(), SensorDataRow.id.asc())
        )

        def _read(session) -> List[Measurement]:
            return [Measurement.from_row(r) for r in session.scalars(stmt).all()]

        result = await self.db.run(_read, timeout=self.read_timeout)
        logger.debug("range(%s, %s, %s) -> %d rows", process, start, end, len(result))
        return result
