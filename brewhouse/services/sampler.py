"""Background sampler: one measurement per process per tick."""
from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from brewhouse.core.patterns import SamplerState, StateMachine
from brewhouse.models import ProcessSet
from brewhouse.sensors import MeasurementGenerator
from brewhouse.storage import TimeSeriesStore
from brewhouse.triggers import IntervalTrigger, TriggerStrategy


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class TickReport:
    """Outcome of one tick: stored ids and failures keyed by process."""
    started: datetime
    stored: Dict[str, int] = field(default_factory=dict)
    failed: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


class SamplerLoop:
    """
    Periodically generates a reading for every configured process and appends
    it to the store.

    Processes are sampled concurrently inside a tick and each one is isolated:
    a failing generator call or append is logged and recorded in the tick
    report, the remaining processes and all future ticks still run. Ticks never
    overlap; the next check is scheduled once the current tick has finished.
    """

    def __init__(self,
                 generator: MeasurementGenerator,
                 store: TimeSeriesStore,
                 processes: ProcessSet,
                 *,
                 interval: float = 5.0,
                 trigger: Optional[TriggerStrategy] = None,
                 clock: Callable[[], datetime] = _utc_now):
        self.generator = generator
        self.store = store
        self.processes = processes
        self.trigger = trigger or IntervalTrigger({"interval_seconds": interval})
        self.log = logging.getLogger(self.__class__.__name__)
        self.state = StateMachine(SamplerState.IDLE)
        self.tick_count = 0
        self.failure_count = 0
        self.last_tick: Optional[TickReport] = None
        self._clock = clock
        self._last_ts: Dict[str, datetime] = {}
        self._stop_event: Optional[asyncio.Event] = None
        self._task: Optional[asyncio.Task] = None

    # --------------------------------------------------------------------- #
    #  Lifecycle
    # --------------------------------------------------------------------- #
    def start(self) -> None:
        if not self.state.transition(SamplerState.RUNNING):
            raise RuntimeError(f"sampler cannot start from {self.state.state.name}")
        self._stop_event = asyncio.Event()
        self.trigger.reset_state()
        self._task = asyncio.create_task(self._run(), name="sensor-sampler")
        self.log.info("sampler started (%d processes, every %.1fs)",
                      len(self.processes), getattr(self.trigger, "interval_seconds", 0.0))

    async def stop(self) -> None:
        """Signal the loop and wait for the in-flight tick to finish."""
        if self.state.state is SamplerState.IDLE:
            self.state.transition(SamplerState.STOPPED)
            return
        if not self.state.transition(SamplerState.STOPPING):
            return
        self._stop_event.set()
        try:
            await self._task
        finally:
            self.state.transition(SamplerState.STOPPED)
            self.log.info("sampler stopped after %d ticks (%d failed writes)",
                          self.tick_count, self.failure_count)

    @property
    def running(self) -> bool:
        return self.state.state is SamplerState.RUNNING

    async def _run(self) -> None:
        while not self._stop_event.is_set():
            if await self.trigger.should_trigger():
                await self.tick()
            delay = self.trigger.get_next_check_interval()
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=delay)
            except asyncio.TimeoutError:
                pass

    # --------------------------------------------------------------------- #
    #  Tick
    # --------------------------------------------------------------------- #
    async def tick(self) -> TickReport:
        report = TickReport(started=self._clock())
        processes = list(self.processes)
        results = await asyncio.gather(*(self._sample_one(p) for p in processes))
        for process, result in zip(processes, results):
            if isinstance(result, Exception):
                report.failed[process] = f"{type(result).__name__}: {result}"
            else:
                report.stored[process] = result

        self.tick_count += 1
        self.failure_count += len(report.failed)
        self.last_tick = report
        self.log.debug("tick %d: stored=%s failed=%s", self.tick_count,
                       sorted(report.stored), sorted(report.failed))
        return report

    async def _sample_one(self, process: str):
        try:
            values = self.generator.generate(process)
            stored_id = await self.store.append(process, values, self._next_timestamp(process))
            self.log.debug("saved sensor data for %s (id=%d)", process, stored_id)
            return stored_id
        except Exception as e:
            self.log.error("error saving %s: %s", process, e, exc_info=True)
            return e

    def _next_timestamp(self, process: str) -> datetime:
        ts = self._clock()
        last = self._last_ts.get(process)
        if last is not None and ts <= last:
            ts = last + timedelta(microseconds=1)
        self._last_ts[process] = ts
        return ts

    def get_stats(self) -> Dict[str, object]:
        return {
            "state": self.state.state.name.lower(),
            "tick_count": self.tick_count,
            "failure_count": self.failure_count,
            "last_tick": self.last_tick.started.isoformat() if self.last_tick else None,
        }
