import time
from typing import Any, Callable, Dict
from .base_trigger import TriggerStrategy

class IntervalTrigger(TriggerStrategy):
    """Fires immediately on first check, then once every ``interval_seconds``"""

    def __init__(self, trigger_config: Dict[str, Any], clock: Callable[[], float] = time.monotonic):
        super().__init__(trigger_config)
        self.interval_seconds = float(trigger_config.get("interval_seconds", 5))
        if self.interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {self.interval_seconds}")
        self._clock = clock

    async def should_trigger(self) -> bool:
        current_time = self._clock()

        if self.last_execution is None or (current_time - self.last_execution) >= self.interval_seconds:
            self.last_execution = current_time
            self.execution_count += 1
            return True

        return False

    def get_next_check_interval(self) -> float:
        if self.last_execution is None:
            return 0.0  # Check immediately

        elapsed = self._clock() - self.last_execution
        return max(0.0, self.interval_seconds - elapsed)

    def reset_state(self) -> None:
        self.last_execution = None
        self.execution_count = 0
