"""
Delayed re-fetch scheduling.

After a mutation that the backend processes asynchronously (starting
signature analysis, triggering HTML extraction) pages schedule a refresh a
few seconds later instead of polling. Schedules are keyed so one page can
hold several independent ones.
"""

import time
from typing import Callable, Dict, Optional

ANALYSIS_REFRESH_SECONDS = 3.0
EXTRACTION_REFRESH_SECONDS = 5.0


class DelayedRefresh:
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._due: Dict[str, float] = {}

    def schedule(self, key: str, delay_seconds: float) -> None:
        self._due[key] = self.clock() + max(0.0, delay_seconds)

    def cancel(self, key: str) -> None:
        self._due.pop(key, None)

    def pending(self, key: str) -> bool:
        return key in self._due

    def remaining(self, key: str) -> Optional[float]:
        """Seconds until key is due (0 when already due), or None when nothing is scheduled."""
        due = self._due.get(key)
        if due is None:
            return None
        return max(0.0, due - self.clock())

    def pop_due(self, key: str) -> bool:
        """True once the schedule for key has elapsed; the schedule is then cleared."""
        remaining = self.remaining(key)
        if remaining is None or remaining > 0:
            return False
        del self._due[key]
        return True
