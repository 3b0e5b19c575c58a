"""Clock sources for the stopwatch."""

import time
from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """Monotonic time plus calendar time for export."""

    def now(self) -> float:
        """Seconds since an arbitrary epoch, never decreasing."""
        ...

    def wall_now(self) -> datetime:
        """Current calendar time."""
        ...


class MonotonicClock:
    """Clock backed by the high-resolution performance counter."""

    def __init__(self):
        self._epoch = time.perf_counter()

    def now(self) -> float:
        return time.perf_counter() - self._epoch

    def wall_now(self) -> datetime:
        return datetime.now()
