"""
Clocks for the carousel controller.

The controller never sleeps or schedules callbacks; it reads elapsed time
from a clock. SystemClock is used in production, VirtualClock lets tests
step time forward without waiting.
"""

import time
from typing import Protocol


class Clock(Protocol):
    def now_ms(self) -> float:
        """Current time in milliseconds (monotonic)."""
        ...


class SystemClock:
    """Monotonic wall clock."""

    def now_ms(self) -> float:
        return time.monotonic() * 1000.0


class VirtualClock:
    """Manually advanced clock."""

    def __init__(self, start_ms: float = 0.0):
        self._now = float(start_ms)

    def now_ms(self) -> float:
        return self._now

    def advance(self, ms: float) -> None:
        if ms < 0:
            raise ValueError("VirtualClock cannot go backwards")
        self._now += ms

    def __repr__(self) -> str:
        return f"<VirtualClock now_ms={self._now}>"
