# =========  timing.py  =========
"""
Monotonic-clock helpers and the periodic timer that drives both the data
poll and the page rotation from inside the main loop.
"""

from __future__ import annotations

import time


def now() -> float:
    """Seconds on the monotonic clock (unaffected by wall-clock changes)."""
    return time.monotonic()


class PeriodicTimer:
    """
    Fires every *period* seconds once started, the way a JS setInterval does:
    the first fire is one full period after `start()` / `resume()`.

    Late checks fire once and skip the missed periods rather than bursting.
    """

    def __init__(self, period: float) -> None:
        if period <= 0:
            raise ValueError("period must be positive")
        self.period = float(period)
        self.next_at: float | None = None      # None → not running

    @property
    def running(self) -> bool:
        return self.next_at is not None

    def start(self, at: float) -> None:
        self.next_at = at + self.period

    resume = start

    def suspend(self) -> None:
        self.next_at = None

    stop = suspend

    def poll(self, at: float) -> bool:
        """True if a period elapsed at time *at*; re-arms for the next one."""
        if self.next_at is None or at < self.next_at:
            return False
        missed = int((at - self.next_at) // self.period)
        self.next_at += (missed + 1) * self.period
        return True
