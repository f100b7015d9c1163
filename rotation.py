"""
rotation.py

Page rotation state, the timer-driven scheduler and the manual navigator.
Both movers step through the same `PageCycle`, so arrow keys and the timer
can never disagree about what comes next.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pages import PageCycle
from timing import PeriodicTimer

logger = logging.getLogger(__name__)


@dataclass
class RotationState:
    active_page: str
    is_paused: bool = False
    include_optional: bool = True


class RotationScheduler:
    """Advances `state.active_page` every timer period unless paused."""

    def __init__(self, cycle: PageCycle, period: float,
                 state: RotationState | None = None) -> None:
        self.cycle = cycle
        self.state = state or RotationState(active_page=cycle.first)
        self.timer = PeriodicTimer(period)

    def start(self, now: float) -> None:
        if not self.state.is_paused:
            self.timer.start(now)

    def stop(self) -> None:
        self.timer.stop()

    def advance(self) -> str:
        s = self.state
        s.active_page = self.cycle.next(s.active_page, s.include_optional)
        return s.active_page

    def tick(self, now: float) -> bool:
        """Advance if a rotation period has elapsed; True when the page moved."""
        if self.state.is_paused or not self.timer.poll(now):
            return False
        before = self.state.active_page
        self.advance()
        logger.debug("Rotated %s → %s", before, self.state.active_page)
        return self.state.active_page != before

    # ---------------------------------------------------------- user toggles
    def set_paused(self, paused: bool, now: float) -> None:
        if paused == self.state.is_paused:
            return
        self.state.is_paused = paused
        if paused:
            self.timer.suspend()
        else:
            self.timer.resume(now)       # fresh full period, no instant fire

    def toggle_pause(self, now: float) -> None:
        self.set_paused(not self.state.is_paused, now)

    def toggle_optional(self) -> None:
        # Takes effect at the next transition; an excluded active page stays up.
        self.state.include_optional = not self.state.include_optional


class Navigator:
    """Manual prev/next over the scheduler's cycle and state."""

    def __init__(self, scheduler: RotationScheduler,
                 reset_timer: bool = False) -> None:
        self.scheduler = scheduler
        self.reset_timer = reset_timer

    def _moved(self, now: float | None) -> str:
        sch = self.scheduler
        if self.reset_timer and now is not None and sch.timer.running:
            sch.timer.start(now)
        return sch.state.active_page

    def forward(self, now: float | None = None) -> str:
        self.scheduler.advance()
        return self._moved(now)

    def backward(self, now: float | None = None) -> str:
        s = self.scheduler.state
        s.active_page = self.scheduler.cycle.prev(s.active_page, s.include_optional)
        return self._moved(now)
