"""
session.py – one display session: poll timer, rotation timer, ranking mode.

The main loop calls `update(now)` every frame and `apply(action)` for every
queued action; both run on that one thread, so nothing here needs a lock.
`snapshot()` is what the renderer (and the web remote) read.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Mapping, Optional, Tuple

import config
from pages import DisplayType, PageConfig, PageCycle
from poller import Deliver, PollCoordinator, PollTicket
from records import RankingMode
from rotation import Navigator, RotationScheduler
from timing import PeriodicTimer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderSnapshot:
    page: str
    display_type: DisplayType
    records: Tuple
    mode: RankingMode
    accent: Optional[str]
    header: str
    is_paused: bool
    include_optional: bool

    def as_dict(self) -> dict:
        rows = [asdict(r) for r in self.records]
        return {
            "page":             self.page,
            "display_type":     self.display_type.value,
            "records":          rows,
            "mode":             self.mode.value,
            "accent":           self.accent,
            "header":           self.header,
            "is_paused":        self.is_paused,
            "include_optional": self.include_optional,
        }


class DisplaySession:
    """
    Ties a `PollCoordinator` to a `RotationScheduler`.

    With *deliver* set, polls fetch on background threads and the caller must
    feed results back through ``apply({"type": "poll_result", ...})``;
    without it, polls run inline inside `update()`.
    """

    def __init__(self,
                 pages: Mapping[str, PageConfig],
                 coordinator: PollCoordinator | None = None,
                 deliver: Deliver | None = None,
                 optional_page: str | None = config.OPTIONAL_PAGE,
                 poll_interval: float = config.POLL_INTERVAL_SEC,
                 rotate_interval: float = config.ROTATE_INTERVAL_SEC,
                 reset_rotation_on_nav: bool = config.RESET_ROTATION_ON_NAV,
                 mode: RankingMode = RankingMode.TOTAL) -> None:
        self.pages = dict(pages)
        self.coordinator = coordinator or PollCoordinator(self.pages)
        self.deliver = deliver
        self.mode = mode

        cycle = PageCycle(list(self.pages), optional_page)
        self.rotation = RotationScheduler(cycle, rotate_interval)
        self.navigator = Navigator(self.rotation, reset_rotation_on_nav)
        self.poll_timer = PeriodicTimer(poll_interval)
        self.active = False

    # ── lifecycle ─────────────────────────────────────────────────────────
    def start(self, now: float) -> None:
        self.active = True
        self.poll_timer.start(now)
        self.rotation.start(now)
        self._poll()                     # once immediately on activation

    def stop(self) -> None:
        self.active = False
        self.poll_timer.stop()
        self.rotation.stop()

    def update(self, now: float) -> None:
        if not self.active:
            return
        self.rotation.tick(now)
        if self.poll_timer.poll(now):
            self._poll()

    def _poll(self) -> Optional[PollTicket]:
        page = self.rotation.state.active_page
        if self.deliver is None:
            self.coordinator.poll(page, self.mode)
            return None
        return self.coordinator.poll_in_background(page, self.mode, self.deliver)

    # ── state reads ───────────────────────────────────────────────────────
    @property
    def active_page(self) -> str:
        return self.rotation.state.active_page

    def snapshot(self) -> RenderSnapshot:
        page = self.active_page
        cfg = self.pages[page]
        st = self.rotation.state
        return RenderSnapshot(
            page=page,
            display_type=cfg.display_type,
            records=self.coordinator.committed(page),
            mode=self.mode,
            accent=cfg.accent,
            header=cfg.header,
            is_paused=st.is_paused,
            include_optional=st.include_optional,
        )

    # ── actions ───────────────────────────────────────────────────────────
    def apply(self, action: dict, now: float) -> bool:
        """
        Apply one action dict.  Returns False for types this session does
        not own (quit, fullscreen, …) so the caller can handle them.
        """
        t = action.get("type")
        if t == "poll_result":
            if self.active:
                self.coordinator.resolve(action["ticket"], action.get("payload"))
        elif t == "navigate":
            if action.get("to") == "prev":
                self.navigator.backward(now)
            else:
                self.navigator.forward(now)
        elif t == "toggle_pause":
            self.rotation.toggle_pause(now)
            logger.info("Rotation %s", "paused" if self.rotation.state.is_paused else "resumed")
        elif t == "toggle_optional":
            self.rotation.toggle_optional()
            logger.info("Optional page %s",
                        "included" if self.rotation.state.include_optional else "excluded")
        elif t == "toggle_mode":
            self.mode = self.mode.toggled()
        elif t == "set_mode":
            try:
                self.mode = RankingMode(action.get("mode"))
            except ValueError:
                logger.debug("Ignoring unknown ranking mode %r", action.get("mode"))
        else:
            return False
        return True
