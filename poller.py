"""
poller.py

Poll coordinator for the scoreboard kiosk.

Every poll gets a sequence number from a per-session counter.  When its
payload comes back, only the poll holding the latest number may commit; any
older result is dropped no matter when it arrives.  Committed sequences are
replaced only when the new data differs by value, so the tuple object held in
`PollState` stays the same across identical refreshes.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional

import sheets
from pages import DisplayType, PageConfig
from records import (AwardRows, RankedRows, RankingMode, normalize_awards,
                     normalize_ranked, records_equal, sort_ranked)

logger = logging.getLogger(__name__)

Fetch   = Callable[[str], Optional[dict]]
Deliver = Callable[["PollTicket", Optional[dict]], None]


# ── Data structures ─────────────────────────────────────────────────────────
@dataclass
class PollState:
    latest_sequence: int = 0
    ranked: Dict[str, RankedRows] = field(default_factory=dict)
    awards: AwardRows = ()


@dataclass(frozen=True)
class PollTicket:
    sequence: int
    page: str
    display_type: DisplayType
    mode: RankingMode              # sort order captured at poll start


def _rows_of(payload: Any):
    """Data rows of a values payload (header dropped) or None if unusable."""
    if not isinstance(payload, Mapping):
        return None
    values = payload.get("values")
    if not isinstance(values, list):
        return None
    return [row if isinstance(row, (list, tuple)) else [] for row in values[1:]]


# ── Coordinator ─────────────────────────────────────────────────────────────
class PollCoordinator:
    """Owns one session's `PollState`; the only writer to it."""

    def __init__(self,
                 pages: Mapping[str, PageConfig],
                 fetch: Fetch = sheets.fetch_values,
                 state: PollState | None = None) -> None:
        self.pages = pages
        self._fetch = fetch
        self.state = state or PollState()

    # ---------------------------------------------------------------- reads
    def committed(self, page: str):
        cfg = self.pages[page]
        if cfg.display_type is DisplayType.AWARD_LIST:
            return self.state.awards
        return self.state.ranked.get(page, ())

    # ---------------------------------------------------------------- steps
    def begin(self, page: str, mode: RankingMode) -> PollTicket:
        self.state.latest_sequence += 1
        return PollTicket(self.state.latest_sequence, page,
                          self.pages[page].display_type, mode)

    def fetch(self, ticket: PollTicket) -> Optional[dict]:
        """Run the I/O for *ticket*; failures are logged and read as no data."""
        source = self.pages[ticket.page].source
        try:
            return self._fetch(source)
        except Exception as e:
            logger.warning("Failed to fetch %s data (%s): %s",
                           ticket.page, source, e)
            return None

    def is_current(self, ticket: PollTicket) -> bool:
        return ticket.sequence == self.state.latest_sequence

    def resolve(self, ticket: PollTicket, payload: Optional[dict]) -> bool:
        """Apply a finished poll.  Returns True only if state was replaced."""
        if not self.is_current(ticket):
            logger.debug("Dropping stale poll #%d for %s (latest #%d)",
                         ticket.sequence, ticket.page, self.state.latest_sequence)
            return False

        rows = _rows_of(payload)
        if rows is None:
            return False

        try:
            if ticket.display_type is DisplayType.AWARD_LIST:
                fresh = normalize_awards(rows)
                if records_equal(self.state.awards, fresh):
                    return False
                self.state.awards = fresh
            else:
                fresh = sort_ranked(normalize_ranked(rows), ticket.mode)
                if records_equal(self.state.ranked.get(ticket.page, ()), fresh):
                    return False
                self.state.ranked[ticket.page] = fresh
        except Exception as e:
            logger.warning("Failed to parse %s data from poll #%d: %s",
                           ticket.page, ticket.sequence, e)
            return False

        logger.info("Committed %d %s row(s) from poll #%d",
                    len(fresh), ticket.page, ticket.sequence)
        return True

    # ---------------------------------------------------------- whole polls
    def poll(self, page: str, mode: RankingMode) -> bool:
        """Begin, fetch and resolve inline."""
        ticket = self.begin(page, mode)
        return self.resolve(ticket, self.fetch(ticket))

    def poll_in_background(self, page: str, mode: RankingMode,
                           deliver: Deliver) -> PollTicket:
        """
        Begin now, fetch on a daemon thread, then hand (ticket, payload) to
        *deliver* from that thread.  *deliver* must route the pair back to the
        owning thread for `resolve()`.
        """
        ticket = self.begin(page, mode)

        def _work():
            deliver(ticket, self.fetch(ticket))

        threading.Thread(target=_work, name=f"poll-{ticket.sequence}",
                         daemon=True).start()
        return ticket
