"""
pages.py

Static page table for the scoreboard kiosk plus the cycle arithmetic shared by
automatic rotation and manual navigation.

* Loads `config.PAGES` (or a JSON file with the same shape) once at start-up.
* `PageCycle.next()` / `.prev()` walk the configured order, skipping the
  optional page while it is excluded.  A current page that is itself
  excluded still moves to its true neighbour, so nothing is skipped twice.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

import config


class DisplayType(Enum):
    RANKED_CHART = "chart"
    AWARD_LIST   = "list"


# ── Data structures ─────────────────────────────────────────────────────────
@dataclass(frozen=True)
class PageConfig:
    key: str
    source: str                      # sheet range, e.g. "Awards!A:C"
    display_type: DisplayType
    header: str = ""
    accent: Optional[str] = None     # "#rrggbb"; None → no accent


def _parse_page(key: str, raw: dict) -> PageConfig:
    try:
        source = raw["source"]
        dtype  = DisplayType(raw.get("display_type", "chart"))
    except (KeyError, ValueError) as e:
        raise ValueError(f"page {key!r}: bad or missing field ({e})") from e
    accent = raw.get("accent")
    if accent in ("", "none"):
        accent = None
    return PageConfig(key, source, dtype, raw.get("header", ""), accent)


def load_pages(path: str | None = None) -> Dict[str, PageConfig]:
    """
    Build the ordered page table.  *path* (or `config.PAGES_FILE`) names a
    JSON object ``{key: {source, display_type, header, accent}}``; without
    one, `config.PAGES` is used.
    """
    path = path or config.PAGES_FILE
    if path:
        with open(os.path.expanduser(path), "r", encoding="utf-8") as f:
            raw = json.load(f)
    else:
        raw = config.PAGES

    pages = {k: _parse_page(k, v) for k, v in raw.items()}
    if not pages:
        raise ValueError("page table is empty")
    return pages


# ── Cycle ───────────────────────────────────────────────────────────────────
class PageCycle:
    """Ordered ring of page keys with one optionally excluded member."""

    def __init__(self, order: List[str], optional: str | None = None) -> None:
        if not order:
            raise ValueError("PageCycle needs at least one page")
        self.order = list(order)
        self.optional = optional if optional in self.order else None

    @property
    def first(self) -> str:
        return self.order[0]

    def members(self, include_optional: bool) -> List[str]:
        if include_optional or self.optional is None:
            return list(self.order)
        return [k for k in self.order if k != self.optional]

    def _step(self, cur: str, include_optional: bool, direction: int) -> str:
        keys = self.order
        n = len(keys)
        if cur not in keys:
            live = self.members(include_optional) or keys
            return live[0] if direction > 0 else live[-1]

        idx = keys.index(cur)
        for i in range(1, n + 1):
            cand = keys[(idx + direction * i) % n]
            if include_optional or cand != self.optional:
                return cand
        return cur

    # ------------------------------------------------------------- navigation
    def next(self, cur: str, include_optional: bool = True) -> str:
        return self._step(cur, include_optional, +1)

    def prev(self, cur: str, include_optional: bool = True) -> str:
        return self._step(cur, include_optional, -1)
