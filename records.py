"""
records.py

Display-ready record types, the row normaliser that builds them from raw
sheet rows, and the value-equality check used to suppress redundant commits.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence, Tuple

# ── Types ───────────────────────────────────────────────────────────────────
class RankingMode(Enum):
    TOTAL   = "total"
    PERCENT = "percent"

    def toggled(self) -> "RankingMode":
        return RankingMode.PERCENT if self is RankingMode.TOTAL else RankingMode.TOTAL


@dataclass(frozen=True)
class RankedRecord:
    label: str
    count: int = 0
    percent: float = 0.0


@dataclass(frozen=True)
class AwardRecord:
    title: str
    recipient: str
    group: str = ""


RankedRows = Tuple[RankedRecord, ...]
AwardRows  = Tuple[AwardRecord, ...]

# ── Numeric parsing ─────────────────────────────────────────────────────────
_INT_RE   = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _text(cell) -> str:
    if cell is None:
        return ""
    return cell if isinstance(cell, str) else str(cell)


def parse_count(cell) -> int:
    """Leading integer of *cell* ("12 people" → 12), clamped ≥ 0; 0 if none."""
    m = _INT_RE.match(_text(cell).replace(",", ""))
    if not m:
        return 0
    try:
        val = int(m.group(1))
    except (ValueError, OverflowError):
        return 0
    return max(0, val)


def parse_percent(cell) -> float:
    """Leading number of *cell* ("45.5%" → 45.5), clamped to [0, 100]; 0 if none."""
    m = _FLOAT_RE.match(_text(cell).replace(",", ""))
    if not m:
        return 0.0
    try:
        val = float(m.group(1))
    except (ValueError, OverflowError):
        return 0.0
    if not math.isfinite(val):
        return 0.0
    return min(100.0, max(0.0, val))


def _cell(row: Sequence, idx: int):
    return row[idx] if idx < len(row) else None


# ── Normaliser ──────────────────────────────────────────────────────────────
def normalize_ranked(rows: Iterable[Sequence]) -> RankedRows:
    """
    Rows of ``label, count, <unused>, percent`` → RankedRecords.
    Missing trailing cells read as empty.
    """
    return tuple(
        RankedRecord(
            label=_text(_cell(row, 0)),
            count=parse_count(_cell(row, 1)),
            percent=parse_percent(_cell(row, 3)),
        )
        for row in rows
    )


def normalize_awards(rows: Iterable[Sequence]) -> AwardRows:
    """Rows of ``title, recipient, group`` → AwardRecords in sheet order."""
    return tuple(
        AwardRecord(
            title=_text(_cell(row, 0)),
            recipient=_text(_cell(row, 1)),
            group=_text(_cell(row, 2)),
        )
        for row in rows
    )


def sort_ranked(records: Iterable[RankedRecord], mode: RankingMode) -> RankedRows:
    # sorted() is stable with reverse=True, so ties keep sheet order
    if mode is RankingMode.PERCENT:
        return tuple(sorted(records, key=lambda r: r.percent, reverse=True))
    return tuple(sorted(records, key=lambda r: r.count, reverse=True))


# ── Equality ────────────────────────────────────────────────────────────────
def _same(a, b) -> bool:
    if isinstance(a, RankedRecord) and isinstance(b, RankedRecord):
        return a.label == b.label and a.count == b.count and a.percent == b.percent
    if isinstance(a, AwardRecord) and isinstance(b, AwardRecord):
        return (a.title == b.title
                and a.recipient == b.recipient
                and (a.group or "") == (b.group or ""))
    return False


def records_equal(a: Sequence, b: Sequence) -> bool:
    """Positional value equality of two record sequences."""
    if len(a) != len(b):
        return False
    for x, y in zip(a, b):
        if not _same(x, y):
            return False
    return True
