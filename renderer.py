"""
renderer.py

Draws a `RenderSnapshot` body: the horizontal ranked bar chart or the awards
grid.  Pure presentation; everything it needs is in the snapshot.
"""

from __future__ import annotations

import pygame

import config
from pages import DisplayType
from records import RankingMode

BLUE = pygame.Color(config.BRAND_BLUE)

pygame.font.init()


# ── helpers ────────────────────────────────────────────────────────────────
def _accent(snap) -> pygame.Color:
    return pygame.Color(snap.accent or config.CORE_YELLOW)


def axis_max(records, mode: RankingMode) -> float:
    if mode is RankingMode.PERCENT:
        return 100.0
    return float(max([r.count for r in records] + [1]))


def value_text(value, mode: RankingMode) -> str:
    if mode is RankingMode.PERCENT:
        return f"{value:g}%"
    return f"{value}"


def award_columns(n: int) -> int:
    """Grid width for *n* awards: up to three across, then 4, 5, 6."""
    if n <= 3:
        return 3
    return min(n, 6)


# ── ranked chart ───────────────────────────────────────────────────────────
def _draw_chart(surface: pygame.Surface, rect: pygame.Rect, snap) -> None:
    recs = snap.records
    if not recs:
        return

    label_font = pygame.font.SysFont("sans", max(14, rect.height // 28), bold=True)
    value_font = pygame.font.SysFont("sans", max(12, rect.height // 40), bold=True)

    label_w  = min(280, rect.width // 4)
    plot     = pygame.Rect(rect.x + label_w + 16, rect.y,
                           rect.width - label_w - 80, rect.height)
    slot_h   = plot.height / len(recs)
    bar_h    = max(4, min(config.BAR_SIZE, int(slot_h * 0.7)))
    top      = axis_max(recs, snap.mode)
    colour   = _accent(snap)

    pygame.draw.line(surface, BLUE, plot.topleft, plot.bottomleft, 2)

    for i, r in enumerate(recs):
        val   = r.percent if snap.mode is RankingMode.PERCENT else r.count
        cy    = int(plot.y + slot_h * i + slot_h / 2)
        width = int(plot.width * min(1.0, val / top)) if top else 0

        if r.label:
            lbl = label_font.render(r.label, True, BLUE)
            surface.blit(lbl, (plot.x - 16 - lbl.get_width(), cy - lbl.get_height() // 2))

        bar = pygame.Rect(plot.x + 6, cy - bar_h // 2, max(0, width - 6), bar_h)
        pygame.draw.rect(surface, colour, bar, border_radius=4)

        txt = value_font.render(value_text(val, snap.mode), True, BLUE)
        surface.blit(txt, (bar.right + 8, cy - txt.get_height() // 2))


# ── awards grid ────────────────────────────────────────────────────────────
def _draw_awards(surface: pygame.Surface, rect: pygame.Rect, snap) -> None:
    recs = snap.records
    if not recs:
        return

    cols  = award_columns(len(recs))
    rows  = (len(recs) + cols - 1) // cols
    cell_w, cell_h = rect.width // cols, rect.height // max(1, rows)

    title_f = pygame.font.SysFont("sans", max(14, cell_h // 8), bold=True)
    name_f  = pygame.font.SysFont("sans", max(12, cell_h // 10))
    group_f = pygame.font.SysFont("sans", max(10, cell_h // 14), italic=True)

    for i, a in enumerate(recs):
        cx = rect.x + (i % cols) * cell_w + cell_w // 2
        y  = rect.y + (i // cols) * cell_h + cell_h // 4
        lines = [(title_f, a.title), (name_f, a.recipient)]
        if a.group:
            lines.append((group_f, a.group))
        for font, text in lines:
            if not text:
                y += font.get_linesize() + 4
                continue
            s = font.render(text, True, BLUE)
            surface.blit(s, (cx - s.get_width() // 2, y))
            y += font.get_linesize() + 4


# ── main entry point ───────────────────────────────────────────────────────
def render_page(surface: pygame.Surface, rect: pygame.Rect, snap) -> None:
    if snap.display_type is DisplayType.AWARD_LIST:
        _draw_awards(surface, rect, snap)
    else:
        _draw_chart(surface, rect, snap)
