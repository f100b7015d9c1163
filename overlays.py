"""
overlays.py

Header and quick-controls badge for the scoreboard kiosk.
"""

from __future__ import annotations

import pygame

import config
from records import RankingMode

# ── colours ────────────────────────────────────────────────────────────────
BLUE  = pygame.Color(config.BRAND_BLUE)
GREY  = (150, 150, 150)
BG    = (0, 0, 0, 30)

pygame.font.init()


# ── helpers ────────────────────────────────────────────────────────────────
def _compute_font_sizes(h: int) -> tuple[int, int]:
    return max(12, h // 50), max(24, h // 14)


def badge_items(snap) -> list[tuple[str, bool]]:
    """(label, lit) pairs shown in the quick-controls badge."""
    return [
        ("Total", snap.mode is RankingMode.TOTAL),
        ("%",     snap.mode is RankingMode.PERCENT),
        ("H",     snap.include_optional),
        ("❚❚" if not snap.is_paused else "▶", snap.is_paused),
    ]


# ── main entry points ──────────────────────────────────────────────────────
def draw_header(surface: pygame.Surface, snap) -> int:
    """Centred page header; returns the y just below it."""
    sw, sh = surface.get_size()
    _, large_pt = _compute_font_sizes(sh)
    if not snap.header:
        return large_pt
    font = pygame.font.SysFont("sans", large_pt, bold=True)
    txt  = font.render(snap.header, True, BLUE)
    y    = large_pt // 2
    surface.blit(txt, ((sw - txt.get_width()) // 2, y))
    return y + txt.get_height() + large_pt // 2


def draw_controls(surface: pygame.Surface, snap) -> None:
    sw, sh = surface.get_size()
    small_pt, _ = _compute_font_sizes(sh)
    font = pygame.font.SysFont("sans", small_pt, bold=True)

    x = 10
    for label, lit in badge_items(snap):
        s  = font.render(label, True, BLUE if lit else GREY)
        bg = pygame.Surface(
            (s.get_width() + small_pt, s.get_height() + small_pt // 3),
            pygame.SRCALPHA,
        )
        bg.fill(BG if lit else (0, 0, 0, 0))
        bg.blit(s, (small_pt // 2, small_pt // 6))
        surface.blit(bg, (x, 10))
        x += bg.get_width() + 6
