#!/usr/bin/env python3
"""
app.py – pygame main loop for the scoreboard kiosk.

Polls and rotation live in `DisplaySession`; this module owns the window,
pumps input through events.py and draws the current snapshot each frame.
Poll results arrive from worker threads via the EventManager queue, so the
session is only ever touched from this loop.
"""
from __future__ import annotations

import logging

import pygame

import config
import timing
from events    import EventManager
from overlays  import draw_controls, draw_header
from pages     import load_pages
from renderer  import render_page
from session   import DisplaySession

logger = logging.getLogger(__name__)


class ScoreboardKiosk:
    def __init__(self, pages=None):
        # window ----------------------------------------------------------
        pygame.init()
        pygame.mouse.set_visible(False)
        pygame.display.set_caption("Scoreboard")
        self.screen = self._open_window()
        self.clock = pygame.time.Clock()

        # core state ------------------------------------------------------
        self.pages = pages or load_pages()
        self.session = DisplaySession(self.pages, deliver=EventManager.deliver_poll)

    def _open_window(self) -> pygame.Surface:
        return pygame.display.set_mode(
            (0, 0) if config.FULLSCREEN else config.WINDOWED_SIZE,
            pygame.FULLSCREEN if config.FULLSCREEN else 0,
        )

    # ── drawing ------------------------------------------------------------
    def _draw(self) -> None:
        snap = self.session.snapshot()
        self.screen.fill(pygame.Color(config.BACKGROUND))
        top = draw_header(self.screen, snap)
        sw, sh = self.screen.get_size()
        body = pygame.Rect(int(sw * 0.05), top, int(sw * 0.9), int(sh * 0.9) - top)
        render_page(self.screen, body, snap)
        draw_controls(self.screen, snap)

    # ── main loop ---------------------------------------------------------
    def run(self):
        running = True
        self.session.start(timing.now())
        logger.info("Scoreboard running: %d page(s), start page %s",
                    len(self.pages), self.session.active_page)
        try:
            while running:
                for e in pygame.event.get():
                    EventManager.handle(e)

                # drain keyboard + remote + poll-worker queue (non-blocking)
                while (act := EventManager.poll()):
                    now = timing.now()
                    if self.session.apply(act, now):
                        continue
                    t = act.get("type")
                    if t == "quit":
                        running = False
                    elif t == "toggle_fullscreen":
                        config.FULLSCREEN ^= True
                        self.screen = self._open_window()
                        pygame.mouse.set_visible(False)
                    else:
                        logger.debug("Unhandled action %r", act)

                self.session.update(timing.now())
                self._draw()
                pygame.display.flip()
                self.clock.tick(config.FPS)
        finally:
            self.session.stop()
            pygame.quit()


if __name__ == "__main__":
    ScoreboardKiosk().run()
