#!/usr/bin/env python3
"""
events.py  – central hub

• Translates raw Pygame events to high-level action dicts.
• Exposes a thread-safe queue so *any* external source (web remote, poll
  worker threads) can inject actions for the main loop to apply.
"""

from __future__ import annotations
import queue
from pygame.locals import *

Action = dict      # alias for readability

_KEY_ACTIONS: dict[int, Action] = {
    K_ESCAPE: {"type": "quit"},
    K_q:      {"type": "quit"},
    K_RIGHT:  {"type": "navigate", "to": "next"},
    K_LEFT:   {"type": "navigate", "to": "prev"},
    K_SPACE:  {"type": "toggle_pause"},
    K_h:      {"type": "toggle_optional"},
    K_m:      {"type": "toggle_mode"},
    K_t:      {"type": "set_mode", "mode": "total"},
    K_p:      {"type": "set_mode", "mode": "percent"},
    K_f:      {"type": "toggle_fullscreen"},
}


class EventManager:
    _fifo: "queue.Queue[Action]" = queue.Queue()      # global, thread-safe

    # ── SDL / keyboard path ────────────────────────────────────────────
    @classmethod
    def handle(cls, event) -> None:
        """Translate one Pygame event → action and enqueue it."""
        act = cls.translate(event)
        if act:
            cls._fifo.put(act)

    # ── external / programmatic path ───────────────────────────────────
    @classmethod
    def post(cls, action: Action) -> None:
        """
        Any thread may call this to inject an already-formed action dict, e.g.:
            EventManager.post({"type": "navigate", "to": "next"})
        """
        cls._fifo.put(action)

    @classmethod
    def deliver_poll(cls, ticket, payload) -> None:
        """Poll-worker callback: hand a finished fetch to the main loop."""
        cls._fifo.put({"type": "poll_result", "ticket": ticket, "payload": payload})

    # ── main-loop consumer ─────────────────────────────────────────────
    @classmethod
    def poll(cls) -> Action | None:
        """Return next queued action or None (non-blocking)."""
        try:
            return cls._fifo.get_nowait()
        except queue.Empty:
            return None

    # ── internal translator ───────────────────────────────────────────
    @staticmethod
    def translate(event) -> Action | None:
        if event.type == QUIT:
            return {"type": "quit"}
        if event.type == KEYDOWN:
            act = _KEY_ACTIONS.get(event.key)
            return dict(act) if act else None
        return None
