import unittest

import pygame
from pygame.locals import KEYDOWN, KEYUP, QUIT, K_LEFT, K_RIGHT, K_SPACE, K_h, K_p, K_q, K_x

import web_remote
from events import EventManager


def _drain():
    out = []
    while (act := EventManager.poll()) is not None:
        out.append(act)
    return out


class EventTranslationTests(unittest.TestCase):
    def setUp(self):
        _drain()

    def tearDown(self):
        _drain()

    def test_keys_map_to_actions(self):
        cases = {
            K_RIGHT: {"type": "navigate", "to": "next"},
            K_LEFT:  {"type": "navigate", "to": "prev"},
            K_SPACE: {"type": "toggle_pause"},
            K_h:     {"type": "toggle_optional"},
            K_p:     {"type": "set_mode", "mode": "percent"},
            K_q:     {"type": "quit"},
        }
        for key, want in cases.items():
            self.assertEqual(EventManager.translate(pygame.event.Event(KEYDOWN, key=key)), want)

    def test_ignored_events(self):
        self.assertIsNone(EventManager.translate(pygame.event.Event(KEYDOWN, key=K_x)))
        self.assertIsNone(EventManager.translate(pygame.event.Event(KEYUP, key=K_LEFT)))

    def test_window_close_quits(self):
        self.assertEqual(EventManager.translate(pygame.event.Event(QUIT)), {"type": "quit"})

    def test_translated_actions_are_copies(self):
        a = EventManager.translate(pygame.event.Event(KEYDOWN, key=K_RIGHT))
        a["to"] = "prev"
        b = EventManager.translate(pygame.event.Event(KEYDOWN, key=K_RIGHT))
        self.assertEqual(b["to"], "next")

    def test_queue_preserves_order(self):
        EventManager.handle(pygame.event.Event(KEYDOWN, key=K_SPACE))
        EventManager.post({"type": "quit"})
        EventManager.deliver_poll("ticket", {"values": []})
        self.assertEqual(_drain(), [
            {"type": "toggle_pause"},
            {"type": "quit"},
            {"type": "poll_result", "ticket": "ticket", "payload": {"values": []}},
        ])


class RemoteCommandTests(unittest.TestCase):
    def test_known_commands(self):
        self.assertEqual(web_remote.command_action("next"), {"type": "navigate", "to": "next"})
        self.assertEqual(web_remote.command_action("har"), {"type": "toggle_optional"})
        self.assertEqual(web_remote.command_action("total"),
                         {"type": "set_mode", "mode": "total"})

    def test_every_command_has_a_button(self):
        for cmd in web_remote.COMMANDS:
            self.assertIn(f'href="/action?cmd={cmd}"', web_remote.HTML_PAGE)

    def test_unknown_command(self):
        self.assertIsNone(web_remote.command_action("reboot"))

    def test_fmt_duration(self):
        self.assertEqual(web_remote._fmt_duration(90061), "1d 01:01:01")


if __name__ == "__main__":
    unittest.main()
