import unittest

from pages import DisplayType, PageConfig
from poller import PollCoordinator
from records import RankedRecord, RankingMode
from session import DisplaySession

HEADER = ["Office", "Count", "Invited", "Percent"]


def _pages():
    return {
        "core":   PageConfig("core", "Core!A:D", DisplayType.RANKED_CHART, "Tailgating Scoreboard", "#ffc72c"),
        "har":    PageConfig("har", "Har!A:D", DisplayType.RANKED_CHART, "Tailgating Scoreboard", "#ff6f61"),
        "awards": PageConfig("awards", "Awards!A:C", DisplayType.AWARD_LIST, "Tailgating Stats"),
    }


class CountingSource:
    """Returns a fresh payload per call so each poll can be told apart."""

    def __init__(self):
        self.calls = []

    def __call__(self, source):
        self.calls.append(source)
        n = len(self.calls)
        if source.startswith("Awards"):
            return {"values": [["Award"], [f"Award {n}", "Sam"]]}
        return {"values": [HEADER, [f"Office {n}", str(n), "", "10"]]}


def _session(**kw):
    src = CountingSource()
    pages = _pages()
    s = DisplaySession(pages, coordinator=PollCoordinator(pages, fetch=src),
                       optional_page="har", poll_interval=3, rotate_interval=10, **kw)
    return s, src


class DisplaySessionTests(unittest.TestCase):
    def test_polls_immediately_on_start(self):
        s, src = _session()
        s.start(0)
        self.assertEqual(src.calls, ["Core!A:D"])
        self.assertEqual(s.snapshot().records, (RankedRecord("Office 1", 1, 10.0),))

    def test_poll_interval_independent_of_rotation(self):
        s, src = _session()
        s.start(0)
        for t in range(1, 13):
            s.update(float(t))
        # polls at 0, 3, 6, 9 on core; rotation at 10 → har; poll at 12 on har
        self.assertEqual(src.calls, ["Core!A:D"] * 4 + ["Har!A:D"])
        self.assertEqual(s.active_page, "har")

    def test_switching_page_does_not_fetch(self):
        s, src = _session()
        s.start(0)
        s.apply({"type": "navigate", "to": "next"}, 1)
        self.assertEqual(len(src.calls), 1)
        self.assertEqual(s.snapshot().records, ())

    def test_pause_stops_rotation_but_not_polling(self):
        s, src = _session()
        s.start(0)
        s.apply({"type": "toggle_pause"}, 0.5)
        for t in range(1, 61):
            s.update(float(t))
        self.assertEqual(s.active_page, "core")
        self.assertEqual(len(src.calls), 21)
        self.assertEqual(s.snapshot().records[0].label, "Office 21")
        self.assertTrue(s.snapshot().is_paused)

    def test_optional_page_toggle_and_navigation(self):
        s, _ = _session()
        s.start(0)
        s.apply({"type": "toggle_optional"}, 0)
        s.apply({"type": "navigate", "to": "next"}, 0)
        self.assertEqual(s.active_page, "awards")
        s.apply({"type": "toggle_optional"}, 0)
        s.apply({"type": "navigate", "to": "prev"}, 0)
        self.assertEqual(s.active_page, "har")

    def test_mode_actions(self):
        s, _ = _session()
        self.assertTrue(s.apply({"type": "toggle_mode"}, 0))
        self.assertIs(s.mode, RankingMode.PERCENT)
        s.apply({"type": "set_mode", "mode": "total"}, 0)
        self.assertIs(s.mode, RankingMode.TOTAL)
        s.apply({"type": "set_mode", "mode": "bogus"}, 0)
        self.assertIs(s.mode, RankingMode.TOTAL)

    def test_unowned_actions_are_returned(self):
        s, _ = _session()
        self.assertFalse(s.apply({"type": "quit"}, 0))
        self.assertFalse(s.apply({}, 0))

    def test_snapshot_contract(self):
        s, _ = _session()
        s.start(0)
        s.apply({"type": "navigate", "to": "prev"}, 0)
        s.update(3)
        snap = s.snapshot()
        self.assertEqual(snap.page, "awards")
        self.assertIs(snap.display_type, DisplayType.AWARD_LIST)
        self.assertEqual(snap.header, "Tailgating Stats")
        self.assertIsNone(snap.accent)
        d = snap.as_dict()
        self.assertEqual(d["display_type"], "list")
        self.assertEqual(d["records"], [{"title": "Award 2", "recipient": "Sam", "group": ""}])
        self.assertEqual(d["mode"], "total")

    def test_stop_halts_both_timers_and_ignores_late_results(self):
        s, src = _session(deliver=lambda ticket, payload: None)
        s.coordinator.poll_in_background = lambda page, mode, deliver: s.coordinator.begin(page, mode)
        s.start(0)
        ticket = s.coordinator.begin("core", RankingMode.TOTAL)
        s.stop()
        s.update(100)
        self.assertEqual(s.active_page, "core")
        s.apply({"type": "poll_result", "ticket": ticket,
                 "payload": {"values": [HEADER, ["Late", "1"]]}}, 100)
        self.assertEqual(s.snapshot().records, ())
        self.assertEqual(src.calls, [])

    def test_background_results_resolve_through_apply(self):
        delivered = []
        s, _ = _session(deliver=lambda ticket, payload: delivered.append((ticket, payload)))
        tickets = []

        def fake_bg(page, mode, deliver):
            t = s.coordinator.begin(page, mode)
            tickets.append(t)
            return t

        s.coordinator.poll_in_background = fake_bg
        s.start(0)
        s.update(3)
        old, new = tickets
        s.apply({"type": "poll_result", "ticket": new,
                 "payload": {"values": [HEADER, ["New", "2"]]}}, 3.5)
        s.apply({"type": "poll_result", "ticket": old,
                 "payload": {"values": [HEADER, ["Old", "1"]]}}, 4)
        self.assertEqual(s.snapshot().records, (RankedRecord("New", 2, 0.0),))

    def test_mode_change_applies_to_next_poll_only(self):
        pages = _pages()
        payload = {"values": [HEADER, ["A", "9", "", "10"], ["B", "1", "", "90"]]}
        s = DisplaySession(pages, coordinator=PollCoordinator(pages, fetch=lambda src: payload),
                           poll_interval=3, rotate_interval=10)
        s.start(0)
        self.assertEqual([r.label for r in s.snapshot().records], ["A", "B"])
        s.apply({"type": "set_mode", "mode": "percent"}, 1)
        self.assertEqual([r.label for r in s.snapshot().records], ["A", "B"])
        s.update(3)
        self.assertEqual([r.label for r in s.snapshot().records], ["B", "A"])


if __name__ == "__main__":
    unittest.main()
