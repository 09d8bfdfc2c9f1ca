"""Tests for the hold-to-read key tracker.

WHY: Auto-repeat and focus loss are the two ways a hold key goes wrong:
playback restarting on every repeat, or playing forever after the window
loses focus. Both are tested here without a display.
"""

from rsvp_reader.keyboard import HoldKeyTracker, KeyHandlers


def _recording_tracker():
    events = []
    handlers = KeyHandlers(
        on_hold_start=lambda: events.append("start"),
        on_hold_end=lambda: events.append("end"),
        on_step_back=lambda: events.append("back"),
        on_step_forward=lambda: events.append("forward"),
        on_exit=lambda: events.append("exit"),
    )
    return HoldKeyTracker(handlers), events


class TestHold:

    def test_press_and_release(self):
        tracker, events = _recording_tracker()
        assert tracker.key_down("space")
        assert tracker.held
        assert tracker.key_up("space")
        assert not tracker.held
        assert events == ["start", "end"]

    def test_auto_repeat_ignored(self):
        tracker, events = _recording_tracker()
        for _ in range(5):
            tracker.key_down("space")
        tracker.key_up("space")
        assert events == ["start", "end"]

    def test_release_without_press(self):
        tracker, events = _recording_tracker()
        tracker.key_up("space")
        assert events == []

    def test_focus_lost_while_held(self):
        tracker, events = _recording_tracker()
        tracker.key_down("space")
        tracker.focus_lost()
        tracker.key_up("space")
        assert events == ["start", "end"]

    def test_focus_lost_when_not_held(self):
        tracker, events = _recording_tracker()
        tracker.focus_lost()
        assert events == []

    def test_key_names_case_insensitive(self):
        tracker, events = _recording_tracker()
        tracker.key_down("Space")
        tracker.key_up("SPACE")
        assert events == ["start", "end"]


class TestOtherKeys:

    def test_arrows_and_escape(self):
        tracker, events = _recording_tracker()
        tracker.key_down("Left")
        tracker.key_down("Right")
        tracker.key_down("Escape")
        assert events == ["back", "forward", "exit"]

    def test_unknown_key_not_consumed(self):
        tracker, events = _recording_tracker()
        assert tracker.key_down("a") is False
        assert tracker.key_up("left") is False
        assert events == []

    def test_ignored_in_text_entry(self):
        tracker, events = _recording_tracker()
        assert tracker.key_down("space", in_text_entry=True) is False
        assert tracker.key_down("left", in_text_entry=True) is False
        assert not tracker.held
        assert events == []


class TestHandlerSlot:

    def test_default_handlers_are_noops(self):
        tracker = HoldKeyTracker()
        assert tracker.key_down("space")
        tracker.key_up("space")
        tracker.key_down("escape")

    def test_handlers_read_at_event_time(self):
        tracker, events = _recording_tracker()
        tracker.key_down("space")
        later = []
        tracker.handlers = KeyHandlers(on_hold_end=lambda: later.append("end"))
        tracker.key_up("space")
        assert events == ["start"]
        assert later == ["end"]
