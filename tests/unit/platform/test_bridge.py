"""
Unit tests for the browser event bridge.
"""

from galleryguard.models.protection import Platform
from galleryguard.platform.bridge import BrowserEventBridge
from galleryguard.platform.events import EventTarget, InMemoryEventSource
from galleryguard.services.screenshot_detector import ScreenshotDetector


class TestBrowserEventBridge:
    """Test cases for BrowserEventBridge."""

    def setup_method(self):
        self.source = InMemoryEventSource()
        self.bridge = BrowserEventBridge(self.source)
        self.calls = []
        self.source.add_listener(EventTarget.SURFACE, "contextmenu", lambda e: self.calls.append(e.type))
        self.source.add_listener(EventTarget.SURFACE, "dragstart", lambda e: self.calls.append(e.type))

    def test_replays_new_events_in_order(self):
        batch = {
            "session": "s1",
            "events": [{"seq": 2, "type": "dragstart"}, {"seq": 1, "type": "contextmenu"}],
        }

        assert self.bridge.forward(batch) == 2
        assert self.calls == ["contextmenu", "dragstart"]
        assert self.bridge.last_seq == 2

    def test_same_batch_is_replayed_once(self):
        batch = {"session": "s1", "events": [{"seq": 1, "type": "contextmenu"}]}

        self.bridge.forward(batch)
        assert self.bridge.forward(batch) == 0

        assert self.calls == ["contextmenu"]

    def test_growing_batch_replays_only_the_tail(self):
        self.bridge.forward({"session": "s1", "events": [{"seq": 1, "type": "contextmenu"}]})

        replayed = self.bridge.forward(
            {"session": "s1", "events": [{"seq": 1, "type": "contextmenu"}, {"seq": 2, "type": "dragstart"}]}
        )

        assert replayed == 1
        assert self.calls == ["contextmenu", "dragstart"]

    def test_new_session_restarts_numbering(self):
        self.bridge.forward(
            {"session": "s1", "events": [{"seq": 1, "type": "contextmenu"}, {"seq": 2, "type": "contextmenu"}]}
        )

        self.bridge.forward({"session": "s2", "events": [{"seq": 1, "type": "dragstart"}]})

        assert self.calls == ["contextmenu", "contextmenu", "dragstart"]
        assert self.bridge.last_seq == 1

    def test_missing_or_malformed_batches_are_ignored(self):
        assert self.bridge.forward(None) == 0
        assert self.bridge.forward("contextmenu") == 0
        assert self.bridge.forward({"session": "s1", "events": "nope"}) == 0
        assert self.bridge.forward({"session": "s1", "events": [{"type": "contextmenu"}, "x"]}) == 0
        assert self.calls == []

    def test_reported_platform_selects_shortcut_table(self):
        detector = ScreenshotDetector(self.source)
        assert detector.platform == Platform.OTHER

        self.bridge.forward({"session": "s1", "platform": "MacIntel", "events": []})

        assert self.source.platform_string == "MacIntel"
        assert detector.platform == Platform.MAC

    def test_replayed_screenshot_shortcut_is_detected(self):
        detector = ScreenshotDetector(self.source)
        signals = []
        detector.subscribe(signals.append)
        detector.enable()

        self.bridge.forward(
            {
                "session": "s1",
                "platform": "Win32",
                "events": [{"seq": 1, "type": "keydown", "key": "PrintScreen"}],
            }
        )

        assert len(signals) == 1
