"""
Screenshot-intent detection.

Recognizes the key combinations that trigger the operating system's
screenshot tools and emits ``SCREENSHOT_ATTEMPT``. The default action is
prevented before subscribers run, which is best effort: the OS may already
have taken the capture by the time the browser sees the key.
"""

from dataclasses import dataclass

import structlog

from galleryguard.models.protection import Platform, SignalEvent, detect_platform
from galleryguard.platform.events import EventTarget, KeyEvent, PlatformEvent, PlatformEventSource

from .signals import ListenerSpec, SignalDetector

logger = structlog.get_logger(__name__)

PRINT_SCREEN = "PrintScreen"


@dataclass(frozen=True)
class KeyCombo:
    """
    A key plus the modifiers that must be held. Unlisted modifiers are ignored.

    Keys compare case-insensitively since holding Shift reports "S" for "s".
    """

    key: str
    meta: bool = False
    shift: bool = False

    def matches(self, event: KeyEvent) -> bool:
        if event.key.lower() != self.key.lower():
            return False
        if self.meta and not event.meta_key:
            return False
        if self.shift and not event.shift_key:
            return False
        return True

    def to_dict(self) -> dict:
        return {"key": self.key, "metaKey": self.meta, "shiftKey": self.shift}


SCREENSHOT_PATTERNS: dict[Platform, tuple[KeyCombo, ...]] = {
    Platform.WINDOWS: (
        KeyCombo(PRINT_SCREEN),
        KeyCombo("s", meta=True, shift=True),  # Snip & Sketch
        KeyCombo(PRINT_SCREEN, meta=True),
    ),
    Platform.MAC: (
        KeyCombo("3", meta=True, shift=True),
        KeyCombo("4", meta=True, shift=True),
        KeyCombo("5", meta=True, shift=True),
    ),
    Platform.LINUX: (
        KeyCombo(PRINT_SCREEN),
        KeyCombo(PRINT_SCREEN, shift=True),
    ),
    Platform.OTHER: (),
}


def screenshot_patterns(platform: Platform) -> tuple[KeyCombo, ...]:
    """Key combinations treated as screenshot attempts on a platform."""
    return SCREENSHOT_PATTERNS.get(platform, ())


def is_screenshot_combo(event: KeyEvent, platform: Platform) -> bool:
    """Check a key event against the platform's screenshot patterns."""
    return any(combo.matches(event) for combo in screenshot_patterns(platform))


class ScreenshotDetector(SignalDetector):
    """Watches ``keydown`` in the capture phase for screenshot shortcuts."""

    name = "screenshot"

    def __init__(self, event_source: PlatformEventSource, platform: Platform | None = None):
        super().__init__(event_source)
        self._platform = platform

    @property
    def platform(self) -> Platform:
        """Pinned platform, else the one the event source currently reports."""
        return self._platform or detect_platform(self._event_source.platform_string)

    def _listener_specs(self) -> list[ListenerSpec]:
        # Capture phase so prevent_default runs ahead of page handlers
        return [(EventTarget.WINDOW, "keydown", self._handle_key_down, True)]

    def _handle_key_down(self, event: PlatformEvent) -> None:
        if not isinstance(event, KeyEvent):
            return
        if not is_screenshot_combo(event, self.platform):
            return

        event.prevent_default()
        logger.info("screenshot_shortcut_detected", platform=self.platform.value, key=event.key)
        self._emit(SignalEvent.SCREENSHOT_ATTEMPT)
