"""Window focus and tab visibility detection."""

import structlog

from galleryguard.models.protection import SignalEvent
from galleryguard.platform.events import EventTarget, PlatformEvent, PlatformEventSource

from .signals import ListenerSpec, SignalDetector

logger = structlog.get_logger(__name__)


class FocusDetector(SignalDetector):
    """
    Coalesces window blur/focus and document visibility into two signals.

    Browsers fire these inconsistently (alt-tab, tab switch, minimize), so
    both sources are honored and every raw transition maps to one signal.
    """

    name = "focus"

    def __init__(self, event_source: PlatformEventSource):
        super().__init__(event_source)
        self._exposed = not event_source.document_hidden

    @property
    def is_exposed(self) -> bool:
        """Whether the viewing surface is currently in the foreground."""
        return self._exposed

    def enable(self) -> None:
        if not self.enabled:
            self._exposed = not self._event_source.document_hidden
        super().enable()

    def disable(self) -> None:
        super().disable()
        self._exposed = True

    def _listener_specs(self) -> list[ListenerSpec]:
        return [
            (EventTarget.WINDOW, "blur", self._handle_blur, False),
            (EventTarget.WINDOW, "focus", self._handle_focus, False),
            (EventTarget.DOCUMENT, "visibilitychange", self._handle_visibility_change, False),
        ]

    def _handle_blur(self, event: PlatformEvent) -> None:
        self._signal(exposed=False)

    def _handle_focus(self, event: PlatformEvent) -> None:
        self._signal(exposed=True)

    def _handle_visibility_change(self, event: PlatformEvent) -> None:
        self._signal(exposed=not self._event_source.document_hidden)

    def _signal(self, exposed: bool) -> None:
        self._exposed = exposed
        signal = SignalEvent.FOCUS_GAINED if exposed else SignalEvent.FOCUS_LOST
        logger.debug("focus_signal", signal=signal.value)
        self._emit(signal)
