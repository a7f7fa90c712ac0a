"""Blocking of direct interactions on the protected surface."""

from galleryguard.models.protection import SignalEvent
from galleryguard.platform.events import EventTarget, PlatformEvent, PlatformEventSource

from .signals import ListenerSpec, SignalDetector


class InteractionBlocker(SignalDetector):
    """Prevents one surface event type (context menu, drag) and reports it."""

    def __init__(self, event_source: PlatformEventSource, event_type: str, signal: SignalEvent):
        super().__init__(event_source)
        self.event_type = event_type
        self.signal = signal
        self.name = event_type

    def _listener_specs(self) -> list[ListenerSpec]:
        return [(EventTarget.SURFACE, self.event_type, self._handle, False)]

    def _handle(self, event: PlatformEvent) -> None:
        event.prevent_default()
        self._emit(self.signal)


def context_menu_blocker(event_source: PlatformEventSource) -> InteractionBlocker:
    return InteractionBlocker(event_source, "contextmenu", SignalEvent.CONTEXT_MENU_ATTEMPT)


def drag_blocker(event_source: PlatformEventSource) -> InteractionBlocker:
    return InteractionBlocker(event_source, "dragstart", SignalEvent.DRAG_ATTEMPT)
