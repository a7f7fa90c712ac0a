"""Observer plumbing shared by the protection detectors."""

from collections.abc import Callable

import structlog

from galleryguard.errors import ListenerError
from galleryguard.models.protection import SignalEvent
from galleryguard.platform.events import EventHandler, EventTarget, PlatformEventSource

logger = structlog.get_logger(__name__)

SignalCallback = Callable[[SignalEvent], None]

# (target, event type, handler, capture)
ListenerSpec = tuple[EventTarget, str, EventHandler, bool]


class SignalDetector:
    """
    Base class for detectors that turn raw platform events into signals.

    Subclasses describe their listeners in ``_listener_specs``. Listeners are
    attached only while the detector is enabled, so handlers never need to
    check an enabled flag.
    """

    name = "detector"

    def __init__(self, event_source: PlatformEventSource):
        self._event_source = event_source
        self._subscribers: list[SignalCallback] = []
        self._attached: list[ListenerSpec] = []

    @property
    def enabled(self) -> bool:
        return bool(self._attached)

    def subscribe(self, callback: SignalCallback) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: SignalCallback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def enable(self) -> None:
        """Attach listeners. Partially attached listeners are removed if any attach fails."""
        if self._attached:
            return

        try:
            for target, event_type, handler, capture in self._listener_specs():
                self._event_source.add_listener(target, event_type, handler, capture)
                self._attached.append((target, event_type, handler, capture))
        except Exception as e:
            self.disable()
            raise ListenerError(
                f"Failed to attach {self.name} listeners",
                details={"detector": self.name},
                original_exception=e,
            ) from e

        logger.debug("listeners_attached", detector=self.name, count=len(self._attached))

    def disable(self) -> None:
        """Detach every listener this detector attached."""
        while self._attached:
            target, event_type, handler, capture = self._attached.pop()
            self._event_source.remove_listener(target, event_type, handler, capture)
        logger.debug("listeners_detached", detector=self.name)

    def set_enabled(self, enabled: bool) -> None:
        if enabled:
            self.enable()
        else:
            self.disable()

    def _emit(self, signal: SignalEvent) -> None:
        for callback in list(self._subscribers):
            callback(signal)

    def _listener_specs(self) -> list[ListenerSpec]:
        raise NotImplementedError
