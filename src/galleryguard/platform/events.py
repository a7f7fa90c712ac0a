"""
Platform event source abstraction.

Detectors never reach for a global window or document. They receive a
``PlatformEventSource`` and register handlers on it, which lets the host
bridge real browser events in and lets tests drive a fake source.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, runtime_checkable

import structlog

logger = structlog.get_logger(__name__)


class EventTarget(Enum):
    """Where a listener is registered."""

    WINDOW = "window"
    DOCUMENT = "document"
    SURFACE = "surface"


@dataclass
class PlatformEvent:
    """A raw event as dispatched by the environment."""

    type: str
    default_prevented: bool = field(default=False, init=False)

    def prevent_default(self) -> None:
        self.default_prevented = True


@dataclass
class KeyEvent(PlatformEvent):
    """Keyboard event. ``key`` follows the DOM key naming ("PrintScreen", "s", "3")."""

    key: str = ""
    meta_key: bool = False
    shift_key: bool = False
    ctrl_key: bool = False
    alt_key: bool = False


EventHandler = Callable[[PlatformEvent], None]


@runtime_checkable
class PlatformEventSource(Protocol):
    """Capability the detectors depend on instead of ambient globals."""

    @property
    def platform_string(self) -> str: ...

    @property
    def document_hidden(self) -> bool: ...

    def add_listener(
        self, target: EventTarget, event_type: str, handler: EventHandler, capture: bool = False
    ) -> None: ...

    def remove_listener(
        self, target: EventTarget, event_type: str, handler: EventHandler, capture: bool = False
    ) -> None: ...


class InMemoryEventSource:
    """
    Event source backed by plain lists.

    Dispatch runs capture-phase listeners before bubble-phase listeners,
    mirroring DOM ordering. Used by the Streamlit bridge to replay browser
    events and by tests to simulate them.
    """

    def __init__(self, platform_string: str = "", document_hidden: bool = False):
        self._platform_string = platform_string
        self._document_hidden = document_hidden
        self._listeners: dict[tuple[EventTarget, str, bool], list[EventHandler]] = {}

    @property
    def platform_string(self) -> str:
        return self._platform_string

    @platform_string.setter
    def platform_string(self, value: str) -> None:
        self._platform_string = value or ""

    @property
    def document_hidden(self) -> bool:
        return self._document_hidden

    def add_listener(
        self, target: EventTarget, event_type: str, handler: EventHandler, capture: bool = False
    ) -> None:
        handlers = self._listeners.setdefault((target, event_type, capture), [])
        # Same handler registered twice is a no-op, as in the DOM
        if handler not in handlers:
            handlers.append(handler)

    def remove_listener(
        self, target: EventTarget, event_type: str, handler: EventHandler, capture: bool = False
    ) -> None:
        handlers = self._listeners.get((target, event_type, capture))
        if handlers and handler in handlers:
            handlers.remove(handler)
            if not handlers:
                del self._listeners[(target, event_type, capture)]

    def listener_count(self, target: EventTarget | None = None, event_type: str | None = None) -> int:
        """Number of registered listeners, optionally filtered."""
        return sum(
            len(handlers)
            for (key_target, key_type, _capture), handlers in self._listeners.items()
            if (target is None or key_target == target) and (event_type is None or key_type == event_type)
        )

    def has_capture_listener(self, target: EventTarget, event_type: str) -> bool:
        return bool(self._listeners.get((target, event_type, True)))

    def dispatch(self, target: EventTarget, event: PlatformEvent) -> PlatformEvent:
        """Deliver an event to capture listeners, then bubble listeners."""
        for capture in (True, False):
            for handler in list(self._listeners.get((target, event.type, capture), [])):
                handler(event)
        return event

    # Convenience helpers for simulating the environment

    def press_key(
        self,
        key: str,
        meta: bool = False,
        shift: bool = False,
        ctrl: bool = False,
        alt: bool = False,
    ) -> KeyEvent:
        event = KeyEvent(type="keydown", key=key, meta_key=meta, shift_key=shift, ctrl_key=ctrl, alt_key=alt)
        self.dispatch(EventTarget.WINDOW, event)
        return event

    def blur_window(self) -> PlatformEvent:
        return self.dispatch(EventTarget.WINDOW, PlatformEvent(type="blur"))

    def focus_window(self) -> PlatformEvent:
        return self.dispatch(EventTarget.WINDOW, PlatformEvent(type="focus"))

    def set_document_hidden(self, hidden: bool) -> PlatformEvent:
        self._document_hidden = hidden
        return self.dispatch(EventTarget.DOCUMENT, PlatformEvent(type="visibilitychange"))

    def context_menu(self) -> PlatformEvent:
        return self.dispatch(EventTarget.SURFACE, PlatformEvent(type="contextmenu"))

    def drag_start(self) -> PlatformEvent:
        return self.dispatch(EventTarget.SURFACE, PlatformEvent(type="dragstart"))

    def replay(self, payload: dict) -> PlatformEvent | None:
        """
        Replay an event reported by the browser bridge.

        Args:
            payload: ``{"type": "keydown", "key": "s", "metaKey": true, ...}`` or
                ``{"type": "visibilitychange", "hidden": true}``

        Returns:
            The dispatched event, or None for unknown event types
        """
        event_type = payload.get("type")
        if event_type == "keydown":
            return self.press_key(
                payload.get("key", ""),
                meta=bool(payload.get("metaKey")),
                shift=bool(payload.get("shiftKey")),
                ctrl=bool(payload.get("ctrlKey")),
                alt=bool(payload.get("altKey")),
            )
        if event_type == "blur":
            return self.blur_window()
        if event_type == "focus":
            return self.focus_window()
        if event_type == "visibilitychange":
            return self.set_document_hidden(bool(payload.get("hidden")))
        if event_type == "contextmenu":
            return self.context_menu()
        if event_type == "dragstart":
            return self.drag_start()

        logger.debug("unknown_bridge_event", event_type=event_type)
        return None
