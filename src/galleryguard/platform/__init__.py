"""Environment event plumbing used by the protection detectors."""

from .bridge import BrowserEventBridge
from .events import (
    EventHandler,
    EventTarget,
    InMemoryEventSource,
    KeyEvent,
    PlatformEvent,
    PlatformEventSource,
)

__all__ = [
    "BrowserEventBridge",
    "EventHandler",
    "EventTarget",
    "InMemoryEventSource",
    "KeyEvent",
    "PlatformEvent",
    "PlatformEventSource",
]
