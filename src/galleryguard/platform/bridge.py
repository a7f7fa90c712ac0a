"""
Browser event bridge.

The browser side of the protected surface reports every protection-relevant
event as a numbered entry in a batch::

    {"session": "k3j9x", "platform": "MacIntel",
     "events": [{"seq": 1, "type": "contextmenu"}, ...]}

Streamlit hands the latest batch back on every rerun, so entries are
replayed at most once per browser session. A new session token (the frame
was reloaded) restarts the numbering. The reported platform string selects
the screenshot shortcut table.
"""

from typing import Any

import structlog

from .events import InMemoryEventSource

logger = structlog.get_logger(__name__)


class BrowserEventBridge:
    """Replays browser event batches into an ``InMemoryEventSource``."""

    def __init__(self, event_source: InMemoryEventSource):
        self.event_source = event_source
        self._session: str | None = None
        self._last_seq = 0

    @property
    def last_seq(self) -> int:
        return self._last_seq

    def forward(self, batch: Any) -> int:
        """
        Replay the entries of a batch not seen before.

        Args:
            batch: Component value returned by the browser, or None

        Returns:
            int: Number of events replayed
        """
        if not isinstance(batch, dict) or not isinstance(batch.get("events"), list):
            if batch is not None:
                logger.debug("bridge_batch_ignored", batch_type=type(batch).__name__)
            return 0

        if isinstance(batch.get("platform"), str) and batch["platform"]:
            self.event_source.platform_string = batch["platform"]

        session = str(batch.get("session", ""))
        if session != self._session:
            self._session = session
            self._last_seq = 0

        entries = [
            entry
            for entry in batch["events"]
            if isinstance(entry, dict) and isinstance(entry.get("seq"), int) and entry["seq"] > self._last_seq
        ]
        entries.sort(key=lambda entry: entry["seq"])

        for entry in entries:
            self.event_source.replay(entry)
            self._last_seq = entry["seq"]

        if entries:
            logger.debug("bridge_events_replayed", count=len(entries), last_seq=self._last_seq)
        return len(entries)
