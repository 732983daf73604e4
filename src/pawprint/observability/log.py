"""Event log — queryable, thread-safe store of generation events.

Keeps a bounded ring buffer of ``SitemapEvent`` objects so the dev server
can report what the last passes ignored, dropped, or failed on.

Thread Safety:
    All methods are protected by a ``threading.Lock``.  Passes run in
    worker threads while the event loop reads.

"""

import threading
from collections import deque
from collections.abc import Sequence
from typing import Any

from pawprint.observability.events import SitemapEvent


class EventLog:
    """Bounded event store with query support.

    When the buffer is full, the oldest events are discarded.

    Args:
        max_events: Maximum number of events to retain.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 5_000) -> None:
        self._max_events = max_events
        self._events: deque[SitemapEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: SitemapEvent) -> None:
        with self._lock:
            self._events.append(event)

    def append_many(self, events: Sequence[SitemapEvent]) -> None:
        with self._lock:
            self._events.extend(events)

    def query(
        self,
        *,
        event_type: type | None = None,
        since_ns: int = 0,
        path: str | None = None,
        limit: int = 100,
    ) -> list[SitemapEvent]:
        """Query events with optional filters.

        Args:
            event_type: Only return events of this type.
            since_ns: Only return events at or after this timestamp.
            path: Substring matched against the event's page path, URL path
                or ``loc``.
            limit: Maximum number of events to return.

        Returns:
            Matching events, most recent first.

        """
        with self._lock:
            snapshot = list(self._events)

        results: list[SitemapEvent] = []
        for event in reversed(snapshot):
            if len(results) >= limit:
                break
            if event_type is not None and not isinstance(event, event_type):
                continue
            if since_ns and event.timestamp_ns < since_ns:
                continue
            if path is not None and path not in _event_subject(event):
                continue
            results.append(event)
        return results

    def recent(self, n: int = 20) -> list[SitemapEvent]:
        """Return the N most recent events, oldest first."""
        with self._lock:
            items = list(self._events)
        return items[-n:]

    def clear(self) -> int:
        """Clear all events and return the count that was cleared."""
        with self._lock:
            count = len(self._events)
            self._events.clear()
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def stats(self) -> dict[str, Any]:
        """Return event counts by type."""
        with self._lock:
            events = list(self._events)

        type_counts: dict[str, int] = {}
        for event in events:
            name = type(event).__name__
            type_counts[name] = type_counts.get(name, 0) + 1

        return {
            "total": len(events),
            "max_events": self._max_events,
            "by_type": type_counts,
        }


def _event_subject(event: SitemapEvent) -> str:
    for attr in ("path", "url_path", "loc"):
        value = getattr(event, attr, None)
        if value:
            return str(value)
    return ""
