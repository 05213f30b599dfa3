"""Event log — bounded, thread-safe store of preview events.

Thread Safety:
    All methods are protected by a ``threading.Lock``.

"""

import threading
from collections import Counter, deque
from typing import Any

from preen.observability.events import PreviewEvent


class EventLog:
    """Ring buffer of the most recent events.

    Args:
        max_events: Maximum number of events to retain; the oldest are
            discarded once the buffer is full.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 1_000) -> None:
        self._max_events = max_events
        self._events: deque[PreviewEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    @property
    def max_events(self) -> int:
        return self._max_events

    def append(self, event: PreviewEvent) -> None:
        with self._lock:
            self._events.append(event)

    def of_type(self, event_type: type, limit: int = 100) -> list[PreviewEvent]:
        """Return up to *limit* events of *event_type*, most recent first."""
        with self._lock:
            snapshot = list(self._events)
        matches = [e for e in reversed(snapshot) if isinstance(e, event_type)]
        return matches[:limit]

    def recent(self, n: int = 20) -> list[PreviewEvent]:
        """Return the N most recent events, oldest first."""
        with self._lock:
            items = list(self._events)
        return items[-n:]

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def stats(self) -> dict[str, Any]:
        """Return event counts by type."""
        with self._lock:
            counts = Counter(type(e).__name__ for e in self._events)
            total = len(self._events)
        return {
            "total": total,
            "max_events": self._max_events,
            "by_type": dict(counts),
        }
