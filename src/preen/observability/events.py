"""Event model for render and viewer observability.

All events are frozen dataclasses with a ``timestamp_ns`` taken from the
monotonic clock, safe to share across threads.
"""

import time
from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Render attempts
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RenderCompleted:
    """A render attempt produced a document.

    Attributes:
        sequence: Number of the render attempt.
        trigger_path: Input file whose change started the attempt
            (empty for the startup render).
        accepted: False if a newer attempt had already been stored.
        clients_notified: Viewers the document was delivered to.
        size_bytes: UTF-8 size of the document.
        duration_ms: Time from attempt start to broadcast completion.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    sequence: int
    trigger_path: str
    accepted: bool
    clients_notified: int
    size_bytes: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class RenderFailed:
    """A render attempt failed and left the current document untouched.

    Attributes:
        sequence: Number of the render attempt.
        trigger_path: Input file whose change started the attempt.
        error_type: Exception class name (``SourceReadError``, ...).
        message: Exception message.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    sequence: int
    trigger_path: str
    error_type: str
    message: str
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Viewer lifecycle
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ViewerConnected:
    client_id: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ViewerDisconnected:
    client_id: str
    timestamp_ns: int


type PreviewEvent = RenderCompleted | RenderFailed | ViewerConnected | ViewerDisconnected


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
