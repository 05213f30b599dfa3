"""Observability — render attempts and viewer lifecycle as events.

Quick Start:
    >>> from preen.observability import EventLog, RenderCollector
    >>> collector = RenderCollector(EventLog())
    >>> collector.record_render(0, clients_notified=2)
    >>> collector.summary()["renders"]
    1

"""

from preen.observability.collector import RenderCollector
from preen.observability.events import (
    PreviewEvent,
    RenderCompleted,
    RenderFailed,
    ViewerConnected,
    ViewerDisconnected,
    now_ns,
)
from preen.observability.log import EventLog

__all__ = [
    "EventLog",
    "PreviewEvent",
    "RenderCollector",
    "RenderCompleted",
    "RenderFailed",
    "ViewerConnected",
    "ViewerDisconnected",
    "now_ns",
]
