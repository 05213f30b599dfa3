"""Reactive layer — change propagation pipeline.

Connects input changes to browser updates through the render state and
SSE broadcasting.
"""

from preen.reactive.broadcaster import BroadcastHub, ViewerConnection
from preen.reactive.state import EMPTY_DOCUMENT, RenderState
from preen.reactive.trigger import ChangeTrigger

__all__ = [
    "EMPTY_DOCUMENT",
    "BroadcastHub",
    "ChangeTrigger",
    "RenderState",
    "ViewerConnection",
]
