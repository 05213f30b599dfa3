"""Broadcast hub — pushes the rendered document to connected browsers.

Every open ``/updates`` stream is a ViewerConnection with its own queue.
The hub writes each successful render to every queue; the SSE handler
drains the queue into Chirp's EventStream.

Delivery is best effort and most-recent-value: there are no acks, a viewer
that connects late gets only the current document, and a viewer whose queue
is full loses its oldest pending update rather than slowing the others.
"""

from __future__ import annotations

import asyncio
import json
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from preen._errors import DeliveryError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from preen._types import ClientID, RenderedDocument
    from preen.reactive.state import RenderState

# Pending updates per viewer before the oldest is dropped.
DEFAULT_QUEUE_SIZE = 8


@dataclass(frozen=True, slots=True)
class ViewerConnection:
    """A connected SSE client.

    Attributes:
        client_id: Unique identifier for this connection.
        queue: Documents waiting to be written to the client's stream.

    """

    client_id: ClientID
    queue: asyncio.Queue[RenderedDocument] = field(
        default_factory=lambda: asyncio.Queue(maxsize=DEFAULT_QUEUE_SIZE),
        compare=False,
        hash=False,
    )
    _closed: threading.Event = field(
        default_factory=threading.Event, compare=False, hash=False, repr=False
    )

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def close(self) -> None:
        """Mark the connection closed; further sends raise DeliveryError."""
        self._closed.set()

    def send(self, document: RenderedDocument) -> None:
        """Queue *document* without blocking.

        Raises:
            DeliveryError: If the connection has been closed.

        """
        if self.closed:
            msg = f"viewer {self.client_id} is disconnected"
            raise DeliveryError(msg)
        while True:
            try:
                self.queue.put_nowait(document)
                return
            except asyncio.QueueFull:
                try:
                    self.queue.get_nowait()
                except asyncio.QueueEmpty:
                    pass


def format_update(document: RenderedDocument) -> str:
    """JSON payload of one SSE message: ``{"html": document}``."""
    return json.dumps({"html": document})


class BroadcastHub:
    """The set of live viewer connections.

    Reads the current document from RenderState when a viewer registers, so
    a late joiner immediately sees the latest successful render.

    Thread-safe: the connection map is protected by a lock; ``publish``
    writes to a snapshot taken under that lock.

    """

    def __init__(self, state: RenderState) -> None:
        self._state = state
        self._connections: dict[ClientID, ViewerConnection] = {}
        self._lock = threading.Lock()

    @property
    def client_count(self) -> int:
        """Number of live viewer connections."""
        with self._lock:
            return len(self._connections)

    def client_ids(self) -> frozenset[ClientID]:
        with self._lock:
            return frozenset(self._connections)

    def register(self, conn: ViewerConnection) -> None:
        """Add a viewer and send it the current document right away."""
        with self._lock:
            self._connections[conn.client_id] = conn
            # Under the lock so a concurrent publish cannot slip in between
            # and leave the viewer with an older document than the state.
            conn.send(self._state.get())

    def unregister(self, client_id: ClientID) -> bool:
        """Remove a viewer. Returns False if it was already gone."""
        with self._lock:
            conn = self._connections.pop(client_id, None)
        if conn is None:
            return False
        conn.close()
        return True

    async def publish(self, document: RenderedDocument) -> int:
        """Write *document* to every registered viewer.

        A viewer that fails (closed connection) is unregistered; the rest
        still receive the update.

        Returns:
            Number of viewers the document was delivered to.

        """
        with self._lock:
            connections = tuple(self._connections.values())

        delivered = 0
        for conn in connections:
            try:
                conn.send(document)
            except DeliveryError:
                self.unregister(conn.client_id)
                continue
            delivered += 1
        return delivered

    async def client_generator(self, conn: ViewerConnection) -> AsyncIterator[RenderedDocument]:
        """Async generator that yields documents from a connection's queue.

        Catches ``CancelledError`` (client disconnect / task cancellation)
        and ``GeneratorExit`` (generator cleanup) so a dropped client ends
        the stream quietly.

        """
        try:
            while not conn.closed:
                yield await conn.queue.get()
        except (asyncio.CancelledError, GeneratorExit):
            return
