"""Preview router — the HTTP front door on a Chirp app.

Routes:
    ``/``                       page shell embedding the current document
    ``/updates``                SSE stream of ``{"html": ...}`` messages
    ``/__preen/stats``          render and viewer statistics (JSON)
    ``/github-markdown-css/*``  stylesheet bundle, served verbatim
"""

from __future__ import annotations

import json
import uuid
from typing import TYPE_CHECKING, Any

from preen.page import UPDATES_ENDPOINT, VENDOR_CSS_PREFIX, render_page
from preen.reactive.broadcaster import ViewerConnection, format_update

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from chirp import App, Request, SSEEvent

    from preen.config import PreenConfig
    from preen.observability.collector import RenderCollector
    from preen.reactive.broadcaster import BroadcastHub
    from preen.reactive.state import RenderState


STATS_ENDPOINT = "/__preen/stats"


class PreviewRouter:
    """Registers the preview routes on a Chirp app.

    Args:
        app: Chirp App to register routes on (must not yet be frozen).
        state: Source of the document embedded in ``/``.
        hub: Viewer registry backing ``/updates``.
        config: Page title and vendor stylesheet location.
        collector: Optional recorder for viewer lifecycle and ``/__preen/stats``.

    """

    def __init__(
        self,
        app: App,
        state: RenderState,
        hub: BroadcastHub,
        config: PreenConfig,
        collector: RenderCollector | None = None,
    ) -> None:
        self._app = app
        self._state = state
        self._hub = hub
        self._config = config
        self._collector = collector

    def register_page(self) -> None:
        """Register ``/``: the current document inside the live page shell."""
        state = self._state
        title = self._config.title

        async def page_handler(request: Request) -> Any:
            from chirp import Response

            return Response(
                body=render_page(state.get(), title=title),
                status=200,
                content_type="text/html; charset=utf-8",
            )

        page_handler.__name__ = "preen_page"
        page_handler.__qualname__ = "PreviewRouter.preen_page"

        self._app.route("/", name="preen:page")(page_handler)

    def register_sse_endpoint(self) -> None:
        """Register the ``/updates`` SSE endpoint."""
        from chirp import EventStream

        async def updates_handler(request: Request) -> Any:
            conn = ViewerConnection(client_id=str(uuid.uuid4()))
            return EventStream(self.viewer_events(conn))

        updates_handler.__name__ = "preen_updates"
        updates_handler.__qualname__ = "PreviewRouter.preen_updates"

        self._app.route(UPDATES_ENDPOINT, name="preen:updates")(updates_handler)

    async def viewer_events(self, conn: ViewerConnection) -> AsyncIterator[SSEEvent]:
        """SSE events for one viewer, starting with the current document.

        The connection is registered with the hub when the stream starts
        and unregistered when the client disconnects and Chirp closes the
        generator.

        """
        from chirp import SSEEvent

        hub = self._hub
        collector = self._collector

        hub.register(conn)
        if collector is not None:
            collector.record_connect(conn.client_id)
        try:
            async for document in hub.client_generator(conn):
                yield SSEEvent(data=format_update(document))
        finally:
            hub.unregister(conn.client_id)
            if collector is not None:
                collector.record_disconnect(conn.client_id)

    def register_stats_endpoint(self) -> None:
        """Register the ``/__preen/stats`` JSON endpoint.

        Raises:
            ValueError: If the router was built without a collector.

        """
        collector = self._collector
        if collector is None:
            msg = "the stats endpoint needs a RenderCollector"
            raise ValueError(msg)
        hub = self._hub
        state = self._state

        async def stats_handler(request: Request) -> Any:
            from chirp import Response

            payload = json.dumps(
                {
                    "renders": collector.summary(),
                    "viewers": hub.client_count,
                    "document_bytes": len(state.get().encode("utf-8")),
                    "event_log": collector.log.stats(),
                },
                indent=2,
            )
            return Response(body=payload, status=200, content_type="application/json")

        stats_handler.__name__ = "preen_stats"
        stats_handler.__qualname__ = "PreviewRouter.preen_stats"

        self._app.route(STATS_ENDPOINT, name="preen:stats")(stats_handler)

    def mount_vendor_css(self) -> bool:
        """Serve the github-markdown-css bundle if it is installed.

        Returns False (and mounts nothing) when the directory is missing;
        the page then renders without the markdown styles.

        """
        from chirp.middleware import StaticFiles

        directory = self._config.vendor_css_path
        if not directory.is_dir():
            return False
        self._app.add_middleware(StaticFiles(directory=directory, prefix=VENDOR_CSS_PREFIX))
        return True
