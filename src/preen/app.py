"""Preen application — wires the render pipeline into a Chirp app.

``create_preview`` builds every component with explicit ownership: one
RenderState and one BroadcastHub, injected into the ChangeTrigger and the
PreviewRouter. ``dev`` is the public entry point.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from preen.config_loader import load_config

if TYPE_CHECKING:
    from chirp import App

    from preen.config import PreenConfig
    from preen.content.compositor import DocumentCompositor
    from preen.content.watcher import ContentWatcher
    from preen.observability.collector import RenderCollector
    from preen.reactive.broadcaster import BroadcastHub
    from preen.reactive.state import RenderState
    from preen.reactive.trigger import ChangeTrigger


@dataclass(frozen=True, slots=True)
class Preview:
    """The assembled preview server components."""

    config: PreenConfig
    app: App
    state: RenderState
    hub: BroadcastHub
    compositor: DocumentCompositor
    trigger: ChangeTrigger
    watcher: ContentWatcher
    collector: RenderCollector
    vendor_css: bool


def _create_chirp_app(config: PreenConfig) -> App:
    """Create a Chirp App for the preview routes.

    Routes return prebuilt ``Response`` bodies, so Chirp's own template
    directory is only pointed at the project root to satisfy its loader.

    """
    from chirp import App, AppConfig

    return App(
        config=AppConfig(
            template_dir=config.root,
            debug=True,
            host=config.host,
            port=config.port,
        )
    )


def create_preview(config: PreenConfig) -> Preview:
    """Build the pipeline components and register routes and lifecycle hooks."""
    from preen.content.compositor import DocumentCompositor
    from preen.content.watcher import ContentWatcher
    from preen.observability import EventLog, RenderCollector
    from preen.reactive.broadcaster import BroadcastHub
    from preen.reactive.state import RenderState
    from preen.reactive.trigger import ChangeTrigger
    from preen.router import PreviewRouter

    app = _create_chirp_app(config)
    collector = RenderCollector(EventLog())
    state = RenderState()
    hub = BroadcastHub(state)
    compositor = DocumentCompositor(config)
    trigger = ChangeTrigger(compositor, state, hub, collector)
    watcher = ContentWatcher(config)

    router = PreviewRouter(app, state, hub, config, collector)
    router.register_page()
    router.register_sse_endpoint()
    router.register_stats_endpoint()
    vendor_css = router.mount_vendor_css()

    _wire_lifecycle(app, trigger, watcher)

    return Preview(
        config=config,
        app=app,
        state=state,
        hub=hub,
        compositor=compositor,
        trigger=trigger,
        watcher=watcher,
        collector=collector,
        vendor_css=vendor_css,
    )


def _wire_lifecycle(app: App, trigger: ChangeTrigger, watcher: ContentWatcher) -> None:
    """Register startup/shutdown hooks that own the watch loop.

    Flow:
        on_startup  → one render attempt, then start watcher + consumer task
        file change → trigger.schedule() → independent render task
        on_shutdown → stop watcher, cancel consumer and in-flight renders

    """
    _task: asyncio.Task[None] | None = None

    @app.on_startup
    async def _start_watch_loop() -> None:
        nonlocal _task
        await trigger.render_once()
        watcher.start()
        _task = asyncio.create_task(trigger.run(watcher))

    @app.on_shutdown
    async def _stop_watch_loop() -> None:
        watcher.stop()
        if _task is not None and not _task.done():
            _task.cancel()
        await trigger.aclose()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def dev(root: str | Path = ".", **kwargs: object) -> None:
    """Start the live-preview server.

    Renders once on startup, then re-renders whenever the data file,
    template or stylesheet changes and pushes the result to every open
    browser tab.

    Args:
        root: Project directory containing the three inputs.
        **kwargs: Override PreenConfig fields.

    """
    from preen.banner import print_banner

    config = load_config(Path(root), **kwargs)
    preview = create_preview(config)

    print_banner(config, vendor_css=preview.vendor_css)

    preview.app.run(host=config.host, port=config.port)
