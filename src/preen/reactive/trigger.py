"""Change trigger — connects the watcher to the compositor and the hub.

Orchestrates one render attempt per change:
    1. ContentWatcher reports a modified input (ChangeEvent)
    2. DocumentCompositor re-reads all three inputs and renders
    3. RenderState stores the document (unless a newer attempt already did)
    4. The output artifact is rewritten
    5. BroadcastHub pushes the document to every viewer

Each change starts its own task, so renders may overlap. Attempts are
numbered as they start and RenderState keeps the newest-started result.
Composition runs concurrently; accepting, writing the artifact and
publishing are serialized under one lock.
A failed attempt is logged and recorded; the current document, the
artifact and the viewers are left as they were. Nothing is retried.
"""

from __future__ import annotations

import asyncio
import itertools
import sys
import time
from typing import TYPE_CHECKING

from preen._errors import PreenError

if TYPE_CHECKING:
    from preen.content.compositor import DocumentCompositor
    from preen.content.watcher import ChangeEvent, ContentWatcher
    from preen.observability.collector import RenderCollector
    from preen.reactive.broadcaster import BroadcastHub
    from preen.reactive.state import RenderState


class ChangeTrigger:
    """Runs a render attempt for every change to a watched input.

    Args:
        compositor: Produces the document from the inputs.
        state: Receives each accepted document.
        hub: Fans accepted documents out to viewers.
        collector: Optional event recorder for the stats endpoint.

    """

    def __init__(
        self,
        compositor: DocumentCompositor,
        state: RenderState,
        hub: BroadcastHub,
        collector: RenderCollector | None = None,
    ) -> None:
        self._compositor = compositor
        self._state = state
        self._hub = hub
        self._collector = collector
        self._sequence = itertools.count()
        self._tasks: set[asyncio.Task[None]] = set()
        self._commit_lock = asyncio.Lock()

    @property
    def pending(self) -> int:
        """Number of render attempts currently in flight."""
        return len(self._tasks)

    async def handle_change(self, event: ChangeEvent) -> None:
        """Process a single watcher event.

        Only ``modified`` events render. A newly created input is logged,
        as is a deleted one; the next modification renders it.

        """
        name = event.path.name
        if event.kind == "created":
            print(f"  Watching: {name}", file=sys.stderr)
            return
        if event.kind == "deleted":
            print(f"  Removed: {name} (keeping last render)", file=sys.stderr)
            return

        print(f"  Changed: {name}", file=sys.stderr)
        await self.render_once(trigger=name)

    async def render_once(self, trigger: str = "") -> bool:
        """Run one render attempt. Returns True if it produced a document.

        Never raises PreenError: failures are reduced to a log line.

        """
        sequence = next(self._sequence)
        t0 = time.perf_counter()

        try:
            document = await self._compositor.compose()
        except PreenError as exc:
            self._report_failure(sequence, exc, trigger)
            return False

        # Accept, write and publish are one step per attempt: once a newer
        # attempt is accepted, an older one never reaches the artifact or viewers.
        async with self._commit_lock:
            if not self._state.set(document, sequence):
                print(
                    f"  Render #{sequence} superseded by #{self._state.sequence}, dropped",
                    file=sys.stderr,
                )
                self._record(sequence, trigger, document, t0, accepted=False)
                return True

            try:
                await self._compositor.write_output(document)
            except PreenError as exc:
                # The document is current; only the artifact is stale.
                print(f"  Output not written: {exc}", file=sys.stderr)

            count = await self._hub.publish(document)
        ms = self._record(sequence, trigger, document, t0, clients=count)

        clients = "viewer" if count == 1 else "viewers"
        print(
            f"  {self._compositor.output_path.name} updated "
            f"in {ms:.0f}ms, {count} {clients} notified",
            file=sys.stderr,
        )
        return True

    def schedule(self, event: ChangeEvent) -> asyncio.Task[None]:
        """Handle *event* in its own task without waiting for earlier renders."""
        task = asyncio.create_task(self.handle_change(event))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def run(self, watcher: ContentWatcher) -> None:
        """Consume watcher events until the watcher stops."""
        async for event in watcher.changes():
            self.schedule(event)

    async def aclose(self) -> None:
        """Cancel render attempts still in flight."""
        tasks = tuple(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    def _report_failure(self, sequence: int, exc: PreenError, trigger: str) -> None:
        source = f" ({trigger})" if trigger else ""
        print(
            f"  Render failed{source}: {type(exc).__name__}: {exc}",
            file=sys.stderr,
        )
        if self._collector is not None:
            self._collector.record_failure(sequence, exc, trigger_path=trigger)

    def _record(
        self,
        sequence: int,
        trigger: str,
        document: str,
        t0: float,
        *,
        accepted: bool = True,
        clients: int = 0,
    ) -> float:
        duration_ms = (time.perf_counter() - t0) * 1000
        if self._collector is not None:
            self._collector.record_render(
                sequence,
                trigger_path=trigger,
                accepted=accepted,
                clients_notified=clients,
                size_bytes=len(document.encode("utf-8")),
                duration_ms=duration_ms,
            )
        return duration_ms
