"""File watcher — reports changes to the three watched inputs.

Watches the directories holding the data file, template and stylesheet
(non-recursively) and keeps only events for those exact paths. Every
other file in the project directory is ignored.

Editors that save atomically (write to a temp file, then rename over the
original) produce a ``deleted`` + ``created`` pair for the same path within
one batch; the watcher folds such a pair into a single ``modified`` event.
"""

from __future__ import annotations

import asyncio
import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from watchfiles import Change

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterable

    from preen._types import ChangeKind, InputRole
    from preen.config import PreenConfig


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A change to one of the watched inputs.

    Attributes:
        path: Absolute path to the changed file.
        kind: Type of filesystem change.
        role: Which input changed.

    """

    path: Path
    kind: ChangeKind
    role: InputRole


_CHANGE_KIND_MAP: dict[Change, ChangeKind] = {
    Change.added: "created",
    Change.modified: "modified",
    Change.deleted: "deleted",
}


def classify_path(path: Path, config: PreenConfig) -> InputRole | None:
    """Return the role of *path*, or None if it is not a watched input."""
    if path == config.data_path:
        return "data"
    if path == config.template_path:
        return "template"
    if path == config.stylesheet_path:
        return "stylesheet"
    return None


def collect_events(
    raw_changes: Iterable[tuple[Change, str]],
    config: PreenConfig,
) -> list[ChangeEvent]:
    """Turn one watchfiles batch into ChangeEvents for watched paths.

    Events keep the order in which paths first appear in the batch.

    """
    kinds: dict[Path, set[ChangeKind]] = {}
    for change_type, path_str in raw_changes:
        path = Path(path_str)
        if classify_path(path, config) is None:
            continue
        kinds.setdefault(path, set()).add(_CHANGE_KIND_MAP.get(change_type, "modified"))

    events: list[ChangeEvent] = []
    for path, seen in kinds.items():
        if "modified" in seen or {"created", "deleted"} <= seen:
            kind: ChangeKind = "modified"
        elif "created" in seen:
            kind = "created"
        else:
            kind = "deleted"
        role = classify_path(path, config)
        assert role is not None
        events.append(ChangeEvent(path=path, kind=kind, role=role))
    return events


class ContentWatcher:
    """Watches the input files and feeds change events to the event loop.

    watchfiles runs in a background thread; events are handed to the
    loop that called ``start()`` through ``call_soon_threadsafe``.

    """

    def __init__(
        self,
        config: PreenConfig,
        *,
        debounce_ms: int = 50,
        retry_delay: float = 1.0,
    ) -> None:
        self._config = config
        self._debounce_ms = debounce_ms
        self._retry_delay = retry_delay
        self._queue: asyncio.Queue[ChangeEvent] = asyncio.Queue()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def is_running(self) -> bool:
        """Whether the watcher background thread is active."""
        return self._thread is not None and self._thread.is_alive()

    @property
    def watch_dirs(self) -> tuple[Path, ...]:
        """Directories handed to watchfiles, one per distinct parent."""
        return tuple(sorted({p.parent for p in self._config.watched_paths}))

    def start(self) -> None:
        """Start watching in a background thread. Must run inside the event loop."""
        if self.is_running:
            return

        self._loop = asyncio.get_running_loop()
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._watch_loop,
            name="preen-watcher",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Signal the watcher to stop and wait for the thread to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=5.0)
            self._thread = None

    async def changes(self) -> AsyncIterator[ChangeEvent]:
        """Async iterator that yields ChangeEvent objects as they occur."""
        while self.is_running or not self._queue.empty():
            try:
                event = await asyncio.wait_for(self._queue.get(), timeout=0.5)
                yield event
            except TimeoutError:
                if not self.is_running:
                    break

    def _watch_loop(self) -> None:
        """Background thread: run watchfiles and push events to the queue.

        A watch error is logged and watching resumes after ``retry_delay``
        seconds, until ``stop()`` is called.

        """
        while not self._stop_event.is_set():
            try:
                self._watch_once()
            except Exception as exc:
                print(f"  Watch error: {type(exc).__name__}: {exc}", file=sys.stderr)
                self._stop_event.wait(self._retry_delay)

    def _watch_once(self) -> None:
        from watchfiles import watch

        dirs = [d for d in self.watch_dirs if d.is_dir()]
        if not dirs:
            msg = "no input directory exists"
            raise FileNotFoundError(msg)

        for raw_changes in watch(
            *dirs,
            stop_event=self._stop_event,
            recursive=False,
            debounce=self._debounce_ms,
            step=50,
        ):
            for event in collect_events(raw_changes, self._config):
                self._enqueue(event)

    def _enqueue(self, event: ChangeEvent) -> None:
        loop = self._loop
        if loop is None or loop.is_closed():
            return
        loop.call_soon_threadsafe(self._queue.put_nowait, event)
