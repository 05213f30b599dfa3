"""Render state — the single current document shared by all viewers."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from preen._types import RenderedDocument

# What viewers receive before the first successful render.
EMPTY_DOCUMENT: RenderedDocument = ""


class RenderState:
    """Holds the most recently accepted RenderedDocument.

    Render attempts are numbered when they start. ``set`` refuses a
    document from an attempt older than the one already stored, so when
    renders overlap the newest-started attempt wins regardless of which
    one finishes last. Failed attempts never call ``set``.

    Thread-safe: value and sequence are replaced together under a lock.

    """

    __slots__ = ("_document", "_lock", "_sequence")

    def __init__(self) -> None:
        self._document: RenderedDocument = EMPTY_DOCUMENT
        self._sequence = -1
        self._lock = threading.Lock()

    def get(self) -> RenderedDocument:
        """Return the current document (``EMPTY_DOCUMENT`` before any render)."""
        with self._lock:
            return self._document

    @property
    def sequence(self) -> int:
        """Sequence number of the stored document, -1 if none."""
        with self._lock:
            return self._sequence

    @property
    def is_empty(self) -> bool:
        """True until the first successful render is stored."""
        with self._lock:
            return self._sequence < 0

    def set(self, document: RenderedDocument, sequence: int | None = None) -> bool:
        """Replace the current document.

        Args:
            document: The newly rendered document.
            sequence: Number of the render attempt that produced it. ``None``
                replaces unconditionally.

        Returns:
            False if the document came from an attempt older than the
            stored one and was discarded, True otherwise.

        """
        with self._lock:
            if sequence is None:
                sequence = self._sequence + 1
            elif sequence < self._sequence:
                return False
            self._document = document
            self._sequence = sequence
            return True
