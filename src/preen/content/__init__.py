"""Content layer — the watched inputs and how they become a document.

Handles file watching, style extraction, and data/template composition
for the reactive pipeline.
"""

from preen.content.compositor import DocumentCompositor
from preen.content.styles import extract_styles
from preen.content.watcher import ChangeEvent, ContentWatcher

__all__ = [
    "ChangeEvent",
    "ContentWatcher",
    "DocumentCompositor",
    "extract_styles",
]
