"""Shared type definitions for preen."""

from typing import Literal

# Text produced by one successful render
type RenderedDocument = str

# Selector -> accumulated "prop: value; ..." declarations
type StyleMap = dict[str, str]

# SSE client identifier
type ClientID = str

# Which of the three watched inputs a path is
type InputRole = Literal["data", "template", "stylesheet"]

# Filesystem change kind reported by the watcher
type ChangeKind = Literal["created", "modified", "deleted"]
