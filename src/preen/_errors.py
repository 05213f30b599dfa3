"""Preen error hierarchy.

All preen-specific errors inherit from PreenError for easy catching.
"""


class PreenError(Exception):
    """Base error for all preen operations."""


class ConfigError(PreenError):
    """Invalid or missing configuration."""


class SourceReadError(PreenError):
    """A watched input could not be read or its structured data parsed."""


class StyleParseError(SourceReadError):
    """The stylesheet is not syntactically valid CSS."""


class CompositionError(PreenError):
    """Template evaluation failed (syntax error, undefined reference, ...)."""


class OutputWriteError(PreenError):
    """The rendered document could not be written to the output artifact."""


class DeliveryError(PreenError):
    """A message could not be written to a viewer connection."""
