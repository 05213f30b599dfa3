"""Preen — live preview for a data + template + stylesheet document.

Watches a YAML data file, a Kida template and a CSS stylesheet, re-renders
one HTML document whenever any of them changes, and pushes the result to
every open browser tab over Server-Sent Events.

Quick start::

    import preen

    preen.dev("my-letter/")

The stylesheet's rules are available to the template as ``styles``::

    <div style="{{ styles['.note'] }}">...</div>

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "PreenConfig",
    "__version__",
    "create_preview",
    "dev",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import preen`` fast; Chirp and Kida load on first use.
    """
    if name == "PreenConfig":
        from preen.config import PreenConfig

        return PreenConfig

    if name == "dev":
        from preen.app import dev

        return dev

    if name == "create_preview":
        from preen.app import create_preview

        return create_preview

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
