"""Startup banner — what is watched, where it is served.

Detects ``NO_COLOR`` / ``TERM`` for safe fallback to plain text.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from preen.config import PreenConfig


# ---------------------------------------------------------------------------
# ANSI helpers, respecting NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_CYAN = "\033[36m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""


def _clickable_url(url: str) -> str:
    """Wrap *url* in an OSC 8 hyperlink escape if the terminal supports it."""
    if not _COLOR:
        return url
    return f"\033]8;;{url}\033\\{_BOLD}{_CYAN}{url}{_RESET}\033]8;;\033\\"


def print_banner(
    config: PreenConfig,
    *,
    vendor_css: bool = True,
    warnings: list[str] | None = None,
) -> None:
    """Print the preen startup banner to stderr.

    Args:
        config: Resolved PreenConfig.
        vendor_css: Whether the github-markdown-css bundle was found.
        warnings: Optional list of warning messages to display.

    """
    from preen import __version__

    lines: list[str] = [
        "",
        f"  {_BOLD}preen{_RESET} {_DIM}v{__version__}{_RESET}  {_GREEN}[live]{_RESET}",
        f"  {_DIM}{'─' * 43}{_RESET}",
        f"  {_DIM}├─{_RESET} data:       {config.data_file}",
        f"  {_DIM}├─{_RESET} template:   {config.template_file}",
        f"  {_DIM}├─{_RESET} stylesheet: {config.stylesheet_file}",
        f"  {_DIM}├─{_RESET} output:     {_DIM}{config.output_path}{_RESET}",
        f"  {_DIM}└─{_RESET} {_GREEN}live{_RESET} — SSE on {_DIM}/updates{_RESET}",
        "",
        f"  {_clickable_url(config.url)}",
        "",
        f"  {_DIM}Watching for changes...{_RESET}",
    ]

    all_warnings = list(warnings or [])
    if not vendor_css:
        all_warnings.append(
            f"stylesheet bundle not found at {config.vendor_css_path}"
        )
    if all_warnings:
        lines.append("")
        lines.extend(f"  {_YELLOW}!{_RESET} {w}" for w in all_warnings)

    lines.append("")

    print("\n".join(lines), file=sys.stderr)
