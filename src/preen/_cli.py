"""Preen CLI — ``preen [root] [--port N]``.

Entry point for the ``preen`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys

from preen._errors import ConfigError


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the preen CLI."""
    parser = argparse.ArgumentParser(
        prog="preen",
        description="Live preview of a data + template + stylesheet document.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument("root", nargs="?", default=".", help="Project directory")
    parser.add_argument("--port", type=int, default=None, help="Bind port (default 3000)")
    return parser


def _get_version() -> str:
    """Get the package version."""
    from preen import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    from preen.app import dev

    overrides: dict[str, object] = {}
    if args.port is not None:
        overrides["port"] = args.port

    try:
        dev(root=args.root, **overrides)
    except ConfigError as exc:
        print(f"  Config error: {exc}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
