"""Style extraction — stylesheet rules as template data.

Turns a stylesheet into a flat ``selector -> declarations`` mapping so
templates can inline styles (``style="{{ styles['.note'] }}"``). Only plain
style rules contribute; at-rules such as ``@media`` and comments are skipped.

A selector that appears in several rules accumulates its declarations in
source order, separated by a single space. Entries are never overwritten.

Parsing follows CSS Syntax Level 3 error recovery: the end of the input
closes any block still open, so a trailing rule missing its final ``}``
still contributes. Errors that recovery cannot absorb (a rule with no
block, a declaration without a colon, an empty value) raise
StyleParseError.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import tinycss2

from preen._errors import StyleParseError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from tinycss2.ast import Node

    from preen._types import StyleMap


def extract_styles(css: str) -> StyleMap:
    """Parse *css* and return the accumulated StyleMap.

    Raises:
        StyleParseError: If the stylesheet (or a rule's declarations) is
            not valid CSS.

    """
    styles: StyleMap = {}
    rules = tinycss2.parse_stylesheet(css, skip_comments=True, skip_whitespace=True)

    for rule in rules:
        if rule.type == "error":
            raise _parse_error(rule)
        if rule.type != "qualified-rule":
            continue

        declarations = format_declarations(rule.content)
        for selector in split_selectors(rule.prelude):
            previous = styles.get(selector)
            styles[selector] = f"{previous} {declarations}" if previous else declarations

    return styles


def format_declarations(content: Iterable[Node]) -> str:
    """Render a rule body as ``"prop: value; prop: value;"`` in source order."""
    parts: list[str] = []
    for decl in tinycss2.parse_declaration_list(
        content, skip_comments=True, skip_whitespace=True
    ):
        if decl.type == "error":
            raise _parse_error(decl)
        if decl.type != "declaration":
            continue  # nested rules and at-rules inside a block
        value = tinycss2.serialize(decl.value).strip()
        if not value:
            msg = (
                f"empty value for {decl.name!r} "
                f"(line {decl.source_line}, column {decl.source_column})"
            )
            raise StyleParseError(msg)
        if decl.important:
            value += " !important"
        parts.append(f"{decl.name}: {value};")
    return " ".join(parts)


def split_selectors(prelude: Iterable[Node]) -> Iterator[str]:
    """Yield each selector of a comma-separated selector list.

    Commas inside functional pseudo-classes (``:is(a, b)``) are nested in
    function tokens and do not split. Whitespace runs collapse to one space.
    """
    current: list[str] = []
    for token in prelude:
        if token.type == "literal" and token.value == ",":
            selector = "".join(current).strip()
            if selector:
                yield selector
            current = []
        elif token.type in ("whitespace", "comment"):
            if current and current[-1] != " ":
                current.append(" ")
        else:
            current.append(token.serialize())

    selector = "".join(current).strip()
    if selector:
        yield selector


def _parse_error(node: Node) -> StyleParseError:
    line = getattr(node, "source_line", 0)
    column = getattr(node, "source_column", 0)
    message = getattr(node, "message", "invalid CSS")
    return StyleParseError(f"{message} (line {line}, column {column})")
