"""Tests for preen.content.styles — stylesheet to StyleMap."""

from __future__ import annotations

import pytest

from preen._errors import StyleParseError
from preen.content.styles import extract_styles


class TestExtractStyles:
    """Basic rule and declaration formatting."""

    def test_single_rule(self) -> None:
        assert extract_styles(".x { color: red; }") == {".x": "color: red;"}

    def test_declarations_in_source_order(self) -> None:
        styles = extract_styles("h1 { font-size: 2em; margin: 0 auto; color: #333 }")
        assert styles == {"h1": "font-size: 2em; margin: 0 auto; color: #333;"}

    def test_selector_list_shares_declarations(self) -> None:
        styles = extract_styles("h1, h2 { color: red; }")
        assert styles == {"h1": "color: red;", "h2": "color: red;"}

    def test_selector_whitespace_normalized(self) -> None:
        styles = extract_styles("div   >\n  p , .a .b { color: red; }")
        assert set(styles) == {"div > p", ".a .b"}

    def test_comma_inside_pseudo_class_does_not_split(self) -> None:
        styles = extract_styles(":is(h1, h2) { color: red; }")
        assert list(styles) == [":is(h1, h2)"]

    def test_important_kept(self) -> None:
        styles = extract_styles(".x { color: red !important; }")
        assert styles == {".x": "color: red !important;"}

    def test_empty_stylesheet(self) -> None:
        assert extract_styles("") == {}

    def test_empty_rule_maps_to_empty_string(self) -> None:
        assert extract_styles(".x {}") == {".x": ""}


class TestAccumulation:
    """A repeated selector appends; it is never overwritten."""

    def test_two_rules_same_selector(self) -> None:
        css = ".x { color: red; }\n.x { margin: 0; padding: 1px; }"
        styles = extract_styles(css)
        assert styles == {".x": "color: red; margin: 0; padding: 1px;"}

    def test_single_occurrence_has_no_leading_separator(self) -> None:
        styles = extract_styles(".x { color: red; }")
        assert not styles[".x"].startswith(" ")

    def test_accumulates_through_selector_lists(self) -> None:
        css = "a, b { color: red; }\nb { color: blue; }"
        styles = extract_styles(css)
        assert styles["a"] == "color: red;"
        assert styles["b"] == "color: red; color: blue;"

    def test_three_rules(self) -> None:
        css = ".x { a: 1; } .y { b: 2; } .x { c: 3; } .x { d: 4; }"
        assert extract_styles(css)[".x"] == "a: 1; c: 3; d: 4;"


class TestIgnoredRules:
    """Non-style rules contribute nothing and do not raise."""

    def test_comments_ignored(self) -> None:
        css = "/* heading */\n.x { /* inline */ color: red; }"
        assert extract_styles(css) == {".x": "color: red;"}

    def test_media_query_ignored(self) -> None:
        css = "@media print { .x { color: black; } }\n.x { color: red; }"
        assert extract_styles(css) == {".x": "color: red;"}

    def test_import_and_font_face_ignored(self) -> None:
        css = '@import url("a.css");\n@font-face { font-family: X; }\n.y { top: 0; }'
        assert extract_styles(css) == {".y": "top: 0;"}


class TestParseErrors:
    """Malformed CSS raises StyleParseError."""

    def test_rule_without_block(self) -> None:
        with pytest.raises(StyleParseError):
            extract_styles(".x color: red")

    def test_invalid_declaration(self) -> None:
        with pytest.raises(StyleParseError, match="line"):
            extract_styles(".x { color red; }")

    def test_empty_value(self) -> None:
        with pytest.raises(StyleParseError, match="empty value for 'color'"):
            extract_styles(".x { color: ; }")


class TestErrorRecovery:
    """End of input closes open blocks."""

    def test_trailing_rule_without_closing_brace(self) -> None:
        assert extract_styles(".x { color: red; ") == {".x": "color: red;"}

    def test_closed_rule_then_unclosed_rule(self) -> None:
        styles = extract_styles(".a { top: 0; }\n.b { left: 0;")
        assert styles == {".a": "top: 0;", ".b": "left: 0;"}
