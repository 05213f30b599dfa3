"""Tests for preen._errors."""

from preen._errors import (
    CompositionError,
    ConfigError,
    DeliveryError,
    OutputWriteError,
    PreenError,
    SourceReadError,
    StyleParseError,
)


class TestErrorHierarchy:
    """All preen errors inherit from PreenError."""

    def test_preen_error_is_exception(self) -> None:
        assert issubclass(PreenError, Exception)

    def test_style_parse_error_is_a_read_error(self) -> None:
        """Invalid CSS propagates exactly like an unreadable input."""
        assert issubclass(StyleParseError, SourceReadError)

    def test_composition_error_is_not_a_read_error(self) -> None:
        assert not issubclass(CompositionError, SourceReadError)

    def test_catch_all_preen_errors(self) -> None:
        for error_cls in (
            ConfigError,
            SourceReadError,
            StyleParseError,
            CompositionError,
            OutputWriteError,
            DeliveryError,
        ):
            try:
                raise error_cls("test")
            except PreenError:
                pass
