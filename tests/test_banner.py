"""Tests for preen.banner — startup banner output."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from unittest.mock import patch

from preen.banner import print_banner
from preen.config import PreenConfig


class TestPrintBanner:
    """Tests for the startup banner."""

    def _capture_banner(self, **kwargs: object) -> str:
        """Call print_banner and capture stderr output."""
        buf = io.StringIO()
        with patch.object(sys, "stderr", buf):
            config = PreenConfig(root=Path("/tmp/test-letter"))
            print_banner(config, **kwargs)
        return buf.getvalue()

    def test_banner_contents(self) -> None:
        output = self._capture_banner()

        assert "preen" in output
        assert "data.yml" in output
        assert "template.html" in output
        assert "style.css" in output
        assert "dist.html" in output
        assert "/updates" in output
        assert "http://127.0.0.1:3000" in output
        assert "Watching for changes" in output

    def test_custom_port_in_url(self) -> None:
        buf = io.StringIO()
        with patch.object(sys, "stderr", buf):
            print_banner(PreenConfig(root=Path("/tmp/test-letter"), port=4100))
        assert "http://127.0.0.1:4100" in buf.getvalue()

    def test_missing_vendor_css_warns(self) -> None:
        output = self._capture_banner(vendor_css=False)
        assert "stylesheet bundle not found" in output
        assert "github-markdown-css" in output

    def test_no_warning_when_bundle_present(self) -> None:
        output = self._capture_banner(vendor_css=True)
        assert "not found" not in output

    def test_warnings_displayed(self) -> None:
        output = self._capture_banner(warnings=["Missing data file: data.yml"])
        assert "Missing data file: data.yml" in output

    def test_no_color_respected(self) -> None:
        """When NO_COLOR is set, no ANSI escape codes should appear."""
        buf = io.StringIO()
        with patch.dict("os.environ", {"NO_COLOR": "1"}):
            # Re-import to pick up env change
            import importlib

            import preen.banner
            importlib.reload(preen.banner)
            with patch.object(sys, "stderr", buf):
                config = PreenConfig(root=Path("/tmp/test-letter"))
                preen.banner.print_banner(config)
            # Restore original
            importlib.reload(preen.banner)

        output = buf.getvalue()
        assert "\033[" not in output
