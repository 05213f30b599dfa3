"""Shared test fixtures for preen."""

from __future__ import annotations

from pathlib import Path

import pytest

from preen.config import PreenConfig

DATA_YAML = 'title: "Hi"\n'
TEMPLATE = "<h1>{{title}}</h1><div style=\"{{styles['.x']}}\">x</div>"
STYLESHEET = ".x { color: red; }\n"


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """Create a project with the three watched inputs.

    Renders to ``<h1>Hi</h1><div style="color: red;">x</div>``.
    """
    (tmp_path / "data.yml").write_text(DATA_YAML)
    (tmp_path / "template.html").write_text(TEMPLATE)
    (tmp_path / "style.css").write_text(STYLESHEET)
    return tmp_path


@pytest.fixture
def config(tmp_project: Path) -> PreenConfig:
    """A PreenConfig rooted at the temp project."""
    return PreenConfig(root=tmp_project)
