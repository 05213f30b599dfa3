"""Document compositor — data + styles + template -> rendered document.

One render attempt reads the three watched inputs, folds the stylesheet into
the data under ``styles``, and evaluates the Kida template against it:

    1. data file  -> YAML mapping          (SourceReadError)
    2. template   -> raw text              (SourceReadError)
    3. stylesheet -> StyleMap -> data["styles"]  (SourceReadError, StyleParseError)
    4. evaluate template                   (CompositionError)
    5. write the output artifact           (OutputWriteError)

The steps of one attempt run strictly in order. Attempts are not serialized
against each other: file reads and template evaluation run on worker threads
so the event loop keeps serving viewers while a render is in flight.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import yaml
from kida import Environment, FileSystemLoader

from preen._errors import CompositionError, OutputWriteError, SourceReadError
from preen.content.styles import extract_styles

if TYPE_CHECKING:
    from pathlib import Path

    from preen._types import RenderedDocument
    from preen.config import PreenConfig


class DocumentCompositor:
    """Renders the preview document from the configured inputs.

    The Kida environment loads from the project root, so templates can
    ``{% include %}`` sibling partials. Autoescaping is off: the template
    produces HTML and the data is trusted local content.

    Args:
        config: Supplies the input paths and the output artifact path.

    """

    def __init__(self, config: PreenConfig) -> None:
        self._config = config
        self._env = Environment(
            loader=FileSystemLoader(str(config.root)),
            autoescape=False,
        )

    @property
    def output_path(self) -> Path:
        return self._config.output_path

    async def render(self) -> RenderedDocument:
        """Compose the document and write it to the output artifact."""
        document = await self.compose()
        await self.write_output(document)
        return document

    async def compose(self) -> RenderedDocument:
        """Run steps 1-4: read inputs and evaluate the template.

        No side effects; calling it twice with unchanged inputs yields
        identical text.

        """
        context = await self.load_data()
        source = await _read_text(self._config.template_path)
        css = await _read_text(self._config.stylesheet_path)
        context["styles"] = extract_styles(css)
        return await self._evaluate(source, context)

    async def load_data(self) -> dict[str, Any]:
        """Read and parse the YAML data file into a mapping."""
        path = self._config.data_path
        text = await _read_text(path)
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            msg = f"Invalid YAML in {path.name}: {exc}"
            raise SourceReadError(msg) from exc

        if data is None:
            return {}
        if not isinstance(data, dict):
            msg = f"{path.name} must contain a mapping, got {type(data).__name__}"
            raise SourceReadError(msg)
        return data

    async def write_output(self, document: RenderedDocument) -> None:
        """Overwrite the output artifact with *document*."""
        path = self._config.output_path
        try:
            await asyncio.to_thread(_write_text, path, document)
        except OSError as exc:
            msg = f"Failed to write {path}: {exc}"
            raise OutputWriteError(msg) from exc

    async def _evaluate(self, source: str, context: dict[str, Any]) -> RenderedDocument:
        name = self._config.template_file
        try:
            template = self._env.from_string(source)
            # Mapping passed positionally; YAML keys need not be strings.
            return await asyncio.to_thread(template.render, context)
        except Exception as exc:
            msg = f"{name}: {exc}"
            raise CompositionError(msg) from exc


async def _read_text(path: Path) -> str:
    try:
        return await asyncio.to_thread(path.read_text, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Cannot read {path.name}: {exc}"
        raise SourceReadError(msg) from exc


def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
