"""Preen configuration.

PreenConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path

from preen._errors import ConfigError


@dataclass(frozen=True, slots=True)
class PreenConfig:
    """Configuration for a preview server.

    Attributes:
        root: Project directory holding the three watched inputs.
              Always resolved to an absolute path on construction.
        host: Bind address.
        port: Bind port.
        data_file: YAML data file, relative to root.
        template_file: Kida template, relative to root.
        stylesheet_file: CSS file whose rules become ``styles`` in the template.
        output: Rendered artifact, overwritten after every successful render.
        vendor_css_dir: Directory of the github-markdown-css bundle served
            under ``/github-markdown-css``.
        title: Page title of the preview shell.

    """

    root: Path = field(default_factory=Path.cwd)
    host: str = "127.0.0.1"
    port: int = 3000
    data_file: str = "data.yml"
    template_file: str = "template.html"
    stylesheet_file: str = "style.css"
    output: Path = field(default_factory=lambda: Path("dist.html"))
    vendor_css_dir: str = "vendor/github-markdown-css"
    title: str = "Markdown Preview"

    def __post_init__(self) -> None:
        # watchfiles reports absolute paths; compare against absolute ones.
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        if not isinstance(self.output, Path):
            object.__setattr__(self, "output", Path(str(self.output)))
        if not 0 < self.port < 65536:
            msg = f"port must be between 1 and 65535, got {self.port}"
            raise ConfigError(msg)

    @property
    def data_path(self) -> Path:
        """Absolute path to the data file."""
        return self.root / self.data_file

    @property
    def template_path(self) -> Path:
        """Absolute path to the template file."""
        return self.root / self.template_file

    @property
    def stylesheet_path(self) -> Path:
        """Absolute path to the stylesheet."""
        return self.root / self.stylesheet_file

    @property
    def output_path(self) -> Path:
        """Absolute path to the rendered artifact."""
        if self.output.is_absolute():
            return self.output
        return self.root / self.output

    @property
    def vendor_css_path(self) -> Path:
        """Absolute path to the stylesheet bundle directory."""
        return self.root / self.vendor_css_dir

    @property
    def watched_paths(self) -> frozenset[Path]:
        """The fixed set of inputs whose changes trigger a re-render."""
        return frozenset({self.data_path, self.template_path, self.stylesheet_path})

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"
