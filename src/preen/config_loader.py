"""Load PreenConfig from preen.yaml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import dataclasses
import tomllib
from pathlib import Path

import yaml

from preen._errors import ConfigError
from preen.config import PreenConfig

_CONFIG_KEYS = frozenset(
    f.name for f in dataclasses.fields(PreenConfig) if f.name != "root"
)


def load_config(root: Path, **overrides: object) -> PreenConfig:
    """Load PreenConfig from root, optionally merging preen.yaml.

    Looks for preen.yaml, preen.yml, or preen.toml in root. If found, loads
    and merges with overrides. Overrides take precedence.

    Raises:
        ConfigError: If a config file exists but cannot be parsed.

    """
    file_config = _read_preen_config(root)
    merged = {**file_config, **overrides}
    if "output" in merged and not isinstance(merged["output"], Path):
        merged["output"] = Path(str(merged["output"]))
    try:
        return PreenConfig(root=root, **merged)  # type: ignore[arg-type]
    except TypeError as exc:
        msg = f"Invalid configuration value: {exc}"
        raise ConfigError(msg) from exc


def _read_preen_config(root: Path) -> dict[str, object]:
    """Read preen config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("preen.yaml", "preen.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "preen.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Failed to read {path.name}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_preen_section(data, path)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Failed to read {path.name}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_preen_section(data, path)


def _flatten_preen_section(data: object, path: Path) -> dict[str, object]:
    """Extract known keys from the top level and the ``preen`` section.

    Keys under ``preen`` win over top-level keys; unknown keys are ignored.
    """
    if not isinstance(data, dict):
        msg = f"{path.name} must contain a mapping"
        raise ConfigError(msg)

    result: dict[str, object] = {
        k: v for k, v in data.items() if k in _CONFIG_KEYS
    }
    section = data.get("preen")
    if isinstance(section, dict):
        result.update((k, v) for k, v in section.items() if k in _CONFIG_KEYS)
    return result
