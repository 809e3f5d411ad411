"""Configuration loading for noirdoc (.noirdoc.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".noirdoc.yml"

DEFAULT_MARKER = "// typedoc: true"
DEFAULT_EXTENSION = ".nr"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ParserConfig:
    """Structural parser settings."""

    strict: bool = True
    workers: int = 1


@dataclass
class LayoutConfig:
    """Document layout. A namespace switches to ``<namespace>/<unit>.md`` paths."""

    namespace: Optional[str] = None


@dataclass
class OverviewConfig:
    """Landing page settings for the flat layout."""

    slug: str = "aztec-nr"
    title: str = "Aztec.nr Project"
    label: str = "Aztec.nr Overview"
    intro: str = (
        "Welcome to the Aztec.nr project documentation. "
        "This project consists of the following libraries:"
    )
    template: Optional[Path] = None


@dataclass
class OutputConfig:
    """Where generated files land under the output root."""

    docs_dir: str = "docs"
    sidebar_file: str = "sidebars.js"
    sidebar_name: str = "someSidebar"


@dataclass
class NoirDocConfig:
    """Represents the settings defined in .noirdoc.yml."""

    root: Path
    marker: str = DEFAULT_MARKER
    extension: str = DEFAULT_EXTENSION
    recursive: bool = False
    exclude_paths: List[str] = field(default_factory=list)
    fail_fast: bool = False
    parser: ParserConfig = field(default_factory=ParserConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    overview: OverviewConfig = field(default_factory=OverviewConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(config_path: Path) -> NoirDocConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return NoirDocConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = NoirDocConfig(root=root)
    config.marker = _as_str(data.get("marker")) or config.marker
    config.extension = _normalise_extension(_as_str(data.get("extension")) or config.extension)
    config.recursive = _as_bool(data.get("recursive")) or False
    config.exclude_paths = _as_str_list(data.get("exclude_paths"))
    config.fail_fast = _as_bool(data.get("fail_fast")) or False

    parser_data = _as_dict(data.get("parser"))
    if parser_data:
        strict = _as_bool(parser_data.get("strict"))
        config.parser.strict = True if strict is None else strict
        workers = _as_int(parser_data.get("workers"))
        if workers is not None:
            if workers < 1:
                raise ConfigError("parser.workers must be a positive integer")
            config.parser.workers = workers

    layout_data = _as_dict(data.get("layout"))
    if layout_data:
        config.layout.namespace = _as_str(layout_data.get("namespace")) or None

    overview_data = _as_dict(data.get("overview"))
    if overview_data:
        overview = config.overview
        overview.slug = _as_str(overview_data.get("slug")) or overview.slug
        overview.title = _as_str(overview_data.get("title")) or overview.title
        overview.label = _as_str(overview_data.get("label")) or overview.label
        overview.intro = _as_str(overview_data.get("intro")) or overview.intro
        template = _as_str(overview_data.get("template"))
        overview.template = root / template if template else None

    output_data = _as_dict(data.get("output"))
    if output_data:
        output = config.output
        output.docs_dir = _as_str(output_data.get("docs_dir")) or output.docs_dir
        output.sidebar_file = _as_str(output_data.get("sidebar_file")) or output.sidebar_file
        output.sidebar_name = _as_str(output_data.get("sidebar_name")) or output.sidebar_name

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _normalise_extension(value: str) -> str:
    return value if value.startswith(".") else f".{value}"


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
