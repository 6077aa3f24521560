"""Configuration loading for depgraph (.depgraph.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .converters.classes import DEFAULT_ROOT_CLASSES

CONFIG_FILENAME = ".depgraph.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ConverterConfig:
    """Converter enablement; an empty list enables every converter."""

    enabled: List[str] = field(default_factory=list)


@dataclass
class ClassesConfig:
    """Settings for the class-hierarchy converter."""

    root_classes: List[str] = field(default_factory=lambda: list(DEFAULT_ROOT_CLASSES))


@dataclass
class OutputConfig:
    """JSON output formatting."""

    indent: int = 2


@dataclass
class DepGraphConfig:
    """Represents the settings defined in .depgraph.yml."""

    root: Path
    project_name: Optional[str] = None
    converters: ConverterConfig = field(default_factory=ConverterConfig)
    classes: ClassesConfig = field(default_factory=ClassesConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(config_path: Path) -> DepGraphConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DepGraphConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    converters = ConverterConfig()
    converter_data = _as_dict(data.get("converters"))
    if converter_data:
        converters.enabled = _as_str_list(converter_data.get("enabled"))

    classes = ClassesConfig()
    classes_data = _as_dict(data.get("classes"))
    if "root_classes" in classes_data:
        classes.root_classes = _as_str_list(classes_data.get("root_classes"))

    output = OutputConfig()
    output_data = _as_dict(data.get("output"))
    indent = _as_int(output_data.get("indent"))
    if indent is not None:
        if indent < 0:
            raise ConfigError("output.indent must not be negative")
        output.indent = indent

    return DepGraphConfig(
        root=root,
        project_name=_as_str(data.get("project_name")),
        converters=converters,
        classes=classes,
        output=output,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


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


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ClassesConfig",
    "ConfigError",
    "ConverterConfig",
    "DepGraphConfig",
    "OutputConfig",
    "load_config",
]
