"""Shape-based detection of dependency export formats."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Mapping, Sequence, Tuple


class Ecosystem(str, Enum):
    """Source ecosystem of an export; the value is the graph's ``projectType``."""

    UI_COMPONENTS = "typescript"
    CLASS_HIERARCHY = "java"
    ORM_MODELS = "django"
    UNKNOWN = "unknown"


class InputFormat(str, Enum):
    """Recognised top-level input shapes.

    Declaration order is the probe order used by ``detect_format``.
    """

    COMPONENTS = "components"
    LEGACY_FILES = "legacy-files"
    PACKAGE_TREE = "package-tree"
    ORM_PROJECT = "orm-project"
    UNKNOWN = "unknown"

    @property
    def ecosystem(self) -> Ecosystem:
        return _ECOSYSTEMS[self]


_ECOSYSTEMS = {
    InputFormat.COMPONENTS: Ecosystem.UI_COMPONENTS,
    InputFormat.LEGACY_FILES: Ecosystem.UI_COMPONENTS,
    InputFormat.PACKAGE_TREE: Ecosystem.CLASS_HIERARCHY,
    InputFormat.ORM_PROJECT: Ecosystem.ORM_MODELS,
    InputFormat.UNKNOWN: Ecosystem.UNKNOWN,
}


def detect_format(data: Any) -> InputFormat:
    """Return the input shape of ``data`` by probing a few top-level keys.

    The probes run in a fixed order and the first match wins. The component
    mapping and the legacy per-file list differ only in whether the value is
    a sequence, so the order matters. Nested values are never inspected.
    """
    for input_format, probe in _PROBES:
        if probe(data):
            return input_format
    return InputFormat.UNKNOWN


def detect_ecosystem(data: Any) -> Ecosystem:
    return detect_format(data).ecosystem


def _is_component_mapping(data: Any) -> bool:
    return isinstance(data, Mapping) and isinstance(data.get("components"), Mapping)


def _is_legacy_file_list(data: Any) -> bool:
    if not _is_sequence(data) or not data:
        return False
    first = data[0]
    return isinstance(first, Mapping) and _has(first, "fileName", "exports")


def _is_package_tree(data: Any) -> bool:
    return isinstance(data, Mapping) and _has(data, "name", "elements")


def _is_orm_project(data: Any) -> bool:
    return isinstance(data, Mapping) and _has(data, "metadata", "apps", "models")


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _has(record: Mapping[str, Any], *keys: str) -> bool:
    return all(_is_set(record.get(key)) for key in keys)


def _is_set(value: Any) -> bool:
    """Treat None, False, zero, NaN and empty strings as absent; empty containers count."""
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, (str, int, float)):
        return value == value and bool(value)
    return True


_PROBES: Tuple[Tuple[InputFormat, Callable[[Any], bool]], ...] = (
    (InputFormat.COMPONENTS, _is_component_mapping),
    (InputFormat.LEGACY_FILES, _is_legacy_file_list),
    (InputFormat.PACKAGE_TREE, _is_package_tree),
    (InputFormat.ORM_PROJECT, _is_orm_project),
)


__all__ = ["Ecosystem", "InputFormat", "detect_ecosystem", "detect_format"]
