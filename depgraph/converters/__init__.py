"""Converter plugin implementations and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Iterable, List, Optional, Sequence, Set

from .base import Converter, IdAllocator
from .classes import ClassHierarchyConverter
from .components import ComponentConverter
from .legacy_files import LegacyFileConverter
from .orm import OrmConverter
from .utils import make_id, simple_name

_ENTRY_POINT_GROUP = "depgraph.converters"


def discover_converters(
    enabled: Sequence[str] | None = None,
    *,
    root_classes: Optional[Iterable[str]] = None,
) -> List[Converter]:
    """Return instantiated converters, honoring optional enabled names."""

    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}

    builtins: dict[str, Callable[[], Converter]] = {
        "components": ComponentConverter,
        "legacy-files": LegacyFileConverter,
        "classes": lambda: ClassHierarchyConverter(root_classes=root_classes),
        "orm": OrmConverter,
    }

    converters: List[Converter] = []
    seen: Set[str] = set()

    def _add(name: str, factory: Callable[[], Converter]) -> None:
        key = name.lower()
        if enabled_set is not None and key not in enabled_set:
            return
        if key in seen:
            return
        instance = factory()
        if not isinstance(instance, Converter):
            raise TypeError(f"Converter factory for '{name}' did not return a Converter instance")
        converters.append(instance)
        seen.add(key)
        if enabled_set is not None:
            enabled_set.discard(key)

    for name, factory in builtins.items():
        _add(name, factory)

    for entry in _iter_entry_points():
        name = entry.name
        try:
            loaded = entry.load()
        except Exception as exc:
            raise RuntimeError(f"Failed to load converter entry point '{name}': {exc}") from exc

        def _factory(obj: object = loaded) -> Converter:
            return _coerce_converter(obj)

        _add(name, _factory)

    if enabled_set:
        missing = ", ".join(sorted(enabled_set))
        raise ValueError(f"Unknown converters requested: {missing}")

    return converters


def _coerce_converter(obj: object) -> Converter:
    if isinstance(obj, Converter):
        return obj
    if isinstance(obj, type) and issubclass(obj, Converter):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, Converter):
            return instance
    raise TypeError("Converter entry point must be a Converter subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points(group=_ENTRY_POINT_GROUP)


__all__ = [
    "ClassHierarchyConverter",
    "ComponentConverter",
    "Converter",
    "IdAllocator",
    "LegacyFileConverter",
    "OrmConverter",
    "discover_converters",
    "make_id",
    "simple_name",
]
