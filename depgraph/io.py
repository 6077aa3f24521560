"""Reading dependency exports and writing converted graphs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from .models import Graph

_YAML_SUFFIXES = {".yml", ".yaml"}


def load_input(path: Path) -> Any:
    """Read and decode a dependency export.

    YAML files are decoded with ``yaml.safe_load``; everything else is JSON.
    Read and decode errors propagate to the caller.
    """
    text = Path(path).read_text(encoding="utf-8")
    if Path(path).suffix.lower() in _YAML_SUFFIXES:
        return yaml.safe_load(text)
    return json.loads(text)


def dump_graph(graph: Graph, *, indent: int | None = 2) -> str:
    return json.dumps(graph.to_dict(), indent=indent, ensure_ascii=False)


def write_graph(graph: Graph, path: Path, *, indent: int | None = 2) -> Path:
    """Write ``graph`` as JSON, creating parent directories as needed."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(dump_graph(graph, indent=indent) + "\n", encoding="utf-8")
    return target


__all__ = ["dump_graph", "load_input", "write_graph"]
