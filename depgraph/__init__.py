"""Normalize dependency-analysis exports into a unified entity/relationship graph."""

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from .detect import Ecosystem, InputFormat, detect_ecosystem, detect_format
from .models import Edge, Graph, GraphMetadata, Item, Node, Section
from .pipeline import GraphConverter, UnsupportedFormatError, convert, convert_file

try:
    __version__ = _pkg_version("depgraph")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "Ecosystem",
    "Edge",
    "Graph",
    "GraphConverter",
    "GraphMetadata",
    "InputFormat",
    "Item",
    "Node",
    "Section",
    "UnsupportedFormatError",
    "__version__",
    "convert",
    "convert_file",
    "detect_ecosystem",
    "detect_format",
]
