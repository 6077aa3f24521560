"""Graph data model shared by every converter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Set, Union

MetadataValue = Union[
    str, int, float, bool, None, List["MetadataValue"], Dict[str, "MetadataValue"]
]
Metadata = Dict[str, MetadataValue]

NODE_TYPES = frozenset(
    {
        "class",
        "interface",
        "component",
        "file",
        "app",
        "model",
        "view",
        "module",
        "function",
    }
)


@dataclass
class Item:
    """One formatted fact inside a section."""

    id: str
    value: str
    icon: Optional[str] = None
    metadata: Optional[Metadata] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "value": self.value}
        if self.icon is not None:
            data["icon"] = self.icon
        if self.metadata is not None:
            data["metadata"] = self.metadata
        return data


@dataclass
class Section:
    """Named group of items rendered on a node."""

    id: str
    name: str
    items: List[Item] = field(default_factory=list)
    metadata: Optional[Metadata] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "items": [item.to_dict() for item in self.items],
        }
        if self.metadata is not None:
            data["metadata"] = self.metadata
        return data


@dataclass
class Node:
    """One analyzed entity (class, component, app, model, view, file)."""

    id: str
    title: str
    type: str
    sections: List[Section] = field(default_factory=list)
    metadata: Metadata = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.type not in NODE_TYPES:
            raise ValueError(f"Unknown node type '{self.type}'")

    def section(self, name: str) -> Optional[Section]:
        for section in self.sections:
            if section.name == name:
                return section
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type,
            "sections": [section.to_dict() for section in self.sections],
            "metadata": self.metadata,
        }


@dataclass
class Edge:
    """Directed relationship between two nodes of the same graph."""

    source: str
    target: str
    type: str
    metadata: Optional[Metadata] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "source": self.source,
            "target": self.target,
            "type": self.type,
        }
        if self.metadata is not None:
            data["metadata"] = self.metadata
        return data


@dataclass
class GraphMetadata:
    """Provenance of a converted graph."""

    project_type: str
    project_name: str
    converted_at: str
    original_format: Metadata = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "projectType": self.project_type,
            "projectName": self.project_name,
            "convertedAt": self.converted_at,
            "originalFormat": self.original_format,
        }


@dataclass
class Graph:
    """Root output of a conversion."""

    nodes: List[Node]
    edges: List[Edge]
    metadata: GraphMetadata

    def node_ids(self) -> Set[str]:
        return {node.id for node in self.nodes}

    def get_node(self, node_id: str) -> Optional[Node]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "metadata": self.metadata.to_dict(),
        }


def coerce_metadata(value: Any) -> MetadataValue:
    """Normalise an arbitrary decoded value into a metadata value."""
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, Mapping):
        return {str(key): coerce_metadata(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [coerce_metadata(item) for item in value]
    return str(value)


def compact(values: Mapping[str, Any]) -> Metadata:
    """Build a metadata bag from optional fields, dropping absent (None) ones."""
    return {
        key: coerce_metadata(value) for key, value in values.items() if value is not None
    }


__all__ = [
    "Edge",
    "Graph",
    "GraphMetadata",
    "Item",
    "Metadata",
    "MetadataValue",
    "NODE_TYPES",
    "Node",
    "Section",
    "coerce_metadata",
    "compact",
]
