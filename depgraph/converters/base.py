"""Base classes for converter plugins."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, ClassVar, Dict, FrozenSet, Generic, List, Mapping, Optional, Set, Tuple, TypeVar

from ..detect import Ecosystem, InputFormat
from ..logging import converter_logger, log_skipped
from ..models import Edge, Graph, GraphMetadata, Metadata, Node, coerce_metadata
from .utils import make_id

EntityT = TypeVar("EntityT")

Lookup = Mapping[str, str]


class IdAllocator:
    """Issues ``make_id`` identifiers that are unique within one graph.

    The first request for an id returns it unchanged; repeats get ``_2``,
    ``_3``, ... appended.
    """

    def __init__(self) -> None:
        self._taken: Set[str] = set()

    def allocate(self, prefix: str, name: Any) -> str:
        base = make_id(prefix, name)
        candidate = base
        counter = 1
        while candidate in self._taken:
            counter += 1
            candidate = f"{base}_{counter}"
        self._taken.add(candidate)
        return candidate

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._taken


class Converter(ABC, Generic[EntityT]):
    """Contract for converters that project one input shape onto a Graph.

    Conversion runs in two passes. ``build_nodes`` creates every node and
    returns the source entities plus a lookup table from natural keys to node
    ids. ``build_edges`` then resolves declared relationships against the
    complete, read-only lookup table.
    """

    name: ClassVar[str]
    formats: ClassVar[FrozenSet[InputFormat]]
    ecosystem: ClassVar[Ecosystem]
    default_project_name: ClassVar[str]

    def __init__(self) -> None:
        self.logger = converter_logger(self.name)

    def supports(self, input_format: InputFormat) -> bool:
        """Return True when this converter handles ``input_format``."""
        return input_format in self.formats

    def convert(
        self,
        data: Any,
        *,
        converted_at: str,
        project_name: Optional[str] = None,
    ) -> Graph:
        ids = IdAllocator()
        nodes, entities, lookup = self.build_nodes(data, ids)
        edges = self.build_edges(entities, MappingProxyType(dict(lookup)))
        metadata = GraphMetadata(
            project_type=self.ecosystem.value,
            project_name=project_name or self.project_name(data),
            converted_at=converted_at,
            original_format=self.original_format(data),
        )
        return Graph(nodes=nodes, edges=edges, metadata=metadata)

    @abstractmethod
    def build_nodes(
        self, data: Any, ids: IdAllocator
    ) -> Tuple[List[Node], List[EntityT], Dict[str, str]]:
        """Create nodes and the natural-key lookup table for ``data``."""

    @abstractmethod
    def build_edges(self, entities: List[EntityT], lookup: Lookup) -> List[Edge]:
        """Resolve relationships declared on ``entities`` into edges."""

    def project_name(self, data: Any) -> str:
        return self.default_project_name

    def original_format(self, data: Any) -> Metadata:
        if isinstance(data, Mapping) and isinstance(data.get("metadata"), Mapping):
            coerced = coerce_metadata(data["metadata"])
            if isinstance(coerced, dict):
                return coerced
        return {}

    def resolve(self, lookup: Lookup, *keys: Optional[str]) -> Optional[str]:
        """Return the node id for the first key found in ``lookup``."""
        for key in keys:
            if key is not None and key in lookup:
                return lookup[key]
        return None

    def skip_unresolved(self, source: str, kind: str, reference: Optional[str]) -> None:
        log_skipped(self.logger, kind, source, reference)


__all__ = ["Converter", "IdAllocator", "Lookup"]
