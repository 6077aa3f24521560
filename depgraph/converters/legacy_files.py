"""Converter for the legacy per-file UI dependency export."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from ..detect import Ecosystem, InputFormat
from ..models import Edge, Item, Node, Section, compact
from .base import Converter, IdAllocator, Lookup
from .utils import as_dict, as_records, as_str, as_str_list, make_id, make_item, make_section


@dataclass(frozen=True)
class FileEntity:
    node_id: str
    file_path: str
    outgoing: Tuple[str, ...]
    incoming: Tuple[str, ...]


def format_params(params: Any) -> str:
    names = [as_str(param.get("name")) or "" for param in as_records(params)]
    return f"({', '.join(names)})"


def format_import(record: Dict[str, Any]) -> str:
    path = as_str(record.get("path")) or ""
    named = as_str_list(record.get("namedImports"))
    default = as_str(record.get("defaultImport"))
    if named:
        return f"{{ {', '.join(named)} }} from '{path}'"
    if default:
        return f"{default} from '{path}'"
    return f"import '{path}'"


class LegacyFileConverter(Converter[FileEntity]):
    """Projects a list of per-file records onto file nodes.

    Each record lists its imports and exports plus precomputed
    ``outgoingDependencies``/``incomingDependencies`` naming other files by
    path. Both lists are walked, so a relationship declared on both ends
    yields one edge per declaration.
    """

    name = "legacy-files"
    formats = frozenset({InputFormat.LEGACY_FILES})
    ecosystem = Ecosystem.UI_COMPONENTS
    default_project_name = "TypeScript Project"

    def build_nodes(
        self, data: Any, ids: IdAllocator
    ) -> Tuple[List[Node], List[FileEntity], Dict[str, str]]:
        nodes: List[Node] = []
        entities: List[FileEntity] = []
        lookup: Dict[str, str] = {}

        for record in as_records(data):
            file_name = as_str(record.get("fileName")) or ""
            file_path = as_str(record.get("filePath")) or file_name
            node_id = ids.allocate("ts", file_path)
            lookup[file_path] = node_id
            if file_name:
                lookup.setdefault(file_name, node_id)

            outgoing = tuple(as_str_list(record.get("outgoingDependencies")))
            incoming = tuple(as_str_list(record.get("incomingDependencies")))

            sections: List[Section] = []
            imports = self._import_items(file_path, record, ids)
            if imports:
                sections.append(make_section(make_id("sec", f"{node_id}_imports"), "Imports", imports))
            exports = self._export_items(file_path, as_dict(record.get("exports")), ids)
            if exports:
                sections.append(make_section(make_id("sec", f"{node_id}_exports"), "Exports", exports))

            nodes.append(
                Node(
                    id=node_id,
                    title=file_name or file_path,
                    type="file",
                    sections=sections,
                    metadata=compact(
                        {
                            "filePath": file_path,
                            "fileName": file_name,
                            "outgoingDependencies": list(outgoing),
                            "incomingDependencies": list(incoming),
                        }
                    ),
                )
            )
            entities.append(
                FileEntity(node_id=node_id, file_path=file_path, outgoing=outgoing, incoming=incoming)
            )

        return nodes, entities, lookup

    def build_edges(self, entities: List[FileEntity], lookup: Lookup) -> List[Edge]:
        edges: List[Edge] = []
        for entity in entities:
            for target_name in entity.outgoing:
                target = self.resolve(lookup, target_name)
                if target is None:
                    self.skip_unresolved(entity.file_path, "dependency", target_name)
                    continue
                edges.append(
                    Edge(
                        source=entity.node_id,
                        target=target,
                        type="dependency",
                        metadata={"direction": "outgoing"},
                    )
                )

            for source_name in entity.incoming:
                source = self.resolve(lookup, source_name)
                if source is None:
                    self.skip_unresolved(source_name, "dependency", entity.file_path)
                    continue
                edges.append(
                    Edge(
                        source=source,
                        target=entity.node_id,
                        type="dependency",
                        metadata={"direction": "incoming"},
                    )
                )
        return edges

    def _import_items(self, file_path: str, record: Dict[str, Any], ids: IdAllocator) -> List[Item]:
        items: List[Item] = []
        for entry in as_records(record.get("imports")):
            path = as_str(entry.get("path")) or ""
            items.append(
                make_item(
                    ids.allocate("imp", f"{file_path}_{path}"),
                    format_import(entry),
                    "import",
                    compact(
                        {
                            "path": path,
                            "isTypeOnly": entry.get("isTypeOnly"),
                            "resolvedFilePath": entry.get("resolvedFilePath"),
                        }
                    ),
                )
            )
        return items

    def _export_items(self, file_path: str, exports: Dict[str, Any], ids: IdAllocator) -> List[Item]:
        items: List[Item] = []

        for func in as_records(exports.get("functions")):
            if not func.get("isExported"):
                continue
            func_name = as_str(func.get("name")) or ""
            return_type = as_str(func.get("returnType")) or "void"
            items.append(
                make_item(
                    ids.allocate("func", f"{file_path}_{func_name}"),
                    f"{func_name}{format_params(func.get('params'))}: {return_type}",
                    "function",
                    {"isExported": True},
                )
            )

        for comp in as_records(exports.get("components")):
            comp_name = as_str(comp.get("name")) or ""
            comp_type = as_str(comp.get("type")) or "Component"
            items.append(
                make_item(
                    ids.allocate("comp", f"{file_path}_{comp_name}"),
                    f"{comp_name}: {comp_type}",
                    "component",
                    {"isExported": True},
                )
            )

        for key, prefix, icon in (
            ("interfaces", "intf", "interface"),
            ("types", "type", "type"),
            ("classes", "cls", "class"),
        ):
            for entry in as_records(exports.get(key)):
                entry_name = as_str(entry.get("name")) or ""
                items.append(
                    make_item(
                        ids.allocate(prefix, f"{file_path}_{entry_name}"),
                        entry_name,
                        icon,
                        {"isExported": True},
                    )
                )

        return items


__all__ = ["FileEntity", "LegacyFileConverter", "format_import", "format_params"]
