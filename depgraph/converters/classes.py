"""Converter for class-hierarchy (package tree) dependency exports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..detect import Ecosystem, InputFormat
from ..models import Edge, Item, Node, Section, compact
from .base import Converter, IdAllocator, Lookup
from .utils import as_dict, as_list, as_records, as_str, as_str_list, make_id, make_item, make_section, simple_name

DEFAULT_ROOT_CLASSES: Tuple[str, ...] = ("java.lang.Object",)

CONSTRUCTOR_NAME = "<init>"


@dataclass(frozen=True)
class ClassEntity:
    """Inheritance and dependency names declared by one class."""

    node_id: str
    name: str
    super_class: Optional[str]
    interfaces: Tuple[str, ...]
    outgoing: Tuple[str, ...]


def iter_classes(package: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
    """Yield class records of a package tree depth-first, in declaration order."""
    for element in as_records(package.get("elements")):
        if element.get("class") or element.get("interface"):
            yield element
        elif element.get("package") or "elements" in element:
            yield from iter_classes(element)


def format_modifiers(*modifiers: Optional[str]) -> str:
    return " ".join(modifier for modifier in modifiers if modifier)


class ClassHierarchyConverter(Converter[ClassEntity]):
    """Projects a nested package tree onto class and interface nodes.

    A qualified reference resolves only to the class declared under that
    exact name. A bare simple name resolves to the first class declared with
    that simple name. Superclasses listed in ``root_classes`` (the language's
    universal base class) never produce a Class Info line or an edge.
    """

    name = "classes"
    formats = frozenset({InputFormat.PACKAGE_TREE})
    ecosystem = Ecosystem.CLASS_HIERARCHY
    default_project_name = "Java Project"

    def __init__(self, root_classes: Optional[Iterable[str]] = None) -> None:
        super().__init__()
        self.root_classes = frozenset(root_classes if root_classes is not None else DEFAULT_ROOT_CLASSES)

    def build_nodes(
        self, data: Any, ids: IdAllocator
    ) -> Tuple[List[Node], List[ClassEntity], Dict[str, str]]:
        nodes: List[Node] = []
        entities: List[ClassEntity] = []
        lookup: Dict[str, str] = {}
        simple_lookup: Dict[str, str] = {}

        for record in iter_classes(as_dict(data)):
            qualified = as_str(record.get("name")) or ""
            short = simple_name(qualified)
            node_id = ids.allocate("java", qualified)
            lookup[qualified] = node_id
            simple_lookup.setdefault(short, node_id)

            super_class = as_str(record.get("superClassName"))
            interfaces = tuple(as_str_list(record.get("interfaces")))
            outgoing = tuple(as_str_list(record.get("outGoingDependencies")))
            incoming = as_str_list(record.get("incomingDependencies"))

            nodes.append(
                Node(
                    id=node_id,
                    title=short,
                    type="interface" if record.get("interface") else "class",
                    sections=self._sections(node_id, qualified, record, super_class, interfaces, ids),
                    metadata=compact(
                        {
                            "fullName": qualified,
                            "packageName": as_str(record.get("packageName")),
                            "sourceFile": as_str(record.get("sourceFile")),
                            "isAbstract": bool(record.get("abstract")),
                            "isFinal": bool(record.get("final")),
                            "superClassName": super_class,
                            "interfaces": list(interfaces),
                            "outGoingDependencies": list(outgoing),
                            "incomingDependencies": incoming,
                        }
                    ),
                )
            )
            entities.append(
                ClassEntity(
                    node_id=node_id,
                    name=qualified,
                    super_class=super_class,
                    interfaces=interfaces,
                    outgoing=outgoing,
                )
            )

        for short, node_id in simple_lookup.items():
            lookup.setdefault(short, node_id)

        self.logger.debug("Built %d class nodes", len(nodes))
        return nodes, entities, lookup

    def build_edges(self, entities: List[ClassEntity], lookup: Lookup) -> List[Edge]:
        edges: List[Edge] = []
        for entity in entities:
            if entity.super_class and entity.super_class not in self.root_classes:
                target = self._resolve_class(lookup, entity.super_class)
                if target is None:
                    self.skip_unresolved(entity.name, "inheritance", entity.super_class)
                else:
                    edges.append(
                        Edge(
                            source=entity.node_id,
                            target=target,
                            type="inheritance",
                            metadata={"relationship": "extends"},
                        )
                    )

            for interface in entity.interfaces:
                target = self._resolve_class(lookup, interface)
                if target is None:
                    self.skip_unresolved(entity.name, "implementation", interface)
                    continue
                edges.append(
                    Edge(
                        source=entity.node_id,
                        target=target,
                        type="implementation",
                        metadata={"relationship": "implements"},
                    )
                )

            for dependency in entity.outgoing:
                target = self._resolve_class(lookup, dependency)
                if target is None:
                    self.skip_unresolved(entity.name, "dependency", dependency)
                    continue
                edges.append(
                    Edge(
                        source=entity.node_id,
                        target=target,
                        type="dependency",
                        metadata={"direction": "outgoing"},
                    )
                )
        return edges

    def _resolve_class(self, lookup: Lookup, name: str) -> Optional[str]:
        # Simple-name keys never contain a dot, so a qualified name that misses
        # its own entry names a class outside the input and stays unresolved.
        return self.resolve(lookup, name)

    def _sections(
        self,
        node_id: str,
        qualified: str,
        record: Dict[str, Any],
        super_class: Optional[str],
        interfaces: Sequence[str],
        ids: IdAllocator,
    ) -> List[Section]:
        sections: List[Section] = []

        info: List[Item] = []
        if super_class and super_class not in self.root_classes:
            info.append(
                make_item(
                    ids.allocate("extends", f"{qualified}_extends"),
                    f"extends {simple_name(super_class)}",
                    "inheritance",
                )
            )
        if interfaces:
            info.append(
                make_item(
                    ids.allocate("implements", f"{qualified}_implements"),
                    f"implements {', '.join(simple_name(name) for name in interfaces)}",
                    "interface",
                )
            )
        if info:
            sections.append(make_section(make_id("sec", f"{node_id}_info"), "Class Info", info))

        fields = [self._field_item(qualified, field, ids) for field in as_records(record.get("fields"))]
        if fields:
            sections.append(make_section(make_id("sec", f"{node_id}_fields"), "Fields", fields))

        methods = [self._method_item(qualified, method, ids) for method in as_records(record.get("methods"))]
        if methods:
            sections.append(make_section(make_id("sec", f"{node_id}_methods"), "Methods", methods))

        imports: List[Item] = []
        for package in as_list(record.get("importedPackages")):
            package_name = as_str(package.get("name")) if isinstance(package, Mapping) else as_str(package)
            if not package_name:
                continue
            imports.append(
                make_item(ids.allocate("import", f"{qualified}_{package_name}"), package_name, "package")
            )
        if imports:
            sections.append(make_section(make_id("sec", f"{node_id}_imports"), "Imports", imports))

        return sections

    def _field_item(self, qualified: str, field: Dict[str, Any], ids: IdAllocator) -> Item:
        field_name = as_str(field.get("name")) or ""
        field_type = as_str(field.get("type")) or ""
        modifier = as_str(field.get("modifier"))
        modifiers = format_modifiers(
            modifier.lower() if modifier else None,
            "static" if field.get("static") else None,
            "final" if field.get("final") else None,
        )
        value = format_modifiers(modifiers, simple_name(field_type) if field_type else None, field_name)
        return make_item(
            ids.allocate("field", f"{qualified}_{field_name}"),
            value,
            "field",
            compact({"type": field_type or None}),
        )

    def _method_item(self, qualified: str, method: Dict[str, Any], ids: IdAllocator) -> Item:
        method_name = as_str(method.get("name")) or ""
        is_constructor = method_name == CONSTRUCTOR_NAME
        access = as_str(method.get("accessModifier"))
        modifiers = format_modifiers(
            access.lower() if access else None,
            "static" if method.get("static") else None,
            "final" if method.get("final") else None,
            "abstract" if method.get("abstract") else None,
        )
        params = ", ".join(simple_name(param) for param in as_str_list(method.get("parameters")))
        return_type = as_str(method.get("returnType"))
        if is_constructor:
            signature = f"{simple_name(qualified)}({params})"
        else:
            signature = f"{method_name}({params}): {simple_name(return_type or 'void')}"
        return make_item(
            ids.allocate("method", f"{qualified}_{method_name}"),
            format_modifiers(modifiers, signature),
            "constructor" if is_constructor else "method",
            compact({"returnType": return_type, "isConstructor": is_constructor}),
        )


__all__ = [
    "CONSTRUCTOR_NAME",
    "ClassEntity",
    "ClassHierarchyConverter",
    "DEFAULT_ROOT_CLASSES",
    "format_modifiers",
    "iter_classes",
]
