"""Converter for component-based UI dependency exports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ..detect import Ecosystem, InputFormat
from ..models import Edge, Item, Node, Section, compact
from .base import Converter, IdAllocator, Lookup
from .utils import as_dict, as_list, as_records, as_str, as_str_list, make_id, make_item, make_section


@dataclass(frozen=True)
class ComponentDependency:
    name: str
    path: Optional[str]
    is_external: Optional[bool]


@dataclass(frozen=True)
class ComponentEntity:
    """Relationships of one component, kept for the edge pass."""

    node_id: str
    name: str
    dependencies: Tuple[ComponentDependency, ...]
    children: Tuple[str, ...]


class ComponentConverter(Converter[ComponentEntity]):
    """Projects ``{"components": {name: record}}`` exports onto component nodes."""

    name = "components"
    formats = frozenset({InputFormat.COMPONENTS})
    ecosystem = Ecosystem.UI_COMPONENTS
    default_project_name = "React TypeScript Project"

    def build_nodes(
        self, data: Any, ids: IdAllocator
    ) -> Tuple[List[Node], List[ComponentEntity], Dict[str, str]]:
        nodes: List[Node] = []
        entities: List[ComponentEntity] = []
        lookup: Dict[str, str] = {}

        for key, raw in as_dict(as_dict(data).get("components")).items():
            record = as_dict(raw)
            name = as_str(record.get("name")) or str(key)
            file_path = as_str(record.get("filePath"))
            node_id = ids.allocate("comp", name)
            lookup[name] = node_id

            dependencies = tuple(
                ComponentDependency(
                    name=as_str(dep.get("name")) or "",
                    path=as_str(dep.get("path")),
                    is_external=dep.get("isExternal") if isinstance(dep.get("isExternal"), bool) else None,
                )
                for dep in as_records(record.get("dependencies"))
            )
            children = tuple(as_str_list(record.get("children")))

            nodes.append(
                Node(
                    id=node_id,
                    title=name,
                    type="component",
                    sections=self._sections(node_id, name, record, dependencies, children, ids),
                    metadata=compact({"filePath": file_path, "name": name}),
                )
            )
            entities.append(
                ComponentEntity(
                    node_id=node_id,
                    name=name,
                    dependencies=dependencies,
                    children=children,
                )
            )

        self.logger.debug("Built %d component nodes", len(nodes))
        return nodes, entities, lookup

    def build_edges(self, entities: List[ComponentEntity], lookup: Lookup) -> List[Edge]:
        edges: List[Edge] = []
        for entity in entities:
            for dep in entity.dependencies:
                target = self.resolve(lookup, dep.name or None)
                if target is None:
                    self.skip_unresolved(entity.name, "dependency", dep.name)
                    continue
                edges.append(
                    Edge(
                        source=entity.node_id,
                        target=target,
                        type="dependency",
                        metadata=compact({"path": dep.path, "isExternal": dep.is_external}),
                    )
                )

            for child in entity.children:
                target = self.resolve(lookup, child)
                if target is None:
                    self.skip_unresolved(entity.name, "renders", child)
                    continue
                edges.append(
                    Edge(
                        source=entity.node_id,
                        target=target,
                        type="renders",
                        metadata={"relationship": "parent-child"},
                    )
                )
        return edges

    def _sections(
        self,
        node_id: str,
        name: str,
        record: Dict[str, Any],
        dependencies: Tuple[ComponentDependency, ...],
        children: Tuple[str, ...],
        ids: IdAllocator,
    ) -> List[Section]:
        sections: List[Section] = []

        props: List[Item] = []
        for prop in as_records(record.get("props")):
            prop_name = as_str(prop.get("name")) or ""
            prop_type = as_str(prop.get("type"))
            value = prop_name
            if prop_type:
                value += f": {prop_type}"
            if prop.get("required"):
                value += " (required)"
            props.append(make_item(ids.allocate("prop", f"{name}_{prop_name}"), value, "prop"))
        if props:
            sections.append(make_section(make_id("sec", f"{node_id}_props"), "Props", props))

        state: List[Item] = []
        for entry in as_records(record.get("state")):
            state_name = as_str(entry.get("name")) or ""
            state_type = as_str(entry.get("type"))
            initial = as_str(entry.get("initialValue"))
            value = state_name
            if state_type:
                value += f": {state_type}"
            if initial:
                value += f" = {initial}"
            state.append(make_item(ids.allocate("state", f"{name}_{state_name}"), value, "state"))
        if state:
            sections.append(make_section(make_id("sec", f"{node_id}_state"), "State", state))

        hooks: List[Item] = []
        for hook in as_records(record.get("hooks")):
            hook_type = as_str(hook.get("type")) or ""
            value = f"{hook_type} (custom)" if hook.get("customHook") else hook_type
            hook_deps = as_list(hook.get("dependencies"))
            hooks.append(
                make_item(
                    ids.allocate("hook", f"{name}_{hook_type}"),
                    value,
                    "hook",
                    compact({"dependencies": hook_deps}) if hook_deps else None,
                )
            )
        if hooks:
            sections.append(make_section(make_id("sec", f"{node_id}_hooks"), "Hooks", hooks))

        dependency_items: List[Item] = []
        for dep in dependencies:
            value = f"{dep.name} from '{dep.path or ''}'"
            if dep.is_external:
                value += " (external)"
            dependency_items.append(
                make_item(ids.allocate("dep", f"{name}_{dep.name}"), value, "dependency")
            )
        if dependency_items:
            sections.append(
                make_section(make_id("sec", f"{node_id}_dependencies"), "Dependencies", dependency_items)
            )

        child_items = [
            make_item(ids.allocate("child", f"{name}_{child}"), child, "component")
            for child in children
        ]
        if child_items:
            sections.append(make_section(make_id("sec", f"{node_id}_children"), "Children", child_items))

        return sections


__all__ = ["ComponentConverter", "ComponentDependency", "ComponentEntity"]
