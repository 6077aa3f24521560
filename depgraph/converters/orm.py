"""Converter for ORM web-framework exports (apps, models, views)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from ..detect import Ecosystem, InputFormat
from ..models import Edge, Item, Node, Section, coerce_metadata, compact
from .base import Converter, IdAllocator, Lookup
from .utils import as_dict, as_records, as_str, as_str_list, make_id, make_item, make_section, simple_name

DEFAULT_RELATIONSHIP_TYPE = "relationship"


@dataclass(frozen=True)
class Relationship:
    field_name: str
    kind: Optional[str]
    related_model: str
    related_name: Optional[str]

    @property
    def edge_type(self) -> str:
        return self.kind.lower() if self.kind else DEFAULT_RELATIONSHIP_TYPE


@dataclass(frozen=True)
class ModelEntity:
    node_id: str
    name: str
    app: str
    relationships: Tuple[Relationship, ...]


@dataclass(frozen=True)
class ViewEntity:
    node_id: str
    name: str
    app: str
    uses_models: Tuple[str, ...]


OrmEntity = Union[ModelEntity, ViewEntity]


def app_key(name: str) -> str:
    return f"app_{name}"


def model_key(name: str) -> str:
    return f"model_{name}"


def view_key(name: str) -> str:
    return f"view_{name}"


def format_attribute(value: Any) -> str:
    """Render an attribute value as compact JSON, e.g. ``200`` or ``"CASCADE"``."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


def format_relationship(rel: Relationship) -> str:
    value = f"{rel.field_name} -> {rel.related_model}"
    if rel.related_name:
        value += f" (as {rel.related_name})"
    if rel.kind:
        value += f" ({rel.kind})"
    return value


class OrmConverter(Converter[OrmEntity]):
    """Projects app/model/view records onto a graph.

    Apps, models and views live in separate namespaces, so the lookup table
    is keyed by ``app_<name>``, ``model_<name>`` and ``view_<name>``. Model
    and view node ids are qualified by their app.
    """

    name = "orm"
    formats = frozenset({InputFormat.ORM_PROJECT})
    ecosystem = Ecosystem.ORM_MODELS
    default_project_name = "Django Project"

    def project_name(self, data: Any) -> str:
        metadata = as_dict(as_dict(data).get("metadata"))
        return as_str(metadata.get("projectName")) or self.default_project_name

    def build_nodes(
        self, data: Any, ids: IdAllocator
    ) -> Tuple[List[Node], List[OrmEntity], Dict[str, str]]:
        project = as_dict(data)
        nodes: List[Node] = []
        entities: List[OrmEntity] = []
        lookup: Dict[str, str] = {}

        for app in as_records(project.get("apps")):
            node = self._app_node(app, ids)
            lookup[app_key(node.title)] = node.id
            nodes.append(node)

        for model in as_records(project.get("models")):
            name = as_str(model.get("name")) or ""
            app = as_str(model.get("app")) or ""
            node_id = ids.allocate("django_model", f"{app}_{name}")
            lookup[model_key(name)] = node_id
            if app:
                # "app_label.Model" references only match a model of that app.
                lookup[model_key(f"{app}.{name}")] = node_id
                lookup.setdefault(model_key(f"{simple_name(app)}.{name}"), node_id)
            relationships = tuple(
                Relationship(
                    field_name=as_str(rel.get("field_name")) or "",
                    kind=as_str(rel.get("type")),
                    related_model=as_str(rel.get("related_model")) or "",
                    related_name=as_str(rel.get("related_name")),
                )
                for rel in as_records(model.get("relationships"))
            )
            nodes.append(
                Node(
                    id=node_id,
                    title=name,
                    type="model",
                    sections=self._model_sections(node_id, name, model, relationships, ids),
                    metadata=compact({"app": app, "meta": as_dict(model.get("meta"))}),
                )
            )
            entities.append(ModelEntity(node_id=node_id, name=name, app=app, relationships=relationships))

        for view in as_records(project.get("views")):
            name = as_str(view.get("name")) or ""
            app = as_str(view.get("app")) or ""
            node_id = ids.allocate("django_view", f"{app}_{name}")
            lookup[view_key(name)] = node_id
            uses_models = tuple(as_str_list(view.get("uses_models")))
            http_methods = as_str_list(view.get("http_methods"))
            nodes.append(
                Node(
                    id=node_id,
                    title=name,
                    type="view",
                    sections=self._view_sections(node_id, name, view, http_methods, uses_models, ids),
                    metadata=compact(
                        {
                            "app": app,
                            "type": as_str(view.get("type")),
                            "path": as_str(view.get("path")),
                            "http_methods": http_methods or None,
                            "template": as_str(view.get("template")),
                        }
                    ),
                )
            )
            entities.append(ViewEntity(node_id=node_id, name=name, app=app, uses_models=uses_models))

        self.logger.debug("Built %d app/model/view nodes", len(nodes))
        return nodes, entities, lookup

    def build_edges(self, entities: List[OrmEntity], lookup: Lookup) -> List[Edge]:
        edges: List[Edge] = []
        for entity in entities:
            owner = self.resolve(lookup, app_key(entity.app))
            relationship = "app_model" if isinstance(entity, ModelEntity) else "app_view"
            if owner is None:
                self.skip_unresolved(entity.app, "contains", entity.name)
            else:
                edges.append(
                    Edge(
                        source=owner,
                        target=entity.node_id,
                        type="contains",
                        metadata={"relationship": relationship},
                    )
                )

            if isinstance(entity, ViewEntity):
                for model in entity.uses_models:
                    target = self._resolve_model(lookup, model)
                    if target is None:
                        self.skip_unresolved(entity.name, "uses", model)
                        continue
                    edges.append(
                        Edge(
                            source=entity.node_id,
                            target=target,
                            type="uses",
                            metadata={"relationship": "view_model"},
                        )
                    )

        for entity in entities:
            if not isinstance(entity, ModelEntity):
                continue
            for rel in entity.relationships:
                target = self._resolve_model(lookup, rel.related_model)
                if target is None:
                    self.skip_unresolved(entity.name, rel.edge_type, rel.related_model)
                    continue
                edges.append(
                    Edge(
                        source=entity.node_id,
                        target=target,
                        type=rel.edge_type,
                        metadata={"field_name": rel.field_name, "related_name": rel.related_name},
                    )
                )
        return edges

    def _resolve_model(self, lookup: Lookup, name: str) -> Optional[str]:
        return self.resolve(lookup, model_key(name))

    def _app_node(self, app: Dict[str, Any], ids: IdAllocator) -> Node:
        name = as_str(app.get("name")) or ""
        path = as_str(app.get("path"))
        is_project_app = app.get("is_project_app")
        node_id = ids.allocate("django_app", name)

        info: List[Item] = []
        if path:
            info.append(make_item(ids.allocate("path", f"{name}_path"), f"Path: {path}", "path"))
        if isinstance(is_project_app, bool):
            info.append(
                make_item(
                    ids.allocate("project_app", f"{name}_project_app"),
                    f"Project app: {'true' if is_project_app else 'false'}",
                    "info",
                )
            )
        sections = [make_section(make_id("sec", f"{node_id}_info"), "App Info", info)] if info else []

        return Node(
            id=node_id,
            title=name,
            type="app",
            sections=sections,
            metadata=compact(
                {"path": path, "is_project_app": is_project_app, "note": as_str(app.get("note"))}
            ),
        )

    def _model_sections(
        self,
        node_id: str,
        name: str,
        model: Dict[str, Any],
        relationships: Tuple[Relationship, ...],
        ids: IdAllocator,
    ) -> List[Section]:
        sections: List[Section] = []

        fields: List[Item] = []
        for field in as_records(model.get("fields")):
            field_name = as_str(field.get("name")) or ""
            attributes = as_dict(field.get("attributes"))
            rendered = ", ".join(f"{key}={format_attribute(value)}" for key, value in attributes.items())
            value = f"{field_name}: {as_str(field.get('type')) or ''}"
            if rendered:
                value += f" ({rendered})"
            fields.append(
                make_item(
                    ids.allocate("field", f"{name}_{field_name}"),
                    value,
                    "field",
                    {str(key): coerce_metadata(item) for key, item in attributes.items()},
                )
            )
        if fields:
            sections.append(make_section(make_id("sec", f"{node_id}_fields"), "Fields", fields))

        methods: List[Item] = []
        for method in as_records(model.get("methods")):
            method_name = as_str(method.get("name")) or ""
            params = ", ".join(as_str_list(method.get("parameters")))
            methods.append(
                make_item(ids.allocate("method", f"{name}_{method_name}"), f"{method_name}({params})", "method")
            )
        if methods:
            sections.append(make_section(make_id("sec", f"{node_id}_methods"), "Methods", methods))

        rel_items = [
            make_item(
                ids.allocate("rel", f"{name}_{rel.field_name}"),
                format_relationship(rel),
                "relationship",
                compact(
                    {
                        "type": rel.kind,
                        "related_model": rel.related_model,
                        "related_name": rel.related_name,
                    }
                ),
            )
            for rel in relationships
        ]
        if rel_items:
            sections.append(make_section(make_id("sec", f"{node_id}_relationships"), "Relationships", rel_items))

        return sections

    def _view_sections(
        self,
        node_id: str,
        name: str,
        view: Dict[str, Any],
        http_methods: List[str],
        uses_models: Tuple[str, ...],
        ids: IdAllocator,
    ) -> List[Section]:
        sections: List[Section] = []

        info: List[Item] = []
        kind = as_str(view.get("type"))
        if kind:
            info.append(make_item(ids.allocate("type", f"{name}_type"), f"Type: {kind}", "info"))
        path = as_str(view.get("path"))
        if path:
            info.append(make_item(ids.allocate("path", f"{name}_path"), f"Path: {path}", "path"))
        if http_methods:
            info.append(
                make_item(
                    ids.allocate("methods", f"{name}_http_methods"),
                    f"HTTP Methods: {', '.join(http_methods)}",
                    "method",
                )
            )
        template = as_str(view.get("template"))
        if template:
            info.append(
                make_item(ids.allocate("template", f"{name}_template"), f"Template: {template}", "template")
            )
        if info:
            sections.append(make_section(make_id("sec", f"{node_id}_info"), "View Info", info))

        model_items = [
            make_item(ids.allocate("uses", f"{name}_uses_{model}"), model, "model") for model in uses_models
        ]
        if model_items:
            sections.append(make_section(make_id("sec", f"{node_id}_models"), "Uses Models", model_items))

        return sections


__all__ = [
    "ModelEntity",
    "OrmConverter",
    "OrmEntity",
    "Relationship",
    "ViewEntity",
    "app_key",
    "format_attribute",
    "format_relationship",
    "model_key",
    "view_key",
]
