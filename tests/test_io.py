"""Tests for loading exports and writing graphs."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from depgraph.io import dump_graph, load_input, write_graph
from depgraph.models import Graph, GraphMetadata, Node


def _graph() -> Graph:
    return Graph(
        nodes=[Node(id="comp_App", title="App", type="component")],
        edges=[],
        metadata=GraphMetadata(project_type="typescript", project_name="Demo", converted_at="2024-01-01T00:00:00.000Z"),
    )


def test_load_input_decodes_json(tmp_path: Path) -> None:
    source = tmp_path / "deps.json"
    source.write_text('{"components": {}}', encoding="utf-8")

    assert load_input(source) == {"components": {}}


def test_load_input_decodes_yaml(tmp_path: Path) -> None:
    source = tmp_path / "deps.yaml"
    source.write_text("name: com.sample\nelements: []\n", encoding="utf-8")

    assert load_input(source) == {"name": "com.sample", "elements": []}


def test_load_input_propagates_decode_errors(tmp_path: Path) -> None:
    bad_json = tmp_path / "deps.json"
    bad_json.write_text("{", encoding="utf-8")
    bad_yaml = tmp_path / "deps.yml"
    bad_yaml.write_text("a: [b\n", encoding="utf-8")

    with pytest.raises(json.JSONDecodeError):
        load_input(bad_json)
    with pytest.raises(yaml.YAMLError):
        load_input(bad_yaml)


def test_write_graph_creates_parent_directories(tmp_path: Path) -> None:
    target = tmp_path / "out" / "graph.json"

    written = write_graph(_graph(), target, indent=None)

    assert written == target
    data = json.loads(target.read_text(encoding="utf-8"))
    assert data["nodes"][0]["id"] == "comp_App"
    assert data["metadata"]["projectName"] == "Demo"


def test_dump_graph_indents() -> None:
    assert dump_graph(_graph(), indent=4).splitlines()[1].startswith("    ")
