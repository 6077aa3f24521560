"""Tests for the FastAPI service mode."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from depgraph.pipeline import GraphConverter
from depgraph.service import create_app
from tests._fixtures.payloads import component_export, orm_export


@pytest.fixture
def client(fixed_clock) -> TestClient:
    app = create_app(lambda: GraphConverter(clock=fixed_clock))
    return TestClient(app)


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_detect_endpoint(client: TestClient) -> None:
    response = client.post("/detect", json=orm_export())
    assert response.status_code == 200
    assert response.json() == {"format": "orm-project", "ecosystem": "django"}


def test_convert_endpoint_returns_graph(client: TestClient) -> None:
    response = client.post("/convert", json=component_export())
    assert response.status_code == 200
    data = response.json()
    assert [node["id"] for node in data["nodes"]] == ["comp_App", "comp_Header", "comp_BookList"]
    assert data["metadata"]["convertedAt"] == "2024-05-17T12:30:45.123Z"


def test_convert_endpoint_rejects_unknown_format(client: TestClient) -> None:
    response = client.post("/convert", json={})
    assert response.status_code == 422
    assert response.json() == {"detail": "Unknown dependency data format", "format": "unknown"}
