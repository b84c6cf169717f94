"""Tests for the FastAPI service mode."""

from __future__ import annotations

from pathlib import Path
from typing import List

import pytest
from fastapi.testclient import TestClient

from specaudit.config import ConfigError
from specaudit.engine import ConsistencyEngine
from specaudit.service import create_app
from tests._fixtures.corpus_builder import CorpusBuilder


@pytest.fixture
def project(corpus_builder: CorpusBuilder) -> Path:
    corpus_builder.write(
        {
            "spec/blocks.md": """
            # Blocks

            See [blocks](#blocks) and [nowhere](#nowhere).

            {"type": "paragraph"}
            {"type": "sidebar"}
            """,
        }
    )
    corpus_builder.write_json(
        "schemas/content.schema.json",
        {"$defs": {"paragraph": {"properties": {"type": {"const": "paragraph"}}}}},
    )
    return corpus_builder.path()


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_types_endpoint_returns_reconciliation(client: TestClient, project: Path) -> None:
    response = client.post("/types", json={"path": str(project)})

    assert response.status_code == 200
    data = response.json()
    assert data["synced"] == ["paragraph"]
    assert data["prose_only"] == [
        {
            "name": "sidebar",
            "location": {"file": "spec/blocks.md", "line": 6},
            "kind": "prose",
        }
    ]
    assert data["schema_only"] == []
    assert data["has_discrepancies"] is True


def test_references_endpoint_returns_broken_links(client: TestClient, project: Path) -> None:
    response = client.post("/references", json={"path": str(project)})

    assert response.status_code == 200
    data = response.json()
    assert data["references_found"] == 2
    assert [ref["target"] for ref in data["valid"]] == ["#blocks"]
    assert data["broken"] == [
        {
            "target": "#nowhere",
            "file": "spec/blocks.md",
            "line": 3,
            "context": "[nowhere](#nowhere)",
        }
    ]


def test_missing_path_maps_to_404(client: TestClient, tmp_path: Path) -> None:
    response = client.post("/types", json={"path": str(tmp_path / "missing")})

    assert response.status_code == 404
    assert "Project path not found" in response.json()["detail"]


def test_config_error_maps_to_400(tmp_path: Path) -> None:
    def _factory(path: str) -> ConsistencyEngine:
        raise ConfigError("bad config")

    client = TestClient(create_app(_factory))
    response = client.post("/references", json={"path": str(tmp_path)})

    assert response.status_code == 400
    assert response.json() == {"detail": "bad config"}


def test_custom_engine_factory_receives_path(project: Path) -> None:
    calls: List[str] = []

    def _factory(path: str) -> ConsistencyEngine:
        calls.append(path)
        return ConsistencyEngine.for_path(path)

    client = TestClient(create_app(_factory))
    response = client.post("/types", json={"path": str(project)})

    assert response.status_code == 200
    assert calls == [str(project)]
