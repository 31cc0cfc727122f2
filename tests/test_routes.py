"""Tests for the HTTP service."""

import logging

import pytest
from fastapi.testclient import TestClient

from src.main import app
from src.routes import compilation as compile_routes
from src.service.compile_service import CompileService
from tests.conftest import make_app, make_component


@pytest.fixture
def client():
    return TestClient(app)


def _counter() -> dict:
    return make_app(
        make_component(
            "Counter",
            expressions=[{"type": "state", "var": ["count", "setCount"], "initialState": 1}],
            children=["{count}"],
        )
    )


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_compile_returns_artifacts(client):
    response = client.post("/compile", json={"document": _counter()})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["platform"] == "web"
    assert "const [count, setCount] = useState(1);" in body["artifacts"]["components/Counter.jsx"]
    assert body["output_dir"] is None


def test_compile_cross_platform(client):
    response = client.post("/compile", json={"document": _counter(), "platform": "cross-platform"})

    assert response.status_code == 200
    assert "components/Counter.js" in response.json()["artifacts"]


def test_compile_rejects_unknown_platform(client):
    response = client.post("/compile", json={"document": _counter(), "platform": "desktop"})
    assert response.status_code == 422


def test_compile_errors_return_422_with_ordered_list(client):
    document = make_app(
        make_component("A", provideContexts={"X": "{a}"}, useContexts=["Missing"]),
        make_component("B", provideContexts={"X": "{b}"}),
    )
    response = client.post("/compile", json={"document": document})

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert [e["kind"] for e in detail] == ["duplicate_context", "unknown_context"]
    assert detail[0]["other_path"] == "components[0].provideContexts.X"
    assert "other_path" not in detail[1]


def test_compile_structural_error(client):
    response = client.post("/compile", json={"document": {"type": "app", "components": []}})

    assert response.status_code == 422
    assert response.json()["detail"][0]["path"] == "components"


def test_compile_and_write(client, tmp_path, monkeypatch):
    monkeypatch.setattr(
        compile_routes, "_get_service", lambda: CompileService(output_dir=tmp_path)
    )
    response = client.post("/compile", params={"write": True}, json={"document": _counter()})

    assert response.status_code == 200
    assert response.json()["output_dir"] == str(tmp_path)
    assert (tmp_path / "components" / "Counter.jsx").exists()


def test_list_platforms(client):
    response = client.get("/compile/platforms")
    assert response.json() == {"platforms": ["web", "cross-platform"]}


def test_startup_logs_compiler_configuration(caplog):
    caplog.set_level(logging.INFO, logger="src.main")
    with TestClient(app):
        pass

    messages = [r.getMessage() for r in caplog.records]
    assert "Targets: web, cross-platform" in messages
    assert any(m.startswith("Component workers: ") for m in messages)


def test_compile_mistyped_field_is_422(client):
    document = make_app(make_component("App", styleSheet=5))
    response = client.post("/compile", json={"document": document})

    assert response.status_code == 422
    assert response.json()["detail"][0]["path"] == "components[0].styleSheet"
