"""Tests for CompileService."""

import json

import httpx
import pytest

from src.generator.tree import Platform
from src.service import compile_service
from src.service.compile_service import CompileService, DocumentLoadError
from tests.conftest import make_app, make_component


@pytest.fixture
def service(tmp_path):
    return CompileService(output_dir=tmp_path / "build", default_platform="web")


@pytest.fixture
def document():
    return make_app(
        make_component(
            "App",
            children=["Hello"],
            style=[{"selector": "&:hover", "style": {"color": "red"}}],
        ),
        styleSheet="body { margin: 0; }",
    )


def test_load_document_from_dict(service, document):
    assert service.load_document(document) is document


def test_load_document_from_file(service, document, tmp_path):
    path = tmp_path / "app.json"
    path.write_text(json.dumps(document))

    assert service.load_document(path) == document
    assert service.load_document(str(path)) == document


def test_load_document_missing_file(service, tmp_path):
    with pytest.raises(DocumentLoadError):
        service.load_document(tmp_path / "missing.json")


def test_load_document_invalid_json(service, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")

    with pytest.raises(DocumentLoadError):
        service.load_document(path)


def test_load_document_must_be_object(service, tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[]")

    with pytest.raises(DocumentLoadError):
        service.load_document(path)


def test_load_document_from_url(service, document, monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url == "https://example.test/app.json"
        return httpx.Response(200, json=document)

    transport = httpx.MockTransport(handler)
    real_client = httpx.Client
    monkeypatch.setattr(
        compile_service.httpx, "Client", lambda **kwargs: real_client(transport=transport, **kwargs)
    )

    assert service.load_document("https://example.test/app.json") == document


def test_load_document_from_url_http_error(service, monkeypatch):
    transport = httpx.MockTransport(lambda request: httpx.Response(404))
    real_client = httpx.Client
    monkeypatch.setattr(
        compile_service.httpx, "Client", lambda **kwargs: real_client(transport=transport, **kwargs)
    )

    with pytest.raises(DocumentLoadError, match="HTTP 404"):
        service.load_document("https://example.test/missing.json")


def test_platform_resolution_order(service):
    assert service.resolve_platform({}, None) == Platform.WEB
    assert service.resolve_platform({"platform": "cross-platform"}, None) == "cross-platform"
    assert service.resolve_platform({"platform": "cross-platform"}, "web") == "web"


def test_default_platform_applies_when_document_has_none(tmp_path):
    service = CompileService(output_dir=tmp_path, default_platform="cross-platform")
    response = service.compile(make_app())

    assert response.platform == Platform.CROSS_PLATFORM
    assert "components/App.js" in response.artifacts


def test_compile_success(service, document):
    response = service.compile(document)

    assert response.status == "success"
    assert response.errors == []
    assert "components/App.jsx" in response.artifacts


def test_compile_failure_lists_errors(service):
    response = service.compile(make_app(make_component("App", useContexts=["Missing"])))

    assert response.status == "error"
    assert response.artifacts == {}
    assert [e.kind for e in response.errors] == ["unknown_context"]
    assert response.errors[0].path == "components[0].useContexts[0]"


def test_compile_to_disk_writes_every_artifact(service, document, tmp_path):
    response = service.compile_to_disk(document)
    root = tmp_path / "build"

    assert response.output_dir == str(root)
    for relative, content in response.artifacts.items():
        assert (root / relative).read_text(encoding="utf-8") == content
    assert (root / "styles" / "global.css").read_text() == "body { margin: 0; }\n"


def test_compile_to_disk_writes_nothing_on_failure(service, tmp_path):
    document = make_app(
        make_component("A", provideContexts={"X": "{a}"}),
        make_component("B", provideContexts={"X": "{b}"}),
    )
    response = service.compile_to_disk(document)

    assert response.status == "error"
    assert response.output_dir is None
    assert not (tmp_path / "build").exists()


def test_compile_to_disk_output_dir_override(service, document, tmp_path):
    response = service.compile_to_disk(document, output_dir=tmp_path / "other")
    assert (tmp_path / "other" / "index.jsx").exists()
    assert response.output_dir == str(tmp_path / "other")
