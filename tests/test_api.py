"""Tests for the HTTP surface."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from link_preview import main
from link_preview.api.deps import get_app_settings, get_metadata_service
from link_preview.config import Settings
from link_preview.main import app
from link_preview.schemas import LinkMetadata
from link_preview.services.metadata import BodyReadError, NetworkError


class StubMetadataService:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def extract(self, url):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.result or LinkMetadata(url=url)


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _use_service(service):
    app.dependency_overrides[get_metadata_service] = lambda: service
    return service


def test_fetch_link_metadata_success(client):
    service = _use_service(
        StubMetadataService(
            result=LinkMetadata(
                url="https://example.com/article",
                title="Example Article",
                description="A short summary.",
            )
        )
    )

    response = client.post(
        "/api/links/metadata", json={"url": "https://example.com/article"}
    )

    assert response.status_code == 200
    assert response.json() == {
        "url": "https://example.com/article",
        "title": "Example Article",
        "description": "A short summary.",
        "image": None,
        "site_name": None,
    }
    assert service.calls == ["https://example.com/article"]


def test_fetch_link_metadata_passes_url_unchanged(client):
    service = _use_service(StubMetadataService())

    response = client.post("/api/links/metadata", json={"url": "example.com/A B"})

    assert response.status_code == 200
    assert response.json()["url"] == "example.com/A B"
    assert service.calls == ["example.com/A B"]


@pytest.mark.parametrize(
    "error",
    [
        NetworkError(
            "https://down.example",
            "Failed to fetch https://down.example: refused",
        ),
        BodyReadError(
            "https://down.example",
            "Failed to read response from https://down.example: reset",
        ),
    ],
)
def test_fetch_link_metadata_failure_returns_message(client, error):
    _use_service(StubMetadataService(error=error))

    response = client.post("/api/links/metadata", json={"url": "https://down.example"})

    assert response.status_code == 502
    assert response.json() == {"detail": str(error)}


@pytest.mark.parametrize("payload", [{}, {"url": ""}])
def test_fetch_link_metadata_requires_url(client, payload):
    service = _use_service(StubMetadataService())

    response = client.post("/api/links/metadata", json=payload)

    assert response.status_code == 422
    assert service.calls == []


@pytest.mark.parametrize("debug", [True, False])
def test_is_dev_reflects_debug_setting(client, debug):
    app.dependency_overrides[get_app_settings] = lambda: Settings(
        _env_file=None, debug=debug
    )

    response = client.get("/api/system/is-dev")

    assert response.status_code == 200
    assert response.json() == {"is_dev": debug}


def test_healthcheck(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_responses_carry_request_id(client):
    response = client.get("/health")

    assert response.headers["X-Request-ID"]


def test_run_serves_app_with_configured_address(monkeypatch):
    calls = []
    monkeypatch.setattr(
        main.uvicorn, "run", lambda target, **kwargs: calls.append((target, kwargs))
    )

    main.run()

    assert calls == [
        (
            "link_preview.main:app",
            {
                "host": main.settings.host,
                "port": main.settings.port,
                "log_config": None,
            },
        )
    ]
