"""Tests for the REST API."""

import pytest
from fastapi.testclient import TestClient

from searchstream.api.app import create_app
from searchstream.config.settings import Settings
from tests.mocks import FailingGenerator


@pytest.fixture
def client():
    app = create_app(Settings(search_mode="mock", llm_mode="mock"))
    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": "1.0.0"}


def test_api_index(client):
    body = client.get("/api").json()

    assert body["message"] == "SearchStream API"
    assert body["endpoints"]["search"]["deep"] == "POST /api/search/deep"


def test_chat_message(client):
    response = client.post("/api/chat/message", json={"messages": [{"role": "user", "content": "hi"}]})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": {"message": "Mock response to: hi", "model": "anthropic/claude-sonnet-4.5"},
    }


def test_chat_message_requires_messages(client):
    response = client.post("/api/chat/message", json={"messages": []})

    assert response.status_code == 422


def test_chat_message_generation_failure(client):
    client.app.state.generator = FailingGenerator()

    response = client.post("/api/chat/message", json={"messages": [{"role": "user", "content": "hi"}]})

    assert response.status_code == 502
    assert "unauthorized" in response.json()["detail"]


def test_models(client):
    body = client.get("/api/chat/models").json()

    assert body["success"] is True
    assert len(body["data"]["models"]) == 3


def test_validate_connection(client):
    body = client.post("/api/chat/validate").json()

    assert body == {"success": True, "data": {"connected": True, "baseUrl": "https://go.trybons.ai"}}


def test_deep_search(client):
    response = client.post("/api/search/deep", json={"query": "python", "maxResults": 10})

    body = response.json()
    assert response.status_code == 200
    assert body["searchDepth"] == "expert"
    assert body["totalResults"] == 10
    assert len(body["results"]) == 10
    assert "timestamp" in body


def test_quick_search_defaults_to_configured_size(client):
    body = client.post("/api/search/quick", json={"query": "python"}).json()

    assert body["searchDepth"] == "surface"
    assert body["totalResults"] == 5
    assert {result["source"] for result in body["results"]} == {"DuckDuckGo"}


def test_search_requires_query(client):
    assert client.post("/api/search/deep", json={"query": ""}).status_code == 422


def test_triggers(client):
    body = client.get("/api/search/triggers", params={"q": "find the latest rare vinyl"}).json()

    assert body == {"shouldSearch": True, "shouldUseDeepSearch": True}


def test_clear_cache(client):
    client.post("/api/search/quick", json={"query": "python"})

    response = client.delete("/api/search/cache")

    assert response.json() == {"success": True}
    assert len(client.app.state.web_search.cache) == 0
