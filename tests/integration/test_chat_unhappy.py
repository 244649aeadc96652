import pytest
from fastapi.testclient import TestClient

from immo_assistant.core.errors import UpstreamError, UpstreamTimeoutError
from immo_assistant.main import app


client = TestClient(app)


@pytest.fixture
def wired(monkeypatch, fake_llm, fake_resolver):
    from immo_assistant import main

    monkeypatch.setattr(main.orchestrator, "llm", fake_llm)
    monkeypatch.setattr(main.orchestrator, "resolver", fake_resolver)
    return fake_llm


def test_chat_requires_authentication(wired):
    response = client.post("/chat", json={"message": "Je veux investir"})

    assert response.status_code == 401
    assert wired.calls == []


def test_chat_rejects_unknown_key_before_validation(wired):
    response = client.post("/chat", json={}, headers={"x-api-key": "wrong"})

    assert response.status_code == 401


@pytest.mark.parametrize("body", [{}, {"message": 42}, {"message": "   "}, {"history": []}])
def test_chat_invalid_message_returns_400(wired, api_headers, body):
    response = client.post("/chat", json=body, headers=api_headers)

    assert response.status_code == 400
    assert wired.calls == []


def test_chat_timeout_returns_504(wired, api_headers):
    wired.error = UpstreamTimeoutError("generative service timed out after 90s")

    response = client.post("/chat", json={"message": "Je veux investir à Bordeaux 33000"}, headers=api_headers)

    assert response.status_code == 504
    payload = response.json()
    assert payload["action"] == "error"
    assert payload["action"] != "city_snapshot"
    assert "trop de temps" in payload["reply"]
    assert "Bordeaux 33000" in payload["reply"]


def test_chat_upstream_error_returns_502(wired, api_headers):
    wired.error = UpstreamError("generative service returned HTTP 500")
    before = client.get("/metrics").json()["failures"].get("UpstreamError", 0)

    response = client.post("/chat", json={"message": "Je veux investir"}, headers=api_headers)

    assert response.status_code == 502
    assert response.json()["action"] == "error"
    assert client.get("/metrics").json()["failures"]["UpstreamError"] == before + 1


def test_chat_unexpected_failure_returns_500_with_hint(wired, api_headers):
    wired.error = RuntimeError("kaboom " + "x" * 500)

    response = client.post("/chat", json={"message": "Je veux investir"}, headers=api_headers)

    assert response.status_code == 500
    payload = response.json()
    assert payload["action"] == "error"
    assert "kaboom" in payload["reply"]
    assert "x" * 300 not in payload["reply"]
    assert "ville + code postal" in payload["reply"]


def test_lookup_failure_downgrades_to_postal_code_question(wired, api_headers):
    response = client.post("/chat", json={"message": "Je veux investir à Toulouse"}, headers=api_headers)

    assert response.status_code == 200
    assert response.json()["action"] == "ask_postal_code"
