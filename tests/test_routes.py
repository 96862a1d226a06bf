# tests/test_routes.py

import pytest
from fastapi.testclient import TestClient

from config import Settings
from conftest import SEARCH_MESSAGE, FakeAiService, FakeTicketService
from main import create_app
from router import DialogueRouter
from session_store import MemoryStore


def _client(tickets=None, ai=None):
    settings = Settings(ALLOWED_ORIGINS="http://localhost:3000", MAX_MESSAGE_CHARS=200)
    router = DialogueRouter(
        store=MemoryStore(),
        tickets=tickets or FakeTicketService(),
        ai=ai or FakeAiService(),
        timeout=2.0,
    )
    return TestClient(create_app(settings, router=router))


@pytest.fixture
def client():
    return _client()


@pytest.mark.parametrize("path", ["/", "/health"])
def test_health(client, path):
    resp = client.get(path)
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_chat_greeting_creates_session(client):
    resp = client.post("/chat", json={"user_id": "u1", "message": "Olá"})
    assert resp.status_code == 200
    data = resp.json()
    assert "assistente de reservas" in data["response"]
    assert data["session_id"]
    assert "action_data" not in data


def test_chat_conversation_keeps_session(client):
    first = client.post("/chat", json={"user_id": "u1", "message": SEARCH_MESSAGE}).json()
    assert first["action_data"]["flights"][0]["flight_number"] == "GO34094"
    sid = first["session_id"]

    second = client.post("/chat", json={"user_id": "u1", "message": "GO34094", "session_id": sid}).json()
    assert second["session_id"] == sid
    assert "passageiros" in second["response"]


@pytest.mark.parametrize("body", [
    {"user_id": "u1", "message": ""},
    {"user_id": "", "message": "Olá"},
    {"message": "Olá"},
])
def test_chat_rejects_invalid_body(client, body):
    assert client.post("/chat", json=body).status_code == 422


def test_chat_message_too_long(client):
    resp = client.post("/chat", json={"user_id": "u1", "message": "a" * 201})
    assert resp.status_code == 413


def test_ai_failure_maps_to_502():
    client = _client(ai=FakeAiService(fail=True))
    resp = client.post("/chat", json={"user_id": "u1", "message": "conte uma piada"})
    assert resp.status_code == 502
    assert "llm down" not in resp.text


def test_unexpected_error_maps_to_500():
    class BrokenAi:
        def generate_response(self, message):
            return None

    client = _client(ai=BrokenAi())
    resp = client.post("/chat", json={"user_id": "u1", "message": "conte uma piada"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Erro interno"}


def test_cors_preflight(client):
    resp = client.options(
        "/chat",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://localhost:3000"


def test_main_entrypoint_starts_uvicorn(monkeypatch):
    import runpy

    import uvicorn

    calls = {}
    monkeypatch.setattr(uvicorn, "run", lambda app, **kw: calls.update(kw, app=app))
    monkeypatch.setenv("PORT", "9123")
    monkeypatch.delenv("HOST", raising=False)
    runpy.run_module("main", run_name="__main__")
    assert calls["port"] == 9123
    assert calls["host"] == "0.0.0.0"
    assert calls["app"].title == "Flight Booking Assistant"
