"""Tests for the HTTP adapter: routing, identity header and error mapping."""

import pytest
from fastapi.testclient import TestClient

from smarthome_support.app.dependencies import get_chat_service
from smarthome_support.app.main import app

ALICE = {"X-User-Id": "alice"}
MALLORY = {"X-User-Id": "mallory"}


@pytest.fixture
def client(service):
    app.dependency_overrides[get_chat_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def chat_id(client):
    return client.post("/chats", headers=ALICE).json()["chat_id"]


# ── Chats ────────────────────────────────────────────────


def test_create_chat(client):
    response = client.post("/chats", headers=ALICE)
    assert response.status_code == 201
    body = response.json()
    assert body["title"] == "New Chat 1"
    assert body["current_step_id"] == 1
    assert body["is_escalated"] is False
    assert len(body["messages"]) == 1
    assert body["messages"][0]["sender"] == "agent"
    assert [o["outcome"] for o in body["messages"][0]["options"]] == [2, 3, 4]


def test_create_chat_with_title(client):
    response = client.post("/chats", headers=ALICE, json={"title": "Hub offline"})
    assert response.json()["title"] == "Hub offline"


def test_identity_header_required(client):
    assert client.post("/chats").status_code == 422


def test_list_chats(client, chat_id):
    client.post("/chats", headers=MALLORY)
    response = client.get("/chats", headers=ALICE)
    assert response.status_code == 200
    assert [c["chat_id"] for c in response.json()] == [chat_id]


def test_get_chat(client, chat_id):
    response = client.get(f"/chats/{chat_id}", headers=ALICE)
    assert response.status_code == 200
    assert response.json()["chat_id"] == chat_id


def test_get_foreign_chat(client, chat_id):
    assert client.get(f"/chats/{chat_id}", headers=MALLORY).status_code == 403


def test_get_missing_chat(client):
    assert client.get("/chats/nope", headers=ALICE).status_code == 404


def test_delete_chat(client, chat_id):
    assert client.delete(f"/chats/{chat_id}", headers=MALLORY).status_code == 403
    assert client.delete(f"/chats/{chat_id}", headers=ALICE).status_code == 204
    assert client.get(f"/chats/{chat_id}", headers=ALICE).status_code == 404


# ── Conversation ─────────────────────────────────────────


def test_select_option(client, chat_id):
    response = client.post(f"/chats/{chat_id}/options", headers=ALICE, json={"outcome": 2})
    assert response.status_code == 200
    body = response.json()
    assert body["current_step_id"] == 2
    assert body["messages"][-1]["text"].startswith("Let's troubleshoot the Wi-Fi connection")


def test_select_resolve(client, chat_id):
    client.post(f"/chats/{chat_id}/options", headers=ALICE, json={"outcome": 3})
    response = client.post(f"/chats/{chat_id}/options", headers=ALICE, json={"outcome": "resolve"})
    body = response.json()
    assert body["current_step_id"] == 1
    assert body["messages"][-1]["text"].startswith("Great! I'm glad we could resolve")


def test_select_escalate_option(client, chat_id):
    response = client.post(f"/chats/{chat_id}/options", headers=ALICE, json={"outcome": "escalate"})
    body = response.json()
    assert body["is_escalated"] is True
    assert body["current_step_id"] is None
    assert body["messages"][-1]["sender"] == "human"
    assert body["messages"][-1]["options"] is None


def test_invalid_sentinel_rejected(client, chat_id):
    response = client.post(f"/chats/{chat_id}/options", headers=ALICE, json={"outcome": "restart"})
    assert response.status_code == 422


def test_unknown_step_is_a_server_error(client, chat_id):
    response = client.post(f"/chats/{chat_id}/options", headers=ALICE, json={"outcome": 99})
    assert response.status_code == 500
    # Nothing was appended
    assert len(client.get(f"/chats/{chat_id}", headers=ALICE).json()["messages"]) == 1


def test_send_message(client, chat_id):
    response = client.post(
        f"/chats/{chat_id}/messages", headers=ALICE, json={"text": "my wifi is broken"}
    )
    assert response.status_code == 200
    messages = response.json()["messages"]
    assert [m["sender"] for m in messages] == ["agent", "user", "agent"]
    assert [m["id"] for m in messages] == [0, 1, 2]
    assert "Wi-Fi" in messages[-1]["text"]


def test_send_empty_message_rejected(client, chat_id):
    response = client.post(f"/chats/{chat_id}/messages", headers=ALICE, json={"text": ""})
    assert response.status_code == 422


def test_escalate_endpoint_is_idempotent(client, chat_id):
    first = client.post(f"/chats/{chat_id}/escalate", headers=ALICE).json()
    second = client.post(f"/chats/{chat_id}/escalate", headers=ALICE).json()
    assert first["is_escalated"] is True
    assert len(second["messages"]) == len(first["messages"]) == 2


def test_escalated_chat_ignores_messages(client, chat_id):
    client.post(f"/chats/{chat_id}/escalate", headers=ALICE)
    response = client.post(f"/chats/{chat_id}/messages", headers=ALICE, json={"text": "hello?"})
    assert response.status_code == 200
    assert len(response.json()["messages"]) == 2


def test_foreign_user_cannot_send(client, chat_id):
    response = client.post(f"/chats/{chat_id}/messages", headers=MALLORY, json={"text": "hi"})
    assert response.status_code == 403
