import json
import uuid

import pytest

from studyatlas.exceptions import (
    GatewayConnectionError,
    GatewayCreditsExhaustedError,
    GatewayException,
    GatewayRateLimitError,
    GatewayTimeoutError,
)
from studyatlas.schemas.gateway import EmailDraftContent
from tests.conftest import OTHER_USER_ID, auth_headers

API = "/api/v1/workbench"


@pytest.fixture
def conversation(client):
    response = client.post(f"{API}/conversations", json={}, headers=auth_headers())
    assert response.status_code == 201
    return response.json()


def _events(response) -> list:
    return [line[len("data: "):] for line in response.text.split("\n\n") if line.startswith("data: ")]


# ---- Conversations ----


def test_conversation_crud(client, conversation):
    assert conversation["title"] == "New Conversation"

    renamed = client.patch(
        f"{API}/conversations/{conversation['id']}", json={"title": "Exchange planning"}, headers=auth_headers()
    )
    assert renamed.json()["title"] == "Exchange planning"

    listing = client.get(f"{API}/conversations", headers=auth_headers()).json()
    assert [c["id"] for c in listing] == [conversation["id"]]

    assert client.delete(f"{API}/conversations/{conversation['id']}", headers=auth_headers()).status_code == 204
    assert client.get(f"{API}/conversations", headers=auth_headers()).json() == []


def test_conversations_are_private(client, conversation):
    other = auth_headers(OTHER_USER_ID)

    assert client.get(f"{API}/conversations", headers=other).json() == []
    assert client.get(f"{API}/conversations/{conversation['id']}/messages", headers=other).status_code == 404


# ---- Messages ----


def test_send_message_stores_both_turns(client, gateway, conversation):
    gateway.advise.return_value = "Consider CS-433 Machine Learning."

    response = client.post(
        f"{API}/conversations/{conversation['id']}/messages",
        json={"content": "Which ML course should I take?", "user_context": {"academic_level": "Ma"}},
        headers=auth_headers(),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["user_message"]["role"] == "user"
    assert body["assistant_message"]["content"] == "Consider CS-433 Machine Learning."

    history, user_context = gateway.advise.call_args.args
    assert [(m.role, m.content) for m in history] == [("user", "Which ML course should I take?")]
    assert user_context == {"academic_level": "Ma"}

    messages = client.get(f"{API}/conversations/{conversation['id']}/messages", headers=auth_headers()).json()
    assert [m["role"] for m in messages] == ["user", "assistant"]


def test_send_message_forwards_the_whole_history(client, gateway, conversation):
    gateway.advise.side_effect = ["First answer", "Second answer"]
    url = f"{API}/conversations/{conversation['id']}/messages"

    client.post(url, json={"content": "First question"}, headers=auth_headers())
    client.post(url, json={"content": "Second question"}, headers=auth_headers())

    history = gateway.advise.call_args.args[0]
    assert [m.content for m in history] == ["First question", "First answer", "Second question"]


@pytest.mark.parametrize(
    "error, status_code",
    [
        (GatewayRateLimitError("Rate limit exceeded. Please try again in a moment."), 429),
        (GatewayCreditsExhaustedError("AI credits exhausted. Please add credits to continue."), 402),
        (GatewayConnectionError("Cannot connect to model gateway"), 502),
        (GatewayTimeoutError("Model gateway timeout"), 504),
        (GatewayException("Model gateway error"), 502),
    ],
)
def test_gateway_errors_map_to_http_statuses(client, gateway, conversation, error, status_code):
    gateway.advise.side_effect = error

    response = client.post(
        f"{API}/conversations/{conversation['id']}/messages", json={"content": "Hi"}, headers=auth_headers()
    )

    assert response.status_code == status_code
    assert response.json()["detail"] == str(error)


def test_feedback_on_assistant_messages_only(client, gateway, conversation):
    gateway.advise.return_value = "Answer"
    body = client.post(
        f"{API}/conversations/{conversation['id']}/messages", json={"content": "Question"}, headers=auth_headers()
    ).json()

    assistant_id = body["assistant_message"]["id"]
    rated = client.put(f"{API}/messages/{assistant_id}/feedback", json={"feedback": "positive"}, headers=auth_headers())
    assert rated.status_code == 200
    assert rated.json()["feedback"] == "positive"
    assert rated.json()["feedback_at"] is not None

    cleared = client.put(f"{API}/messages/{assistant_id}/feedback", json={"feedback": None}, headers=auth_headers())
    assert cleared.json()["feedback"] is None

    user_id = body["user_message"]["id"]
    assert client.put(f"{API}/messages/{user_id}/feedback", json={"feedback": "negative"}, headers=auth_headers()).status_code == 409
    assert client.put(f"{API}/messages/{assistant_id}/feedback", json={"feedback": "meh"}, headers=auth_headers()).status_code == 422
    assert (
        client.put(
            f"{API}/messages/{assistant_id}/feedback", json={"feedback": "positive"}, headers=auth_headers(OTHER_USER_ID)
        ).status_code
        == 404
    )


# ---- Streaming ----


def test_stream_emits_deltas_and_done(client, gateway):
    gateway.advise_stream.return_value = iter(["Hello", " there"])

    response = client.post(
        f"{API}/chat/stream", json={"messages": [{"role": "user", "content": "Hi"}]}, headers=auth_headers()
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    events = _events(response)
    assert events[-1] == "[DONE]"
    deltas = [json.loads(event)["choices"][0]["delta"]["content"] for event in events[:-1]]
    assert deltas == ["Hello", " there"]


def test_stream_persists_turns_for_a_conversation(client, gateway, conversation):
    gateway.advise_stream.return_value = iter(["Try ", "the MLO lab."])

    client.post(
        f"{API}/chat/stream",
        json={
            "conversation_id": conversation["id"],
            "messages": [
                {"role": "assistant", "content": "How can I help?"},
                {"role": "user", "content": "Any lab ideas?"},
            ],
        },
        headers=auth_headers(),
    )

    messages = client.get(f"{API}/conversations/{conversation['id']}/messages", headers=auth_headers()).json()
    assert [(m["role"], m["content"]) for m in messages] == [
        ("user", "Any lab ideas?"),
        ("assistant", "Try the MLO lab."),
    ]


def test_stream_rate_limit_before_first_delta_is_429(client, gateway):
    gateway.advise_stream.side_effect = GatewayRateLimitError("Rate limit exceeded. Please try again in a moment.")

    response = client.post(
        f"{API}/chat/stream", json={"messages": [{"role": "user", "content": "Hi"}]}, headers=auth_headers()
    )

    assert response.status_code == 429
    assert response.json()["detail"] == "Rate limit exceeded. Please try again in a moment."


def test_stream_interrupted_midway_reports_an_error_event(client, gateway):
    def broken_stream():
        yield "Partial"
        raise GatewayConnectionError("Cannot connect to model gateway")

    gateway.advise_stream.return_value = broken_stream()

    response = client.post(
        f"{API}/chat/stream", json={"messages": [{"role": "user", "content": "Hi"}]}, headers=auth_headers()
    )

    events = _events(response)
    assert json.loads(events[0])["choices"][0]["delta"]["content"] == "Partial"
    assert json.loads(events[-1]) == {"error": "Cannot connect to model gateway"}
    assert "[DONE]" not in events


def test_stream_for_unknown_conversation_is_404(client, gateway):
    response = client.post(
        f"{API}/chat/stream",
        json={"conversation_id": str(uuid.uuid4()), "messages": [{"role": "user", "content": "Hi"}]},
        headers=auth_headers(),
    )

    assert response.status_code == 404
    gateway.advise_stream.assert_not_called()


def test_stream_rejects_empty_messages(client):
    response = client.post(f"{API}/chat/stream", json={"messages": []}, headers=auth_headers())

    assert response.status_code == 422


# ---- Email drafts ----


def test_generate_and_manage_email_draft(client, gateway, catalog):
    gateway.draft_email.return_value = EmailDraftContent(subject="Semester project", body="Dear Prof. Jaggi, ...")

    created = client.post(
        f"{API}/email-drafts/generate",
        json={
            "purpose": "Ask about a semester project",
            "recipient": "Prof. Jaggi",
            "context": "MSc student, interested in optimization",
            "lab_id": str(catalog.mlo.id),
        },
        headers=auth_headers(),
    )
    assert created.status_code == 201
    draft = created.json()
    assert draft["subject"] == "Semester project"
    assert draft["status"] == "draft"
    assert draft["lab_id"] == str(catalog.mlo.id)
    gateway.draft_email.assert_called_once_with(
        "Ask about a semester project", "Prof. Jaggi", "MSc student, interested in optimization"
    )

    url = f"{API}/email-drafts/{draft['id']}"
    sent = client.patch(url, json={"status": "sent", "body": "Dear Professor Jaggi, ..."}, headers=auth_headers())
    assert sent.json()["status"] == "sent"
    assert sent.json()["subject"] == "Semester project"

    assert client.get(url, headers=auth_headers(OTHER_USER_ID)).status_code == 404
    assert [d["id"] for d in client.get(f"{API}/email-drafts", headers=auth_headers()).json()] == [draft["id"]]

    assert client.delete(url, headers=auth_headers()).status_code == 204
    assert client.get(url, headers=auth_headers()).status_code == 404


def test_generate_draft_for_unknown_lab_is_404(client, gateway, catalog):
    response = client.post(
        f"{API}/email-drafts/generate",
        json={"purpose": "Ask", "recipient": "Prof", "lab_id": str(uuid.uuid4())},
        headers=auth_headers(),
    )

    assert response.status_code == 404
    gateway.draft_email.assert_not_called()


def test_invalid_draft_status_is_rejected(client, gateway):
    gateway.draft_email.return_value = EmailDraftContent(subject="s", body="b")
    draft = client.post(
        f"{API}/email-drafts/generate", json={"purpose": "Ask", "recipient": "Prof"}, headers=auth_headers()
    ).json()

    response = client.patch(f"{API}/email-drafts/{draft['id']}", json={"status": "archived"}, headers=auth_headers())

    assert response.status_code == 422
