"""HTTP tests for chat session logging, health and routing."""

from pymongo.errors import AutoReconnect


def _messages():
    return [
        {"sender": "user", "text": "What is the forecast?"},
        {"sender": "bot", "text": "Sunny with a light breeze.", "timestamp": "2024-05-01T10:00:00Z"},
    ]


class TestSaveChatSession:

    def test_save_with_feedback(self, client, chat_collection):
        response = client.post(
            "/api/chat",
            json={"messages": _messages(), "feedback": {"isAccurate": "yes", "rating": 4, "comments": "ok"}},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Chat session and feedback saved successfully"
        assert body["data"]["feedback"] == {"isAccurate": "yes", "rating": 4, "comments": "ok"}
        assert [message["sender"] for message in body["data"]["messages"]] == ["user", "bot"]

        stored = chat_collection.documents[0]
        assert str(stored["_id"]) == body["data"]["id"]
        assert stored["messages"][0]["timestamp"] is not None
        assert stored["messages"][1]["timestamp"].year == 2024
        assert stored["createdAt"] is not None

    def test_save_without_feedback(self, client, chat_collection):
        response = client.post("/api/chat", json={"messages": _messages()})

        assert response.status_code == 201
        assert "feedback" not in response.json()["data"]
        assert "feedback" not in chat_collection.documents[0]

    def test_empty_messages_accepted(self, client, chat_collection):
        response = client.post("/api/chat", json={"messages": []})

        assert response.status_code == 201
        assert chat_collection.documents[0]["messages"] == []

    def test_messages_not_a_list(self, client, chat_collection):
        response = client.post("/api/chat", json={"messages": "hello"})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid input: messages array is required"
        assert chat_collection.documents == []

    def test_messages_missing(self, client, chat_collection):
        response = client.post("/api/chat", json={"feedback": {"rating": 5}})

        assert response.status_code == 400
        assert chat_collection.documents == []

    def test_unknown_sender_rejected(self, client, chat_collection):
        response = client.post("/api/chat", json={"messages": [{"sender": "system", "text": "hi"}]})

        assert response.status_code == 400
        assert "messages.0.sender" in response.json()["details"]["errors"]
        assert chat_collection.documents == []

    def test_empty_text_rejected(self, client, chat_collection):
        response = client.post("/api/chat", json={"messages": [{"sender": "user", "text": ""}]})

        assert response.status_code == 400
        assert chat_collection.documents == []

    def test_whitespace_text_is_kept(self, client, chat_collection):
        response = client.post("/api/chat", json={"messages": [{"sender": "user", "text": "   "}]})

        assert response.status_code == 201
        assert chat_collection.documents[0]["messages"][0]["text"] == "   "

    def test_rating_out_of_range_rejected(self, client, chat_collection):
        response = client.post("/api/chat", json={"messages": _messages(), "feedback": {"rating": 6}})

        assert response.status_code == 400
        assert "feedback.rating" in response.json()["details"]["errors"]
        assert chat_collection.documents == []

    def test_survey_answer_must_be_yes_or_no(self, client):
        response = client.post("/api/chat", json={"messages": _messages(), "feedback": {"isFast": "maybe"}})

        assert response.status_code == 400

    def test_storage_failure(self, client, chat_collection):
        chat_collection.error = AutoReconnect("connection reset")

        response = client.post("/api/chat", json={"messages": _messages()})

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to save chat session"
        assert response.json()["error"] == "connection reset"


class TestServiceEndpoints:

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Server is running"
        assert body["services"] == {"database": "healthy"}
        assert "timestamp" in body

    def test_root(self, client):
        body = client.get("/").json()

        assert body["message"] == "Welcome to Feedback API"
        assert body["endpoints"]["feedback"] == "/api/feedback"

    def test_unknown_route(self, client):
        response = client.get("/api/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Route not found"}

    def test_metrics(self, client):
        client.get("/api/health")

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "feedback_api_requests_total" in response.text

    def test_timing_headers(self, client):
        response = client.get("/api/health")

        assert "X-Request-ID" in response.headers
        assert "X-Process-Time" in response.headers


def test_unexpected_error_is_generic_500(client):
    from app.core.dependencies import get_chat_session_recorder
    from app.main import app

    def broken_recorder():
        raise RuntimeError("recorder exploded")

    app.dependency_overrides[get_chat_session_recorder] = broken_recorder

    response = client.post("/api/chat", json={"messages": []})

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Internal server error"
    assert "recorder exploded" in body["stack"]
