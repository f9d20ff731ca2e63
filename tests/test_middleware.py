"""Cross-origin allow-list behaviour."""

import pytest

from app.config import normalize_origin


@pytest.mark.parametrize(
    "value, expected",
    [
        ("https://chat.example.com/", "https://chat.example.com"),
        ("https://chat.example.com", "https://chat.example.com"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_origin(value, expected):
    assert normalize_origin(value) == expected


def test_request_without_origin_passes(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert "Access-Control-Allow-Origin" not in response.headers


def test_configured_client_url_allowed(client):
    response = client.get("/api/health", headers={"Origin": "https://chat.example.com"})

    assert response.status_code == 200
    assert response.headers["Access-Control-Allow-Origin"] == "https://chat.example.com"
    assert response.headers["Access-Control-Allow-Credentials"] == "true"


def test_trailing_slash_is_normalized(client):
    response = client.get("/api/health", headers={"Origin": "https://chat.example.com/"})

    assert response.status_code == 200


def test_additional_origin_allowed(client):
    response = client.get("/api/health", headers={"Origin": "http://localhost:5173"})

    assert response.status_code == 200


def test_unknown_origin_rejected(client, feedback_collection):
    response = client.post(
        "/api/feedback",
        json={"name": "Ann", "email": "ann@example.com", "message": "Hello"},
        headers={"Origin": "https://evil.example.org"},
    )

    assert response.status_code == 403
    assert response.json() == {"success": False, "message": "Not allowed by CORS"}
    assert feedback_collection.documents == []


def test_preflight(client):
    response = client.options(
        "/api/feedback",
        headers={
            "Origin": "https://chat.example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )

    assert response.status_code == 200
    assert response.headers["Access-Control-Allow-Origin"] == "https://chat.example.com"
    assert "PATCH" in response.headers["Access-Control-Allow-Methods"]
    assert response.headers["Access-Control-Allow-Headers"] == "Content-Type"


def test_preflight_from_unknown_origin_rejected(client):
    response = client.options(
        "/api/feedback",
        headers={"Origin": "https://evil.example.org", "Access-Control-Request-Method": "POST"},
    )

    assert response.status_code == 403
    assert "Access-Control-Allow-Origin" not in response.headers
