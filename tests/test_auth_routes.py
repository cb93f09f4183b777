"""Registration, login, profile, and refresh endpoint tests."""

from __future__ import annotations

import pytest

from conftest import bearer


def test_register_returns_user_and_token(client):
    response = client.post(
        "/api/v1/auth/register",
        json={"name": "Alice", "email": "Alice@Example.com", "password": "secret123"},
    )

    assert response.status_code == 201
    body = response.get_json()
    assert body["user"]["name"] == "Alice"
    assert body["user"]["email"] == "alice@example.com"
    assert body["user"]["avatar"] == ""
    assert "password" not in body["user"]
    assert "password_hash" not in body["user"]
    assert body["token"]


def test_register_duplicate_email_conflicts(client, alice):
    response = client.post(
        "/api/v1/auth/register",
        json={"name": "Alice Again", "email": "alice@example.com", "password": "another1"},
    )

    assert response.status_code == 409
    assert response.get_json() == {"error": "Email already exists"}


@pytest.mark.parametrize(
    "payload, field",
    [
        ({"name": "A", "email": "a@example.com", "password": "secret123"}, "name"),
        ({"name": "Alice", "email": "not-an-email", "password": "secret123"}, "email"),
        ({"name": "Alice", "email": "a@example.com", "password": "12345"}, "password"),
        ({"email": "a@example.com", "password": "secret123"}, "name"),
    ],
)
def test_register_validation_errors(client, payload, field):
    response = client.post("/api/v1/auth/register", json=payload)

    assert response.status_code == 400
    body = response.get_json()
    assert body["error"] == "Invalid request"
    assert field in body["details"]


def test_register_requires_json_object(client):
    response = client.post("/api/v1/auth/register", data="nope", content_type="text/plain")

    assert response.status_code == 400
    assert response.get_json() == {"error": "Request body must be a JSON object"}


def test_login_success(client, alice):
    response = client.post(
        "/api/v1/auth/login", json={"email": "alice@example.com", "password": "secret123"}
    )

    assert response.status_code == 200
    body = response.get_json()
    assert body["user"]["id"] == alice["user"]["id"]
    assert body["token"]


@pytest.mark.parametrize(
    "email, password",
    [
        ("alice@example.com", "wrong-password"),
        ("nobody@example.com", "secret123"),
        ("nobody@example.com", "x"),
        ("not even an email", "secret123"),
    ],
)
def test_login_failures_are_unauthorized(client, alice, email, password):
    response = client.post("/api/v1/auth/login", json={"email": email, "password": password})

    assert response.status_code == 401
    assert response.get_json() == {"error": "Invalid credentials"}


def test_profile_round_trip(client, alice):
    response = client.get("/api/v1/user/profile", headers=alice["headers"])
    assert response.status_code == 200
    assert response.get_json()["email"] == "alice@example.com"

    response = client.put(
        "/api/v1/user/profile",
        json={"name": "Alice Liddell", "avatar": "https://img.example.com/a.png"},
        headers=alice["headers"],
    )
    assert response.status_code == 200
    body = response.get_json()
    assert body["name"] == "Alice Liddell"
    assert body["avatar"] == "https://img.example.com/a.png"


def test_profile_update_leaves_omitted_fields(client, alice):
    client.put("/api/v1/user/profile", json={"avatar": "a.png"}, headers=alice["headers"])

    response = client.put("/api/v1/user/profile", json={"name": "Ally"}, headers=alice["headers"])

    body = response.get_json()
    assert body["name"] == "Ally"
    assert body["avatar"] == "a.png"


def test_profile_update_rejects_short_name(client, alice):
    response = client.put("/api/v1/user/profile", json={"name": "A"}, headers=alice["headers"])

    assert response.status_code == 400
    assert "name" in response.get_json()["details"]


def test_refresh_issues_a_working_token(client, alice):
    response = client.post("/api/v1/auth/refresh", headers=alice["headers"])

    assert response.status_code == 200
    token = response.get_json()["token"]
    profile = client.get("/api/v1/user/profile", headers=bearer(token))
    assert profile.status_code == 200


def test_refresh_requires_token(client):
    response = client.post("/api/v1/auth/refresh")

    assert response.status_code == 401


def test_health_is_public(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"
