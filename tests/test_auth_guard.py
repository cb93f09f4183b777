"""Bearer-token guard behaviour on protected routes."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from conftest import TEST_SECRET, bearer
from finmind.security import extract_bearer_token
from finmind.errors import MalformedHeaderError, MissingHeaderError
from finmind.services.tokens import TokenService

PROTECTED = [
    ("get", "/api/v1/user/profile"),
    ("get", "/api/v1/categories"),
    ("get", "/api/v1/bills"),
    ("get", "/api/v1/bills/statistics"),
]


@pytest.mark.parametrize("method, path", PROTECTED)
def test_missing_header_is_rejected(client, method, path):
    response = getattr(client, method)(path)

    assert response.status_code == 401
    assert response.get_json() == {"error": "Authorization header required"}


def test_header_without_bearer_prefix_is_rejected(client, alice):
    response = client.get("/api/v1/bills", headers={"Authorization": alice["token"]})

    assert response.status_code == 401
    assert response.get_json() == {"error": "Bearer token required"}


def test_expired_token_is_rejected(client, alice):
    issued = datetime.now(timezone.utc) - timedelta(hours=25)
    token = TokenService(TEST_SECRET).issue(alice["user"]["id"], "alice@example.com", now=issued)

    response = client.get("/api/v1/bills", headers=bearer(token))

    assert response.status_code == 401
    assert response.get_json() == {"error": "Token has expired"}


def test_foreign_signature_is_rejected(client, alice):
    token = TokenService("not-the-server-secret").issue(alice["user"]["id"], "alice@example.com")

    response = client.get("/api/v1/bills", headers=bearer(token))

    assert response.status_code == 401
    assert response.get_json() == {"error": "Invalid token"}


def test_garbage_token_is_rejected(client):
    response = client.get("/api/v1/bills", headers=bearer("garbage"))

    assert response.status_code == 401
    assert response.get_json() == {"error": "Malformed token"}


def test_no_handler_side_effects_when_rejected(client, alice):
    response = client.post(
        "/api/v1/categories",
        json={"name": "Sneaky", "type": "expense", "icon": "x", "color": "#000"},
        headers={"Authorization": "Token abc"},
    )
    assert response.status_code == 401

    listing = client.get("/api/v1/categories", headers=alice["headers"])
    names = [item["name"] for item in listing.get_json()["categories"]]
    assert "Sneaky" not in names


def test_extract_bearer_token():
    assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"
    with pytest.raises(MissingHeaderError):
        extract_bearer_token(None)
    with pytest.raises(MalformedHeaderError):
        extract_bearer_token("Basic dXNlcjpwYXNz")
    with pytest.raises(MalformedHeaderError):
        extract_bearer_token("Bearer ")
