"""Pytest configuration and shared fixtures for FinMind tests.

Each test gets its own SQLite file under ``tmp_path`` and a freshly built
Flask app, so nothing touches a real instance directory.
"""

from __future__ import annotations

from datetime import datetime
from itertools import count

import pytest

from finmind import create_app
from finmind.domain.bills import BillDraft
from finmind.extensions import EXTENSION_KEY, build_bill_ledger, build_category_registry
from finmind.models import Category

TEST_SECRET = "test-signing-secret"


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture()
def app(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Flask app bound to an isolated SQLite database with defaults seeded."""

    db_path = tmp_path / "finmind.db"
    monkeypatch.setenv("FINMIND_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("FINMIND_DATABASE_URL", f"sqlite:///{db_path}")
    monkeypatch.setenv("FINMIND_JWT_SECRET", TEST_SECRET)
    monkeypatch.setenv("FINMIND_SEED_DEFAULTS", "true")
    monkeypatch.delenv("FINMIND_API_PREFIX", raising=False)
    app = create_app("testing")
    yield app
    app.extensions[EXTENSION_KEY].engine.dispose()


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture()
def state(app):
    return app.extensions[EXTENSION_KEY]


@pytest.fixture()
def registry(state):
    return build_category_registry(state)


@pytest.fixture()
def ledger(state):
    return build_bill_ledger(state)


# =============================================================================
# Users and Auth Helpers
# =============================================================================


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def register_user(client):
    """Factory registering a user through the API.

    Returns a dict with ``user``, ``token`` and ready-made ``headers``.
    """

    sequence = count(1)

    def _register(
        name: str | None = None,
        email: str | None = None,
        password: str = "secret123",
    ) -> dict:
        n = next(sequence)
        response = client.post(
            "/api/v1/auth/register",
            json={
                "name": name or f"User {n}",
                "email": email or f"user{n}@example.com",
                "password": password,
            },
        )
        assert response.status_code == 201, response.get_json()
        body = response.get_json()
        body["headers"] = bearer(body["token"])
        return body

    return _register


@pytest.fixture()
def alice(register_user):
    return register_user(name="Alice", email="alice@example.com")


@pytest.fixture()
def bob(register_user):
    return register_user(name="Bob", email="bob@example.com")


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture()
def default_category(registry):
    """Return a seeded default category by (name, type)."""

    def _lookup(name: str = "Food", category_type: str = "expense") -> Category:
        category = registry.repo.find_by_name(name, category_type)
        assert category is not None, f"default category {name!r} missing"
        return category

    return _lookup


@pytest.fixture()
def bill_factory(ledger, default_category):
    """Factory for creating bills directly through the ledger service."""

    def _create_bill(
        user_id: int,
        *,
        amount: float = 10.0,
        bill_type: str = "expense",
        category_id: int | None = None,
        merchant: str = "Corner Shop",
        description: str = "",
        bill_time: datetime | None = None,
    ):
        if category_id is None:
            category_id = default_category(
                "Food" if bill_type == "expense" else "Salary", bill_type
            ).id
        return ledger.create(
            user_id,
            BillDraft(
                type=bill_type,
                amount=amount,
                category_id=category_id,
                merchant=merchant,
                description=description,
                bill_time=bill_time or datetime(2024, 1, 15, 12, 0),
            ),
        )

    return _create_bill
