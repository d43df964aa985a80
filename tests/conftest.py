"""Test configuration and fixtures."""

import json
import uuid

import pytest
from fastapi.testclient import TestClient

from cashless_hub_api.app.core.config import settings
from cashless_hub_api.app.core.db import get_connection, init_db
from cashless_hub_api.app.core.security import UserRole, create_access_token
from cashless_hub_api.app.main import create_app


TENANT_A = "tenant-a"
TENANT_B = "tenant-b"


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    """Point the application at a fresh SQLite file for every test."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "test.db"))
    init_db()
    yield


@pytest.fixture
def app():
    """Create FastAPI test app."""
    return create_app()


@pytest.fixture
def client(app):
    """Create test client that returns 500 responses instead of raising."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


def make_token(tenant_id=TENANT_A, tenant_role=UserRole.TENANT_ADMIN, global_role=UserRole.END_USER, **extra):
    claims = {
        "userId": extra.pop("user_id", "user-1"),
        "email": "admin@example.com",
        "globalRole": global_role.value,
    }
    if tenant_id is not None:
        claims["tenantId"] = tenant_id
    if tenant_role is not None:
        claims["tenantRole"] = tenant_role.value
    claims.update(extra)
    return create_access_token(claims)


def auth(tenant_id=TENANT_A, **kwargs):
    return {"Authorization": f"Bearer {make_token(tenant_id, **kwargs)}"}


@pytest.fixture
def admin_a():
    return auth(TENANT_A)


@pytest.fixture
def admin_b():
    return auth(TENANT_B)


@pytest.fixture
def staff_a():
    return auth(TENANT_A, tenant_role=UserRole.TENANT_STAFF)


@pytest.fixture
def create_event(client):
    """Create an event through the API and return its JSON representation."""

    def _create(headers, **overrides):
        body = {
            "name": "Opening Night",
            "location": "Club Neon",
            "startDate": "2025-01-01T20:00:00Z",
            "endDate": "2025-01-02T02:00:00Z",
        }
        body.update(overrides)
        response = client.post("/api/v1/events", json=body, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create


@pytest.fixture
def insert_payment():
    """Insert a payment row directly, as the cashless terminals would."""

    def _insert(
        event_id,
        tenant_id=TENANT_A,
        amount=10.0,
        method="CARD",
        status="COMPLETED",
        paid_at=None,
        metadata=None,
        user_id="end-user-1",
    ):
        payment_id = str(uuid.uuid4())
        conn = get_connection()
        try:
            conn.execute(
                """
                INSERT INTO payments (id, amount, currency, payment_method, status, event_id, user_id, tenant_id, metadata, paid_at)
                VALUES (?, ?, 'EUR', ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    payment_id,
                    amount,
                    method,
                    status,
                    event_id,
                    user_id,
                    tenant_id,
                    json.dumps(metadata) if metadata is not None else None,
                    paid_at,
                ),
            )
            conn.commit()
        finally:
            conn.close()
        return payment_id

    return _insert


@pytest.fixture
def insert_user():
    """Insert an end user directly and return its id."""

    def _insert(email, first_name=None, last_name=None):
        user_id = str(uuid.uuid4())
        conn = get_connection()
        try:
            conn.execute(
                "INSERT INTO users (id, email, first_name, last_name) VALUES (?, ?, ?, ?)",
                (user_id, email, first_name, last_name),
            )
            conn.commit()
        finally:
            conn.close()
        return user_id

    return _insert
