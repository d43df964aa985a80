"""Tests for the read-only payment endpoints."""

import pytest

from conftest import TENANT_B


@pytest.fixture
def event(admin_a, create_event):
    return create_event(admin_a)


def test_lists_payments_most_recent_first(client, admin_a, event, insert_payment):
    pending = insert_payment(event["id"], status="PENDING")
    older = insert_payment(event["id"], paid_at="2025-01-01T21:00:00.000000+00:00")
    newer = insert_payment(event["id"], paid_at="2025-01-01T23:30:00.000000+00:00", metadata={"terminal": "bar-2"})

    response = client.get(f"/api/v1/payments/events/{event['id']}", headers=admin_a)

    assert response.status_code == 200
    data = response.json()["data"]
    assert [p["id"] for p in data] == [newer, older, pending]
    assert data[0]["metadata"] == {"terminal": "bar-2"}
    assert data[0]["paymentMethod"] == "CARD"
    assert data[2]["paidAt"] is None
    assert data[0]["user"] is None


def test_payments_embed_the_paying_user(client, admin_a, event, insert_payment, insert_user):
    user_id = insert_user("ada@example.com", first_name="Ada", last_name="Lovelace")
    insert_payment(event["id"], user_id=user_id, paid_at="2025-01-01T21:00:00.000000+00:00")

    response = client.get(f"/api/v1/payments/events/{event['id']}", headers=admin_a)

    payment = response.json()["data"][0]
    assert payment["userId"] == user_id
    assert payment["user"] == {"id": user_id, "email": "ada@example.com", "firstName": "Ada", "lastName": "Lovelace"}


def test_foreign_event_payments_are_not_found(client, admin_b, event, insert_payment):
    insert_payment(event["id"], paid_at="2025-01-01T21:00:00.000000+00:00")

    for path in (f"/api/v1/payments/events/{event['id']}", f"/api/v1/payments/events/{event['id']}/stats"):
        response = client.get(path, headers=admin_b)
        assert response.status_code == 404
        assert response.json()["code"] == "EVENT_NOT_FOUND"


def test_payments_are_filtered_by_tenant(client, admin_a, event, insert_payment):
    insert_payment(event["id"], paid_at="2025-01-01T21:00:00.000000+00:00")
    insert_payment(event["id"], tenant_id=TENANT_B, paid_at="2025-01-01T22:00:00.000000+00:00")

    response = client.get(f"/api/v1/payments/events/{event['id']}", headers=admin_a)

    assert len(response.json()["data"]) == 1


def test_stats_count_only_completed_payments(client, staff_a, event, insert_payment):
    insert_payment(event["id"], amount=10.0, method="CARD", paid_at="2025-01-01T21:05:00.000000+00:00")
    insert_payment(event["id"], amount=5.0, method="BRACELET", paid_at="2025-01-01T21:45:00.000000+00:00")
    insert_payment(event["id"], amount=15.0, method="BRACELET", paid_at="2025-01-01T23:10:00.000000+00:00")
    insert_payment(event["id"], amount=100.0, status="PENDING")
    insert_payment(event["id"], amount=50.0, status="REFUNDED", paid_at="2025-01-01T22:00:00.000000+00:00")

    response = client.get(f"/api/v1/payments/events/{event['id']}/stats", headers=staff_a)

    assert response.status_code == 200
    stats = response.json()["data"]
    assert stats["totalRevenue"] == 30.0
    assert stats["totalTransactions"] == 3
    assert stats["avgTransaction"] == 10.0
    assert stats["paymentMethodStats"] == {"CARD": 1, "BRACELET": 2}
    assert stats["revenueByHour"] == {"21": 15.0, "23": 15.0}


def test_stats_without_payments(client, admin_a, event):
    response = client.get(f"/api/v1/payments/events/{event['id']}/stats", headers=admin_a)

    stats = response.json()["data"]
    assert stats["totalRevenue"] == 0
    assert stats["totalTransactions"] == 0
    assert stats["avgTransaction"] == 0
    assert stats["paymentMethodStats"] == {}
    assert stats["revenueByHour"] == {}


def test_deleting_event_removes_its_payments(client, admin_a, event, insert_payment):
    insert_payment(event["id"], paid_at="2025-01-01T21:00:00.000000+00:00")

    assert client.delete(f"/api/v1/events/{event['id']}", headers=admin_a).status_code == 200

    response = client.get(f"/api/v1/payments/events/{event['id']}", headers=admin_a)
    assert response.status_code == 404
