from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from carwash.api.deps import get_store
from carwash.config import settings
from carwash.main import app
from carwash.utils.clock import local_now


@pytest.fixture
async def client(store):
    app.dependency_overrides[get_store] = lambda: store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def payload(booking_payload):
    return {**booking_payload, "date": local_now().date().isoformat()}


async def create_booking(client, payload, **overrides):
    response = await client.post("/api/v1/bookings/", json={**payload, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "X-Request-ID" in response.headers


async def test_create_and_get_booking(client, payload):
    booking = await create_booking(client, payload)

    assert booking["status"] == "pending"
    assert booking["next_status"] == "confirmed"
    assert booking["next_action"] == "Confirm"
    assert booking["can_cancel"] is True

    response = await client.get(f"/api/v1/bookings/{booking['booking_id']}")
    assert response.status_code == 200
    assert response.json()["booking_id"] == booking["booking_id"]


async def test_invalid_booking_payload(client, payload):
    response = await client.post("/api/v1/bookings/", json={**payload, "time": "25:00"})
    assert response.status_code == 422


async def test_advance_and_cancel_endpoints(client, payload):
    booking = await create_booking(client, payload)
    booking_id = booking["booking_id"]

    statuses = []
    for _ in range(4):
        response = await client.post(f"/api/v1/bookings/{booking_id}/advance")
        assert response.status_code == 200
        statuses.append(response.json()["status"])
    assert statuses == ["confirmed", "on-way", "in-progress", "completed"]

    response = await client.post(f"/api/v1/bookings/{booking_id}/advance")
    assert response.status_code == 409

    response = await client.post(f"/api/v1/bookings/{booking_id}/cancel")
    assert response.status_code == 409

    other = await create_booking(client, payload)
    response = await client.post(f"/api/v1/bookings/{other['booking_id']}/cancel")
    assert response.status_code == 200
    assert response.json()["status"] == "cancelled"
    assert response.json()["next_status"] is None


async def test_unknown_booking_returns_404(client):
    response = await client.post("/api/v1/bookings/2SW-000000/advance")
    assert response.status_code == 404
    assert "2SW-000000" in response.json()["detail"]


async def test_list_bookings_filters(client, payload):
    await create_booking(client, payload)
    old = (local_now().date() - timedelta(days=20)).isoformat()
    await create_booking(client, payload, date=old, first_name="Baraka", phone="0755000111")

    response = await client.get("/api/v1/bookings/", params={"date_filter": "today"})
    assert response.json()["total"] == 1

    response = await client.get("/api/v1/bookings/", params={"search": "baraka"})
    assert [b["first_name"] for b in response.json()["items"]] == ["Baraka"]

    response = await client.get("/api/v1/bookings/", params={"status": "pending"})
    assert response.json()["total"] == 2

    response = await client.get("/api/v1/bookings/today")
    assert response.json()["total"] == 1

    response = await client.get("/api/v1/bookings/", params={"limit": 1})
    assert response.json()["total"] == 2
    assert len(response.json()["items"]) == 1


async def test_payments_and_dashboard(client, payload):
    booking = await create_booking(client, payload)

    response = await client.post(
        "/api/v1/payments/",
        json={"booking_id": booking["booking_id"], "amount": 5000, "payment_method": "cash"},
    )
    assert response.status_code == 201
    payment_id = response.json()["payment_id"]

    await client.post(
        "/api/v1/payments/",
        json={"booking_id": booking["booking_id"], "amount": 3000, "payment_method": "mpesa"},
    )

    response = await client.patch(
        f"/api/v1/payments/{payment_id}/status", json={"status": "completed"}
    )
    assert response.status_code == 200
    assert response.json()["status"] == "completed"

    response = await client.patch(
        f"/api/v1/payments/{payment_id}/status", json={"status": "failed"}
    )
    assert response.status_code == 409

    stats = (await client.get("/api/v1/dashboard/stats")).json()
    assert stats["total_revenue"] == 5000
    assert stats["today_revenue"] == 5000
    assert stats["pending_payments"] == 1
    assert stats["total_bookings"] == 1
    assert stats["today_bookings"] == 1
    assert stats["total_customers"] == 1
    assert stats["currency"] == "TZS"

    counts = (await client.get("/api/v1/dashboard/status-counts")).json()["counts"]
    assert counts["pending"] == 1
    assert counts["completed"] == 0

    payment_stats = (await client.get("/api/v1/dashboard/payments")).json()
    assert payment_stats["completed_payments"] == 1

    listed = (await client.get("/api/v1/payments/", params={"status": "completed"})).json()
    assert [p["payment_id"] for p in listed["items"]] == [payment_id]


async def test_payment_date_range_validation(client):
    response = await client.get(
        "/api/v1/payments/", params={"start_date": "2024-02-01", "end_date": "2024-01-01"}
    )
    assert response.status_code == 422


async def test_payment_for_unknown_booking(client):
    response = await client.post(
        "/api/v1/payments/",
        json={"booking_id": "2SW-000000", "amount": 100, "payment_method": "cash"},
    )
    assert response.status_code == 404


async def test_customer_endpoints(client, payload):
    booking = await create_booking(client, payload)
    await create_booking(client, payload)

    listed = (await client.get("/api/v1/customers/")).json()
    assert listed["total"] == 1
    summary = listed["items"][0]
    assert summary["customer"]["phone"] == "0712345678"
    assert summary["stats"]["total_bookings"] == 2
    assert summary["stats"]["active_bookings"] == 2
    assert summary["is_active"] is True

    detail = (await client.get("/api/v1/customers/0712345678")).json()
    assert len(detail["bookings"]) == 2
    assert booking["booking_id"] in {b["booking_id"] for b in detail["bookings"]}

    overview = (await client.get("/api/v1/customers/overview")).json()
    assert overview["total_customers"] == 1
    assert overview["active_customers"] == 1
    assert overview["average_bookings"] == 2.0
    assert overview["currency"] == settings.currency

    response = await client.get("/api/v1/customers/0712 345 678")
    assert response.status_code == 200
    assert response.json()["customer"]["phone"] == "0712345678"

    response = await client.get("/api/v1/customers/0000000")
    assert response.status_code == 404
