"""Integration tests for the booking REST API.

These exercise the full stack: views, services, Django stores, constraints.
Run with: pytest tests/test_booking_api.py -v
"""

import uuid
from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient


@pytest.fixture
def catalog(api_client: APIClient, db):
    film = api_client.post(
        "/api/films", {"title": "Arrival", "genre": "Sci-Fi", "duration": 116}, format="json"
    ).data
    auditorium = api_client.post(
        "/api/auditoriums", {"name": "Hall 1", "capacity": 120}, format="json"
    ).data
    account = api_client.post(
        "/api/accounts",
        {
            "display_name": "Ada Lovelace",
            "email": "ada@example.com",
            "login_name": "ada",
            "credential": "secret-pass",
        },
        format="json",
    ).data
    return {"film": film, "auditorium": auditorium, "account": account}


@pytest.fixture
def schedule(api_client: APIClient, catalog):
    response = api_client.post(
        "/api/schedules",
        {
            "auditorium_id": catalog["auditorium"]["id"],
            "film_id": catalog["film"]["id"],
            "show_time": (timezone.now() + timedelta(days=1)).isoformat(),
            "price": "50000",
        },
        format="json",
    )
    assert response.status_code == 201
    return response.data


def _reserve(api_client, schedule, catalog, seat="A1"):
    return api_client.post(
        "/api/bookings",
        {"schedule_id": schedule["id"], "account_id": catalog["account"]["id"], "seat_code": seat},
        format="json",
    )


def _pay(api_client, booking, catalog, status="success"):
    return api_client.post(
        "/api/payments",
        {
            "booking_id": booking["id"],
            "account_id": catalog["account"]["id"],
            "amount": "50000",
            "method": "card",
            "status": status,
        },
        format="json",
    )


@pytest.mark.django_db
class TestCatalogEndpoints:
    """Tests for /api/films, /api/auditoriums, /api/accounts"""

    def test_create_film_returns_created(self, catalog):
        assert catalog["film"]["title"] == "Arrival"
        assert catalog["film"]["duration"] == 116

    def test_account_response_hides_credential(self, catalog):
        assert "credential" not in catalog["account"]
        assert catalog["account"]["role"] == "customer"

    def test_duplicate_login_name_conflicts(self, api_client: APIClient, catalog):
        response = api_client.post(
            "/api/accounts",
            {
                "display_name": "Ada Again",
                "email": "ada2@example.com",
                "login_name": "ada",
                "credential": "secret-pass",
            },
            format="json",
        )
        assert response.status_code == 409
        assert response.data["code"] == "CONFLICT"

    def test_malformed_id_is_bad_request(self, api_client: APIClient, db):
        response = api_client.get("/api/films/not-a-uuid")
        assert response.status_code == 400
        assert response.data["code"] == "INVALID_IDENTIFIER"

    def test_unknown_film_is_not_found(self, api_client: APIClient, db):
        response = api_client.get(f"/api/films/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.data == {"code": "NOT_FOUND", "message": "Film not found"}

    def test_schema_violation_uses_framework_validation(self, api_client: APIClient, db):
        response = api_client.post(
            "/api/auditoriums", {"name": "Hall 2", "capacity": 0}, format="json"
        )
        assert response.status_code == 400
        assert "capacity" in response.data

    def test_delete_film_with_schedule_conflicts(self, api_client: APIClient, schedule):
        response = api_client.delete(f"/api/films/{schedule['film_id']}")
        assert response.status_code == 409


@pytest.mark.django_db
class TestScheduleEndpoints:
    """Tests for /api/schedules"""

    def test_schedule_detail_embeds_film_and_auditorium(self, api_client: APIClient, schedule):
        response = api_client.get(f"/api/schedules/{schedule['id']}")
        assert response.status_code == 200
        assert response.data["film"]["title"] == "Arrival"
        assert response.data["auditorium"]["name"] == "Hall 1"
        assert response.data["price"] == "50000.00"

    def test_past_show_time_is_rejected(self, api_client: APIClient, catalog):
        response = api_client.post(
            "/api/schedules",
            {
                "auditorium_id": catalog["auditorium"]["id"],
                "film_id": catalog["film"]["id"],
                "show_time": (timezone.now() - timedelta(minutes=1)).isoformat(),
                "price": "50000",
            },
            format="json",
        )
        assert response.status_code == 400
        assert response.data["code"] == "INVALID_TEMPORAL_VALUE"

    def test_unknown_film_reference_is_not_found(self, api_client: APIClient, catalog):
        response = api_client.post(
            "/api/schedules",
            {
                "auditorium_id": catalog["auditorium"]["id"],
                "film_id": str(uuid.uuid4()),
                "show_time": (timezone.now() + timedelta(days=1)).isoformat(),
                "price": "50000",
            },
            format="json",
        )
        assert response.status_code == 404
        assert response.data["code"] == "REFERENCE_NOT_FOUND"

    def test_delete_schedule_with_active_booking_conflicts(
        self, api_client: APIClient, schedule, catalog
    ):
        _reserve(api_client, schedule, catalog)
        response = api_client.delete(f"/api/schedules/{schedule['id']}")
        assert response.status_code == 409


@pytest.mark.django_db
class TestBookingFlow:
    """Tests for /api/bookings and /api/payments"""

    def test_seat_is_booked_once(self, api_client: APIClient, schedule, catalog):
        first = _reserve(api_client, schedule, catalog)
        second = _reserve(api_client, schedule, catalog, seat="a1")

        assert first.status_code == 201
        assert first.data["status"] == "active"
        assert first.data["schedule"]["film"]["title"] == "Arrival"
        assert second.status_code == 409
        assert second.data["code"] == "SEAT_TAKEN"

    def test_cancel_frees_the_seat(self, api_client: APIClient, schedule, catalog):
        booking = _reserve(api_client, schedule, catalog).data

        cancelled = api_client.post(f"/api/bookings/{booking['id']}/cancel")
        again = _reserve(api_client, schedule, catalog)

        assert cancelled.status_code == 200
        assert cancelled.data["status"] == "cancelled"
        assert again.status_code == 201
        assert again.data["id"] != booking["id"]

    def test_expire_after_cancel_conflicts(self, api_client: APIClient, schedule, catalog):
        booking = _reserve(api_client, schedule, catalog).data
        api_client.post(f"/api/bookings/{booking['id']}/cancel")

        response = api_client.post(f"/api/bookings/{booking['id']}/expire")

        assert response.status_code == 409

    def test_change_seat_onto_taken_seat_conflicts(self, api_client: APIClient, schedule, catalog):
        _reserve(api_client, schedule, catalog, seat="A1")
        mover = _reserve(api_client, schedule, catalog, seat="B1").data

        response = api_client.put(
            f"/api/bookings/{mover['id']}",
            {"schedule_id": schedule["id"], "seat_code": "A1"},
            format="json",
        )

        assert response.status_code == 409
        assert api_client.get(f"/api/bookings/{mover['id']}").data["seat_code"] == "B1"

    def test_change_seat_moves_booking(self, api_client: APIClient, schedule, catalog):
        booking = _reserve(api_client, schedule, catalog).data

        response = api_client.put(
            f"/api/bookings/{booking['id']}",
            {"schedule_id": schedule["id"], "seat_code": "c7"},
            format="json",
        )

        assert response.status_code == 200
        assert response.data["id"] == booking["id"]
        assert response.data["seat_code"] == "C7"

    def test_reserve_for_unknown_account_is_reference_error(
        self, api_client: APIClient, schedule
    ):
        response = api_client.post(
            "/api/bookings",
            {"schedule_id": schedule["id"], "account_id": str(uuid.uuid4()), "seat_code": "A1"},
            format="json",
        )
        assert response.status_code == 404
        assert response.data["code"] == "REFERENCE_NOT_FOUND"

    def test_list_bookings_filters_by_schedule(self, api_client: APIClient, schedule, catalog):
        _reserve(api_client, schedule, catalog, seat="A1")
        _reserve(api_client, schedule, catalog, seat="A2")

        response = api_client.get("/api/bookings", {"schedule_id": schedule["id"]})

        assert response.status_code == 200
        assert {b["seat_code"] for b in response.data} == {"A1", "A2"}

    def test_booking_is_paid_once(self, api_client: APIClient, schedule, catalog):
        booking = _reserve(api_client, schedule, catalog).data

        failed = _pay(api_client, booking, catalog, status="failed")
        paid = _pay(api_client, booking, catalog)
        duplicate = _pay(api_client, booking, catalog)

        assert failed.status_code == 201
        assert paid.status_code == 201
        assert paid.data["amount"] == "50000.00"
        assert duplicate.status_code == 409
        assert duplicate.data["code"] == "ALREADY_PAID"
        history = api_client.get(f"/api/bookings/{booking['id']}/payments").data
        assert [p["status"] for p in history] == ["success", "failed"]

    def test_account_payment_history(self, api_client: APIClient, schedule, catalog):
        booking = _reserve(api_client, schedule, catalog).data
        _pay(api_client, booking, catalog)

        response = api_client.get(f"/api/accounts/{catalog['account']['id']}/payments")

        assert response.status_code == 200
        assert len(response.data) == 1
        assert response.data[0]["booking"]["seat_code"] == "A1"

    def test_update_payment_to_success_when_already_paid_conflicts(
        self, api_client: APIClient, schedule, catalog
    ):
        booking = _reserve(api_client, schedule, catalog).data
        _pay(api_client, booking, catalog)
        pending = _pay(api_client, booking, catalog, status="pending").data

        response = api_client.put(
            f"/api/payments/{pending['id']}",
            {
                "booking_id": booking["id"],
                "account_id": catalog["account"]["id"],
                "amount": "50000",
                "method": "card",
                "status": "success",
            },
            format="json",
        )

        assert response.status_code == 409
        assert response.data["code"] == "ALREADY_PAID"

    def test_bookings_and_payments_cannot_be_deleted(
        self, api_client: APIClient, schedule, catalog
    ):
        """Ledger rows end by cancel, expire or update, never by DELETE."""
        booking = _reserve(api_client, schedule, catalog).data
        payment = _pay(api_client, booking, catalog).data

        assert api_client.delete(f"/api/bookings/{booking['id']}").status_code == 405
        assert api_client.delete(f"/api/payments/{payment['id']}").status_code == 405
        assert api_client.get(f"/api/bookings/{booking['id']}").status_code == 200
        assert api_client.get(f"/api/payments/{payment['id']}").status_code == 200

    def test_pay_for_cancelled_booking_conflicts(self, api_client: APIClient, schedule, catalog):
        booking = _reserve(api_client, schedule, catalog).data
        api_client.post(f"/api/bookings/{booking['id']}/cancel")

        response = _pay(api_client, booking, catalog, status="pending")

        assert response.status_code == 409
        assert response.data["code"] == "CONFLICT"
