"""Integration tests for the HTTP API."""

import inspect

import pytest
from fastapi.testclient import TestClient

from eventhub.api.app import create_application
from eventhub.api.dependencies import get_database
from eventhub.api.routes import bookings, events


class TestHealth:

    def test_health_check(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestEventDetail:
    """Tests for GET /api/events/{slug}"""

    def test_get_event_returns_details(self, client, stored_event):
        response = client.get("/api/events/tech-meetup-2024")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Event fetched successfully"
        assert body["event"]["slug"] == "tech-meetup-2024"
        assert body["event"]["tags"] == ["tooling", "meetup"]
        assert "createdAt" in body["event"]

    def test_get_event_normalizes_raw_slug(self, client, stored_event):
        response = client.get("/api/events/Tech-Meetup-2024")
        assert response.status_code == 200

    def test_get_event_by_accented_title(self, client, admin_headers, event_payload):
        client.post("/api/events", json=dict(event_payload, title="Café Night"), headers=admin_headers)

        response = client.get("/api/events/Café Night")

        assert response.status_code == 200
        assert response.json()["event"]["slug"] == "cafe-night"

    def test_get_event_not_found(self, client):
        response = client.get("/api/events/tech-meetup-1999")

        assert response.status_code == 404
        assert response.json() == {
            "message": "Not found",
            "error": "Event with slug 'tech-meetup-1999' does not exist",
        }

    def test_get_event_invalid_slug_format(self, client):
        response = client.get("/api/events/UPPER_CASE")

        assert response.status_code == 400
        assert response.json()["message"] == "Validation error"

    def test_get_event_blank_slug(self, client):
        response = client.get("/api/events/%20%20")

        assert response.status_code == 400
        assert response.json()["error"] == "Slug parameter is required"

    def test_store_failure_returns_500(self, unreachable_database):
        app = create_application()
        app.dependency_overrides[get_database] = lambda: unreachable_database

        response = TestClient(app).get("/api/events/tech-meetup-2024")

        assert response.status_code == 500
        assert response.json()["message"] == "Internal server error"


class TestEventList:
    """Tests for GET /api/events"""

    def test_list_events(self, client, stored_event):
        response = client.get("/api/events")

        assert response.status_code == 200
        assert [event["slug"] for event in response.json()["events"]] == ["tech-meetup-2024"]

    def test_list_events_empty_catalog(self, client):
        response = client.get("/api/events")
        assert response.json()["events"] == []


class TestEventWrites:
    """Tests for POST /api/events and PATCH /api/events/{slug}"""

    def test_create_requires_authorization(self, client, event_payload):
        response = client.post("/api/events", json=event_payload)
        assert response.status_code == 401

        response = client.post("/api/events", json=event_payload, headers={"Authorization": "wrong"})
        assert response.status_code == 401

    def test_create_without_configured_key(self, client, event_payload, monkeypatch):
        monkeypatch.delenv("ADMIN_API_KEY")
        response = client.post("/api/events", json=event_payload, headers={"Authorization": "x"})
        assert response.status_code == 503

    def test_create_event(self, client, admin_headers, event_payload):
        event_payload["time"] = "9:5"

        response = client.post("/api/events", json=event_payload, headers=admin_headers)

        assert response.status_code == 201
        event = response.json()["event"]
        assert event["slug"] == "tech-meetup-2024"
        assert event["time"] == "09:05"

    def test_create_duplicate_is_conflict(self, client, admin_headers, event_payload, stored_event):
        response = client.post("/api/events", json=event_payload, headers=admin_headers)

        assert response.status_code == 422
        assert response.json()["message"] == "Conflict"

    def test_create_invalid_time(self, client, admin_headers, event_payload):
        event_payload["time"] = "25:00"

        response = client.post("/api/events", json=event_payload, headers=admin_headers)

        assert response.status_code == 400
        assert "Hours must be 0-23" in response.json()["error"]

    def test_update_event_title(self, client, admin_headers, stored_event):
        response = client.patch(
            "/api/events/tech-meetup-2024",
            json={"title": "Tech Meetup 2025"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["event"]["slug"] == "tech-meetup-2025"
        assert client.get("/api/events/tech-meetup-2024").status_code == 404
        assert client.get("/api/events/tech-meetup-2025").status_code == 200


class TestBookings:
    """Tests for POST /api/bookings"""

    def test_book_event(self, client, stored_event):
        response = client.post(
            "/api/bookings",
            json={"eventId": stored_event.id, "slug": stored_event.slug, "email": "Jane@Example.com"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["booking"]["email"] == "jane@example.com"

    def test_book_with_invalid_email(self, client, stored_event):
        response = client.post(
            "/api/bookings",
            json={"eventId": stored_event.id, "email": "jane@"},
        )

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_book_missing_event(self, client):
        response = client.post(
            "/api/bookings",
            json={"eventId": 999, "slug": "gone", "email": "jane@example.com"},
        )

        assert response.status_code == 422
        assert response.json() == {
            "success": False,
            "message": "Conflict",
            "error": "Event with ID 999 does not exist",
        }

    @pytest.mark.parametrize("payload", [{"email": "jane@example.com"}, {"eventId": "", "email": "jane@example.com"}])
    def test_book_without_event_id(self, client, payload):
        response = client.post("/api/bookings", json=payload)
        assert response.status_code == 400

    @pytest.mark.parametrize("event_id", [True, False, 1.5, [1]])
    def test_book_with_non_integer_event_id(self, client, stored_event, event_id):
        response = client.post("/api/bookings", json={"eventId": event_id, "email": "jane@example.com"})

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert client.get("/api/events/tech-meetup-2024/bookings/count").json()["count"] == 0

    def test_booking_count(self, client, stored_event):
        for email in ("a@example.com", "b@example.com", "c@example.com"):
            client.post("/api/bookings", json={"eventId": stored_event.id, "email": email})

        response = client.get("/api/events/tech-meetup-2024/bookings/count")

        assert response.status_code == 200
        assert response.json()["count"] == 3


@pytest.mark.parametrize("handler", [
    events.get_events,
    events.get_event,
    events.get_booking_count,
    events.post_event,
    events.patch_event,
    bookings.create_booking,
])
def test_database_handlers_run_in_threadpool(handler):
    """Handlers doing blocking store calls are plain functions, not coroutines."""
    assert not inspect.iscoroutinefunction(handler)
