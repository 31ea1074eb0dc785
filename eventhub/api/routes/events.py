"""Events router module."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from ...db import Database
from ...errors import DomainError
from ...services import (
    count_bookings_for_event,
    create_event,
    get_event_by_slug,
    list_events,
    update_event,
)
from ..dependencies import get_database, require_admin
from ..responses import error_response, unexpected_error_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"])

@router.get("/events")
def get_events(database: Database = Depends(get_database)):
    """List all events ordered by date and time."""
    try:
        events = list_events(database)
    except DomainError as e:
        return error_response(e)
    except Exception as e:
        return unexpected_error_response("GET /api/events", e)

    return {
        "message": "Events fetched successfully",
        "events": [event.to_dict() for event in events],
    }

@router.get("/events/{slug}")
def get_event(slug: str, database: Database = Depends(get_database)):
    """Fetch a single event by its unique slug."""
    try:
        event = get_event_by_slug(database, slug)
    except DomainError as e:
        return error_response(e)
    except Exception as e:
        return unexpected_error_response("GET /api/events/{slug}", e)

    return {"message": "Event fetched successfully", "event": event.to_dict()}

@router.get("/events/{slug}/bookings/count")
def get_booking_count(slug: str, database: Database = Depends(get_database)):
    """Number of seats booked for an event."""
    try:
        event = get_event_by_slug(database, slug)
        count = count_bookings_for_event(database, event.id)
    except DomainError as e:
        return error_response(e)
    except Exception as e:
        return unexpected_error_response("GET /api/events/{slug}/bookings/count", e)

    return {"message": "Booking count fetched successfully", "count": count}

@router.post("/events", status_code=201, dependencies=[Depends(require_admin)])
def post_event(
    payload: Dict[str, Any] = Body(...),
    database: Database = Depends(get_database)
):
    """
    Create an event. The slug is derived from the title.
    This endpoint is protected by an authorization header.
    """
    try:
        event = create_event(database, payload)
    except DomainError as e:
        return error_response(e)
    except Exception as e:
        return unexpected_error_response("POST /api/events", e)

    return {"message": "Event created successfully", "event": event.to_dict()}

@router.patch("/events/{slug}", dependencies=[Depends(require_admin)])
def patch_event(
    slug: str,
    payload: Dict[str, Any] = Body(...),
    database: Database = Depends(get_database)
):
    """
    Update the changed fields of an event.
    This endpoint is protected by an authorization header.
    """
    try:
        event = update_event(database, slug, payload)
    except DomainError as e:
        return error_response(e)
    except Exception as e:
        return unexpected_error_response("PATCH /api/events/{slug}", e)

    return {"message": "Event updated successfully", "event": event.to_dict()}
