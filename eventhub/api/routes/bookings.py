"""Bookings router module."""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...db import Database
from ...errors import DomainError
from ...services import validate_and_persist
from ..dependencies import get_database
from ..responses import error_response, unexpected_error_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bookings"])


class BookingRequest(BaseModel):
    """Booking form submission. Field checks happen in the booking service."""

    eventId: Any = None
    slug: Optional[str] = None
    email: Optional[str] = None


@router.post("/bookings", status_code=201)
def create_booking(request: BookingRequest, database: Database = Depends(get_database)):
    """Book a seat at an event for the given email address."""
    try:
        booking = validate_and_persist(
            database,
            {'event_id': request.eventId, 'email': request.email},
        )
    except DomainError as e:
        logger.info(f"Booking rejected for event {request.eventId} ({request.slug}): {e}")
        return error_response(e, success=False)
    except Exception as e:
        return unexpected_error_response("POST /api/bookings", e, success=False)

    logger.info(f"Booking {booking.id} created for event {booking.event_id} ({request.slug})")
    return {"success": True, "booking": booking.to_dict()}
