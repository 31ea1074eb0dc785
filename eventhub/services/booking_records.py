"""Booking record validation and persistence.

A booking may only be written while the event it references exists. The
existence check runs in the same transaction as the insert, so nothing is
committed until the check has passed.
"""

import logging
from typing import Any, Dict

from sqlalchemy import exists, func
from sqlalchemy.exc import IntegrityError

from ..db import Database, DatabaseError
from ..errors import (
    BookingNotFoundError,
    DanglingReferenceError,
    DependencyFailureError,
    InvalidFormatError,
    MissingParameterError,
)
from ..models.booking import Booking
from ..models.event import Event
from ..utils.normalization import normalize_email

logger = logging.getLogger(__name__)


def _normalize_event_id(value: Any) -> int:
    if value is None or value == '':
        raise MissingParameterError('eventId', "Event ID is required")
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise InvalidFormatError("Event ID must be an integer", field='eventId')
    try:
        return int(value)
    except ValueError as e:
        raise InvalidFormatError("Event ID must be an integer", field='eventId') from e


def validate_booking_fields(candidate: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
    """
    Validate the booking fields present in ``candidate``.

    Args:
        candidate: Dict with ``event_id`` and ``email``
        partial: Only validate the fields present (used for updates)

    Raises:
        ValidationError: If a field is missing or malformed
    """
    fields: Dict[str, Any] = {}
    if 'event_id' in candidate or not partial:
        fields['event_id'] = _normalize_event_id(candidate.get('event_id'))
    if 'email' in candidate or not partial:
        fields['email'] = normalize_email(candidate.get('email'))
    return fields


def ensure_event_exists(session, event_id: int) -> None:
    """
    Check that the referenced event is present.

    Raises:
        DanglingReferenceError: If the event does not exist
    """
    if not session.query(exists().where(Event.id == event_id)).scalar():
        logger.warning(f"Rejected booking for missing event {event_id}")
        raise DanglingReferenceError(event_id)


def _flush_reference(session, event_id: int) -> None:
    # The event can vanish between the check and the insert
    try:
        session.flush()
    except IntegrityError as e:
        raise DanglingReferenceError(event_id) from e


def validate_and_persist(database: Database, candidate: Dict[str, Any]) -> Booking:
    """
    Validate a booking candidate and insert it.

    Raises:
        ValidationError: If the email or event ID is rejected
        DanglingReferenceError: If the referenced event does not exist
        DependencyFailureError: If the store is unavailable
    """
    fields = validate_booking_fields(candidate)

    try:
        with database.session() as session:
            ensure_event_exists(session, fields['event_id'])
            booking = Booking(**fields)
            session.add(booking)
            _flush_reference(session, fields['event_id'])
    except DatabaseError as e:
        logger.error(f"Error validating event {fields['event_id']} for booking: {e}")
        raise DependencyFailureError("Error validating event") from e

    logger.info(f"Created booking {booking.id} for event {booking.event_id}")
    return booking


def update_booking(database: Database, booking_id: int, changes: Dict[str, Any]) -> Booking:
    """
    Apply changes to an existing booking.

    The event existence check only runs when ``event_id`` actually changes.

    Raises:
        BookingNotFoundError: If the booking does not exist
        ValidationError: If a changed field is rejected
        DanglingReferenceError: If the new event does not exist
        DependencyFailureError: If the store is unavailable
    """
    fields = validate_booking_fields(changes, partial=True)

    try:
        with database.session() as session:
            booking = session.get(Booking, booking_id)
            if booking is None:
                raise BookingNotFoundError(booking_id)

            if 'event_id' in fields and fields['event_id'] != booking.event_id:
                ensure_event_exists(session, fields['event_id'])

            for name, value in fields.items():
                setattr(booking, name, value)
            _flush_reference(session, booking.event_id)
    except DatabaseError as e:
        logger.error(f"Failed to update booking {booking_id}: {e}")
        raise DependencyFailureError("Error validating event") from e

    return booking


def count_bookings_for_event(database: Database, event_id: int) -> int:
    """Number of bookings held for an event."""
    try:
        with database.session() as session:
            return session.query(func.count(Booking.id)).filter(Booking.event_id == event_id).scalar()
    except DatabaseError as e:
        logger.error(f"Failed to count bookings for event {event_id}: {e}")
        raise DependencyFailureError("Failed to count bookings") from e
