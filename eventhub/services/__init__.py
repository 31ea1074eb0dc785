"""Record services for events and bookings."""

from .event_lookup import get_event_by_slug, normalize_lookup_slug
from .event_records import create_event, list_events, update_event, validate_and_normalize
from .booking_records import (
    count_bookings_for_event,
    update_booking,
    validate_and_persist,
)

__all__ = [
    'get_event_by_slug',
    'normalize_lookup_slug',
    'create_event',
    'list_events',
    'update_event',
    'validate_and_normalize',
    'validate_and_persist',
    'update_booking',
    'count_bookings_for_event',
]
