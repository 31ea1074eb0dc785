"""Event record validation, normalization and persistence.

``validate_and_normalize`` is the single entry point that turns caller input
into storable event fields. ``create_event`` and ``update_event`` run it
before anything is written, so a rejected candidate never reaches the store.
"""

import logging
from typing import Any, Callable, Dict, List

from sqlalchemy.exc import IntegrityError

from ..db import Database, DatabaseError
from ..errors import DependencyFailureError, DuplicateKeyError, EventNotFoundError, MissingParameterError
from ..models.event import Event
from ..utils.normalization import (
    derive_slug,
    normalize_date,
    normalize_mode,
    normalize_text,
    normalize_text_list,
    normalize_time,
)
from .event_lookup import normalize_lookup_slug

logger = logging.getLogger(__name__)


def _required(name: str, normalizer: Callable[[Any], Any]) -> Callable[[Any], Any]:
    def run(value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise MissingParameterError(name)
        return normalizer(value)
    return run


# Caller-settable fields in validation order, with their normalizers
EVENT_FIELD_NORMALIZERS: Dict[str, Callable[[Any], Any]] = {
    'title': lambda v: normalize_text('title', v),
    'description': lambda v: normalize_text('description', v),
    'overview': lambda v: normalize_text('overview', v),
    'image': lambda v: normalize_text('image', v, trim=False),
    'venue': lambda v: normalize_text('venue', v),
    'location': lambda v: normalize_text('location', v),
    'date': _required('date', normalize_date),
    'time': _required('time', normalize_time),
    'mode': _required('mode', normalize_mode),
    'audience': lambda v: normalize_text('audience', v),
    'agenda': lambda v: normalize_text_list('agenda', v),
    'organizer': lambda v: normalize_text('organizer', v),
    'tags': lambda v: normalize_text_list('tags', v),
}

EVENT_FIELDS = tuple(EVENT_FIELD_NORMALIZERS)

# Managed by the system; silently dropped from caller input
SYSTEM_FIELDS = ('id', 'slug', 'createdAt', 'updatedAt', 'created_at', 'updated_at')


def validate_and_normalize(candidate: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
    """
    Validate an event candidate and return its canonical fields.

    Args:
        candidate: Raw field values keyed by field name
        partial: Only validate the fields present (used for updates).
                 When False every field is required.

    Returns:
        Dict of normalized fields. Includes ``slug`` whenever ``title`` is present.

    Raises:
        ValidationError: The first field that fails validation
    """
    ignored = [key for key in candidate if key in SYSTEM_FIELDS]
    if ignored:
        logger.debug(f"Ignoring system-managed fields in event candidate: {ignored}")

    normalized: Dict[str, Any] = {}
    for name, normalizer in EVENT_FIELD_NORMALIZERS.items():
        if name not in candidate:
            if partial:
                continue
            raise MissingParameterError(name)
        normalized[name] = normalizer(candidate[name])

    if 'title' in normalized:
        normalized['slug'] = derive_slug(normalized['title'])

    return normalized


def changed_fields(event: Event, changes: Dict[str, Any]) -> Dict[str, Any]:
    """Return the subset of ``changes`` that differs from the stored event."""
    return {
        name: value
        for name, value in changes.items()
        if name in EVENT_FIELDS and getattr(event, name) != value
    }


def _flush_unique(session, slug: str) -> None:
    try:
        session.flush()
    except IntegrityError as e:
        logger.warning(f"Slug collision for '{slug}'")
        raise DuplicateKeyError('slug', slug) from e


def create_event(database: Database, candidate: Dict[str, Any]) -> Event:
    """
    Validate and insert a new event.

    Raises:
        ValidationError: If the candidate is rejected
        DuplicateKeyError: If another event already has the derived slug
        DependencyFailureError: If the store is unavailable
    """
    fields = validate_and_normalize(candidate)

    try:
        with database.session() as session:
            event = Event(**fields)
            session.add(event)
            _flush_unique(session, fields['slug'])
    except DatabaseError as e:
        logger.error(f"Failed to create event '{fields['slug']}': {e}")
        raise DependencyFailureError("Failed to save event") from e

    logger.info(f"Created event {event}")
    return event


def update_event(database: Database, slug: str, changes: Dict[str, Any]) -> Event:
    """
    Apply changes to the event identified by ``slug``.

    Only fields whose value actually changed are re-validated; a changed
    title re-derives the slug.

    Raises:
        EventNotFoundError: If no event has that slug
        ValidationError: If a changed field is rejected
        DuplicateKeyError: If the new title collides with another event's slug
        DependencyFailureError: If the store is unavailable
    """
    slug = normalize_lookup_slug(slug)

    try:
        with database.session() as session:
            event = session.query(Event).filter(Event.slug == slug).one_or_none()
            if event is None:
                raise EventNotFoundError(slug)

            fields = validate_and_normalize(changed_fields(event, changes), partial=True)
            if not fields:
                return event

            for name, value in fields.items():
                setattr(event, name, value)
            _flush_unique(session, event.slug)
    except DatabaseError as e:
        logger.error(f"Failed to update event '{slug}': {e}")
        raise DependencyFailureError("Failed to save event") from e

    logger.info(f"Updated event {event} fields: {sorted(fields)}")
    return event


def list_events(database: Database) -> List[Event]:
    """Return all events ordered by date and time."""
    try:
        with database.session() as session:
            return session.query(Event).order_by(Event.date, Event.time, Event.id).all()
    except DatabaseError as e:
        logger.error(f"Failed to list events: {e}")
        raise DependencyFailureError("Failed to load events") from e
