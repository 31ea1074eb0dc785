"""Event lookup by slug."""

import logging
from typing import Any

from ..db import Database, DatabaseError
from ..errors import DependencyFailureError, EventNotFoundError, InvalidFormatError, MissingParameterError
from ..models.event import Event
from ..utils.normalization import is_valid_slug, normalize_slug_input

logger = logging.getLogger(__name__)


def normalize_lookup_slug(raw_slug: Any) -> str:
    """
    Turn a caller-supplied slug into the form stored on events.

    Raises:
        MissingParameterError: If the slug is empty or whitespace
        InvalidFormatError: If the normalized slug is not lowercase alphanumeric with hyphens
    """
    if not isinstance(raw_slug, str) or not raw_slug.strip():
        raise MissingParameterError('slug', "Slug parameter is required")

    slug = normalize_slug_input(raw_slug)
    if not is_valid_slug(slug):
        raise InvalidFormatError(
            "Invalid slug format. Slug must be lowercase alphanumeric with hyphens only",
            field='slug',
        )
    return slug


def get_event_by_slug(database: Database, raw_slug: Any) -> Event:
    """
    Fetch a single event by its unique slug.

    The slug is validated before the store is touched.

    Raises:
        MissingParameterError: If the slug is empty
        InvalidFormatError: If the slug has the wrong shape
        EventNotFoundError: If no event has that slug
        DependencyFailureError: If the store is unavailable
    """
    slug = normalize_lookup_slug(raw_slug)

    try:
        with database.session() as session:
            event = session.query(Event).filter(Event.slug == slug).one_or_none()
    except DatabaseError as e:
        logger.error(f"Lookup of event '{slug}' failed: {e}")
        raise DependencyFailureError("Failed to load event") from e

    if event is None:
        raise EventNotFoundError(slug)
    return event
