"""Field normalization for event and booking records.

Each function takes raw caller input and returns the canonical stored form,
raising a ``ValidationError`` subclass when the input cannot be normalized.
"""

import re
import unicodedata
from datetime import datetime, timezone
from typing import Any, List

from dateutil import parser as dateutil_parser

from ..errors import (
    EmptyCollectionError,
    InvalidDateError,
    InvalidEmailError,
    InvalidEnumError,
    InvalidFormatError,
    InvalidTimeError,
    MissingParameterError,
)

# Slug configuration
NON_SLUG_CHARS = re.compile(r'[^\w\s-]', re.ASCII)
WHITESPACE_RUNS = re.compile(r'\s+')
HYPHEN_RUNS = re.compile(r'-+')
SLUG_PATTERN = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*$')

# Date/time configuration
ISO_DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')
CANONICAL_TIME_PATTERN = re.compile(r'^([01]\d|2[0-3]):([0-5]\d)$')
LOOSE_TIME_PATTERN = re.compile(r'^(\d{1,2}):(\d{1,2})$')

EVENT_MODES = ('online', 'offline', 'hybrid')

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


def _collapse_to_slug(text: str) -> str:
    text = NON_SLUG_CHARS.sub('', text.lower())
    text = WHITESPACE_RUNS.sub('-', text)
    text = HYPHEN_RUNS.sub('-', text)
    return text.strip('-')


def _fold_accents(text: str) -> str:
    decomposed = unicodedata.normalize('NFKD', text)
    return ''.join(ch for ch in decomposed if not unicodedata.combining(ch))


def derive_slug(title: str) -> str:
    """
    Derive the URL slug for an event title.

    Accents are folded to ASCII and underscores act as word separators,
    so the result always matches ``SLUG_PATTERN``.

    Raises:
        InvalidFormatError: If nothing slug-worthy is left of the title
    """
    slug = _collapse_to_slug(_fold_accents(title).replace('_', ' '))
    if not slug:
        raise InvalidFormatError(
            "Title must contain at least one letter or digit",
            field='title',
        )
    return slug


def normalize_slug_input(raw_slug: str) -> str:
    """Normalize a caller-supplied slug; accents fold as in ``derive_slug``, underscores stay."""
    return _collapse_to_slug(_fold_accents(raw_slug.strip()))


def is_valid_slug(slug: str) -> bool:
    """Slugs are lowercase alphanumeric runs joined by single hyphens."""
    return bool(SLUG_PATTERN.match(slug))


def normalize_date(value: Any) -> str:
    """
    Return the date as ``YYYY-MM-DD``.

    Values already in that form are returned unchanged. Anything else is
    parsed and reduced to its UTC calendar date.
    """
    if not isinstance(value, str):
        raise InvalidDateError(value)
    value = value.strip()
    if ISO_DATE_PATTERN.match(value):
        return value
    try:
        # Missing parts default to January 1st of the current year
        parsed = dateutil_parser.parse(value, default=datetime(utcnow().year, 1, 1))
    except (ValueError, OverflowError) as e:
        raise InvalidDateError(value) from e
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.strftime('%Y-%m-%d')


def normalize_time(value: Any) -> str:
    """Return the time as zero-padded 24-hour ``HH:MM``."""
    if not isinstance(value, str):
        raise InvalidTimeError("Invalid time format. Expected HH:MM (24-hour format)")
    value = value.strip()
    if CANONICAL_TIME_PATTERN.match(value):
        return value

    match = LOOSE_TIME_PATTERN.match(value)
    if not match:
        raise InvalidTimeError("Invalid time format. Expected HH:MM (24-hour format)")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeError("Invalid time. Hours must be 0-23 and minutes 0-59")
    return f"{hours:02d}:{minutes:02d}"


def normalize_mode(value: Any) -> str:
    if not isinstance(value, str) or value.strip().lower() not in EVENT_MODES:
        raise InvalidEnumError('mode', EVENT_MODES)
    return value.strip().lower()


def normalize_text(name: str, value: Any, trim: bool = True) -> str:
    """Required text field: must be a non-blank string."""
    if value is None:
        raise MissingParameterError(name)
    if not isinstance(value, str):
        raise InvalidFormatError(f"{name} must be text", field=name)
    if not value.strip():
        raise MissingParameterError(name)
    return value.strip() if trim else value


def normalize_text_list(name: str, value: Any) -> List[str]:
    """Required ordered sequence of text items with at least one entry."""
    if value is None:
        raise MissingParameterError(name)
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise InvalidFormatError(f"{name} must be a list of text items", field=name)
    if not value:
        raise EmptyCollectionError(name)
    if not all(isinstance(item, str) for item in value):
        raise InvalidFormatError(f"{name} must be a list of text items", field=name)
    return list(value)


def normalize_email(value: Any) -> str:
    """Lowercase and trim an email address, then check its shape."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MissingParameterError('email', "Email is required")
    if not isinstance(value, str):
        raise InvalidEmailError()
    email = value.strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise InvalidEmailError()
    return email


def utcnow() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)
