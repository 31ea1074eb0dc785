"""Tests for slug lookup."""

import pytest

from eventhub.errors import (
    DependencyFailureError,
    EventNotFoundError,
    InvalidFormatError,
    MissingParameterError,
)
from eventhub.services import create_event, get_event_by_slug, normalize_lookup_slug


class TestNormalizeLookupSlug:

    @pytest.mark.parametrize("raw,expected", [
        ("tech-meetup-2024", "tech-meetup-2024"),
        ("  Tech-Meetup-2024 ", "tech-meetup-2024"),
        ("Tech Meetup!", "tech-meetup"),
    ])
    def test_normalization(self, raw, expected):
        assert normalize_lookup_slug(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_empty_slug_is_missing(self, raw):
        with pytest.raises(MissingParameterError):
            normalize_lookup_slug(raw)

    @pytest.mark.parametrize("raw", ["UPPER_CASE", "!!!", "a_b-c"])
    def test_malformed_slug_is_invalid(self, raw):
        with pytest.raises(InvalidFormatError):
            normalize_lookup_slug(raw)


class TestGetEventBySlug:

    def test_existing_slug_returns_event(self, database, stored_event):
        event = get_event_by_slug(database, 'tech-meetup-2024')
        assert event.id == stored_event.id
        assert event.title == 'Tech Meetup 2024'

    def test_raw_title_input_finds_event(self, database, event_payload):
        create_event(database, dict(event_payload, title='Tech Meetup'))
        assert get_event_by_slug(database, 'Tech Meetup!').slug == 'tech-meetup'

    def test_unknown_slug_is_not_found(self, database, stored_event):
        with pytest.raises(EventNotFoundError) as exc_info:
            get_event_by_slug(database, 'tech-meetup-1999')
        assert exc_info.value.key == 'tech-meetup-1999'

    def test_invalid_slug_never_touches_store(self, unreachable_database):
        with pytest.raises(InvalidFormatError):
            get_event_by_slug(unreachable_database, 'UPPER_CASE')
        assert unreachable_database.engine is None

    def test_store_failure_is_not_not_found(self, unreachable_database):
        with pytest.raises(DependencyFailureError):
            get_event_by_slug(unreachable_database, 'tech-meetup-2024')
