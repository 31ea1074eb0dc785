"""Pytest configuration and shared fixtures."""

import os

os.environ.setdefault('ENVIRONMENT', 'development')

import pytest
from fastapi.testclient import TestClient

from eventhub.api.app import create_application
from eventhub.api.dependencies import get_database
from eventhub.db import Database, DatabaseConfig
from eventhub.models import Event

ADMIN_KEY = 'test-admin-key'


@pytest.fixture
def database():
    """In-memory SQLite database with the schema created."""
    database = Database(DatabaseConfig(database_url='sqlite://'))
    database.init_db()
    yield database
    database.dispose()


@pytest.fixture
def unreachable_database(tmp_path):
    """Database whose file lives in a directory that does not exist."""
    url = f"sqlite:///{tmp_path / 'missing' / 'events.db'}"
    return Database(DatabaseConfig(database_url=url))


@pytest.fixture
def event_payload():
    """A complete, valid event candidate."""
    return {
        'title': 'Tech Meetup 2024',
        'description': 'An evening of lightning talks about developer tooling.',
        'overview': 'Lightning talks and networking.',
        'image': '/images/event1.png',
        'venue': 'Community Hall',
        'location': 'Oslo, Norway',
        'date': '2024-11-05',
        'time': '18:30',
        'mode': 'offline',
        'audience': 'Developers',
        'agenda': ['Doors open', 'Talks', 'Networking'],
        'organizer': 'Oslo Devs',
        'tags': ['tooling', 'meetup'],
    }


@pytest.fixture
def stored_event(database, event_payload) -> Event:
    from eventhub.services import create_event
    return create_event(database, event_payload)


@pytest.fixture
def client(database, monkeypatch) -> TestClient:
    monkeypatch.setenv('ADMIN_API_KEY', ADMIN_KEY)
    app = create_application()
    app.dependency_overrides[get_database] = lambda: database
    return TestClient(app)


@pytest.fixture
def admin_headers():
    return {'Authorization': ADMIN_KEY}
