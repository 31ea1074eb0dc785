"""Event model definition."""

from typing import Any, Dict

from sqlalchemy import Column, Integer, String, Text, JSON

from .base import Base, TimestampMixin, isoformat


class Event(TimestampMixin, Base):
    """
    Event model representing a listed event.

    Fields:
        id: Unique identifier (auto-generated)
        title: Event title
        slug: URL-safe identifier derived from the title (unique)
        description: Full event description
        overview: Short summary shown on cards
        image: Image URL or path
        venue: Venue name
        location: City or address
        date: Event date as YYYY-MM-DD
        time: Start time as HH:MM (24-hour)
        mode: 'online', 'offline' or 'hybrid'
        audience: Who the event is for
        agenda: Ordered agenda items
        organizer: Who runs the event
        tags: Ordered topic tags
        created_at: When the event was first stored
        updated_at: When the event was last saved
    """
    __tablename__ = 'events'

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True, index=True)
    description = Column(Text, nullable=False)
    overview = Column(Text, nullable=False)
    image = Column(String, nullable=False)
    venue = Column(String, nullable=False)
    location = Column(String, nullable=False)
    date = Column(String(10), nullable=False)
    time = Column(String(5), nullable=False)
    mode = Column(String(16), nullable=False)
    audience = Column(String, nullable=False)
    agenda = Column(JSON, nullable=False)
    organizer = Column(String, nullable=False)
    tags = Column(JSON, nullable=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the API representation."""
        return {
            'id': self.id,
            'title': self.title,
            'slug': self.slug,
            'description': self.description,
            'overview': self.overview,
            'image': self.image,
            'venue': self.venue,
            'location': self.location,
            'date': self.date,
            'time': self.time,
            'mode': self.mode,
            'audience': self.audience,
            'agenda': list(self.agenda or []),
            'organizer': self.organizer,
            'tags': list(self.tags or []),
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }

    def __str__(self) -> str:
        """String representation."""
        return f"Event(id={self.id}, slug={self.slug}, date={self.date})"
