"""Booking model definition."""

from typing import Any, Dict

from sqlalchemy import Column, ForeignKey, Integer, String

from .base import Base, TimestampMixin, isoformat


class Booking(TimestampMixin, Base):
    """
    Booking of a seat at an event.

    Fields:
        id: Unique identifier (auto-generated)
        event_id: The booked event; must reference an existing event
        email: Attendee email, stored lowercase and trimmed
    """
    __tablename__ = 'bookings'

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey('events.id'), nullable=False, index=True)
    email = Column(String, nullable=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the API representation."""
        return {
            'id': self.id,
            'eventId': self.event_id,
            'email': self.email,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }

    def __str__(self) -> str:
        return f"Booking(id={self.id}, event_id={self.event_id})"
