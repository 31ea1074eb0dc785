"""Declarative base shared by all persisted models."""

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base

from ..utils.normalization import utcnow

Base = declarative_base()


class TimestampMixin:
    """System-managed created/updated timestamps (UTC)."""

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)


def isoformat(value):
    """Serialize a timestamp for API responses."""
    return value.isoformat() if value is not None else None
