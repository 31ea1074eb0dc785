"""Configuration package initialization."""

from .environment import IS_PRODUCTION_ENVIRONMENT

__all__ = ['IS_PRODUCTION_ENVIRONMENT']
