"""API service initialization."""
