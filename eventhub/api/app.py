"""FastAPI application configuration module."""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Internal imports
from ..config.environment import IS_PRODUCTION_ENVIRONMENT  # Environment must be imported first
from ..config.cors import CORS_CONFIG
from ..utils.logging_config import setup_logging
from .. import __version__
from .dependencies import get_database
from .routes import bookings, events, health

# Set up logging
setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    database = app.dependency_overrides.get(get_database, get_database)()
    # Startup
    try:
        database.ensure_tables_exist()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Startup failed: {e}")
        raise
    yield
    # Shutdown
    database.dispose()

def create_application() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Event Hub API",
        description="API for listing events and booking seats",
        version=__version__,
        docs_url=None if IS_PRODUCTION_ENVIRONMENT else '/api/docs',
        redoc_url=None if IS_PRODUCTION_ENVIRONMENT else '/api/redoc',
        lifespan=lifespan
    )

    # Configure CORS
    app.add_middleware(CORSMiddleware, **CORS_CONFIG)

    # Include health check router without prefix
    app.include_router(health.router)

    # Include routers with prefix
    app.include_router(events.router, prefix="/api")
    app.include_router(bookings.router, prefix="/api")

    return app

# Create the application instance
app = create_application()
