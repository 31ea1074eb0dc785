"""FastAPI dependencies shared by the routers."""

from typing import Optional

from fastapi import Header, HTTPException

from ..config.admin import AdminConfig
from ..db import Database, db


def get_database() -> Database:
    """Return the process-wide connection provider.

    Tests override this through ``app.dependency_overrides``.
    """
    return db


def require_admin(authorization: Optional[str] = Header(None)) -> None:
    """Reject requests whose Authorization header is not the admin key."""
    admin_config = AdminConfig()
    try:
        admin_config.validate()
    except ValueError:
        raise HTTPException(
            status_code=503,
            detail="Admin endpoints are not configured"
        )

    if not admin_config.verify_auth(authorization):
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization"
        )
