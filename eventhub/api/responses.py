"""Response helpers that translate domain errors into the API shape."""

import logging

from fastapi.responses import JSONResponse

from ..errors import DomainError, ERROR_LABELS

logger = logging.getLogger(__name__)


def error_response(error: DomainError, **extra) -> JSONResponse:
    """Build ``{message, error}`` with the status mapped from the error code."""
    content = dict(extra)
    content.update({'message': error.label, 'error': error.message})
    return JSONResponse(status_code=error.status_code, content=content)


def unexpected_error_response(route: str, exc: Exception, **extra) -> JSONResponse:
    """Log an unexpected failure and answer with a generic 500."""
    logger.exception(f"[{route}] {exc}")
    content = dict(extra)
    content.update({
        'message': ERROR_LABELS[500],
        'error': 'An unexpected error occurred',
    })
    return JSONResponse(status_code=500, content=content)
