"""Domain error codes for the event and booking records.

Every error carries a code and a user-safe message. The API layer maps
codes to HTTP statuses through ``ERROR_STATUS`` and ``ERROR_LABELS``.
"""

from enum import Enum
from typing import Any, Optional


class ErrorCode(Enum):
    """Domain error codes."""

    MISSING_PARAMETER = "MISSING_PARAMETER"
    INVALID_FORMAT = "INVALID_FORMAT"
    INVALID_DATE = "INVALID_DATE"
    INVALID_TIME = "INVALID_TIME"
    INVALID_ENUM = "INVALID_ENUM"
    EMPTY_COLLECTION = "EMPTY_COLLECTION"
    INVALID_EMAIL = "INVALID_EMAIL"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    DANGLING_REFERENCE = "DANGLING_REFERENCE"
    DUPLICATE_KEY = "DUPLICATE_KEY"
    DEPENDENCY_FAILURE = "DEPENDENCY_FAILURE"


# HTTP status for each code
ERROR_STATUS = {
    ErrorCode.MISSING_PARAMETER: 400,
    ErrorCode.INVALID_FORMAT: 400,
    ErrorCode.INVALID_DATE: 400,
    ErrorCode.INVALID_TIME: 400,
    ErrorCode.INVALID_ENUM: 400,
    ErrorCode.EMPTY_COLLECTION: 400,
    ErrorCode.INVALID_EMAIL: 400,
    ErrorCode.EVENT_NOT_FOUND: 404,
    ErrorCode.BOOKING_NOT_FOUND: 404,
    ErrorCode.DANGLING_REFERENCE: 422,
    ErrorCode.DUPLICATE_KEY: 422,
    ErrorCode.DEPENDENCY_FAILURE: 500,
}

ERROR_LABELS = {
    400: "Validation error",
    404: "Not found",
    422: "Conflict",
    500: "Internal server error",
}


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode = ErrorCode.DEPENDENCY_FAILURE

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field

    @property
    def status_code(self) -> int:
        return ERROR_STATUS[self.code]

    @property
    def label(self) -> str:
        return ERROR_LABELS[self.status_code]

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Client input that cannot be accepted as-is."""


class MissingParameterError(ValidationError):
    """Raised when a required value is absent or blank."""

    code = ErrorCode.MISSING_PARAMETER

    def __init__(self, name: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"{name} is required", field=name)


class InvalidFormatError(ValidationError):
    """Raised when a value has the wrong shape or type."""

    code = ErrorCode.INVALID_FORMAT


class InvalidDateError(ValidationError):
    code = ErrorCode.INVALID_DATE

    def __init__(self, value: Any) -> None:
        super().__init__(
            f"Invalid date '{value}'. Expected ISO format (YYYY-MM-DD)",
            field="date",
        )


class InvalidTimeError(ValidationError):
    code = ErrorCode.INVALID_TIME

    def __init__(self, message: str) -> None:
        super().__init__(message, field="time")


class InvalidEnumError(ValidationError):
    code = ErrorCode.INVALID_ENUM

    def __init__(self, name: str, allowed: tuple) -> None:
        super().__init__(
            f"{name} must be one of: {', '.join(allowed)}",
            field=name,
        )


class EmptyCollectionError(ValidationError):
    code = ErrorCode.EMPTY_COLLECTION

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} must contain at least one item", field=name)


class InvalidEmailError(ValidationError):
    code = ErrorCode.INVALID_EMAIL

    def __init__(self) -> None:
        super().__init__("Please provide a valid email address", field="email")


class EventNotFoundError(DomainError):
    """Raised when no event matches a slug or identifier."""

    code = ErrorCode.EVENT_NOT_FOUND

    def __init__(self, key: Any) -> None:
        super().__init__(f"Event with slug '{key}' does not exist")
        self.key = key


class BookingNotFoundError(DomainError):
    code = ErrorCode.BOOKING_NOT_FOUND

    def __init__(self, booking_id: Any) -> None:
        super().__init__(f"Booking with ID {booking_id} does not exist")
        self.booking_id = booking_id


class DanglingReferenceError(DomainError):
    """Raised when a booking points at an event that does not exist."""

    code = ErrorCode.DANGLING_REFERENCE

    def __init__(self, event_id: Any) -> None:
        super().__init__(f"Event with ID {event_id} does not exist", field="eventId")
        self.event_id = event_id


class DuplicateKeyError(DomainError):
    """Raised when an insert collides with a unique index."""

    code = ErrorCode.DUPLICATE_KEY

    def __init__(self, name: str, value: Any) -> None:
        super().__init__(f"An event with {name} '{value}' already exists", field=name)
        self.value = value


class DependencyFailureError(DomainError):
    """Raised when the document store cannot serve a request."""

    code = ErrorCode.DEPENDENCY_FAILURE
