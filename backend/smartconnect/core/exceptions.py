"""
Booking engine errors

Each error carries the HTTP status it is reported with; the API layer
registers a single handler for the base class.
"""
from fastapi import status


class BookingEngineError(Exception):
    """Base class for all domain errors raised by the engine."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookingEngineError):
    """Malformed or missing input, or an availability batch that overlaps."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(BookingEngineError):
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(BookingEngineError):
    """The actor does not own the record or the requested transition."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(BookingEngineError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(BookingEngineError):
    """The requested slot is no longer free. Callers should re-fetch slots."""

    status_code = status.HTTP_409_CONFLICT


class InvalidStateError(BookingEngineError):
    """Transition out of a terminal status or outside the status graph."""

    status_code = status.HTTP_409_CONFLICT


class StoreError(BookingEngineError):
    """The underlying database operation failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
