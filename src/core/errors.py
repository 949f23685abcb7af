"""
Custom exceptions and error handling for the booking sync webhook.

Defines application-specific exceptions with error codes so that the
dispatcher can pick the HTTP status for each outcome and the caller only
ever sees a generic, user-facing message.

Usage:
    from core.errors import RemoteWriteError, ErrorCode

    raise RemoteWriteError("Insert rejected: 409", code=ErrorCode.WRITE_FAILED)
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for client-facing error messages."""

    # Authentication errors
    AUTH_FAILED = "AUTH_FAILED"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"
    UNSUPPORTED_EVENT = "UNSUPPORTED_EVENT"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"

    # Data API errors
    WRITE_FAILED = "WRITE_FAILED"
    READ_FAILED = "READ_FAILED"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    DATA_API_UNAVAILABLE = "DATA_API_UNAVAILABLE"
    TIMEOUT = "TIMEOUT"

    # System errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


USER_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.AUTH_FAILED: "Unauthorized Access",
    ErrorCode.VALIDATION_ERROR: "The webhook payload is missing required fields.",
    ErrorCode.INVALID_REQUEST: "The webhook body is not valid JSON.",
    ErrorCode.UNSUPPORTED_EVENT: "Unsupported trigger event.",
    ErrorCode.METHOD_NOT_ALLOWED: "Only POST allowed",
    ErrorCode.WRITE_FAILED: "Booking could not be saved.",
    ErrorCode.READ_FAILED: "Bookings could not be retrieved.",
    ErrorCode.BOOKING_NOT_FOUND: "No booking matches the given event id.",
    ErrorCode.DATA_API_UNAVAILABLE: "The booking store is temporarily unavailable.",
    ErrorCode.TIMEOUT: "The booking store did not respond in time.",
    ErrorCode.CONFIGURATION_ERROR: "Internal error",
    ErrorCode.INTERNAL_ERROR: "Internal error",
}


class BookingSyncError(Exception):
    """Base exception for all booking sync errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INTERNAL_ERROR):
        self.message = message
        self.code = code
        super().__init__(message)

    @property
    def user_message(self) -> str:
        return USER_MESSAGES.get(self.code, USER_MESSAGES[ErrorCode.INTERNAL_ERROR])


class AuthenticationError(BookingSyncError):
    """Neither the bearer token nor the body signature is valid."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.AUTH_FAILED):
        super().__init__(message, code)


class ValidationError(BookingSyncError):
    """Inbound payload is malformed or incomplete."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.VALIDATION_ERROR):
        super().__init__(message, code)


class RemoteWriteError(BookingSyncError):
    """Data API rejected an insert or update."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.WRITE_FAILED):
        super().__init__(message, code)


class RemoteReadError(BookingSyncError):
    """Data API rejected a search."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.READ_FAILED):
        super().__init__(message, code)


class TransportError(BookingSyncError):
    """Network failure talking to the data API."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.DATA_API_UNAVAILABLE):
        super().__init__(message, code)


class ConfigurationError(BookingSyncError):
    """Required configuration is missing."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.CONFIGURATION_ERROR):
        super().__init__(message, code)


class InternalError(BookingSyncError):
    """Unexpected failure while processing a webhook."""

    pass
