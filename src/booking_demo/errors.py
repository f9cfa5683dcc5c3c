"""
Exception types for booking API calls.

Every failure of a client operation is raised as a BookingApiError. The
error carries a classified kind so callers can tell a network outage from a
rejected request, while the demo transcript only ever shows the message.

Per project patterns:
- Inherit from Exception for base exception type
- Store context data in attributes for error handling
- Include descriptive message with relevant details
"""

from enum import Enum


class ErrorKind(Enum):
    """Classification of a failed booking API call."""

    NETWORK = "network"  # Transport failure or timeout, no response
    VALIDATION = "validation"  # 400 Bad Request
    NOT_FOUND = "not_found"  # 404
    CONFLICT = "conflict"  # 409, e.g. overlapping booking
    INVALID_RESPONSE = "invalid_response"  # Body did not match the model
    SERVER = "server"  # 5xx
    UNKNOWN = "unknown"

    @classmethod
    def from_status(cls, status_code: int) -> "ErrorKind":
        """
        Map an HTTP status code to an error kind.

        Args:
            status_code: HTTP status of a failed response.

        Returns:
            Matching ErrorKind, UNKNOWN for unmapped codes.
        """
        if status_code == 400:
            return cls.VALIDATION
        if status_code == 404:
            return cls.NOT_FOUND
        if status_code == 409:
            return cls.CONFLICT
        if 500 <= status_code < 600:
            return cls.SERVER
        return cls.UNKNOWN


class BookingApiError(Exception):
    """
    Raised when a booking API operation fails.

    Attributes:
        message: Human-readable description, shown in the demo transcript
        kind: Classified failure kind
        status_code: HTTP status, None for network failures
        error_code: Machine-readable code from the server error body, if any
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.UNKNOWN,
        status_code: int | None = None,
        error_code: str | None = None,
    ) -> None:
        self.message = message
        self.kind = kind
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(message)
