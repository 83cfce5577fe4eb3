"""
Acronym API: Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for each error outcome of a request.
Why:   The service layer decides WHICH outcome happened; the global handlers
       in main.py decide how it looks on the wire. Every exception carries
       what the response envelope needs (status, message, data).
Who:   Raised by AcronymService; caught by handlers registered in main.py.

Exception Hierarchy:
    AcronymAPIError (base)       → 500
    ├── ValidationError          → 400 Bad Request (never touches storage)
    ├── NotFoundError            → 404 Not Found
    ├── ConflictError            → 409 Conflict (duplicate acronym/definition)
    └── DatabaseError            → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class AcronymAPIError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        status_code: HTTP status returned to the client
        message:     Human-readable text placed in the envelope
        data:        Echo of the request input placed in the envelope
        context:     Extra debug info (logged, NOT returned to the client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        data: Any = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.data = data
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(AcronymAPIError):
    """
    Raised when client input is missing, malformed or contradictory.

    When:  Bad pagination parameters, missing body fields, or an update
           that names both fields at once.
    HTTP:  400 Bad Request
    """

    status_code = 400


class NotFoundError(AcronymAPIError):
    """Raised when the update/delete target does not exist."""

    status_code = 404


class ConflictError(AcronymAPIError):
    """
    Raised when an add would duplicate an existing acronym/definition pair.

    Definitions are compared case-insensitively; the same acronym with a
    different definition is NOT a conflict.
    """

    status_code = 409


class DatabaseError(AcronymAPIError):
    """
    Raised when MongoDB fails or reports an unexpected result.

    Two flavors share this class:
        - the driver raised (connection refused, query error); the message
          includes the driver's error text
        - the driver answered, but with counts we did not expect
          (unacknowledged insert, zero modified, zero deleted)
    No retry is attempted; the message tells the caller to try again.
    """

    status_code = 500
