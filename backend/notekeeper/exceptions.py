"""
Notekeeper Backend: Custom Exception Hierarchy
================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and client-safe messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error responses with the matching HTTP status code.
Who:   Raised by services and the HTTP client; caught by global handlers
       and by the client controller.

Exception Hierarchy:
    NotekeeperError (base)
    ├── ValidationError   → 400 Bad Request (client can fix the input)
    ├── NotFoundError     → 404 Not Found
    ├── StoreError        → 500 Internal Server Error
    └── APIRequestError   → raised client-side for any non-2xx response

    The three server-side classes are never conflated: a missing field is
    never reported as 404, an absent row is never reported as 500.
"""

from typing import Any, Dict, Optional


class NotekeeperError(Exception):
    """
    Base exception for all Notekeeper application errors.

    Attributes:
        message:  Client-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotekeeperError):
    """
    Raised when client input fails validation.

    When:    Missing or empty `title`/`content` in a create or update body.
    HTTP:    400 Bad Request. Never retried.

    The fields that failed are kept in `fields` and in the context so the
    server log says exactly what was wrong, while the response body keeps
    the single message the client contract promises.
    """

    def __init__(
        self,
        message: str = "Title and content are required",
        fields: Optional[list] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if fields:
            ctx["fields"] = list(fields)
        super().__init__(message=message, context=ctx)
        self.fields = list(fields or [])


class NotFoundError(NotekeeperError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT/DELETE /api/notes/{id} with an id that has no row.
    HTTP:    404 Not Found. Never retried.

    The store returns None for missing rows (absence is a normal outcome
    there); the service converts None into this exception.
    """

    def __init__(
        self,
        resource: str = "note",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StoreError(NotekeeperError):
    """
    Raised when a storage operation fails unexpectedly.

    When:    Connection lost, constraint violation, driver error.
    HTTP:    500 Internal Server Error. Never retried automatically.

    The message is always the generic "Failed to <verb> note" form. The
    original exception is chained and logged server-side only.
    """

    def __init__(
        self,
        message: str = "Failed to access notes",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class APIRequestError(NotekeeperError):
    """
    Raised by NotesClient when the API answers with a non-success status.

    Attributes:
        status_code: HTTP status returned by the server
        message:     The server's `error` field, or the reason phrase
    """

    def __init__(
        self,
        status_code: int,
        message: str = "Request failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["status_code"] = status_code
        super().__init__(message=message, context=ctx)
        self.status_code = status_code
