"""
Error taxonomy shared by the service layer and the HTTP handlers.

Service functions raise these; `register_error_handlers` turns them into
`{"error": message}` JSON bodies with the matching status code. The message
on each exception is safe to show to the caller.
"""
from __future__ import annotations


class FeedboardError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(FeedboardError):
    status_code = 400
    default_message = "Invalid request"


class Unauthorized(FeedboardError):
    status_code = 401
    default_message = "You must be signed in"


class Forbidden(FeedboardError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(FeedboardError):
    status_code = 404
    default_message = "Not found"


class InternalError(FeedboardError):
    status_code = 500
    default_message = "Internal server error"


class DatabaseUnavailable(InternalError):
    status_code = 503
    default_message = "Database unavailable"
