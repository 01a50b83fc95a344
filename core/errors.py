from __future__ import annotations


class PortalError(Exception):
    """Base for failures that map onto an HTTP envelope."""

    status_code = 500
    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(PortalError):
    status_code = 404
    default_message = "Resource not found"


class Conflict(PortalError):
    status_code = 409
    default_message = "Resource already exists"


class ValidationError(PortalError):
    status_code = 422
    default_message = "Invalid input"


class Unauthorized(PortalError):
    status_code = 401
    default_message = "Unauthorized"


class Internal(PortalError):
    status_code = 500
