"""
Business errors raised by the service layer.

Each error carries the HTTP status it maps to. The API layer never builds
error responses by hand; the exception handlers registered on the
application turn these into ``{"success": false, "message": ...}`` bodies.
"""

from __future__ import annotations

from typing import Any, Optional


class LegalAidError(Exception):
    """Base class for all expected business errors."""

    status_code: int = 400
    default_message: str = "Request could not be processed"

    def __init__(self, message: Optional[str] = None, *, details: Optional[Any] = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationFailed(LegalAidError):
    status_code = 400
    default_message = "Validation failed"


class InvalidTransition(ValidationFailed):
    """A status change that the transition table does not allow."""

    def __init__(self, entity: str, current: str, target: str) -> None:
        super().__init__(f"Invalid {entity} status transition from {current} to {target}")
        self.current = current
        self.target = target


class Unauthorized(LegalAidError):
    status_code = 401
    default_message = "Authentication required"


class Forbidden(LegalAidError):
    status_code = 403
    default_message = "Insufficient permissions"


class NotFound(LegalAidError):
    status_code = 404
    default_message = "Resource not found"


class Conflict(LegalAidError):
    status_code = 409
    default_message = "Resource already exists"


class ExternalServiceError(LegalAidError):
    status_code = 502
    default_message = "External service request failed"
