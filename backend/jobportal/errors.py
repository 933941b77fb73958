"""
Domain errors raised by the service layer.

Each error carries the HTTP status it maps to; the exception handlers in
main.py turn them into a single JSON response at the request boundary.
"""
from typing import Optional


class JobPortalError(Exception):
    """Base class for all expected, user-visible failures."""
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(JobPortalError):
    """Malformed or missing input (bad salary range, unknown status...)."""
    status_code = 400


class Unauthorized(JobPortalError):
    """No credential, or a credential that doesn't resolve to a user."""
    status_code = 401


class Forbidden(JobPortalError):
    """Authenticated, but wrong role or not the owner."""
    status_code = 403


class NotFound(JobPortalError):
    status_code = 404


class Conflict(JobPortalError):
    """Duplicate application/bookmark, or applying to a closed job."""
    status_code = 409


class UpstreamFailure(JobPortalError):
    """The AI provider failed; status_code is chosen from the provider error."""
    status_code = 500
