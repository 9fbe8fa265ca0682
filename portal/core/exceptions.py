"""Error taxonomy shared by services and routes; rendered by handlers in main.py."""

from fastapi import status


class PortalError(Exception):
    """Base exception for the portal API. Unexpected subclasses surface as 500."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(PortalError):
    """Raised when input is malformed; carries per-field messages."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"

    def __init__(self, message: str | None = None, errors: dict[str, str] | None = None):
        super().__init__(message)
        self.errors = errors or {}


class Unauthenticated(PortalError):
    """
    Raised when a request carries no usable credential.

    reason is for server logs only (missing, invalid, expired, user_invalid,
    bad_credentials); clients always see the same message.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"

    def __init__(self, reason: str, message: str | None = None):
        super().__init__(message)
        self.reason = reason


class Forbidden(PortalError):
    """Raised when the caller's role or ownership does not permit the action."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Insufficient permissions"


class NotFound(PortalError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class Conflict(PortalError):
    """Raised when a unique field (email, username, feature name) is taken."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"
