"""
Error taxonomy shared by the REST clients and the annotation editor.
"""

from typing import Optional


class SbxaiError(Exception):
    """Base class for every error raised by this package."""


class NetworkError(SbxaiError):
    """The request could not complete (DNS, connection reset, ...)."""


class ApiError(SbxaiError):
    """The server answered with a non-success status code."""

    def __init__(self, message: str, status_code: int, detail: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class AuthError(ApiError):
    """The bearer token was missing or rejected (HTTP 401)."""

    def __init__(self, message: str = "Not authenticated", detail: Optional[str] = None):
        super().__init__(message, 401, detail)


class ValidationError(SbxaiError):
    """Malformed or undersized annotation geometry."""


class Cancelled(SbxaiError):
    """The owner of the call went away before the call finished."""


class MalformedResponse(SbxaiError):
    """The server answered successfully but its body could not be parsed."""
