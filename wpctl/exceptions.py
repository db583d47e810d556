"""Exception classes for the WordPress REST client.

This module defines custom exception classes used throughout the application
for proper error handling and user feedback. Every exception carries an
``ErrorKind`` tag so callers can branch on the kind of failure without
matching on class identity.
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorKind(str, Enum):
    """Classification of every failure the client can raise."""

    CONFIG = "config"
    AUTHENTICATION = "authentication"
    TRANSPORT = "transport"
    API = "api"
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    SERVER = "server"
    DECODE = "decode"
    CREATE_FAILURE = "create_failure"
    VALIDATION = "validation"


class WpCtlError(Exception):
    """Base exception class for all wpctl errors."""

    kind: ErrorKind = ErrorKind.API

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(WpCtlError):
    """Exception raised for configuration-related errors."""

    kind = ErrorKind.CONFIG


class AuthenticationError(WpCtlError):
    """Exception raised for authentication-related errors."""

    kind = ErrorKind.AUTHENTICATION


class TokenExpiredError(AuthenticationError):
    """Exception raised when a bearer token has expired."""
    pass


class ValidationError(WpCtlError):
    """Exception raised for data validation errors."""

    kind = ErrorKind.VALIDATION


class TransportError(WpCtlError):
    """Exception raised when the HTTP round trip itself fails.

    Covers DNS failures, refused connections and timeouts. Never raised for
    an HTTP status code; those become ``APIError`` subclasses.
    """

    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message, details={"cause": repr(cause)} if cause else None)
        self.cause = cause


class APIError(WpCtlError):
    """Base exception for API-related errors."""

    kind = ErrorKind.API

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Any] = None
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code
            response_data: Raw response data from API
        """
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data or {}

    @property
    def error_code(self) -> Optional[str]:
        """WordPress error code (e.g. ``rest_post_invalid_id``), if any."""
        if isinstance(self.response_data, dict):
            return self.response_data.get("code")
        return None


class BadRequestError(APIError):
    """Exception raised for 400 Bad Request and 422 validation errors."""

    kind = ErrorKind.BAD_REQUEST


class UnauthorizedError(APIError):
    """Exception raised for 401 Unauthorized errors."""

    kind = ErrorKind.UNAUTHORIZED


class ForbiddenError(APIError):
    """Exception raised for 403 Forbidden errors."""

    kind = ErrorKind.FORBIDDEN


class NotFoundError(APIError):
    """Exception raised for 404 Not Found errors."""

    kind = ErrorKind.NOT_FOUND


class PostNotFoundError(NotFoundError):
    """Exception raised when a post id does not resolve."""
    pass


class PostMetaNotFoundError(NotFoundError):
    """Exception raised when a post meta id does not resolve."""
    pass


class TermNotFoundError(NotFoundError):
    """Exception raised when a term id does not resolve in its taxonomy."""
    pass


class TaxonomyNotFoundError(NotFoundError):
    """Exception raised when a taxonomy slug does not resolve."""
    pass


class PageNotFoundError(NotFoundError):
    """Exception raised when an adjacent page link is absent or stale."""
    pass


class ServerError(APIError):
    """Exception raised for 5xx server errors."""

    kind = ErrorKind.SERVER


class ResponseDecodeError(APIError):
    """Exception raised when a successful response cannot be decoded."""

    kind = ErrorKind.DECODE


class PostCreateError(APIError):
    """Exception raised when the server refuses to create or update a post.

    Wraps the classified cause and keeps its status code and body.
    """

    kind = ErrorKind.CREATE_FAILURE

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        status_code: Optional[int] = None,
        response_data: Optional[Any] = None,
    ) -> None:
        super().__init__(message, status_code=status_code, response_data=response_data)
        self.cause = cause
