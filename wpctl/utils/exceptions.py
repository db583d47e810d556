"""Error formatting helpers for wpctl.

This module turns the client's exceptions into messages suitable for
terminal output.
"""

from ..exceptions import (
    WpCtlError,
    APIError,
    NotFoundError,
    PostCreateError,
    TransportError,
    ConfigError,
)


def format_error_for_user(error: Exception, debug: bool = False) -> str:
    """Format an error message for user display.

    Args:
        error: The exception to format
        debug: Whether to include debug information

    Returns:
        Formatted error message
    """
    if isinstance(error, NotFoundError):
        return f"Not found: {error.message}"

    if isinstance(error, PostCreateError):
        message = f"Post rejected: {error.message}"
        if error.status_code:
            message += f"\nStatus code: {error.status_code}"
        if error.response_data and debug:
            message += f"\nResponse: {error.response_data}"
        if error.cause is not None and debug:
            message += f"\nCause: {type(error.cause).__name__}"
        return message

    if isinstance(error, TransportError):
        message = f"Connection error: {error.message}"
        if error.cause is not None and debug:
            message += f"\nCause: {error.cause!r}"
        return message

    if isinstance(error, ConfigError):
        return f"Configuration error: {error.message}"

    # For API errors, show status code and response data if available
    if isinstance(error, APIError):
        message = f"API error: {error.message}"
        if error.status_code:
            message += f"\nStatus code: {error.status_code}"
        if error.error_code:
            message += f"\nError code: {error.error_code}"
        if error.response_data and debug:
            message += f"\nResponse: {error.response_data}"
        return message

    if isinstance(error, WpCtlError):
        message = f"Error: {error.message}"
        if error.details and debug:
            message += f"\nDetails: {error.details}"
        return message

    # Default formatting
    if debug:
        return f"Error: {str(error)}\nType: {type(error).__name__}"
    else:
        return f"Error: {str(error)}"
