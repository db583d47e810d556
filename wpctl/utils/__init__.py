"""Utility modules for wpctl.

This package contains authentication, client construction and error
formatting helpers.
"""

from .auth import JWTAuth, AuthManager

__all__ = [
    "JWTAuth",
    "AuthManager",
]
