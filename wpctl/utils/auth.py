"""Authentication utilities for the WordPress REST API.

WordPress accepts either HTTP Basic credentials made of a user name and an
application password, or a bearer token issued by a JWT authentication
plugin. Tokens are issued by the server; this module only reads their
expiry so an expired token fails before a request is sent.
"""

import time
from typing import Any, Dict, Optional

import jwt
from requests.auth import AuthBase, HTTPBasicAuth

from ..exceptions import AuthenticationError, TokenExpiredError


class JWTAuth(AuthBase):
    """Bearer token authentication for ``requests``."""

    def __init__(self, token: str, leeway: int = 0) -> None:
        """Initialize JWT authentication.

        Args:
            token: Token as issued by the site's token endpoint
            leeway: Seconds of clock skew tolerated on the expiry check

        Raises:
            AuthenticationError: If the token is empty
        """
        if not token:
            raise AuthenticationError("Bearer token cannot be empty")

        self.token = token
        self.leeway = leeway
        self._claims: Optional[Dict[str, Any]] = None

    @property
    def claims(self) -> Dict[str, Any]:
        """Unverified claims of the token; empty if it is not a JWT.

        The signing secret lives on the server, so the signature is not
        checked here.
        """
        if self._claims is None:
            try:
                self._claims = jwt.decode(
                    self.token,
                    options={"verify_signature": False, "verify_exp": False},
                )
            except jwt.InvalidTokenError:
                self._claims = {}
        return self._claims

    @property
    def expires_at(self) -> Optional[float]:
        exp = self.claims.get("exp")
        return float(exp) if exp is not None else None

    def is_expired(self, now: Optional[float] = None) -> bool:
        """Whether the token's ``exp`` claim lies in the past."""
        expires_at = self.expires_at
        if expires_at is None:
            return False
        now = time.time() if now is None else now
        return expires_at + self.leeway < now

    def __call__(self, request):
        if self.is_expired():
            raise TokenExpiredError(
                "Bearer token has expired, request a new one",
                details={"expires_at": self.expires_at},
            )
        request.headers["Authorization"] = f"Bearer {self.token}"
        return request


class AuthManager:
    """Chooses the authentication scheme for a client."""

    def __init__(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        token: Optional[str] = None,
    ) -> None:
        """Initialize authentication manager.

        Args:
            username: WordPress user name
            password: Application password for ``username``
            token: Bearer token; takes precedence over basic credentials

        Raises:
            AuthenticationError: If only half of the basic credentials is given
        """
        if bool(username) != bool(password) and not token:
            raise AuthenticationError("Both username and password are required for basic authentication")

        self.username = username
        self.password = password
        self.token = token

    @property
    def scheme(self) -> str:
        if self.token:
            return "bearer"
        if self.username:
            return "basic"
        return "anonymous"

    def get_auth(self) -> Optional[AuthBase]:
        """Return a ``requests`` auth object, or None for anonymous access."""
        if self.token:
            return JWTAuth(self.token)
        if self.username and self.password:
            return HTTPBasicAuth(self.username, self.password)
        return None

    def get_headers(self) -> Dict[str, str]:
        """Headers sent with every request."""
        return {
            "Accept": "application/json",
            "User-Agent": "wpctl",
        }
