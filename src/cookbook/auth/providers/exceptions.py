"""Authentication provider exceptions.

These are caught by the dependency layer and converted to HTTP 401.
"""

from __future__ import annotations


class AuthProviderError(Exception):
    """Base exception for auth provider errors."""


class AuthenticationError(AuthProviderError):
    """Raised when credentials were presented but could not be accepted."""


class TokenExpiredError(AuthenticationError):
    """Raised when a token has expired."""


class TokenInvalidError(AuthenticationError):
    """Raised when a token is malformed or signature verification fails."""


class ConfigurationError(AuthProviderError):
    """Raised when the auth provider is misconfigured."""
