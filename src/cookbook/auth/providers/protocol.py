"""Authentication provider protocol definition."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from starlette.requests import Request

    from cookbook.auth.providers.models import AuthResult


@runtime_checkable
class AuthProvider(Protocol):
    """Protocol for authentication providers.

    Providers return ``None`` when the request carries no credentials at
    all (an anonymous session) and raise ``AuthenticationError`` when
    credentials are present but invalid.
    """

    @property
    def provider_name(self) -> str:
        """Return a short provider name for logging."""
        ...

    async def authenticate(
        self,
        token: str | None,
        request: Request | None = None,
    ) -> AuthResult | None:
        """Resolve the acting identity of a request.

        Args:
            token: Bearer token from the Authorization header, if any.
            request: Request object, used by providers reading headers.

        Returns:
            AuthResult for an identified user, None for an anonymous one.

        Raises:
            TokenExpiredError: If the token has expired.
            TokenInvalidError: If the token is malformed or signature fails.
        """
        ...

    async def initialize(self) -> None:
        """Validate configuration during application startup.

        Raises:
            ConfigurationError: If the provider is misconfigured.
        """
        ...

    async def shutdown(self) -> None:
        """Release provider resources."""
        ...
