"""Header-based authentication provider.

Trusts ``X-User-ID`` / ``X-User-Email`` set by an upstream gateway that
has already authenticated the user. Never expose a service running in
this mode directly to clients.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cookbook.auth.providers.models import AuthResult
from cookbook.observability.logging import get_logger


if TYPE_CHECKING:
    from starlette.requests import Request

logger = get_logger(__name__)


class HeaderAuthProvider:
    """Reads the acting identity from trusted request headers.

    A request without the user ID header is an anonymous session.
    """

    def __init__(
        self,
        user_id_header: str = "X-User-ID",
        email_header: str = "X-User-Email",
    ) -> None:
        self.user_id_header = user_id_header
        self.email_header = email_header
        self._initialized = False

    @property
    def provider_name(self) -> str:
        """Return provider name for logging."""
        return "header"

    async def authenticate(
        self,
        _token: str | None,
        request: Request | None = None,
    ) -> AuthResult | None:
        """Extract the user from request headers.

        The token is ignored; this provider only looks at headers.
        """
        if request is None:
            return None

        user_id = request.headers.get(self.user_id_header, "").strip()
        if not user_id:
            return None

        email = request.headers.get(self.email_header, "").strip() or None
        logger.debug("Authenticated via headers", user_id=user_id)

        return AuthResult(
            user_id=user_id,
            email=email,
            token_type="header",  # noqa: S106 - not a password
            raw_claims={"source": "headers"},
        )

    async def initialize(self) -> None:
        """Initialize the provider."""
        logger.info(
            "HeaderAuthProvider initialized",
            user_id_header=self.user_id_header,
            email_header=self.email_header,
        )
        logger.warning(
            "HeaderAuthProvider is enabled - ensure this is only used in "
            "development/testing or behind a trusted gateway"
        )
        self._initialized = True

    async def shutdown(self) -> None:
        """Shutdown the provider. No cleanup needed."""
        logger.debug("HeaderAuthProvider shutdown")
        self._initialized = False
