"""Authentication provider factory."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cookbook.auth.providers.exceptions import ConfigurationError
from cookbook.auth.providers.header import HeaderAuthProvider
from cookbook.auth.providers.local_jwt import LocalJWTAuthProvider
from cookbook.core.config import AuthMode, get_settings
from cookbook.observability.logging import get_logger


if TYPE_CHECKING:
    from starlette.requests import Request

    from cookbook.auth.providers.models import AuthResult
    from cookbook.auth.providers.protocol import AuthProvider
    from cookbook.core.config import Settings

logger = get_logger(__name__)

# Fixed development secret - safe for local dev, blocked in production
_DEV_JWT_SECRET = "insecure-dev-key-do-not-use-in-production"  # noqa: S105


def _get_jwt_secret(settings: Settings) -> str:
    """Get JWT secret, refusing to run without one in production."""
    if settings.JWT_SECRET_KEY:
        return settings.JWT_SECRET_KEY

    if settings.is_production:
        msg = "JWT_SECRET_KEY must be set in production for local_jwt auth mode"
        raise ConfigurationError(msg)

    logger.warning("Using insecure development JWT secret - do not use in production")
    return _DEV_JWT_SECRET


# Provider state container (avoids global statement for mutation)
_state: dict[str, AuthProvider | None] = {"provider": None}


class DisabledAuthProvider:
    """Auth provider that treats every request as anonymous."""

    @property
    def provider_name(self) -> str:
        return "disabled"

    async def authenticate(
        self,
        _token: str | None,
        _request: Request | None = None,
    ) -> AuthResult | None:
        return None

    async def initialize(self) -> None:
        logger.warning(
            "DisabledAuthProvider initialized - every session is anonymous "
            "and nothing is written to the data store"
        )

    async def shutdown(self) -> None:
        pass


def create_auth_provider(settings: Settings | None = None) -> AuthProvider:
    """Create an authentication provider based on ``auth.mode``.

    Raises:
        ConfigurationError: If required settings are missing for the auth mode.
    """
    if settings is None:
        settings = get_settings()

    mode = settings.auth_mode_enum
    logger.info("Creating auth provider", mode=mode.value)

    if mode == AuthMode.DISABLED:
        return DisabledAuthProvider()

    if mode == AuthMode.HEADER:
        return HeaderAuthProvider(
            user_id_header=settings.auth.headers.user_id,
            email_header=settings.auth.headers.email,
        )

    if mode == AuthMode.LOCAL_JWT:
        return LocalJWTAuthProvider(
            secret_key=_get_jwt_secret(settings),
            algorithm=settings.auth.jwt.algorithm,
            issuer=settings.auth.jwt.issuer,
            audience=settings.auth.jwt.audience or None,
        )

    msg = f"Unknown auth mode: {mode}"
    raise ConfigurationError(msg)


def get_auth_provider() -> AuthProvider:
    """Get the current auth provider instance.

    Raises:
        RuntimeError: If the provider has not been initialized.
    """
    provider = _state["provider"]
    if provider is None:
        msg = "Auth provider not initialized. Call set_auth_provider() during startup."
        raise RuntimeError(msg)
    return provider


def set_auth_provider(provider: AuthProvider) -> None:
    """Set the process-wide auth provider instance."""
    _state["provider"] = provider
    logger.info("Auth provider set", provider=provider.provider_name)


async def initialize_auth_provider(settings: Settings | None = None) -> AuthProvider:
    """Create, initialize, and set the auth provider."""
    provider = create_auth_provider(settings)
    await provider.initialize()
    set_auth_provider(provider)
    return provider


async def shutdown_auth_provider() -> None:
    """Shutdown the process-wide auth provider and clear it."""
    provider = _state["provider"]
    if provider is not None:
        await provider.shutdown()
        _state["provider"] = None
        logger.info("Auth provider shutdown complete")
