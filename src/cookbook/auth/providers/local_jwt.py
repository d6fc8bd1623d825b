"""Local JWT authentication provider.

Validates access tokens issued by the hosted backend with the shared
project secret. The backend signs HS256 tokens whose ``sub`` is the user
id, ``email`` the account address and ``aud`` is ``authenticated``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError

from cookbook.auth.providers.exceptions import (
    ConfigurationError,
    TokenExpiredError,
    TokenInvalidError,
)
from cookbook.auth.providers.models import AuthResult
from cookbook.observability.logging import get_logger


if TYPE_CHECKING:
    from starlette.requests import Request

logger = get_logger(__name__)


class LocalJWTAuthProvider:
    """Validates JWTs locally using the configured secret key.

    Attributes:
        secret_key: The secret key for HS256 or public key for RS256.
        algorithm: JWT signing algorithm (default: HS256).
        issuer: Expected 'iss' claim value (optional).
        audience: Expected 'aud' claim values (optional).
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str | None = None,
        audience: list[str] | None = None,
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience if audience else None
        self._initialized = False

    @property
    def provider_name(self) -> str:
        """Return provider name for logging."""
        return "local_jwt"

    async def authenticate(
        self,
        token: str | None,
        _request: Request | None = None,
    ) -> AuthResult | None:
        """Validate a bearer token.

        Args:
            token: The JWT to validate. No token means an anonymous session.
            _request: Unused in this provider.

        Returns:
            AuthResult with validated user information, or None.

        Raises:
            TokenExpiredError: If the token has expired.
            TokenInvalidError: If the token is malformed or signature fails.
        """
        if not token:
            return None

        decode_kwargs: dict[str, Any] = {"algorithms": [self.algorithm]}
        if self.issuer:
            decode_kwargs["issuer"] = self.issuer
        # python-jose accepts a single expected audience
        if self.audience:
            decode_kwargs["audience"] = self.audience[0]
        else:
            decode_kwargs["options"] = {"verify_aud": False}

        try:
            payload = jwt.decode(token, self.secret_key, **decode_kwargs)

        except ExpiredSignatureError as e:
            logger.debug("Token expired during local validation")
            msg = "Token has expired"
            raise TokenExpiredError(msg) from e

        except JWTClaimsError as e:
            logger.warning("JWT claims validation failed", error=str(e))
            raise TokenInvalidError(str(e)) from e

        except JWTError as e:
            logger.warning("JWT validation failed", error=str(e))
            msg = "Invalid token"
            raise TokenInvalidError(msg) from e

        user_id = payload.get("sub")
        if not user_id:
            msg = "Token missing 'sub' claim"
            raise TokenInvalidError(msg)

        return AuthResult(
            user_id=user_id,
            email=payload.get("email"),
            token_type="access",  # noqa: S106 - not a password
            expires_at=payload.get("exp"),
            raw_claims=payload,
        )

    async def initialize(self) -> None:
        """Check that a secret key is configured."""
        if not self.secret_key:
            msg = "JWT secret key is not configured"
            raise ConfigurationError(msg)

        logger.info(
            "LocalJWTAuthProvider initialized",
            algorithm=self.algorithm,
            issuer_validation=self.issuer is not None,
            audience_validation=self.audience is not None,
        )
        self._initialized = True

    async def shutdown(self) -> None:
        """Shutdown the provider. No cleanup needed for local JWT."""
        logger.debug("LocalJWTAuthProvider shutdown")
        self._initialized = False
