"""FastAPI dependencies resolving the acting identity of a request.

Absent credentials mean an anonymous session (``None``); credentials
that are present but invalid are rejected with 401.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from cookbook.auth.providers import (
    AuthenticationError,
    AuthResult,
    TokenExpiredError,
    get_auth_provider,
)
from cookbook.models import ActingUser
from cookbook.observability.logging import bind_context


# Used for token extraction only; tokens are issued by the hosted backend.
oauth2_scheme_optional = OAuth2PasswordBearer(
    tokenUrl="/auth/v1/token",
    scheme_name="JWT",
    description="Hosted backend access token",
    auto_error=False,
)


async def get_auth_result(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme_optional)],
) -> AuthResult | None:
    """Resolve credentials with the configured auth provider.

    Raises:
        HTTPException: 401 if credentials are present but invalid.
    """
    try:
        provider = get_auth_provider()
        result = await provider.authenticate(token, request)

    except TokenExpiredError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e) or "Authentication failed",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    if result is not None:
        # Rate limit key
        request.state.user_id = result.user_id
    return result


async def get_acting_user(
    auth_result: Annotated[AuthResult | None, Depends(get_auth_result)],
) -> ActingUser | None:
    """Get the acting user, or None for an anonymous session."""
    if auth_result is None:
        return None

    bind_context(user_id=auth_result.user_id)
    return ActingUser(id=auth_result.user_id, email=auth_result.email)


ActingUserDep = Annotated[ActingUser | None, Depends(get_acting_user)]
