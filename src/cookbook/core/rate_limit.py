"""Rate limiting using SlowAPI.

The gateway endpoints call a rate-limited public text-generation service
on behalf of the client, so they carry a stricter limit than the rest of
the API.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from cookbook.core.config import get_settings
from cookbook.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI
    from starlette.requests import Request

logger = get_logger(__name__)


def _get_rate_limit_key(request: Request) -> str:
    """Acting user if known, otherwise the client address."""
    user_id = getattr(request.state, "user_id", None)
    if user_id:
        return f"user:{user_id}"
    return str(get_remote_address(request))


def _default_limit() -> str:
    return get_settings().rate_limiting.default


def _gateway_limit() -> str:
    return get_settings().rate_limiting.gateway


def create_limiter() -> Limiter:
    """Create and configure the rate limiter."""
    settings = get_settings()

    return Limiter(
        key_func=_get_rate_limit_key,
        default_limits=[_default_limit],
        storage_uri=settings.rate_limiting.storage_uri,
        strategy="fixed-window",
        headers_enabled=True,
    )


limiter = create_limiter()


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """Render a 429 with ``Retry-After``."""
    assert isinstance(exc, RateLimitExceeded)
    logger.warning(
        "Rate limit exceeded",
        path=request.url.path,
        method=request.method,
        client_ip=get_remote_address(request),
        limit=str(exc.detail),
    )

    return ORJSONResponse(
        status_code=429,
        content={
            "error": "rate_limit_exceeded",
            "message": "Too many requests. Please try again later.",
            "retry_after": exc.detail,
        },
        headers={"Retry-After": str(exc.detail)},
    )


def setup_rate_limiting(app: FastAPI) -> None:
    """Attach the limiter and its exception handler to the application."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    logger.info("Rate limiting configured")


def rate_limit_gateway() -> Any:
    """Apply the gateway limit to an endpoint.

    Example:
        @router.post("/format-recipe")
        @rate_limit_gateway()
        async def format_recipe(request: Request): ...
    """
    return limiter.limit(_gateway_limit)
