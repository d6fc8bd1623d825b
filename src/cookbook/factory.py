"""Application factory for creating FastAPI instances.

This module provides the create_app factory function that:
- Configures the FastAPI application with appropriate settings
- Sets up the middleware stack
- Registers exception and rate limit handlers
- Mounts API routers and the metrics endpoint
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.middleware import SlowAPIMiddleware

from cookbook.api.v1.router import router as v1_router
from cookbook.core.config import Settings, get_settings
from cookbook.core.events import lifespan
from cookbook.core.exceptions import setup_exception_handlers
from cookbook.core.middleware import (
    LoggingMiddleware,
    RequestIDMiddleware,
    TimingMiddleware,
)
from cookbook.core.rate_limit import setup_rate_limiting
from cookbook.observability.metrics import setup_metrics


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Recipe deck, favorites and logbook with AI-assisted formatting and import",
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        debug=settings.app.debug,
    )

    # Read by the lifespan and by request dependencies
    app.state.settings = settings

    setup_rate_limiting(app)
    setup_exception_handlers(app)
    _setup_middleware(app, settings)
    _setup_routers(app, settings)

    # After routes are mounted
    setup_metrics(app, settings)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Middleware is executed in reverse order of addition. Order from the
    request's perspective:
    1. RequestIDMiddleware (request id + fresh logging context)
    2. LoggingMiddleware (logs requests/responses)
    3. TimingMiddleware (X-Process-Time header)
    4. SlowAPIMiddleware (default rate limit)
    5. GZipMiddleware (compresses responses)
    6. CORSMiddleware (handles CORS)
    """
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Process-Time"],
        )

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(TimingMiddleware)

    prefix = settings.api.prefix
    app.add_middleware(
        LoggingMiddleware,
        exclude_paths={f"{prefix}/health", f"{prefix}/ready", f"{prefix}/metrics", "/favicon.ico"},
    )

    app.add_middleware(RequestIDMiddleware)


def _setup_routers(app: FastAPI, settings: Settings) -> None:
    """Mount API routers."""
    app.include_router(v1_router, prefix=settings.api.prefix)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        """Root endpoint returning basic service info."""
        return {
            "service": settings.app.name,
            "version": settings.app.version,
            "docs": "/docs" if not settings.is_production else "disabled",
        }
