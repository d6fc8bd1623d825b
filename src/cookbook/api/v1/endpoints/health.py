"""Health check endpoints.

Provides liveness and readiness probes for container orchestrators and
load balancers.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from cookbook.api.dependencies import SettingsDep
from cookbook.schemas import HealthResponse, ReadinessResponse


router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Basic health check to verify the service is running.",
)
async def health_check(settings: SettingsDep) -> HealthResponse:
    """Check if the service is alive. External dependencies are not checked."""
    return HealthResponse(
        status="healthy",
        version=settings.app.version,
        environment=settings.APP_ENV,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Readiness check reporting how recipes are stored.",
)
async def readiness_check(request: Request, settings: SettingsDep) -> ReadinessResponse:
    """Check if the service is ready to handle requests."""
    state = request.app.state
    dependencies: dict[str, str] = {}

    if getattr(state, "recipe_registry", None) is not None:
        dependencies["store"] = "remote"
    elif getattr(state, "recipe_book", None) is not None:
        dependencies["store"] = "local"
    else:
        dependencies["store"] = "unavailable"

    dependencies["text_generation"] = (
        "configured" if getattr(state, "llm_client", None) is not None else "unavailable"
    )

    all_healthy = "unavailable" not in dependencies.values()

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        version=settings.app.version,
        environment=settings.APP_ENV,
        dependencies=dependencies,
    )
