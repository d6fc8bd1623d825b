"""Request timing middleware."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from cookbook.observability.logging import get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

logger = get_logger(__name__)

# Formatting and import wait on the text-generation endpoint; only flag
# requests that are slow even by that standard.
SLOW_REQUEST_THRESHOLD = 15.0


class TimingMiddleware(BaseHTTPMiddleware):
    """Add ``X-Process-Time`` and warn about slow requests."""

    def __init__(
        self,
        app: ASGIApp,
        header_name: str = "X-Process-Time",
        slow_threshold: float = SLOW_REQUEST_THRESHOLD,
    ) -> None:
        super().__init__(app)
        self.header_name = header_name
        self.slow_threshold = slow_threshold

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = time.perf_counter() - start_time

        process_time_ms = round(process_time * 1000, 2)
        response.headers[self.header_name] = f"{process_time_ms}ms"

        if process_time > self.slow_threshold:
            logger.warning(
                "Slow request detected",
                method=request.method,
                path=request.url.path,
                process_time_ms=process_time_ms,
            )
        return response
