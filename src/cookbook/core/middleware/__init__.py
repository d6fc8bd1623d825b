"""Custom middleware components."""

from cookbook.core.middleware.logging import LoggingMiddleware
from cookbook.core.middleware.request_id import RequestIDMiddleware
from cookbook.core.middleware.timing import TimingMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
    "TimingMiddleware",
]
