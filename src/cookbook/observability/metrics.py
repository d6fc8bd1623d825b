"""Prometheus metrics instrumentation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_fastapi_instrumentator import Instrumentator, metrics

from cookbook.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI

    from cookbook.core.config import Settings

logger = get_logger(__name__)

METRIC_NAMESPACE = "cookbook"


def setup_metrics(app: FastAPI, settings: Settings) -> Instrumentator:
    """Instrument HTTP handlers and expose ``{prefix}/metrics``.

    Returns an unattached ``Instrumentator`` when metrics are disabled.
    """
    if not settings.observability.metrics.enabled:
        logger.info("Metrics collection disabled")
        return Instrumentator()

    prefix = settings.api.prefix
    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=[
            f"{prefix}/health",
            f"{prefix}/ready",
            f"{prefix}/metrics",
        ],
        inprogress_name="http_requests_inprogress",
        inprogress_labels=True,
    )
    instrumentator.add(
        metrics.default(
            metric_namespace=METRIC_NAMESPACE,
            metric_subsystem="http",
        )
    )
    instrumentator.instrument(app)

    endpoint = f"{prefix}/metrics"
    instrumentator.expose(app, endpoint=endpoint, tags=["Monitoring"])
    logger.info("Prometheus metrics configured", endpoint=endpoint)

    return instrumentator
