"""
FastAPI middleware for Prometheus request metrics.

Tracks request counts by endpoint, method and status code, plus request
latency. Endpoints are labelled by route template so user ids do not
become label values.
"""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from landlord.observability.metrics import http_request_duration_seconds, http_requests_total

logger = logging.getLogger(__name__)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Collect Prometheus metrics for HTTP requests"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        method = request.method
        start_time = time.time()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            logger.error(f"Request failed: {e}", exc_info=True)
            raise
        finally:
            endpoint = self._endpoint(request)
            http_requests_total.labels(
                method=method, endpoint=endpoint, status=status_code
            ).inc()
            http_request_duration_seconds.labels(
                method=method, endpoint=endpoint
            ).observe(time.time() - start_time)

        return response

    def _endpoint(self, request: Request) -> str:
        """
        Route template for the request, e.g. /api/v1/users/{user_id}/progress

        Unmatched paths share a single label.
        """
        route = request.scope.get("route")
        path = getattr(route, "path", None)
        return path or "unmatched"


def setup_metrics_middleware(app) -> None:
    """Add Prometheus metrics middleware to FastAPI application"""
    app.add_middleware(PrometheusMiddleware)
    logger.info("Prometheus metrics middleware added to FastAPI")
