"""
Prometheus metrics middleware for FastAPI.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Match

from sceau.infrastructure.monitoring import metrics

UNMATCHED_ENDPOINT = "unmatched"


def endpoint_label(request: Request) -> str:
    """
    Route template for the request ("/api/auth/verify").

    Paths that match no route share one label, so probes for arbitrary
    URLs cannot grow the label set.
    """
    for route in request.app.routes:
        match, _ = route.matches(request.scope)
        if match is Match.FULL:
            return getattr(route, "path", UNMATCHED_ENDPOINT)
    return UNMATCHED_ENDPOINT


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Middleware to collect HTTP metrics.

    Records request count by method/endpoint/status, duration by
    method/endpoint, and error count by method/endpoint/class.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        endpoint = endpoint_label(request)
        method = request.method
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            self._observe(method, endpoint, start_time)
            metrics.http_errors_total.labels(
                method=method, endpoint=endpoint, error_type=type(e).__name__
            ).inc()
            raise

        self._observe(method, endpoint, start_time)
        metrics.http_requests_total.labels(
            method=method, endpoint=endpoint, status=response.status_code
        ).inc()

        if response.status_code >= 400:
            metrics.http_errors_total.labels(
                method=method,
                endpoint=endpoint,
                error_type=f"{response.status_code // 100}xx",
            ).inc()

        return response

    @staticmethod
    def _observe(method: str, endpoint: str, start_time: float) -> None:
        metrics.http_request_duration_seconds.labels(
            method=method, endpoint=endpoint
        ).observe(time.perf_counter() - start_time)
