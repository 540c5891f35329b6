"""
Prometheus metrics middleware for HTTP requests.

Endpoint labels are route-shaped: path segments holding entity ids are
replaced with ``{id}`` and usernames with ``{username}``, so every post
or user does not get its own time series.
"""

import re
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from socialnet.utils.metrics import (
    http_request_duration_seconds,
    http_requests_in_progress,
    http_requests_total,
)

_UUID_SEGMENT = re.compile(
    r"/[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}(?=/|$)"
)
_USERNAME_SEGMENT = re.compile(r"^(/api/users/username)/[^/]+$")


def endpoint_label(path: str) -> str:
    """
    Collapse variable path segments.

    Example:
        >>> endpoint_label("/api/posts/0f8b3c1e-7d2a-4b6e-9c1f-2a3b4c5d6e7f/likes")
        '/api/posts/{id}/likes'
    """
    path = _UUID_SEGMENT.sub("/{id}", path)
    return _USERNAME_SEGMENT.sub(r"\1/{username}", path)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Records request count, latency and in-flight requests per endpoint.

    A request that raises is counted with status 500 before the error
    propagates to the server.
    """

    async def dispatch(self, request: Request, call_next: ASGIApp) -> Response:
        method = request.method
        endpoint = endpoint_label(request.url.path)
        status_code = 500

        in_progress = http_requests_in_progress.labels(
            method=method, endpoint=endpoint
        )
        in_progress.inc()
        started = time.perf_counter()
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            http_request_duration_seconds.labels(
                method=method, endpoint=endpoint
            ).observe(time.perf_counter() - started)
            http_requests_total.labels(
                method=method, endpoint=endpoint, status_code=status_code
            ).inc()
            in_progress.dec()
