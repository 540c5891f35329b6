"""
Middleware for injecting contextual fields into structured logs.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from socialnet.logging import clear_log_context, set_log_context


class LoggingContextMiddleware(BaseHTTPMiddleware):  # type: ignore[misc]
    """
    Middleware to inject contextual fields into structured logs.

    Adds endpoint and method to the log context, plus user_id once the
    authentication middleware has resolved a session. The context is
    cleared when the request completes.
    """

    async def dispatch(self, request: Request, call_next: ASGIApp) -> Response:
        set_log_context(
            endpoint=request.url.path,
            method=request.method,
        )

        if "user" in request.scope and request.user.is_authenticated:
            set_log_context(user_id=request.user.id)

        try:
            response = await call_next(request)
            set_log_context(status_code=response.status_code)
            return response
        finally:
            clear_log_context()
