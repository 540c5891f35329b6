"""
Request correlation IDs.

Every request gets an id that is echoed in ``X-Correlation-ID`` and
printed in each log line written while the request is handled. A client
may supply its own id; anything that is not a short token of letters,
digits and dashes is replaced.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

CORRELATION_HEADER = "X-Correlation-ID"

_valid_id = re.compile(r"^[A-Za-z0-9-]{1,64}$")

correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def new_correlation_id() -> str:
    return uuid.uuid4().hex[:8]


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        cid = request.headers.get(CORRELATION_HEADER, "")
        if not _valid_id.match(cid):
            cid = new_correlation_id()

        request.state.request_id = cid
        token = correlation_id.set(cid)
        try:
            response = await call_next(request)
        finally:
            correlation_id.reset(token)

        response.headers[CORRELATION_HEADER] = cid
        return response


def get_correlation_id() -> str:
    """Correlation id of the request being handled, or an empty string."""
    return correlation_id.get()
