"""
ProductHub Backend — Request ID Middleware
============================================

What:  Assigns a correlation ID to each request and echoes it back.
How:   Reuses the client's X-Request-ID header when present, otherwise
       generates a short UUID. The ID is stored in a ContextVar (for loggers
       and the fallback adapter) and in request.state (for handlers).
When:  First middleware in the chain.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Sets request_id_var for the duration of the request and adds X-Request-ID to the response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 hex chars are enough to correlate log lines
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
