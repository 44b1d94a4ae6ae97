"""
ProductHub Backend — Access Logging Middleware
================================================

What:  One access log line per HTTP request on the `producthub.access` logger.
How:   Times the downstream call, then logs method, path, status, duration,
       request ID and the resource (first path segment: products, cart, ...).
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

Levels:
    5xx              ERROR
    4xx              WARNING
    healthy GET /    DEBUG   (load balancers poll it)
    anything else    INFO

Bodies are never logged; user and product documents are free-form.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("producthub.access")

LIVENESS_PATH = "/"


def resource_of(path: str) -> str:
    """`/products/toggle/abc` → `products`; the root path is `health`."""
    head = path.strip("/").split("/", 1)[0]
    return head or "health"


def level_for(method: str, path: str, status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    if method == "GET" and path == LIVENESS_PATH:
        return logging.DEBUG
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        method, path, status = request.method, request.url.path, response.status_code
        rid = request_id_var.get("")
        logger.log(
            level_for(method, path, status),
            "[%s] %s %s → %d in %.1fms",
            rid,
            method,
            path,
            status,
            elapsed_ms,
            extra={
                "request_id": rid,
                "resource": resource_of(path),
                "status": status,
                "duration_ms": round(elapsed_ms, 2),
            },
        )
        return response
