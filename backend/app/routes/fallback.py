"""
ProductHub Backend — Route Fallback Adapter
=============================================

What:  Turns a service call into an HTTP response, substituting the route's
       documented default payload when the call fails.
How:   `guarded(call, fallback)` awaits the service coroutine. A result is
       JSON-encoded with a 200; a ProductHubError is logged and replaced by
       `fallback.payload` with `fallback.status_code`, or with the status
       listed for the error's kind in `fallback.status_by_kind`.
Who:   Every handler in app/routes.

Contract:
    List endpoints never fail: they answer [] with 200.
    Single-document GETs answer {} with 400.
    Mutations answer {"success": false} with 500 (400 for validation errors).
    No error detail reaches the client; the request ID ties the response to
    the log line.

Only ProductHubError is handled here. Anything else is a bug and goes to the
global handler in main.py, which answers a generic 500.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict

from bson import Decimal128, ObjectId, json_util
from bson.binary import Binary
from bson.dbref import DBRef
from bson.max_key import MaxKey
from bson.min_key import MinKey
from bson.regex import Regex
from bson.timestamp import Timestamp
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.exceptions import ErrorKind, ProductHubError, ResponseEncodingError
from app.middleware.request_id import request_id_var
from app.schemas.responses import DashboardResponse, SuccessResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Fallback:
    """Default response of one route, used whenever its service call fails."""

    payload: Any
    status_code: int = 500
    status_by_kind: Dict[ErrorKind, int] = field(default_factory=dict)

    def status_for(self, kind: ErrorKind) -> int:
        return self.status_by_kind.get(kind, self.status_code)

    def response_for(self, exc: ProductHubError) -> JSONResponse:
        return JSONResponse(status_code=self.status_for(exc.kind), content=encode(self.payload))


def _extended_json(value: Any) -> Any:
    return json_util.default(value, json_options=json_util.RELAXED_JSON_OPTIONS)


# BSON values a stored document may carry that jsonable_encoder cannot render.
# Decimal128 becomes {"$numberDecimal": "9.99"}, Binary {"$binary": {...}}, etc.
BSON_ENCODERS: Dict[Any, Callable[[Any], Any]] = {
    ObjectId: str,
    **{
        bson_type: _extended_json
        for bson_type in (Decimal128, Binary, DBRef, MaxKey, MinKey, Regex, Timestamp)
    },
}


def encode(value: Any) -> Any:
    """
    JSON-ready copy of a service result.

    ObjectId → hex string, datetime → ISO 8601, other BSON scalars → relaxed
    Extended JSON.

    Raises:
        ResponseEncodingError: a value has no JSON rendering (e.g. non-UTF-8
            bytes)
    """
    if isinstance(value, BaseModel):
        value = value.model_dump()
    try:
        return jsonable_encoder(value, custom_encoder=BSON_ENCODERS)
    except (ValueError, TypeError) as e:
        raise ResponseEncodingError(context={"error_type": type(e).__name__}) from e


async def guarded(call: Awaitable[Any], fallback: Fallback) -> JSONResponse:
    """
    Await a service call and map its outcome to a response.

    Encoding happens inside the guard, so a stored value that cannot be
    rendered also yields the route's default payload.

    Args:
        call:      an un-awaited service coroutine
        fallback:  what to send if the call or its encoding raises a
                   ProductHubError
    """
    try:
        content = encode(await call)
    except ProductHubError as exc:
        rid = request_id_var.get("")
        status = fallback.status_for(exc.kind)
        level = logging.WARNING if status < 500 else logging.ERROR
        logger.log(
            level,
            "[%s] %s (%s) → default response %d | Context: %s",
            rid,
            exc.message,
            exc.kind.value,
            status,
            exc.context,
        )
        return fallback.response_for(exc)
    return JSONResponse(status_code=200, content=content)


# ── Defaults shared by the routes ─────────────────────────────────────────
LIST_FALLBACK = Fallback(payload=[], status_code=200)
DOCUMENT_FALLBACK = Fallback(payload={}, status_code=400)
MUTATION_FALLBACK = Fallback(payload=SuccessResponse(success=False), status_code=500)
CART_ADD_FALLBACK = Fallback(
    payload=SuccessResponse(success=False),
    status_code=500,
    status_by_kind={ErrorKind.VALIDATION: 400},
)
DASHBOARD_FALLBACK = Fallback(payload=DashboardResponse(), status_code=500)
LIVENESS_FALLBACK = Fallback(payload={"status": "error"}, status_code=500)
