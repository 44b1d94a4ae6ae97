"""
ProductHub Backend — Liveness Route
=====================================

What:  GET / answers {"status": "ok"} once the document store is reachable.
How:   Forces the lazy MongoDB connection, so the first health check also warms the
       connection for the requests that follow.
Who:   Load balancers, uptime monitors, the frontend's server status badge.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.database import MongoStore, get_store
from app.routes.fallback import LIVENESS_FALLBACK, guarded
from app.services.health_service import check_liveness

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/",
    summary="Service liveness check",
    description="Connects to MongoDB if needed. 500 with {\"status\": \"error\"} when it cannot.",
)
async def liveness(store: MongoStore = Depends(get_store)) -> JSONResponse:
    return await guarded(check_liveness(store), LIVENESS_FALLBACK)
