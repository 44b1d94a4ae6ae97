"""ProductHub Backend — Seller Dashboard Route (GET /store-dashboard/{uid})."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.database import MongoStore, get_store
from app.routes.fallback import DASHBOARD_FALLBACK, guarded
from app.services.dashboard_service import dashboard_service

router = APIRouter(prefix="/store-dashboard", tags=["Dashboard"])


@router.get(
    "/{seller_id}",
    summary="Seller dashboard aggregate",
    description=(
        "Product count and received ratings for a seller. totalOrders and "
        "totalEarnings are always 0. A zeroed payload with 500 when the store fails."
    ),
)
async def get_dashboard(
    seller_id: str,
    store: MongoStore = Depends(get_store),
) -> JSONResponse:
    return await guarded(dashboard_service.get_dashboard(store, seller_id), DASHBOARD_FALLBACK)
