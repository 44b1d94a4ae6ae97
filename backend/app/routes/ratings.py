"""ProductHub Backend — Rating Route Handlers."""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from app.database import MongoStore, get_store
from app.routes.fallback import LIST_FALLBACK, MUTATION_FALLBACK, guarded
from app.services.rating_service import rating_service

router = APIRouter(prefix="/ratings", tags=["Ratings"])


@router.get("/product/{product_id}", summary="List the ratings of one product")
async def list_product_ratings(
    product_id: str,
    store: MongoStore = Depends(get_store),
) -> JSONResponse:
    return await guarded(rating_service.list_product_ratings(store, product_id), LIST_FALLBACK)


@router.post("", summary="Create a rating from the raw body")
async def create_rating(
    body: Dict[str, Any] = Body(default_factory=dict),
    store: MongoStore = Depends(get_store),
) -> JSONResponse:
    return await guarded(rating_service.create_rating(store, body), MUTATION_FALLBACK)
