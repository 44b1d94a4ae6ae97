"""
ProductHub Backend — Category Route Handlers
==============================================

Routes:
    GET    /categories          list all             fallback []
    GET    /categories/{id}     one category or {}   fallback {} (400)
    POST   /categories          insert raw body      fallback {success:false} (500)
    PUT    /categories/{id}     $set body            fallback {success:false} (500)
    DELETE /categories/{id}     delete               fallback {success:false} (500)

PUT and DELETE answer {success:true} even when no category matched, which
differs from the product routes (they report whether a document changed).
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from app.database import MongoStore, get_store
from app.routes.fallback import DOCUMENT_FALLBACK, LIST_FALLBACK, MUTATION_FALLBACK, guarded
from app.services.category_service import category_service

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", summary="List all categories")
async def list_categories(store: MongoStore = Depends(get_store)) -> JSONResponse:
    return await guarded(category_service.list_categories(store), LIST_FALLBACK)


@router.get("/{category_id}", summary="Get a single category by ID")
async def get_category(
    category_id: str,
    store: MongoStore = Depends(get_store),
) -> JSONResponse:
    return await guarded(category_service.get_category(store, category_id), DOCUMENT_FALLBACK)


@router.post("", summary="Create a category from the raw body")
async def create_category(
    body: Dict[str, Any] = Body(default_factory=dict),
    store: MongoStore = Depends(get_store),
) -> JSONResponse:
    return await guarded(category_service.create_category(store, body), MUTATION_FALLBACK)


@router.put("/{category_id}", summary="Update fields of a category")
async def update_category(
    category_id: str,
    body: Dict[str, Any] = Body(default_factory=dict),
    store: MongoStore = Depends(get_store),
) -> JSONResponse:
    return await guarded(
        category_service.update_category(store, category_id, body), MUTATION_FALLBACK
    )


@router.delete("/{category_id}", summary="Delete a category")
async def delete_category(
    category_id: str,
    store: MongoStore = Depends(get_store),
) -> JSONResponse:
    return await guarded(category_service.delete_category(store, category_id), MUTATION_FALLBACK)
