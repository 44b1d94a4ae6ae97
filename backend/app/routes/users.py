"""ProductHub Backend — User Route Handlers (POST /users, GET /users)."""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from app.database import MongoStore, get_store
from app.routes.fallback import LIST_FALLBACK, MUTATION_FALLBACK, guarded
from app.services.user_service import user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", summary="Create a user from the raw body")
async def create_user(
    body: Dict[str, Any] = Body(default_factory=dict),
    store: MongoStore = Depends(get_store),
) -> JSONResponse:
    return await guarded(user_service.create_user(store, body), MUTATION_FALLBACK)


@router.get("", summary="List all users")
async def list_users(store: MongoStore = Depends(get_store)) -> JSONResponse:
    return await guarded(user_service.list_users(store), LIST_FALLBACK)
