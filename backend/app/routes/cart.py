"""
ProductHub Backend — Cart Route Handlers
==========================================

What:  GET /cart/{uid} returns the user's cart items; POST /cart/add adds one
       unit of a product, creating the cart on first use.
How:   A missing userId or productId answers {success:false} with 400; any
       store failure answers {success:false} with 500.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from app.database import MongoStore, get_store
from app.routes.fallback import CART_ADD_FALLBACK, LIST_FALLBACK, guarded
from app.services.cart_service import cart_service

router = APIRouter(prefix="/cart", tags=["Cart"])


@router.post("/add", summary="Add one unit of a product to a user's cart")
async def add_to_cart(
    body: Dict[str, Any] = Body(default_factory=dict),
    store: MongoStore = Depends(get_store),
) -> JSONResponse:
    return await guarded(cart_service.add_item(store, body), CART_ADD_FALLBACK)


@router.get("/{user_id}", summary="List the items in a user's cart")
async def get_cart(
    user_id: str,
    store: MongoStore = Depends(get_store),
) -> JSONResponse:
    return await guarded(cart_service.get_items(store, user_id), LIST_FALLBACK)
