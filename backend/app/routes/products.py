"""
ProductHub Backend — Product Route Handlers
=============================================

What:  CRUD on products plus the per-seller listing and the stock toggle.
How:   Each handler delegates to ProductService and wraps the call in
       `guarded`, which supplies the route's default payload on failure.

Routes:
    GET    /products                 list all              fallback []
    GET    /products/{id}            one product or {}     fallback {} (400)
    POST   /products                 insert                fallback {success:false} (500)
    PUT    /products/{id}            $set body             fallback {success:false} (500)
    DELETE /products/{id}            delete                fallback {success:false} (500)
    GET    /products/user/{uid}      list by userId        fallback []
    PATCH  /products/toggle/{id}     flip inStock          fallback {success:false} (500)
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from app.database import MongoStore, get_store
from app.routes.fallback import DOCUMENT_FALLBACK, LIST_FALLBACK, MUTATION_FALLBACK, guarded
from app.services.product_service import product_service

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", summary="List all products")
async def list_products(store: MongoStore = Depends(get_store)) -> JSONResponse:
    return await guarded(product_service.list_products(store), LIST_FALLBACK)


@router.get(
    "/user/{user_id}",
    summary="List the products of one seller",
)
async def list_user_products(
    user_id: str,
    store: MongoStore = Depends(get_store),
) -> JSONResponse:
    return await guarded(product_service.list_user_products(store, user_id), LIST_FALLBACK)


@router.get(
    "/{product_id}",
    summary="Get a single product by ID",
    description="Returns {} when no product has this ID, and {} with 400 when the ID is malformed.",
)
async def get_product(
    product_id: str,
    store: MongoStore = Depends(get_store),
) -> JSONResponse:
    return await guarded(product_service.get_product(store, product_id), DOCUMENT_FALLBACK)


@router.post(
    "",
    summary="Create a product",
    description="Stores the body with inStock=true and createdAt=now, overriding any supplied values.",
)
async def create_product(
    body: Dict[str, Any] = Body(default_factory=dict),
    store: MongoStore = Depends(get_store),
) -> JSONResponse:
    return await guarded(product_service.create_product(store, body), MUTATION_FALLBACK)


@router.put("/{product_id}", summary="Update fields of a product")
async def update_product(
    product_id: str,
    body: Dict[str, Any] = Body(default_factory=dict),
    store: MongoStore = Depends(get_store),
) -> JSONResponse:
    return await guarded(
        product_service.update_product(store, product_id, body), MUTATION_FALLBACK
    )


@router.delete("/{product_id}", summary="Delete a product")
async def delete_product(
    product_id: str,
    store: MongoStore = Depends(get_store),
) -> JSONResponse:
    return await guarded(product_service.delete_product(store, product_id), MUTATION_FALLBACK)


@router.patch(
    "/toggle/{product_id}",
    summary="Flip a product's inStock flag",
    description="Answers {success:false} with 200 when the product does not exist.",
)
async def toggle_stock(
    product_id: str,
    store: MongoStore = Depends(get_store),
) -> JSONResponse:
    return await guarded(product_service.toggle_stock(store, product_id), MUTATION_FALLBACK)
