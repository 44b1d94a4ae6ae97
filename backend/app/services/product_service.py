"""
ProductHub Backend — Product Service
======================================

What:  All reads and writes on the `products` collection.
How:   Each method connects through the store, runs one or two driver calls
       inside `store_errors(...)`, and returns a plain, JSON-ready value.
Who:   Called by routes/products.py and (for counts) the dashboard service.

Error Handling Strategy:
    Methods never return error dicts. Invalid IDs raise InvalidIdError,
    driver failures raise StoreOperationError, connection failures raise
    StoreConnectionError. The route decides which default payload to send.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from app.database import MongoStore, store_errors, to_object_id
from app.models.documents import Product
from app.schemas.responses import InsertResponse, SuccessResponse

logger = logging.getLogger(__name__)


class ProductService:
    """
    Business logic for products.

    Stateless: the store is passed to every call.
    """

    async def list_products(self, store: MongoStore) -> List[Dict[str, Any]]:
        collections = await store.connect()
        with store_errors("find", "products"):
            docs = await collections.products.find().to_list()
            return [Product.model_validate(doc).to_response() for doc in docs]

    async def get_product(self, store: MongoStore, product_id: str) -> Dict[str, Any]:
        """
        Fetch one product.

        Returns:
            The product document, or {} when no product has that ID.

        Raises:
            InvalidIdError: product_id is not a valid ObjectId
        """
        oid = to_object_id(product_id)
        collections = await store.connect()
        with store_errors("find_one", "products"):
            doc = await collections.products.find_one({"_id": oid})
            if doc is None:
                return {}
            return Product.model_validate(doc).to_response()

    async def create_product(self, store: MongoStore, body: Dict[str, Any]) -> InsertResponse:
        """
        Insert a product.

        inStock and createdAt are always set by the server; values supplied
        in the body for those two keys are overwritten.
        """
        product = {
            **body,
            "inStock": True,
            "createdAt": datetime.now(timezone.utc),
        }
        collections = await store.connect()
        with store_errors("insert_one", "products"):
            result = await collections.products.insert_one(product)
        logger.info("Product created: %s", result.inserted_id)
        return InsertResponse(success=True, insertedId=str(result.inserted_id))

    async def update_product(
        self, store: MongoStore, product_id: str, body: Dict[str, Any]
    ) -> SuccessResponse:
        """$set the body fields; success only when a document actually changed."""
        oid = to_object_id(product_id)
        collections = await store.connect()
        with store_errors("update_one", "products"):
            result = await collections.products.update_one({"_id": oid}, {"$set": body})
        return SuccessResponse(success=result.modified_count > 0)

    async def delete_product(self, store: MongoStore, product_id: str) -> SuccessResponse:
        """Delete by ID; success only when a document was removed."""
        oid = to_object_id(product_id)
        collections = await store.connect()
        with store_errors("delete_one", "products"):
            result = await collections.products.delete_one({"_id": oid})
        return SuccessResponse(success=result.deleted_count > 0)

    async def list_user_products(self, store: MongoStore, user_id: str) -> List[Dict[str, Any]]:
        collections = await store.connect()
        with store_errors("find", "products"):
            docs = await collections.products.find({"userId": user_id}).to_list()
            return [Product.model_validate(doc).to_response() for doc in docs]

    async def count_user_products(self, store: MongoStore, user_id: str) -> int:
        collections = await store.connect()
        with store_errors("count_documents", "products"):
            return await collections.products.count_documents({"userId": user_id})

    async def toggle_stock(self, store: MongoStore, product_id: str) -> SuccessResponse:
        """
        Flip inStock on one product.

        inStock is read by truthiness: a product without it (or with any
        falsy value) counts as out of stock, so the first toggle sets True.
        Returns success=False when the product does not exist.
        """
        oid = to_object_id(product_id)
        collections = await store.connect()
        with store_errors("toggle_stock", "products"):
            doc = await collections.products.find_one({"_id": oid})
            if doc is None:
                return SuccessResponse(success=False)

            product = Product.model_validate(doc)
            await collections.products.update_one(
                {"_id": oid},
                {"$set": {"inStock": not product.is_in_stock}},
            )
        logger.info("Product %s inStock -> %s", product_id, not product.is_in_stock)
        return SuccessResponse(success=True)


# ── Singleton Instance ────────────────────────────────────────────────────
product_service = ProductService()
