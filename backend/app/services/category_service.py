"""
ProductHub Backend — Category Service
=======================================

What:  CRUD on the `categories` collection.

Unlike products, update and delete report success=True whether or not a
document matched; callers cannot tell a missing category from a removed
one. Deleting a category leaves products that reference it untouched.
"""

import logging
from typing import Any, Dict, List

from app.database import MongoStore, store_errors, to_object_id
from app.models.documents import Category
from app.schemas.responses import SuccessResponse

logger = logging.getLogger(__name__)


class CategoryService:

    async def list_categories(self, store: MongoStore) -> List[Dict[str, Any]]:
        collections = await store.connect()
        with store_errors("find", "categories"):
            docs = await collections.categories.find().to_list()
            return [Category.model_validate(doc).to_response() for doc in docs]

    async def get_category(self, store: MongoStore, category_id: str) -> Dict[str, Any]:
        """Fetch one category, or {} when no category has that ID."""
        oid = to_object_id(category_id)
        collections = await store.connect()
        with store_errors("find_one", "categories"):
            doc = await collections.categories.find_one({"_id": oid})
            if doc is None:
                return {}
            return Category.model_validate(doc).to_response()

    async def create_category(self, store: MongoStore, body: Dict[str, Any]) -> SuccessResponse:
        collections = await store.connect()
        with store_errors("insert_one", "categories"):
            result = await collections.categories.insert_one(dict(body))
        logger.info("Category created: %s", result.inserted_id)
        return SuccessResponse(success=True)

    async def update_category(
        self, store: MongoStore, category_id: str, body: Dict[str, Any]
    ) -> SuccessResponse:
        oid = to_object_id(category_id)
        collections = await store.connect()
        with store_errors("update_one", "categories"):
            await collections.categories.update_one({"_id": oid}, {"$set": body})
        return SuccessResponse(success=True)

    async def delete_category(self, store: MongoStore, category_id: str) -> SuccessResponse:
        oid = to_object_id(category_id)
        collections = await store.connect()
        with store_errors("delete_one", "categories"):
            await collections.categories.delete_one({"_id": oid})
        return SuccessResponse(success=True)


category_service = CategoryService()
