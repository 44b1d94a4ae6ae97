"""
ProductHub Backend — Rating Service
=====================================

What:  Inserts ratings and lists them by product or by seller.
How:   productId and sellerId are plain string filters; a rating is never
       checked against the products collection.
"""

import logging
from typing import Any, Dict, List

from app.database import MongoStore, store_errors
from app.models.documents import Rating
from app.schemas.responses import SuccessResponse

logger = logging.getLogger(__name__)


class RatingService:

    async def list_product_ratings(self, store: MongoStore, product_id: str) -> List[Dict[str, Any]]:
        return await self._find(store, {"productId": product_id})

    async def list_seller_ratings(self, store: MongoStore, seller_id: str) -> List[Dict[str, Any]]:
        return await self._find(store, {"sellerId": seller_id})

    async def create_rating(self, store: MongoStore, body: Dict[str, Any]) -> SuccessResponse:
        collections = await store.connect()
        with store_errors("insert_one", "ratings"):
            result = await collections.ratings.insert_one(dict(body))
        logger.info("Rating created: %s", result.inserted_id)
        return SuccessResponse(success=True)

    async def _find(self, store: MongoStore, query: Dict[str, Any]) -> List[Dict[str, Any]]:
        collections = await store.connect()
        with store_errors("find", "ratings"):
            docs = await collections.ratings.find(query).to_list()
            return [Rating.model_validate(doc).to_response() for doc in docs]


rating_service = RatingService()
