"""
ProductHub Backend — Cart Service
===================================

What:  Reads a user's cart and adds products to it.
How:   One Cart document per userId, holding an ordered list of
       {productId, qty} items. The cart is created by the first add.

Add-to-cart Flow:
    ┌──────────┐  no cart  ┌──────────────────────────────┐
    │  load by │──────────▶│ insert {userId, items:[p x1]}│
    │  userId  │           └──────────────────────────────┘
    └────┬─────┘
         │ cart found
         ▼
    ┌──────────────────────────┐     ┌───────────────────────────┐
    │ item for productId?      │────▶│ $set the whole items list │
    │  yes: qty += 1           │     └───────────────────────────┘
    │  no:  append at qty 1    │
    └──────────────────────────┘

Known race:
    The flow is read-modify-write with no lock or transaction. Two adds for
    the same user running concurrently can both read the same items list and
    one increment is lost; two first-adds can also create two carts. An
    atomic alternative is a single update_one with upsert=True using $inc on
    the matching array element (and $push when absent), backed by a unique
    index on userId. It is not used here so the stored shape and write
    pattern stay exactly what existing clients expect.
"""

import logging
from typing import Any, Dict, List

from app.database import MongoStore, store_errors
from app.exceptions import ValidationError
from app.models.documents import Cart
from app.schemas.responses import SuccessResponse

logger = logging.getLogger(__name__)


class CartService:

    async def get_items(self, store: MongoStore, user_id: str) -> List[Dict[str, Any]]:
        """Items of the user's cart, or [] when the user has no cart yet."""
        collections = await store.connect()
        with store_errors("find_one", "carts"):
            doc = await collections.carts.find_one({"userId": user_id})
            if doc is None:
                return []
            return Cart.model_validate(doc).items_payload()

    async def add_item(self, store: MongoStore, body: Dict[str, Any]) -> SuccessResponse:
        """
        Add one unit of a product to a user's cart.

        Args:
            body: request JSON; must carry non-empty userId and productId

        Raises:
            ValidationError: userId or productId missing or empty
        """
        user_id = body.get("userId")
        product_id = body.get("productId")
        if not user_id:
            raise ValidationError(message="userId is required", field="userId")
        if not product_id:
            raise ValidationError(message="productId is required", field="productId")

        collections = await store.connect()
        with store_errors("add_item", "carts"):
            doc = await collections.carts.find_one({"userId": user_id})

            if doc is None:
                cart = Cart(userId=user_id)
                cart.add_product(product_id)
                await collections.carts.insert_one(
                    {"userId": user_id, "items": cart.items_payload()}
                )
                logger.info("Cart created for user %s", user_id)
            else:
                cart = Cart.model_validate(doc)
                cart.add_product(product_id)
                await collections.carts.update_one(
                    {"userId": user_id},
                    {"$set": {"items": cart.items_payload()}},
                )

        return SuccessResponse(success=True)


cart_service = CartService()
