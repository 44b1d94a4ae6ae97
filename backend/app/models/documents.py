"""
ProductHub Backend — Document Models
======================================

What:  Pydantic models for the documents stored in each MongoDB collection.
How:   Collections have no enforced schema: any client may $set any value on
       any key. Fields the services query or write are declared as `Any` so a
       stored value is never rejected or converted, and every other key is
       kept in the extra bag (extra="allow"). Documents are built with
       `model_validate(raw_doc)` and rendered with `to_response()`, which
       returns each stored value unchanged.
Who:   Used by the services when reading documents and shaping responses.

Collections:
    products    Product     userId, inStock, createdAt
    users       User        (opaque)
    ratings     Rating      productId, sellerId (query filters only)
    categories  Category    (opaque)
    carts       Cart        userId, items[] of CartItem{productId, qty}
    stores      (none)      reserved, never read or written

Carts are the one typed exception: add-to-cart does arithmetic on `qty`, so a
cart whose items are not {productId, qty >= 1} raises MalformedDocumentError.
"""

from typing import Annotated, Any, Dict, List

from bson import ObjectId
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _object_id_to_str(value: Any) -> Any:
    return str(value) if isinstance(value, ObjectId) else value


# ObjectId _ids render as hex strings; any other _id type is kept as stored
StoredId = Annotated[Any, BeforeValidator(_object_id_to_str)]


class Document(BaseModel):
    """
    Base for every stored document.

    An ObjectId `_id` becomes its hex string. Declared fields that were
    absent from the stored document are left out of `to_response()`, so a
    product without `createdAt` is not rendered with `"createdAt": null`.
    """

    model_config = ConfigDict(extra="allow")

    id: StoredId = Field(default=None, alias="_id")

    def to_response(self) -> Dict[str, Any]:
        unset = set(type(self).model_fields) - self.model_fields_set
        return self.model_dump(by_alias=True, exclude=unset)


class Product(Document):
    """
    A product listed by a seller; `userId` is the owning seller.

    Written by this service as str / bool / datetime, but a PUT may store
    anything, so none of the three is coerced on read.
    """

    userId: Any = None
    inStock: Any = None
    createdAt: Any = None

    @property
    def is_in_stock(self) -> bool:
        return bool(self.inStock)


class User(Document):
    pass


class Rating(Document):
    productId: Any = None
    sellerId: Any = None


class Category(Document):
    pass


class CartItem(BaseModel):
    """One line of a cart. At most one item per productId within a cart."""

    model_config = ConfigDict(extra="allow")

    productId: Any
    qty: int = Field(default=1, ge=1)


class Cart(Document):
    """
    The cart of one user. At most one Cart document exists per `userId`.

    Created implicitly by the first add-to-cart call.
    """

    userId: Any
    items: List[CartItem] = Field(default_factory=list)

    def add_product(self, product_id: Any) -> None:
        """Increment the matching item, or append a new one at quantity 1."""
        for item in self.items:
            if item.productId == product_id:
                item.qty += 1
                return
        self.items.append(CartItem(productId=product_id, qty=1))

    def items_payload(self) -> List[Dict[str, Any]]:
        return [item.model_dump() for item in self.items]
