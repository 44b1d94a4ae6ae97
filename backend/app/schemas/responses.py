"""
ProductHub Backend — Response Schemas
=======================================

What:  Pydantic models for the fixed-shape payloads the API returns.
How:   Handlers build these and the fallback adapter dumps them to JSON.
       Document bodies (products, users, ...) are not modelled here; they
       pass through as the stored documents (see app/models/documents.py).

Field names follow the wire format used by the frontend (camelCase).
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SuccessResponse(BaseModel):
    """
    What:  Outcome of a mutation.
    Who:   PUT/DELETE/PATCH handlers, POST /ratings, POST /categories, POST /cart/add.
    """
    success: bool = Field(description="Whether the mutation took effect")


class InsertResponse(SuccessResponse):
    """
    What:  Outcome of an insert that reports the new document ID.
    Who:   POST /products and POST /users.
    """
    insertedId: Optional[str] = Field(
        default=None,
        description="ObjectId of the inserted document (hex string)",
    )


class StatusResponse(BaseModel):
    """Liveness response returned by GET /."""
    status: str = Field(description="ok or error")
    message: Optional[str] = Field(default=None, description="Human-readable status")


class DashboardResponse(BaseModel):
    """
    What:  Seller dashboard aggregate for GET /store-dashboard/{uid}.

    totalOrders and totalEarnings are placeholders: order processing does not
    exist, so both are always 0. The default instance doubles as the
    zeroed payload returned when the store is unavailable.
    """
    totalProducts: int = Field(default=0, description="Products whose userId is the seller")
    totalOrders: int = Field(default=0, description="Always 0")
    totalEarnings: int = Field(default=0, description="Always 0")
    ratings: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Ratings whose sellerId is the seller",
    )


class ErrorResponse(BaseModel):
    """
    What:  Body returned by the global exception handlers for errors that
           escape the per-route fallbacks (unexpected bugs).
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
