"""Pydantic schemas for request and response models.

Pydantic models are used for decoding and serialising data that
crosses the boundary of the API. Decoding only checks the *shape* of
a receipt (the right keys holding strings and a list of items); the
format rules for each field live in :mod:`receipt_points.services.validation`
so a decoded receipt can still be rejected by the validator.

JSON uses camelCase keys (``purchaseDate``, ``shortDescription``)
while the Python attributes are snake_case.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _ReceiptModel(BaseModel):
    """Base for receipt payloads: camelCase aliases, immutable once built."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        frozen=True,
    )


class Item(_ReceiptModel):
    """Individual line item on a receipt."""

    short_description: str = Field(description="Short product description for the item")
    price: str = Field(description="Item price with exactly two fraction digits, e.g. 6.49")


class Receipt(_ReceiptModel):
    """A submitted purchase receipt."""

    retailer: str = Field(description="Name of the retailer or store")
    purchase_date: str = Field(description="Date of purchase, YYYY-MM-DD")
    purchase_time: str = Field(description="Time of purchase, 24-hour HH:MM")
    total: str = Field(description="Total amount paid with exactly two fraction digits")
    items: Tuple[Item, ...] = Field(default=())


# ---------------------------------------------------------------------------
# API response schemas


class ReceiptProcessResponse(BaseModel):
    id: str = Field(description="Identifier assigned to the stored receipt")


class ReceiptPointsResponse(BaseModel):
    points: int = Field(description="Number of points awarded")


class ErrorResponse(BaseModel):
    detail: str
    errors: List[Dict[str, Any]] = Field(default_factory=list)
