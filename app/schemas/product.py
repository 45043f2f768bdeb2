"""
app/schemas/product.py

Request and response schemas for product endpoints.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from db.models.product import CATEGORY_MAX_LENGTH, DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH

# Numeric(12, 2) leaves ten integer digits.
MAX_PRICE = Decimal("10000000000")


class ProductCreate(BaseModel):
    """
    Fields accepted when creating a product.

    Also the store-level record shape for CSV rows, so string input such as
    "9.99" or "5" is coerced. Unknown keys are ignored.
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    price: Decimal = Field(..., ge=0, lt=MAX_PRICE)
    stock: int = Field(..., ge=0)
    category: str = Field(..., min_length=1, max_length=CATEGORY_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)

    @field_validator("description")
    @classmethod
    def _blank_description_is_none(cls, value: str | None) -> str | None:
        return value or None


class ProductUpdate(BaseModel):
    """
    Partial update payload; omitted fields keep their stored value.
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    price: Decimal | None = Field(default=None, ge=0, lt=MAX_PRICE)
    stock: int | None = Field(default=None, ge=0)
    category: str | None = Field(default=None, min_length=1, max_length=CATEGORY_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)


class ProductResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: str | None
    price: Decimal
    stock: int
    category: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str


class ProductUploadResponse(BaseModel):
    """
    API response model for a successful CSV upload.
    """

    message: str
    count: int = Field(..., ge=0)
    total_parsed: int = Field(..., ge=0)
    total_valid: int = Field(..., ge=0)
