# nursery/schemas/product.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, Field, field_validator

from nursery.schemas.common import ApiModel

SortField = Literal["name", "price", "rating", "quantity", "created_at"]
SortOrder = Literal["asc", "desc"]


class ProductCreate(ApiModel):
    """
    Payload for creating a product.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=255)
    description: str | None = None
    category: str | None = Field(default=None, max_length=100)
    rating: float | None = Field(default=None, ge=0, le=5)
    price: float = Field(default=0, ge=0)
    image: str | None = None
    quantity: int = Field(default=0, ge=0)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("category")
    @classmethod
    def normalize_category(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class ProductUpdate(ApiModel):
    """
    Partial update payload for products.
    All fields are optional.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    category: str | None = Field(default=None, max_length=100)
    rating: float | None = Field(default=None, ge=0, le=5)
    price: float | None = Field(default=None, ge=0)
    image: str | None = None
    quantity: int | None = Field(default=None, ge=0)

    @field_validator("name", "price", "quantity")
    @classmethod
    def not_null(cls, v):
        # Omit the field to leave it unchanged; null would clear a required column
        if v is None:
            raise ValueError("field cannot be null")
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class ProductRead(ApiModel):
    """
    Product representation for clients.
    """

    id: uuid.UUID = Field(alias="_id")
    name: str
    description: str | None = None
    category: str | None = None
    rating: float | None = None
    price: float
    image: str | None = None
    quantity: int
    created_at: datetime


class ProductQuery(ApiModel):
    """
    Listing filters, pagination and sort for GET /products.

    - rating: minimum rating
    - search: case-insensitive substring of name or description
    - page: 1-based
    """

    id: uuid.UUID | None = None
    category: str | None = None
    rating: float | None = None
    search: str | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)
    sort_by: SortField | None = None
    sort_order: SortOrder = "asc"

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit
