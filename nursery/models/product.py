# nursery/models/product.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Catalog entry for a plant / nursery item.

    Only `quantity` carries meaning for the cart and checkout flow:
    it is the stock still available for new reservations. Every other
    field is descriptive payload.
    """

    __tablename__ = "products"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        index=True,
        description="Display name of the product",
    )

    description: str | None = Field(
        default=None,
        description="Optional long description",
    )

    category: str | None = Field(
        default=None,
        index=True,
        description="Category name the product is listed under",
    )

    rating: float | None = Field(
        default=None,
        description="Average rating (0-5)",
    )

    price: float = Field(
        default=0,
        description="Unit price",
    )

    image: str | None = Field(
        default=None,
        description="Public image URL",
    )

    # Reduced by cart reservations and checkout, never below zero
    quantity: int = Field(
        default=0,
        ge=0,
        description="Units available for new reservations",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
