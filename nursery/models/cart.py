# nursery/models/cart.py
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import SQLModel, Field


class CartLine(SQLModel, table=True):
    """
    Stock reserved for one product inside a cart scope.

    A scope cannot have 2 rows for the same product: adding the same
    product again merges into the existing line.
    """

    __tablename__ = "cart_lines"
    __table_args__ = (
        UniqueConstraint("scope", "product_id", name="uq_cart_lines_scope_product"),
    )

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    scope: str = Field(
        index=True,
        description="Cart scope key ('global' unless configured otherwise)",
    )

    # Plain reference, not a foreign key: deleting a product leaves the line
    product_id: uuid.UUID = Field(
        index=True,
    )

    quantity: int = Field(
        gt=0,
        description="Units reserved for this product",
    )

    # Caller-supplied fields (name, price, image ...) kept as-is
    extra: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False),
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
