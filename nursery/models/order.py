# nursery/models/order.py
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field


class Order(SQLModel, table=True):
    """
    Completed checkout.

    Append-only: rows are created once, together with the stock
    decrement of every line item, and never updated afterwards.
    """

    __tablename__ = "orders"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        description="Shopper name",
    )
    phone: str = Field(
        description="Contact phone number for delivery",
    )
    address: str = Field(
        description="Delivery address",
    )

    # Stored as supplied by the client, not recomputed from line items
    grand_total: float = Field(
        description="Order total as sent by the client",
    )

    # Snapshot of the request line items, in input order
    products: list[dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )

    ordered_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
        description="Creation timestamp (UTC)",
    )
