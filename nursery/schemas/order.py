# nursery/schemas/order.py
import uuid
from datetime import datetime
from typing import Any

from pydantic import AliasChoices, ConfigDict, Field, field_validator

from nursery.schemas.common import ApiModel


class OrderLineItem(ApiModel):
    """
    One requested product inside a checkout payload.

    Extra fields (name, price, image ...) are kept in the order snapshot.
    """

    model_config = ConfigDict(extra="allow")

    product_id: uuid.UUID = Field(
        validation_alias=AliasChoices("productId", "_id", "product_id"),
        serialization_alias="productId",
    )
    quantity: int

    def snapshot(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class OrderCreate(ApiModel):
    """
    Payload for POST /order.

    Required-field checks live in the service so a missing field is
    reported as an invalid order rather than a validation error.
    """

    name: str | None = None
    phone: str | None = None
    address: str | None = None
    grand_total: float | None = None
    products: list[OrderLineItem] = Field(default_factory=list)

    @field_validator("name", "phone", "address")
    @classmethod
    def strip_blank(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class OrderRead(ApiModel):
    id: uuid.UUID = Field(alias="_id")
    name: str
    phone: str
    address: str
    grand_total: float
    products: list[dict[str, Any]]
    ordered_at: datetime


class FailedLineItem(ApiModel):
    product_id: uuid.UUID
    reason: str
