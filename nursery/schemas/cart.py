# nursery/schemas/cart.py
import uuid
from datetime import datetime
from typing import Any

from pydantic import AliasChoices, ConfigDict, Field

from nursery.models.cart import CartLine
from nursery.schemas.common import ApiModel

# Keys owned by the cart line itself; never copied from caller extras
RESERVED_CART_KEYS = frozenset(
    {
        "_id",
        "id",
        "productId",
        "product_id",
        "quantity",
        "scope",
        "extra",
        "createdAt",
        "created_at",
        "updatedAt",
        "updated_at",
    }
)


class CartLineCreate(ApiModel):
    """
    Payload for POST /cart.

    Clients usually post the product document itself plus a quantity,
    so the product id arrives as `_id`. Anything else in the body is
    kept on the cart line as extra fields.
    """

    model_config = ConfigDict(extra="allow")

    product_id: uuid.UUID = Field(
        validation_alias=AliasChoices("_id", "productId", "product_id"),
        serialization_alias="productId",
    )
    # Not constrained here: non-positive amounts are refused as insufficient stock
    quantity: int

    def extra_fields(self) -> dict[str, Any]:
        return {
            k: v
            for k, v in (self.model_extra or {}).items()
            if k not in RESERVED_CART_KEYS
        }


class CartLineRead(ApiModel):
    """
    Read model for a cart line, with its extra fields flattened in.
    """

    model_config = ConfigDict(extra="allow")

    id: uuid.UUID = Field(alias="_id")
    product_id: uuid.UUID
    quantity: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_line(cls, line: CartLine) -> "CartLineRead":
        extra = {k: v for k, v in line.extra.items() if k not in RESERVED_CART_KEYS}
        return cls(
            **extra,
            id=line.id,
            product_id=line.product_id,
            quantity=line.quantity,
            created_at=line.created_at,
            updated_at=line.updated_at,
        )
