# nursery/routers/cart.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from nursery.core.config import get_settings
from nursery.core.responses import send_response
from nursery.core.scope import get_cart_scope
from nursery.database import get_session
from nursery.repositories.cart_repo import CartRepository
from nursery.repositories.order_repo import OrderRepository
from nursery.repositories.product_repo import ProductRepository
from nursery.schemas.cart import CartLineCreate, CartLineRead
from nursery.services.inventory_service import InventoryService

router = APIRouter(prefix="/cart", tags=["Cart"])

settings = get_settings()

service = InventoryService(
    ProductRepository(),
    CartRepository(),
    OrderRepository(),
    restore_stock_on_remove=settings.RESTORE_STOCK_ON_CART_REMOVE,
)


@router.post("")
def add_to_cart(
    payload: CartLineCreate,
    session: Session = Depends(get_session),
    scope: str = Depends(get_cart_scope),
):
    """
    Add a product to the cart, reserving its stock.

    Body: the product id as `_id`, a `quantity`, and any extra fields
    to keep on the cart line. Adding a product already in the cart
    increases that line's quantity.
    """
    line = service.add_to_cart(session, payload, scope)
    return send_response(
        True, "Product added to cart successfully", CartLineRead.from_line(line)
    )


@router.get("")
def get_cart(
    session: Session = Depends(get_session),
    scope: str = Depends(get_cart_scope),
):
    lines = service.get_cart(session, scope)
    return send_response(
        True,
        "Cart retrieved successfully",
        [CartLineRead.from_line(line) for line in lines],
    )


@router.delete("/{line_id}")
def remove_cart_line(
    line_id: uuid.UUID,
    session: Session = Depends(get_session),
    scope: str = Depends(get_cart_scope),
):
    """
    Remove a line from the cart.

    The reserved quantity is not returned to the product unless
    RESTORE_STOCK_ON_CART_REMOVE is enabled.
    """
    result = service.remove_cart_line(session, line_id, scope)
    return send_response(True, "Cart item removed successfully", result)
