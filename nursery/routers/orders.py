# nursery/routers/orders.py
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from nursery.core.config import get_settings
from nursery.core.responses import send_response
from nursery.core.scope import get_cart_scope
from nursery.database import get_session
from nursery.repositories.cart_repo import CartRepository
from nursery.repositories.order_repo import OrderRepository
from nursery.repositories.product_repo import ProductRepository
from nursery.schemas.order import OrderCreate, OrderRead
from nursery.services.inventory_service import InventoryService
from nursery.services.order_service import OrderService

router = APIRouter(prefix="/order", tags=["Orders"])

settings = get_settings()

order_repo = OrderRepository()
inventory = InventoryService(
    ProductRepository(),
    CartRepository(),
    order_repo,
    restore_stock_on_remove=settings.RESTORE_STOCK_ON_CART_REMOVE,
)
service = OrderService(order_repo)


@router.post("", status_code=status.HTTP_201_CREATED)
def place_order(
    payload: OrderCreate,
    session: Session = Depends(get_session),
    scope: str = Depends(get_cart_scope),
):
    """
    Checkout.

    Decrements stock for every line item, records the order and empties
    the cart. If any line item cannot be served nothing is changed and
    the failed items are returned.
    """
    order = inventory.place_order(session, payload, scope)
    return send_response(
        True, "Order placed successfully", OrderRead.model_validate(order)
    )


@router.get("")
def list_orders(
    session: Session = Depends(get_session),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
):
    """
    List orders, newest first.
    """
    orders = service.list_orders(session, skip, limit)
    return send_response(
        True,
        "All orders retrieved successfully",
        [OrderRead.model_validate(o) for o in orders],
    )


@router.get("/{order_id}")
def get_order(
    order_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    order = service.get_order(session, order_id)
    return send_response(
        True, "Order retrieved successfully", OrderRead.model_validate(order)
    )
