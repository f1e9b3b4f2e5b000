# nursery/services/order_service.py
import uuid

from sqlmodel import Session

from nursery.core.errors import NotFound
from nursery.models.order import Order
from nursery.repositories.order_repo import OrderRepository


class OrderService:
    """
    Read access to placed orders.

    Orders are written only by InventoryService.place_order and are
    never updated or deleted.
    """

    def __init__(self, order_repo: OrderRepository):
        self.order_repo = order_repo

    def list_orders(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Order]:
        """
        List orders, newest first.
        """
        return self.order_repo.list_all(session, skip, limit)

    def get_order(self, session: Session, order_id: uuid.UUID) -> Order:
        order = self.order_repo.get_by_id(session, order_id)
        if not order:
            raise NotFound("Order not found")
        return order
