# nursery/services/inventory_service.py
import logging
import uuid
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from nursery.core.errors import (
    InsufficientStock,
    InvalidOrder,
    NotFound,
    PartialFailure,
)
from nursery.models.cart import CartLine
from nursery.models.order import Order
from nursery.repositories.cart_repo import CartRepository
from nursery.repositories.order_repo import OrderRepository
from nursery.repositories.product_repo import ProductRepository
from nursery.schemas.cart import CartLineCreate
from nursery.schemas.order import FailedLineItem, OrderCreate

logger = logging.getLogger(__name__)

REASON_NOT_FOUND = "not found"
REASON_INSUFFICIENT_STOCK = "insufficient stock"


class InventoryService:
    """
    Keeps product stock, cart lines and orders consistent.

    Responsibilities:
      - reserve stock into the cart at add-to-cart time
      - merge repeated adds of a product into one cart line
      - validate and decrement stock per line item at checkout
      - write the order and empty the cart scope

    Every stock change goes through ProductRepository.reserve_stock, a
    single conditional UPDATE, so two concurrent requests can never both
    take the last units. Each public operation is one transaction:
    either all of its writes are committed or none are.
    """

    def __init__(
        self,
        product_repo: ProductRepository,
        cart_repo: CartRepository,
        order_repo: OrderRepository,
        restore_stock_on_remove: bool = False,
    ):
        self.product_repo = product_repo
        self.cart_repo = cart_repo
        self.order_repo = order_repo
        self.restore_stock_on_remove = restore_stock_on_remove

    # ---- stock primitive ----

    def reserve_stock(self, session: Session, product_id: uuid.UUID, amount: int) -> None:
        """
        Take `amount` units of a product inside the current transaction.

        Raises:
            InsufficientStock: amount <= 0 or not enough units available.
        """
        if not self.product_repo.reserve_stock(session, product_id, amount):
            raise InsufficientStock(
                "Not enough stock available",
                data={"productId": str(product_id), "requested": amount},
            )

    # ---- cart ----

    def add_to_cart(
        self,
        session: Session,
        payload: CartLineCreate,
        scope: str,
    ) -> CartLine:
        """
        Reserve stock for a product and record it in the cart.

        Rules:
          - product must exist (NotFound)
          - 0 < quantity <= product.quantity (InsufficientStock)
          - an existing line for the product is merged:
            quantity is summed, extra fields are updated
        """
        product = self.product_repo.get_by_id(session, payload.product_id)
        if product is None:
            raise NotFound("Product not found")

        requested = payload.quantity
        extra_fields = payload.extra_fields()

        try:
            self.reserve_stock(session, product.id, requested)

            line = self.cart_repo.get_for_product(session, scope, product.id)
            if line is not None:
                self.cart_repo.merge_quantity(session, line, requested, extra_fields)
            else:
                line = CartLine(
                    scope=scope,
                    product_id=product.id,
                    quantity=requested,
                    extra=extra_fields,
                )
                self.cart_repo.save(session, line)
            session.commit()
        except InsufficientStock:
            session.rollback()
            logger.info(
                "Refused cart reservation: product=%s requested=%s", payload.product_id, requested
            )
            raise
        except IntegrityError:
            # Another request created the line for this product first
            session.rollback()
            return self.add_to_cart(session, payload, scope)
        except Exception:
            session.rollback()
            raise

        session.refresh(line)
        logger.info(
            "Reserved %s unit(s) of product %s into cart '%s' (line quantity %s)",
            requested,
            product.id,
            scope,
            line.quantity,
        )
        return line

    def get_cart(self, session: Session, scope: str) -> list[CartLine]:
        return self.cart_repo.list_for_scope(session, scope)

    def remove_cart_line(
        self,
        session: Session,
        line_id: uuid.UUID,
        scope: str,
    ) -> dict[str, Any]:
        """
        Delete a cart line.

        Stock is only given back when restore_stock_on_remove is enabled;
        by default the reservation stays with the product.
        """
        line = self.cart_repo.get_by_id(session, line_id)
        if line is None or line.scope != scope:
            raise NotFound("Cart item not found")

        restored = 0
        try:
            if self.restore_stock_on_remove:
                if self.product_repo.release_stock(session, line.product_id, line.quantity):
                    restored = line.quantity
            self.cart_repo.delete(session, line)
            session.commit()
        except Exception:
            session.rollback()
            raise

        return {"deletedCount": 1, "restoredQuantity": restored}

    # ---- checkout ----

    def _validate_order(self, payload: OrderCreate) -> None:
        missing = [
            wire_name
            for field, wire_name in (
                ("name", "name"),
                ("phone", "phone"),
                ("address", "address"),
                ("grand_total", "grandTotal"),
            )
            if getattr(payload, field) is None
        ]
        if missing:
            raise InvalidOrder(
                "Missing required order fields", data={"missing": missing}
            )
        if not payload.products:
            raise InvalidOrder("Order must contain at least one product")

    def place_order(
        self,
        session: Session,
        payload: OrderCreate,
        scope: str,
    ) -> Order:
        """
        Turn the requested line items into an Order.

        Steps:
          1. Validate shopper info, grandTotal and line items (InvalidOrder).
          2. For each line item, in order: product must exist and the
             conditional decrement must succeed. Failures are collected,
             the loop keeps going.
          3. Any failure: roll back every decrement and raise
             PartialFailure with the failed items. No order is created
             and the cart is left as it was.
          4. Otherwise insert the Order (grandTotal as supplied), delete
             every line of the cart scope, commit.
        """
        self._validate_order(payload)

        failures: list[FailedLineItem] = []

        try:
            for item in payload.products:
                product = self.product_repo.get_by_id(session, item.product_id)
                if product is None:
                    failures.append(
                        FailedLineItem(product_id=item.product_id, reason=REASON_NOT_FOUND)
                    )
                    continue

                if not self.product_repo.reserve_stock(session, product.id, item.quantity):
                    failures.append(
                        FailedLineItem(
                            product_id=item.product_id,
                            reason=REASON_INSUFFICIENT_STOCK,
                        )
                    )

            if failures:
                session.rollback()
                logger.info(
                    "Checkout refused: %s of %s line item(s) failed",
                    len(failures),
                    len(payload.products),
                )
                raise PartialFailure(
                    "Some products could not be ordered",
                    data=failures,
                )

            order = Order(
                name=payload.name,
                phone=payload.phone,
                address=payload.address,
                grand_total=payload.grand_total,
                products=[item.snapshot() for item in payload.products],
            )
            order = self.order_repo.create_order(session, order)

            cleared = self.cart_repo.clear_scope(session, scope)
            session.commit()
        except PartialFailure:
            raise
        except Exception:
            session.rollback()
            raise

        session.refresh(order)
        logger.info(
            "Order %s placed: %s line item(s), grandTotal=%s, cleared %s cart line(s)",
            order.id,
            len(order.products),
            order.grand_total,
            cleared,
        )
        return order
