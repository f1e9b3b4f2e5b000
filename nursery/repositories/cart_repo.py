# nursery/repositories/cart_repo.py
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, update
from sqlmodel import Session, col, select

from nursery.models.cart import CartLine


class CartRepository:
    """
    Data access layer for cart lines.

    NOTE:
      - No commits here; cart writes always go together with a stock
        change. The service is responsible for calling session.commit().
    """

    # Get lines for a scope
    def list_for_scope(self, session: Session, scope: str) -> list[CartLine]:
        stmt = (
            select(CartLine)
            .where(CartLine.scope == scope)
            .order_by(col(CartLine.created_at).asc())
        )
        return list(session.exec(stmt).all())

    def get_for_product(
        self, session: Session, scope: str, product_id: uuid.UUID
    ) -> CartLine | None:
        stmt = select(CartLine).where(
            CartLine.scope == scope, CartLine.product_id == product_id
        )
        return session.exec(stmt).first()

    def get_by_id(self, session: Session, line_id: uuid.UUID) -> CartLine | None:
        return session.get(CartLine, line_id)

    def save(self, session: Session, line: CartLine) -> CartLine:
        session.add(line)
        session.flush()
        return line

    def merge_quantity(
        self,
        session: Session,
        line: CartLine,
        amount: int,
        extra: dict[str, Any],
    ) -> CartLine:
        """
        Add `amount` to an existing line with an in-database increment,
        so concurrent merges into the same line are not lost.

        The extra fields are not merged in the database: they are built
        from this session's copy of `line.extra`, so two concurrent merges
        can drop each other's extra keys. Extras are opaque display data;
        only the quantity has to be exact.
        """
        stmt = (
            update(CartLine)
            .where(col(CartLine.id) == line.id)
            .values(
                quantity=CartLine.quantity + amount,
                extra={**line.extra, **extra},
                updated_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        session.exec(stmt)
        session.refresh(line)
        return line

    def delete(self, session: Session, line: CartLine) -> None:
        session.delete(line)
        session.flush()

    def clear_scope(self, session: Session, scope: str) -> int:
        stmt = (
            delete(CartLine)
            .where(col(CartLine.scope) == scope)
            .execution_options(synchronize_session="fetch")
        )
        result = session.exec(stmt)
        return result.rowcount
