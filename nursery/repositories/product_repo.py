# nursery/repositories/product_repo.py
import uuid

from sqlalchemy import func, or_, update
from sqlmodel import Session, col, select

from nursery.models.product import Product
from nursery.schemas.product import ProductQuery


class ProductRepository:
    """
    Data access layer for Product.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    - Stock methods do not commit; they run inside the caller's
      transaction.
    """

    # ----- Queries -----

    def get_by_id(self, session: Session, product_id: uuid.UUID) -> Product | None:
        return session.get(Product, product_id)

    def _filters(self, query: ProductQuery) -> list:
        clauses = []
        if query.id is not None:
            clauses.append(Product.id == query.id)
        if query.category:
            clauses.append(func.lower(Product.category) == query.category.strip().lower())
        if query.rating is not None:
            clauses.append(col(Product.rating) >= query.rating)
        if query.search:
            pattern = f"%{query.search.strip()}%"
            clauses.append(
                or_(
                    col(Product.name).ilike(pattern),
                    col(Product.description).ilike(pattern),
                )
            )
        return clauses

    def list(self, session: Session, query: ProductQuery) -> list[Product]:
        stmt = select(Product).where(*self._filters(query))

        if query.sort_by:
            column = col(getattr(Product, query.sort_by))
            stmt = stmt.order_by(column.desc() if query.sort_order == "desc" else column.asc())
        else:
            stmt = stmt.order_by(col(Product.created_at).asc())

        stmt = stmt.offset(query.skip).limit(query.limit)
        return list(session.exec(stmt).all())

    def count(self, session: Session, query: ProductQuery) -> int:
        stmt = select(func.count()).select_from(Product).where(*self._filters(query))
        value = session.exec(stmt).one()
        return int(value or 0)

    # ----- CRUD -----

    def create(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def update(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def delete(self, session: Session, product: Product) -> None:
        session.delete(product)
        session.commit()

    # ----- Stock -----

    def reserve_stock(self, session: Session, product_id: uuid.UUID, amount: int) -> bool:
        """
        Atomically take `amount` units from a product's available quantity.

        Single conditional UPDATE:
            quantity = quantity - amount WHERE id = :id AND quantity >= amount

        Returns:
            True if the row was decremented, False if the product is
            missing or does not have enough stock. Nothing changes on False.
        """
        if amount <= 0:
            return False

        stmt = (
            update(Product)
            .where(col(Product.id) == product_id, col(Product.quantity) >= amount)
            .values(quantity=Product.quantity - amount)
            .execution_options(synchronize_session=False)
        )
        result = session.exec(stmt)
        return result.rowcount == 1

    def release_stock(self, session: Session, product_id: uuid.UUID, amount: int) -> bool:
        """
        Give `amount` units back to a product. Returns False if the product
        no longer exists.
        """
        stmt = (
            update(Product)
            .where(col(Product.id) == product_id)
            .values(quantity=Product.quantity + amount)
            .execution_options(synchronize_session=False)
        )
        result = session.exec(stmt)
        return result.rowcount == 1
