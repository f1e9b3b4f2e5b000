# nursery/repositories/category_repo.py
import uuid

from sqlmodel import Session, col, select

from nursery.models.category import Category


class CategoryRepository:

    def get_by_id(self, session: Session, category_id: uuid.UUID) -> Category | None:
        return session.get(Category, category_id)

    def get_by_name(self, session: Session, name: str) -> Category | None:
        stmt = select(Category).where(Category.name == name)
        return session.exec(stmt).first()

    def list(self, session: Session) -> list[Category]:
        stmt = select(Category).order_by(col(Category.name).asc())
        return list(session.exec(stmt).all())

    # CRUD
    def create(self, session: Session, category: Category) -> Category:
        session.add(category)
        session.commit()
        session.refresh(category)
        return category

    def update(self, session: Session, category: Category) -> Category:
        session.add(category)
        session.commit()
        session.refresh(category)
        return category

    def delete(self, session: Session, category: Category) -> None:
        session.delete(category)
        session.commit()
