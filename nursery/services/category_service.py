# nursery/services/category_service.py
import uuid

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from nursery.core.errors import Conflict, NotFound
from nursery.models.category import Category
from nursery.repositories.category_repo import CategoryRepository
from nursery.schemas.category import CategoryCreate, CategoryUpdate


class CategoryService:
    """
    Category CRUD. Names are unique.
    """

    def __init__(self, repo: CategoryRepository):
        self.repo = repo

    def _ensure_name_free(self, session: Session, name: str) -> None:
        if self.repo.get_by_name(session, name) is not None:
            raise Conflict(f"Category '{name}' already exists")

    def list_categories(self, session: Session) -> list[Category]:
        return self.repo.list(session)

    def get_category(self, session: Session, category_id: uuid.UUID) -> Category:
        category = self.repo.get_by_id(session, category_id)
        if not category:
            raise NotFound("Category not found")
        return category

    def _save(self, session: Session, category: Category, create: bool) -> Category:
        """
        Persist a category. The unique index on name is the final check:
        a concurrent request may take the name after _ensure_name_free.
        """
        name = category.name
        try:
            if create:
                return self.repo.create(session, category)
            return self.repo.update(session, category)
        except IntegrityError:
            session.rollback()
            raise Conflict(f"Category '{name}' already exists")

    def create_category(self, session: Session, payload: CategoryCreate) -> Category:
        self._ensure_name_free(session, payload.name)
        return self._save(session, Category(**payload.model_dump()), create=True)

    def update_category(
        self,
        session: Session,
        category_id: uuid.UUID,
        payload: CategoryUpdate,
    ) -> Category:
        category = self.get_category(session, category_id)
        changes = payload.model_dump(exclude_unset=True)

        new_name = changes.get("name")
        if new_name is not None and new_name != category.name:
            self._ensure_name_free(session, new_name)

        for field, value in changes.items():
            setattr(category, field, value)

        return self._save(session, category, create=False)

    def delete_category(self, session: Session, category_id: uuid.UUID) -> None:
        category = self.get_category(session, category_id)
        self.repo.delete(session, category)
