# nursery/routers/category.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from nursery.core.responses import send_response
from nursery.database import get_session
from nursery.repositories.category_repo import CategoryRepository
from nursery.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from nursery.services.category_service import CategoryService

router = APIRouter(prefix="/category", tags=["Category"])

repo = CategoryRepository()
service = CategoryService(repo)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    session: Session = Depends(get_session),
):
    category = service.create_category(session, payload)
    return send_response(
        True, "Category created successfully", CategoryRead.model_validate(category)
    )


@router.get("")
def list_categories(session: Session = Depends(get_session)):
    categories = service.list_categories(session)
    return send_response(
        True,
        "All categories retrieved successfully",
        [CategoryRead.model_validate(c) for c in categories],
    )


@router.get("/{category_id}")
def get_category(
    category_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    category = service.get_category(session, category_id)
    return send_response(
        True, "Category retrieved successfully", CategoryRead.model_validate(category)
    )


@router.patch("/{category_id}")
def update_category(
    category_id: uuid.UUID,
    payload: CategoryUpdate,
    session: Session = Depends(get_session),
):
    category = service.update_category(session, category_id, payload)
    return send_response(
        True, "Category updated successfully", CategoryRead.model_validate(category)
    )


@router.delete("/{category_id}")
def delete_category(
    category_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    deleted = CategoryRead.model_validate(service.get_category(session, category_id))
    service.delete_category(session, category_id)
    return send_response(True, "Category deleted successfully", deleted)
