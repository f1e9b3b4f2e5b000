# nursery/routers/products.py
import uuid

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlmodel import Session

from nursery.core.errors import InvalidImage
from nursery.core.responses import send_response
from nursery.database import get_session
from nursery.repositories.product_repo import ProductRepository
from nursery.schemas.product import (
    ProductCreate,
    ProductQuery,
    ProductRead,
    ProductUpdate,
    SortField,
    SortOrder,
)
from nursery.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

repo = ProductRepository()
service = ProductService(repo)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    session: Session = Depends(get_session),
):
    """
    Create a new product.
    """
    product = service.create_product(session, payload)
    return send_response(
        True, "Product created successfully", ProductRead.model_validate(product)
    )


@router.get("")
def list_products(
    session: Session = Depends(get_session),
    id: uuid.UUID | None = None,
    category: str | None = None,
    rating: float | None = None,
    search: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    sort_by: SortField | None = Query(default=None, alias="sortBy"),
    sort_order: SortOrder = Query(default="asc", alias="sortOrder"),
):
    """
    List products.

    - Filters: id, category, rating (minimum), search (name/description)
    - Pagination: page (1-based), limit
    - Sort: sortBy + sortOrder (asc|desc)

    `length` in the response is the total number of matches.
    """
    query = ProductQuery(
        id=id,
        category=category,
        rating=rating,
        search=search,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    items, total = service.list_products(session, query)
    return send_response(
        True,
        "All products retrieved successfully",
        [ProductRead.model_validate(p) for p in items],
        length=total,
    )


@router.get("/{product_id}")
def get_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    product = service.get_product(session, product_id)
    return send_response(
        True, "Product retrieved successfully", ProductRead.model_validate(product)
    )


@router.patch("/{product_id}")
def update_product(
    product_id: uuid.UUID,
    payload: ProductUpdate,
    session: Session = Depends(get_session),
):
    product = service.update_product(session, product_id, payload)
    return send_response(
        True, "Product updated successfully", ProductRead.model_validate(product)
    )


@router.delete("/{product_id}")
def delete_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    deleted = ProductRead.model_validate(service.get_product(session, product_id))
    service.delete_product(session, product_id)
    return send_response(True, "Product deleted successfully", deleted)


@router.post(
    "/{product_id}/image",
    summary="Upload or replace the product image",
)
def upload_product_image(
    product_id: uuid.UUID,
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
):
    """
    Upload a new image for the product.

    - Accepts JPEG, PNG, WEBP (max 5MB).
    - Replaces any previous image.
    """
    if not file.content_type:
        raise InvalidImage("Missing content-type for uploaded file")

    file_bytes = file.file.read()
    product = service.set_image(
        session=session,
        product_id=product_id,
        content_type=file.content_type,
        file_bytes=file_bytes,
    )
    return send_response(
        True, "Product image uploaded successfully", ProductRead.model_validate(product)
    )
