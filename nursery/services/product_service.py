# nursery/services/product_service.py
import logging
import uuid

from sqlmodel import Session

from nursery.core.errors import InvalidImage, NotFound, StoreError
from nursery.core.storage_utils import (
    delete_public_url,
    generate_filename,
    upload_to_storage,
)
from nursery.models.product import Product
from nursery.repositories.product_repo import ProductRepository
from nursery.schemas.product import ProductCreate, ProductQuery, ProductUpdate

logger = logging.getLogger(__name__)

# --- Image config ---

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5MB per image

ALLOWED_IMAGE_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


class ProductService:
    """
    Business logic for the product catalog.

    Responsibilities:
      - CRUD passthrough to the repository
      - filtered / paginated listing with total count
      - image upload/replace orchestration with Supabase Storage

    Stock held in `quantity` is only touched here by explicit admin
    updates; reservations go through InventoryService.
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    # ----- Helpers -----

    @staticmethod
    def _validate_and_get_ext(content_type: str, file_bytes: bytes) -> str:
        if content_type not in ALLOWED_IMAGE_CONTENT_TYPES:
            raise InvalidImage("Unsupported image type. Allowed: JPEG, PNG, WEBP.")

        if len(file_bytes) > MAX_IMAGE_BYTES:
            raise InvalidImage("Image too large (max 5MB).")

        return ALLOWED_IMAGE_CONTENT_TYPES[content_type]

    # ----- Products -----

    def list_products(
        self,
        session: Session,
        query: ProductQuery,
    ) -> tuple[list[Product], int]:
        """
        Return one page of matching products and the total match count.
        """
        items = self.repo.list(session, query)
        total = self.repo.count(session, query)
        return items, total

    def get_product(self, session: Session, product_id: uuid.UUID) -> Product:
        product = self.repo.get_by_id(session, product_id)
        if not product:
            raise NotFound("Product not found")
        return product

    def create_product(self, session: Session, payload: ProductCreate) -> Product:
        product = Product(**payload.model_dump())
        return self.repo.create(session, product)

    def update_product(
        self,
        session: Session,
        product_id: uuid.UUID,
        payload: ProductUpdate,
    ) -> Product:
        """
        Partial update of a product. Only fields present in the body
        are written.
        """
        product = self.get_product(session, product_id)

        for field, value in payload.model_dump(exclude_unset=True).items():
            setattr(product, field, value)

        return self.repo.update(session, product)

    def delete_product(self, session: Session, product_id: uuid.UUID) -> None:
        product = self.get_product(session, product_id)
        self.repo.delete(session, product)

    # ----- Image -----

    def set_image(
        self,
        session: Session,
        product_id: uuid.UUID,
        content_type: str,
        file_bytes: bytes,
    ) -> Product:
        """
        Upload or replace the product image.

        - Validates content type + size.
        - Uploads to products/<product_id>/<uuid>.<ext>.
        - Deletes the previous image from Storage (best-effort).
        """
        product = self.get_product(session, product_id)
        ext = self._validate_and_get_ext(content_type, file_bytes)

        path = f"products/{product.id}/{generate_filename(ext)}"
        try:
            new_url = upload_to_storage(path, file_bytes, content_type)
        except Exception as exc:
            logger.error("Image upload failed for product %s: %s", product.id, exc)
            raise StoreError("Image upload failed") from exc

        old_url = product.image
        product.image = new_url
        product = self.repo.update(session, product)

        if old_url:
            try:
                delete_public_url(old_url)
            except Exception as exc:
                logger.warning("Could not delete old image %s: %s", old_url, exc)

        return product
