# nursery/core/errors.py
from typing import Any

from fastapi import status


class ShopError(Exception):
    """
    Base class for every failure the API reports to clients.

    Services raise these instead of HTTPException so the same rules can be
    exercised without a request. `nursery.main` turns them into the standard
    response envelope with `success: false`.
    """

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None, data: Any = None) -> None:
        self.message = message or self.default_message
        self.data = data
        super().__init__(self.message)


class NotFound(ShopError):
    """Referenced product, category, cart line or order does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class InvalidOrder(ShopError):
    """Checkout payload is missing required fields or line items."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid order"


class InsufficientStock(ShopError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Insufficient stock"


class PartialFailure(ShopError):
    """
    Checkout refused because some line items could not be reserved.

    `data` holds the failed items as [{"productId": ..., "reason": ...}].
    """

    status_code = status.HTTP_409_CONFLICT
    default_message = "Some items could not be ordered"


class Conflict(ShopError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class StoreError(ShopError):
    """Persistence or storage backend failure, not a business rule."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Storage backend unavailable"


class InvalidImage(ShopError):
    """Uploaded file is not an accepted image type or is too large."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid image"
