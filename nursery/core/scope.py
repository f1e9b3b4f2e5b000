# nursery/core/scope.py
from fastapi import Header

from nursery.core.config import get_settings


def get_cart_scope(
    x_cart_scope: str | None = Header(default=None),
) -> str:
    """
    Resolve which cart a request works on.

    Without an X-Cart-Scope header every request shares the configured
    default scope, i.e. one global cart.
    """
    if x_cart_scope is not None and x_cart_scope.strip():
        return x_cart_scope.strip()
    return get_settings().CART_SCOPE
