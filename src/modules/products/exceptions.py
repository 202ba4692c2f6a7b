"""Product domain exceptions.

Raised by the Service Layer; the RPC handlers turn them into the
normalized ``{message, status}`` error.
"""

from __future__ import annotations

from typing import Any

from shared.domain.errors import BadRequestError, NotFoundError


class ProductNotFound(NotFoundError):
    """The requested product does not exist or has been soft-deleted."""

    def __init__(self, product_id: Any) -> None:
        self.product_id = product_id
        super().__init__(f"Product with id #{product_id} not found")


class ProductsNotFound(BadRequestError):
    """At least one id passed to ``validate_products`` is not live."""

    default_message = "some products were not found"
