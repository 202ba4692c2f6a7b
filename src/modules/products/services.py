"""Product service layer (Use Cases).

Orchestrates the product catalog operations, delegating persistence to
the injected ``IProductRepository``.

Rules enforced here:
- Only live products (``available=True``) are visible to reads, updates,
  removals and validation.
- Remove is a soft delete (``available=False``); rows are never deleted.
- Two-statement operations (assert + mutate, page + count) run in one
  transaction.
- Store failures never reach the caller verbatim: a missing row becomes
  ``ProductNotFound``, any other persistence error a generic
  ``BadRequestError`` and anything else an ``InternalError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, List

import structlog
from django.core.exceptions import FieldError, ObjectDoesNotExist, ValidationError
from django.db import DatabaseError, transaction

from modules.core.pagination import PaginationDTO, last_page, page_window
from modules.products.exceptions import ProductNotFound, ProductsNotFound
from shared.domain.errors import BadRequestError, InternalError

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

# Failures raised by the store itself (constraints, bad columns, driver errors).
PERSISTENCE_ERRORS = (DatabaseError, FieldError, ValidationError)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create(self, dto: CreateProductDTO) -> Product:
        """Insert a new product. No uniqueness checks beyond the store's."""
        log = logger.bind(name=dto.name)
        try:
            product = self._repo.create(dto.model_dump())
        except PERSISTENCE_ERRORS as exc:
            log.warning("product.create_failed", error=str(exc))
            raise BadRequestError() from exc
        log.info("product.created", product_id=product.id)
        return product

    def update(self, id: int, dto: UpdateProductDTO) -> Product:
        """Apply the DTO fields to the live product ``id``.

        Raises:
            ProductNotFound: no live product with that id.
            BadRequestError: the store rejected the change.
        """
        return self._assert_live_then_update(id, dto.changes(), action="updated")

    def remove(self, id: int) -> Product:
        """Soft-delete the live product ``id``; returns the retired row.

        Raises:
            ProductNotFound: no live product with that id.
            BadRequestError: the store rejected the change.
        """
        return self._assert_live_then_update(id, {"available": False}, action="soft_deleted")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_all(self, pagination: PaginationDTO) -> Dict[str, Any]:
        """Return ``{data, meta}`` for one page of live products."""
        offset, limit = page_window(pagination.page, pagination.limit)

        with transaction.atomic():
            products = self._repo.find_live_page(offset, limit)
            total = self._repo.count()

        return {
            "data": products,
            "meta": {
                "totalPages": total,
                "page": pagination.page,
                "lastPage": last_page(total, limit),
            },
        }

    def find_one(self, id: int) -> Product:
        """Retrieve a live product by id.

        Raises:
            ProductNotFound: no live product with that id.
        """
        product = self._repo.find_live(id)
        if not product:
            raise ProductNotFound(id)
        return product

    def validate_products(self, ids: Iterable[int]) -> List[Product]:
        """Return the live products for ``ids``; duplicates are ignored.

        The result order does not follow ``ids``.

        Raises:
            ProductsNotFound: at least one distinct id is not live.
        """
        distinct = list(dict.fromkeys(ids))
        products = self._repo.find_live_by_ids(distinct)
        if len(products) != len(distinct):
            found = {p.id for p in products}
            logger.warning(
                "product.validation_failed",
                missing=[i for i in distinct if i not in found],
            )
            raise ProductsNotFound()
        return products

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _assert_live_then_update(self, id: int, data: Dict[str, Any], action: str) -> Product:
        # The assertion result is discarded: callers only get the new row.
        log = logger.bind(product_id=id)
        try:
            with transaction.atomic():
                self._repo.get_live_or_raise(id)
                product = self._repo.update(id, data)
        except ObjectDoesNotExist as exc:
            raise ProductNotFound(id) from exc
        except PERSISTENCE_ERRORS as exc:
            log.warning("product.write_failed", error=str(exc))
            raise BadRequestError() from exc
        except Exception as exc:
            log.exception("product.write_crashed")
            raise InternalError() from exc

        log.info(f"product.{action}")
        return product
