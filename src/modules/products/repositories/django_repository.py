"""Django ORM implementation of the Product persistence gateway.

Satisfies ``IProductRepository`` using Django's QuerySet API.  The
gateway does not open transactions for multi-statement operations: the
Service Layer owns that boundary.  Missing rows raise
``Product.DoesNotExist``; store failures propagate as ``DatabaseError``.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import structlog
from django.db import connections
from django.utils import timezone

from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product gateway backed by Django ORM."""

    def connect(self) -> None:
        """Open the connection used by the ``products`` table."""
        connection = connections[Product.objects.db]
        connection.ensure_connection()
        logger.info("database.connected", vendor=connection.vendor, alias=connection.alias)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_by_id(self, id: int) -> Optional[Product]:
        """Direct read, soft-deleted rows included."""
        return Product.objects.filter(pk=id).first()

    def find_live(self, id: int) -> Optional[Product]:
        return Product.objects.live().filter(pk=id).first()

    def get_live_or_raise(self, id: int) -> Product:
        return Product.objects.live().select_for_update().get(pk=id)

    def find_live_page(self, offset: int, limit: int) -> List[Product]:
        return list(Product.objects.live().order_by("pk")[offset : offset + limit])

    def find_live_by_ids(self, ids: Iterable[int]) -> List[Product]:
        return list(Product.objects.live().filter(pk__in=list(ids)))

    def count(self) -> int:
        """Number of live products."""
        return Product.objects.live().count()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, data: Dict[str, Any]) -> Product:
        product = Product.objects.create(**data)
        logger.info("product.saved", product_id=product.pk)
        return product

    def update(self, id: int, data: Dict[str, Any]) -> Product:
        """Apply ``data`` to row ``id`` regardless of liveness.

        Raises ``Product.DoesNotExist`` when no row has that id.
        """
        updated = Product.objects.filter(pk=id).update(**data, updated_at=timezone.now())
        if not updated:
            raise Product.DoesNotExist(f"No product row with id {id}.")
        logger.info("product.saved", product_id=id, fields=sorted(data))
        return Product.objects.get(pk=id)
