"""Product persistence gateway interface.

Extends ``IRepository[Product]`` with the live-only look-ups used by the
soft-delete rules: every read the service exposes is filtered on
``available=True``.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Iterable, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Gateway contract for the ``products`` table."""

    @abstractmethod
    def find_live(self, id: int) -> Optional[Product]:
        """Return the live product ``id`` or ``None``."""

    @abstractmethod
    def get_live_or_raise(self, id: int) -> Product:
        """Return the live product ``id``, locking its row when supported.

        Raises ``Product.DoesNotExist`` when there is no live row.
        """

    @abstractmethod
    def find_live_page(self, offset: int, limit: int) -> List[Product]:
        """Window of live products in primary-key order."""

    @abstractmethod
    def find_live_by_ids(self, ids: Iterable[int]) -> List[Product]:
        """Live products whose id is in ``ids`` (order not guaranteed)."""
