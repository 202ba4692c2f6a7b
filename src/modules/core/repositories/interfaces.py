"""Generic persistence gateway interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that domain-specific
gateways extend.  Services hold a gateway by composition and depend on
this abstraction, never on the Django ORM directly.

Look-ups that find nothing raise the model's ``DoesNotExist``
(``django.core.exceptions.ObjectDoesNotExist``); every other store
failure surfaces as ``django.db.DatabaseError``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic gateway contract.

    Type parameter ``T`` is the model managed by the gateway.
    """

    @abstractmethod
    def connect(self) -> None:
        """Open the underlying database connection (called once on startup)."""

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[T]:
        """Direct read by primary key, ignoring any liveness filter."""

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> T:
        """Insert a new record and return it."""

    @abstractmethod
    def update(self, id: int, data: Dict[str, Any]) -> T:
        """Apply ``data`` to the record ``id`` and return the stored row."""

    @abstractmethod
    def count(self) -> int:
        """Count the records visible to callers."""
