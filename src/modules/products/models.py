"""Product model with soft delete through the ``available`` flag.

A product is *live* while ``available`` is ``True``.  Removing a product
flips the flag; rows are never physically deleted.  ``objects`` is
unfiltered: use ``Product.objects.live()`` to see live rows only.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import TimestampedModel


class ProductQuerySet(models.QuerySet):
    """QuerySet with soft-delete helpers."""

    def live(self) -> ProductQuerySet:
        """Return only available products."""
        return self.filter(available=True)

    def retired(self) -> ProductQuerySet:
        """Return only soft-deleted products."""
        return self.filter(available=False)


class Product(TimestampedModel):
    """Catalog product."""

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(max_digits=12, decimal_places=2)
    available = models.BooleanField(default=True)

    objects = ProductQuerySet.as_manager()

    class Meta:
        db_table = "products"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["available"], name="products_available_idx"),
        ]

    @property
    def is_live(self) -> bool:
        return self.available

    def __str__(self) -> str:
        return f"#{self.pk} - {self.name}"
