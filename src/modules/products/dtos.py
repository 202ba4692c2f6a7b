"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the RPC handlers and the Service layer.
DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial updates (``id`` + changed fields).
- ``ProductIdDTO``: input addressing a single product.
- ``ValidateProductsDTO``: input for bulk existence validation.
- ``ProductOutputDTO``: output with all product fields.
- ``ProductPageDTO``: output of the paginated listing.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

if TYPE_CHECKING:
    from modules.products.models import Product


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates:
    - ``name`` is a non-empty string.
    - ``price`` is a non-negative number with at most 2 decimal places.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    price: Decimal = Field(ge=0, decimal_places=2)
    available: bool = True
    description: str = ""

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip()


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    ``id`` addresses the product; every other field is optional and only
    fields present in the payload are applied.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    available: Optional[bool] = None
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip() if v is not None else v

    def changes(self) -> Dict[str, Any]:
        """Fields supplied by the caller, ``id`` excluded."""
        return self.model_dump(exclude_unset=True, exclude={"id"})


class ProductIdDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int


class ValidateProductsDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    ids: List[int]


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class ProductOutputDTO(BaseModel):
    """Immutable DTO for product responses; ``price`` renders as a JSON number."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    description: str
    price: Decimal
    available: bool
    created_at: datetime
    updated_at: datetime

    @field_serializer("price", when_used="json")
    def serialize_price(self, v: Decimal) -> float:
        return float(v)

    @classmethod
    def from_entity(cls, product: Product) -> ProductOutputDTO:
        """Build an output DTO from a Product model instance."""
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            available=product.available,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class PageMetaDTO(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # ``totalPages`` carries the total live count.
    total_pages: int = Field(alias="totalPages")
    page: int
    last_page: int = Field(alias="lastPage")


class ProductPageDTO(BaseModel):
    """``{data, meta}`` listing envelope."""

    model_config = ConfigDict(frozen=True)

    data: List[ProductOutputDTO]
    meta: PageMetaDTO

    @classmethod
    def from_result(cls, result: Dict[str, Any]) -> ProductPageDTO:
        return cls(
            data=[ProductOutputDTO.from_entity(p) for p in result["data"]],
            meta=PageMetaDTO(**result["meta"]),
        )
