"""Unit tests for ProductService.

Covers:
- create: delegation, store failure folded to BadRequest.
- find_all: window, meta, lastPage from a fresh count.
- find_one: happy path, not found message.
- update / remove: assert-then-mutate, NotFound vs BadRequest vs
  InternalError folding, soft delete semantics.
- validate_products: de-duplication and mismatch.
"""

from __future__ import annotations

import math
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from django.db import DatabaseError, IntegrityError

from modules.core.pagination import PaginationDTO
from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.exceptions import ProductNotFound, ProductsNotFound
from modules.products.models import Product
from modules.products.repositories import ProductDjangoRepository
from modules.products.services import ProductService
from shared.domain.errors import BadRequestError, InternalError

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    return MagicMock()


@pytest.fixture()
def service(mock_repo):
    return ProductService(repository=mock_repo)


@pytest.fixture()
def orm_service():
    return ProductService(repository=ProductDjangoRepository())


def _make_product(**overrides) -> Product:
    defaults = {"name": "Widget", "price": Decimal("19.99")}
    defaults.update(overrides)
    return Product.objects.create(**defaults)


# ===========================================================================
# create
# ===========================================================================


class TestCreate:
    def test_success(self, service, mock_repo):
        mock_repo.create.side_effect = lambda data: Product(id=1, **data)

        product = service.create(CreateProductDTO(name="A", price=Decimal("10")))

        assert product.id == 1
        mock_repo.create.assert_called_once_with(
            {"name": "A", "price": Decimal("10"), "available": True, "description": ""}
        )

    def test_store_failure_is_bad_request(self, service, mock_repo):
        mock_repo.create.side_effect = IntegrityError("NOT NULL constraint failed")

        with pytest.raises(BadRequestError, match="request error"):
            service.create(CreateProductDTO(name="A", price=Decimal("10")))


# ===========================================================================
# find_all
# ===========================================================================


class TestFindAll:
    def test_uses_window_and_count(self, service, mock_repo):
        mock_repo.find_live_page.return_value = []
        mock_repo.count.return_value = 21

        result = service.find_all(PaginationDTO(page=3, limit=10))

        mock_repo.find_live_page.assert_called_once_with(20, 10)
        assert result["meta"] == {"totalPages": 21, "page": 3, "lastPage": 3}

    def test_empty_store(self, service, mock_repo):
        mock_repo.find_live_page.return_value = []
        mock_repo.count.return_value = 0

        result = service.find_all(PaginationDTO())

        assert result == {"data": [], "meta": {"totalPages": 0, "page": 1, "lastPage": 0}}

    @pytest.mark.parametrize("page,limit", [(1, 1), (1, 3), (2, 3), (3, 4), (9, 2)])
    def test_page_bounds_against_store(self, orm_service, page, limit):
        for i in range(7):
            _make_product(name=f"Live {i}")
        _make_product(name="Retired", available=False)

        result = orm_service.find_all(PaginationDTO(page=page, limit=limit))

        assert len(result["data"]) <= limit
        assert all(p.available for p in result["data"])
        assert result["meta"]["totalPages"] == 7
        assert result["meta"]["lastPage"] == math.ceil(7 / limit)

    def test_last_page_reflects_current_count(self, orm_service):
        _make_product()
        first = orm_service.find_all(PaginationDTO(limit=1))
        _make_product()
        second = orm_service.find_all(PaginationDTO(limit=1))
        assert first["meta"]["lastPage"] == 1
        assert second["meta"]["lastPage"] == 2


# ===========================================================================
# find_one
# ===========================================================================


class TestFindOne:
    def test_success(self, service, mock_repo):
        existing = Product(id=5, name="Widget", price=Decimal("1.00"))
        mock_repo.find_live.return_value = existing

        assert service.find_one(5) is existing

    def test_not_found_message(self, service, mock_repo):
        mock_repo.find_live.return_value = None

        with pytest.raises(ProductNotFound, match="Product with id #5 not found") as info:
            service.find_one(5)
        assert info.value.status == 404


# ===========================================================================
# update
# ===========================================================================


class TestUpdate:
    def test_asserts_then_updates(self, service, mock_repo):
        updated = Product(id=1, name="New", price=Decimal("1.00"))
        mock_repo.update.return_value = updated

        result = service.update(1, UpdateProductDTO(id=1, name="New"))

        assert result is updated
        mock_repo.get_live_or_raise.assert_called_once_with(1)
        mock_repo.update.assert_called_once_with(1, {"name": "New"})

    def test_missing_row_is_not_found(self, service, mock_repo):
        mock_repo.get_live_or_raise.side_effect = Product.DoesNotExist

        with pytest.raises(ProductNotFound, match="#1"):
            service.update(1, UpdateProductDTO(id=1, name="New"))
        mock_repo.update.assert_not_called()

    def test_store_failure_is_bad_request(self, service, mock_repo):
        mock_repo.update.side_effect = DatabaseError("column price violates check")

        with pytest.raises(BadRequestError) as info:
            service.update(1, UpdateProductDTO(id=1, name="New"))
        assert info.value.message == "request error"
        assert "column" not in str(info.value)

    def test_unexpected_failure_is_internal(self, service, mock_repo):
        mock_repo.update.side_effect = RuntimeError("driver crashed")

        with pytest.raises(InternalError):
            service.update(1, UpdateProductDTO(id=1, name="New"))

    def test_soft_deleted_product_is_not_updated(self, orm_service):
        product = _make_product(available=False)

        with pytest.raises(ProductNotFound):
            orm_service.update(product.id, UpdateProductDTO(id=product.id, name="Revived"))

        product.refresh_from_db()
        assert product.name == "Widget"
        assert product.available is False

    def test_updates_live_product(self, orm_service):
        product = _make_product()

        result = orm_service.update(
            product.id, UpdateProductDTO(id=product.id, price=Decimal("5.50"))
        )

        assert result.price == Decimal("5.50")
        assert result.name == "Widget"


# ===========================================================================
# remove
# ===========================================================================


class TestRemove:
    def test_sets_available_false(self, service, mock_repo):
        service.remove(3)
        mock_repo.get_live_or_raise.assert_called_once_with(3)
        mock_repo.update.assert_called_once_with(3, {"available": False})

    def test_missing_row_is_not_found(self, service, mock_repo):
        mock_repo.get_live_or_raise.side_effect = Product.DoesNotExist

        with pytest.raises(ProductNotFound):
            service.remove(3)

    def test_row_survives_removal(self, orm_service):
        product = _make_product()

        removed = orm_service.remove(product.id)

        assert removed.available is False
        stored = ProductDjangoRepository().get_by_id(product.id)
        assert stored is not None
        assert stored.available is False

    def test_second_removal_is_not_found(self, orm_service):
        product = _make_product()
        orm_service.remove(product.id)

        with pytest.raises(ProductNotFound):
            orm_service.remove(product.id)


# ===========================================================================
# validate_products
# ===========================================================================


class TestValidateProducts:
    def test_deduplicates_ids(self, service, mock_repo):
        mock_repo.find_live_by_ids.return_value = [Product(id=1), Product(id=2)]

        result = service.validate_products([1, 1, 2])

        assert len(result) == 2
        mock_repo.find_live_by_ids.assert_called_once_with([1, 2])

    def test_missing_id_is_bad_request(self, service, mock_repo):
        mock_repo.find_live_by_ids.return_value = [Product(id=1)]

        with pytest.raises(ProductsNotFound, match="some products were not found") as info:
            service.validate_products([1, 999])
        assert info.value.status == 400

    def test_empty_list(self, service, mock_repo):
        mock_repo.find_live_by_ids.return_value = []
        assert service.validate_products([]) == []

    def test_soft_deleted_counts_as_missing(self, orm_service):
        live = _make_product()
        retired = _make_product(available=False)

        with pytest.raises(ProductsNotFound):
            orm_service.validate_products([live.id, retired.id])

    def test_against_store(self, orm_service):
        a = _make_product(name="A")
        b = _make_product(name="B")

        result = orm_service.validate_products([b.id, a.id, a.id])

        assert {p.id for p in result} == {a.id, b.id}
