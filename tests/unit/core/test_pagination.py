"""Unit tests for the pagination helper.

Covers:
- PaginationDTO defaults and lower bounds.
- page_window offset arithmetic.
- last_page rounding.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from modules.core.pagination import PaginationDTO, last_page, page_window

pytestmark = pytest.mark.unit


class TestPaginationDTO:
    def test_defaults(self):
        dto = PaginationDTO()
        assert dto.page == 1
        assert dto.limit == 10

    def test_coerces_query_strings(self):
        dto = PaginationDTO.model_validate({"page": "3", "limit": "25"})
        assert dto.page == 3
        assert dto.limit == 25

    @pytest.mark.parametrize("field", ["page", "limit"])
    def test_zero_rejected(self, field):
        with pytest.raises(ValidationError):
            PaginationDTO(**{field: 0})

    def test_is_immutable(self):
        dto = PaginationDTO()
        with pytest.raises(ValidationError):
            dto.page = 2


class TestPageWindow:
    @pytest.mark.parametrize(
        "page,limit,expected",
        [(1, 10, (0, 10)), (2, 10, (10, 10)), (5, 3, (12, 3)), (1, 1, (0, 1))],
    )
    def test_offset(self, page, limit, expected):
        assert page_window(page, limit) == expected

    def test_rejects_page_below_one(self):
        with pytest.raises(ValueError):
            page_window(0, 10)


class TestLastPage:
    @pytest.mark.parametrize(
        "total,limit,expected",
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (7, 1, 7)],
    )
    def test_ceil(self, total, limit, expected):
        assert last_page(total, limit) == expected
