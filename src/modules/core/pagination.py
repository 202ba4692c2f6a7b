"""Page-number pagination shared by list operations.

``lastPage`` is always computed from a count taken in the same call,
never from a cached total.
"""

from __future__ import annotations

import math
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


class PaginationDTO(BaseModel):
    """Immutable ``(page, limit)`` request; both values start at 1."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=DEFAULT_PAGE, ge=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1)


def page_window(page: int, limit: int) -> Tuple[int, int]:
    """Return the ``(offset, limit)`` window for a 1-based page."""
    if page < 1 or limit < 1:
        raise ValueError("page and limit must be greater than or equal to 1.")
    return (page - 1) * limit, limit


def last_page(total: int, limit: int) -> int:
    return math.ceil(total / limit)
