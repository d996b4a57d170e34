"""Pagination: windowing an ordered collection into 1-indexed pages.

``paginate`` never sorts and never fails on an out-of-range page; the caller
orders the input first when ``sort_by`` is set.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")
U = TypeVar("U")


class PaginationParams(BaseModel):
    """Requested page, 1-indexed."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1)
    sort_by: str | None = None
    sort_order: Literal["asc", "desc"] = "asc"


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of items plus metadata about the whole collection."""

    model_config = ConfigDict(frozen=True)

    items: list[T]
    total: int
    page: int
    page_size: int
    total_pages: int

    def map_items(self, fn: Callable[[T], U]) -> PaginatedResponse[Any]:
        """Copy of this page with every item converted by *fn*."""
        return PaginatedResponse(
            items=[fn(item) for item in self.items],
            total=self.total,
            page=self.page,
            page_size=self.page_size,
            total_pages=self.total_pages,
        )


def paginate(items: Sequence[T], params: PaginationParams) -> PaginatedResponse[T]:
    """Return page ``params.page`` of *items*.

    ``total_pages = ceil(total / page_size)`` (0 for an empty collection).
    A page past the end yields an empty ``items`` list.
    """
    total = len(items)
    total_pages = math.ceil(total / params.page_size)
    start = (params.page - 1) * params.page_size
    end = start + params.page_size

    return PaginatedResponse(
        items=list(items[start:end]),
        total=total,
        page=params.page,
        page_size=params.page_size,
        total_pages=total_pages,
    )
