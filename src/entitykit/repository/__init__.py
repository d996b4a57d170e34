"""Repository layer — storage contract, in-memory store, pagination, queries."""

from entitykit.repository.base import DelegatingRepository, Repository
from entitykit.repository.memory import InMemoryRepository
from entitykit.repository.pagination import (
    PaginatedResponse,
    PaginationParams,
    paginate,
)
from entitykit.repository.queries import (
    filter_items,
    find_first,
    sort_items,
    top_n,
)

__all__ = [
    "DelegatingRepository",
    "InMemoryRepository",
    "PaginatedResponse",
    "PaginationParams",
    "Repository",
    "filter_items",
    "find_first",
    "paginate",
    "sort_items",
    "top_n",
]
