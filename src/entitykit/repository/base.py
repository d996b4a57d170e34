"""Repository contract and the composition base for domain repositories.

All stores implement :class:`Repository` structurally; there is no required
base class.  Domain repositories hold a store and forward to it
(:class:`DelegatingRepository`) rather than inheriting from a concrete one.

Invariants:
    - The only failure at this layer is "not found" on id-keyed operations
    - ``save`` always touches ``updated_at`` and returns the stored value
    - Derived queries never mutate the store
"""

from __future__ import annotations

from typing import Generic, Protocol, TypeVar, runtime_checkable

from entitykit.core.entity import Entity
from entitykit.core.result import Result

from .pagination import PaginatedResponse, PaginationParams

T = TypeVar("T", bound=Entity)


@runtime_checkable
class Repository(Protocol[T]):
    """Id-keyed CRUD and paginated listing over entities."""

    def find_by_id(self, entity_id: str) -> Result[T, str]: ...

    def find_all(self) -> Result[list[T], str]: ...

    def find_paginated(
        self, params: PaginationParams,
    ) -> Result[PaginatedResponse[T], str]: ...

    def save(self, entity: T) -> Result[T, str]: ...

    def delete(self, entity_id: str) -> Result[None, str]: ...


class DelegatingRepository(Generic[T]):
    """Forwards the repository contract to a contained store.

    Subclasses add read-only queries over :meth:`snapshot`.
    """

    def __init__(self, store: Repository[T] | None = None) -> None:
        if store is None:
            from .memory import InMemoryRepository

            store = InMemoryRepository(name=type(self).__name__)
        self._store: Repository[T] = store

    @property
    def store(self) -> Repository[T]:
        return self._store

    def find_by_id(self, entity_id: str) -> Result[T, str]:
        return self._store.find_by_id(entity_id)

    def find_all(self) -> Result[list[T], str]:
        return self._store.find_all()

    def find_paginated(
        self, params: PaginationParams,
    ) -> Result[PaginatedResponse[T], str]:
        return self._store.find_paginated(params)

    def save(self, entity: T) -> Result[T, str]:
        return self._store.save(entity)

    def delete(self, entity_id: str) -> Result[None, str]:
        return self._store.delete(entity_id)

    def snapshot(self) -> list[T]:
        """Current contents of the store (find_all never fails)."""
        return self._store.find_all().unwrap_or([])
