"""In-memory repository — the reference store.

No durability.  All mutations and snapshots go through one re-entrant lock
per instance, so readers never observe a half-applied ``save``/``delete``.

Ordering: ``find_all`` returns records in first-insertion order (the backing
dict's order; re-saving an existing id keeps its position).
``find_paginated`` uses that order unless ``sort_by`` is set.
"""

from __future__ import annotations

import logging
import threading
from typing import Generic, TypeVar

from entitykit.core.clock import IClock
from entitykit.core.entity import Entity, touch
from entitykit.core.result import Result, error, success

from .pagination import PaginatedResponse, PaginationParams, paginate
from .queries import sort_items

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Entity)


def not_found_message(entity_id: str) -> str:
    return f"Entity with id {entity_id} not found"


class InMemoryRepository(Generic[T]):
    """Dict-backed store implementing the Repository contract."""

    def __init__(self, clock: IClock | None = None, name: str = "memory") -> None:
        self._store: dict[str, T] = {}
        self._lock = threading.RLock()
        self._clock = clock
        self._name = name

    # ------------------------------------------------------------------
    # Repository contract
    # ------------------------------------------------------------------

    def find_by_id(self, entity_id: str) -> Result[T, str]:
        with self._lock:
            entity = self._store.get(entity_id)
        if entity is None:
            return error(not_found_message(entity_id))
        return success(entity)

    def find_all(self) -> Result[list[T], str]:
        return success(self._snapshot())

    def find_paginated(
        self, params: PaginationParams,
    ) -> Result[PaginatedResponse[T], str]:
        items = sort_items(self._snapshot(), params.sort_by, params.sort_order)
        return success(paginate(items, params))

    def save(self, entity: T) -> Result[T, str]:
        """Upsert by id. The stored value is the touched copy."""
        updated = touch(entity, self._clock)
        with self._lock:
            created = updated.id not in self._store
            self._store[updated.id] = updated
        logger.debug(
            "repository=%s %s id=%s",
            self._name,
            "inserted" if created else "updated",
            updated.id,
        )
        return success(updated)

    def delete(self, entity_id: str) -> Result[None, str]:
        with self._lock:
            if entity_id not in self._store:
                return error(not_found_message(entity_id))
            del self._store[entity_id]
        logger.debug("repository=%s deleted id=%s", self._name, entity_id)
        return success(None)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def count(self) -> int:
        with self._lock:
            return len(self._store)

    def exists(self, entity_id: str) -> bool:
        with self._lock:
            return entity_id in self._store

    def clear(self) -> None:
        """Drop every record. For tests and teardown."""
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        return self.count()

    def _snapshot(self) -> list[T]:
        with self._lock:
            return list(self._store.values())
