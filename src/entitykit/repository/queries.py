"""Read-only query helpers over repository snapshots.

Every helper is a pure function of the list it is given; none of them touch
a store.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, Literal, TypeVar

from entitykit.core.result import Result, error, success

logger = logging.getLogger(__name__)

T = TypeVar("T")


def filter_items(items: Iterable[T], predicate: Callable[[T], bool]) -> Result[list[T], str]:
    """All items matching *predicate*, in input order. Always succeeds."""
    return success([item for item in items if predicate(item)])


def find_first(
    items: Iterable[T],
    predicate: Callable[[T], bool],
    not_found_message: str,
) -> Result[T, str]:
    """First item matching *predicate*, or a not-found failure."""
    for item in items:
        if predicate(item):
            return success(item)
    return error(not_found_message)


def sort_items(
    items: Iterable[T],
    sort_by: str | None,
    sort_order: Literal["asc", "desc"] = "asc",
) -> list[T]:
    """Stable sort by attribute *sort_by*; returns input order when unset.

    Items without the attribute, or with None, go last in both directions.
    On pydantic models only declared fields count as sort keys. Values that
    do not support ordering leave the input order unchanged.
    """
    ordered = list(items)
    if not sort_by:
        return ordered
    present = [i for i in ordered if _sort_value(i, sort_by) is not None]
    missing = [i for i in ordered if _sort_value(i, sort_by) is None]
    try:
        present.sort(
            key=lambda i: _sort_value(i, sort_by), reverse=(sort_order == "desc"),
        )
    except TypeError:
        logger.warning("sort_by=%s is not orderable; keeping input order", sort_by)
        return ordered
    return present + missing


def _sort_value(item: Any, name: str) -> Any:
    fields = getattr(type(item), "model_fields", None)
    if fields is not None and name not in fields:
        return None
    value = getattr(item, name, None)
    return None if callable(value) else value


def top_n(items: Iterable[T], key: Callable[[T], Any], limit: int) -> Result[list[T], str]:
    """The *limit* items with the highest *key*, highest first."""
    if limit <= 0:
        return success([])
    return success(sorted(items, key=key, reverse=True)[:limit])
