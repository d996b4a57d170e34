"""Canonical ID and timestamp factories for entitykit.

All modules import from here instead of defining local _id()/_now() copies.

ID Format
---------
``<time>-<suffix>``: the current epoch milliseconds in base 36, a dash, and a
9-character random base-36 suffix drawn from :mod:`secrets`.  IDs sort
roughly by creation time and collide only with negligible probability, with
no coordination between processes.

Timestamp Rule
--------------
All timestamps are ``datetime`` with ``tzinfo=timezone.utc`` — never naive.
"""

from __future__ import annotations

import itertools
import secrets
import time
from collections.abc import Callable
from datetime import datetime, timezone

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_SUFFIX_LENGTH = 9

IdGenerator = Callable[[], str]


def to_base36(value: int) -> str:
    """Encode a non-negative integer in lowercase base 36."""
    if value < 0:
        raise ValueError(f"to_base36 requires a non-negative value, got {value}")
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def new_id() -> str:
    """Generate a new entity ID (time component + random suffix)."""
    millis = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(_SUFFIX_LENGTH))
    return f"{to_base36(millis)}-{suffix}"


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


class SequentialIds:
    """Deterministic ID generator for tests: ``prefix-1``, ``prefix-2``, ..."""

    def __init__(self, prefix: str = "id") -> None:
        self._prefix = prefix
        self._counter = itertools.count(1)

    def __call__(self) -> str:
        return f"{self._prefix}-{next(self._counter)}"
