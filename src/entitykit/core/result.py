"""Result: tagged success/failure outcome used by every fallible operation.

A ``Result`` is either a success carrying ``value`` or a failure carrying
``error``.  Expected failures (not found, validation) travel as data in a
failed ``Result`` and are never raised; callers branch on ``ok``.

``unwrap`` is only for places where the caller already knows the result is a
success.  Calling it on a failure, or on a success that carries no value, is a
bug and raises :class:`InvariantViolation`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .errors import InvariantViolation

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """Outcome of a fallible operation.

    Invariants:
        - ``ok`` is True  -> ``error`` is None
        - ``ok`` is False -> ``error`` is not None and ``value`` is None
    """

    ok: bool
    value: T | None = None
    error: E | None = None

    def __post_init__(self) -> None:
        if self.ok and self.error is not None:
            raise InvariantViolation("successful Result must not carry an error")
        if not self.ok:
            if self.error is None:
                raise InvariantViolation("failed Result must carry an error")
            if self.value is not None:
                raise InvariantViolation("failed Result must not carry a value")

    def map(self, fn: Callable[[T], U]) -> Result[U, E]:
        """Apply *fn* to a success value; failures pass through unchanged."""
        if not self.ok:
            return Result(ok=False, error=self.error)
        return Result(ok=True, value=fn(self.value))

    def unwrap_or(self, default: T) -> T:
        """Return the value of a valued success, otherwise *default*."""
        if self.ok and self.value is not None:
            return self.value
        return default


def success(value: T) -> Result[T, Any]:
    """Create a successful result."""
    return Result(ok=True, value=value)


def error(err: E) -> Result[Any, E]:
    """Create a failed result."""
    return Result(ok=False, error=err)


def unwrap(result: Result[T, Any]) -> T:
    """Return the value of a successful result or raise InvariantViolation."""
    if not result.ok:
        raise InvariantViolation(f"unwrap called on failed Result: {result.error}")
    if result.value is None:
        raise InvariantViolation("unwrap called on a Result without a value")
    return result.value
