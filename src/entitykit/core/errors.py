"""Exception hierarchy and service failure values for entitykit.

Expected domain failures (not found, validation, conflict) are returned as
data — :class:`Failure` inside a ``Result`` — and never raised.  Exceptions are
reserved for programming errors and bad configuration.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from entitykit.validation.models import ValidationError


class EntityKitError(Exception):
    """Base exception for all entitykit errors."""


# --- Programming errors ---
class InvariantViolation(EntityKitError):
    """A contract was broken by the caller (e.g. unwrapping a failed Result)."""


# --- Configuration ---
class ConfigError(EntityKitError):
    """Invalid or unreadable configuration."""


# ---------------------------------------------------------------------------
# Service-level failure values
# ---------------------------------------------------------------------------


class FailureKind(str, Enum):
    """Categories of expected failures surfaced by services."""

    NOT_FOUND = "not_found"
    VALIDATION_FAILED = "validation_failed"
    CONFLICT = "conflict"


class Failure(BaseModel):
    """Error value carried by a failed service ``Result``."""

    model_config = ConfigDict(frozen=True)

    kind: FailureKind
    message: str
    errors: list[ValidationError] = Field(default_factory=list)

    @classmethod
    def not_found(cls, message: str) -> Failure:
        return cls(kind=FailureKind.NOT_FOUND, message=message)

    @classmethod
    def conflict(cls, message: str) -> Failure:
        return cls(kind=FailureKind.CONFLICT, message=message)

    @classmethod
    def validation(cls, errors: list[ValidationError]) -> Failure:
        """Build a validation failure whose message joins the error messages."""
        joined = ", ".join(e.message for e in errors)
        return cls(
            kind=FailureKind.VALIDATION_FAILED,
            message=f"Validation failed: {joined}",
            errors=list(errors),
        )
