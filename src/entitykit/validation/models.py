"""Validation models.

- ValidationCode: machine-readable failure codes
- ValidationError: a single field-scoped failure
- ValidationResult: success, or an ordered non-empty list of failures
- FieldRules: the rules checked for one field
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ValidationCode(str, Enum):
    """Failure codes. The field-rule codes are listed in the order rules run."""

    REQUIRED = "REQUIRED"
    MIN_LENGTH = "MIN_LENGTH"
    MAX_LENGTH = "MAX_LENGTH"
    INVALID_FORMAT = "INVALID_FORMAT"
    INVALID_CHOICE = "INVALID_CHOICE"
    MIN_VALUE = "MIN_VALUE"


class ValidationError(BaseModel):
    """A single field-scoped validation failure."""

    model_config = ConfigDict(frozen=True)

    field: str
    message: str
    code: str


class ValidationResult(BaseModel):
    """Outcome of validating a value or a whole DTO.

    ``ok`` is True exactly when ``errors`` is empty.
    """

    model_config = ConfigDict(frozen=True)

    ok: bool
    errors: list[ValidationError] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_consistency(self) -> ValidationResult:
        if self.ok == bool(self.errors):
            raise ValueError("ok must be True exactly when errors is empty")
        return self


class FieldRules(BaseModel):
    """Rules for a single field, applied in a fixed order.

    required -> min_length -> max_length -> pattern -> choices
    """

    model_config = ConfigDict(frozen=True)

    required: bool = True
    min_length: int | None = Field(default=None, ge=0)
    max_length: int | None = Field(default=None, ge=0)
    pattern: str | None = None
    pattern_message: str | None = None
    choices: tuple[str, ...] | None = None
    label: str | None = None  # Human-readable field name for messages


def validation_success() -> ValidationResult:
    return ValidationResult(ok=True)


def validation_failure(errors: list[ValidationError]) -> ValidationResult:
    return ValidationResult(ok=False, errors=errors)
