"""Field-level validation and result combination.

``validate_field`` reports at most one error per field: the first rule that
fails, in the order required -> min_length -> max_length -> pattern ->
choices.  ``combine`` concatenates error lists in input order, which keeps
test expectations deterministic.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

from .models import (
    FieldRules,
    ValidationCode,
    ValidationError,
    ValidationResult,
    validation_failure,
    validation_success,
)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _fail(field: str, message: str, code: ValidationCode) -> ValidationResult:
    return validation_failure(
        [ValidationError(field=field, message=message, code=code.value)]
    )


def validate_field(field: str, value: Any, rules: FieldRules) -> ValidationResult:
    """Validate one value against *rules*, short-circuiting on the first failure."""
    label = rules.label or field

    if _is_missing(value):
        if rules.required:
            return _fail(field, f"{label} is required", ValidationCode.REQUIRED)
        return validation_success()

    if isinstance(value, Enum):
        value = value.value
    text = str(value)

    if rules.min_length is not None and len(text) < rules.min_length:
        return _fail(
            field,
            f"{label} must be at least {rules.min_length} characters",
            ValidationCode.MIN_LENGTH,
        )
    if rules.max_length is not None and len(text) > rules.max_length:
        return _fail(
            field,
            f"{label} must not exceed {rules.max_length} characters",
            ValidationCode.MAX_LENGTH,
        )
    if rules.pattern is not None and not re.fullmatch(rules.pattern, text):
        return _fail(
            field,
            rules.pattern_message or f"Invalid {label} format",
            ValidationCode.INVALID_FORMAT,
        )
    if rules.choices is not None and text not in rules.choices:
        allowed = ", ".join(sorted(rules.choices))
        return _fail(
            field,
            f"{label} must be one of: {allowed}",
            ValidationCode.INVALID_CHOICE,
        )
    return validation_success()


def combine(*results: ValidationResult) -> ValidationResult:
    """Concatenate errors in input order; ok only if every input is ok."""
    errors: list[ValidationError] = []
    for result in results:
        if not result.ok:
            errors.extend(result.errors)
    return validation_failure(errors) if errors else validation_success()
