"""Validation — field rules, ordered error lists, and result combination.

Public API
----------
Models:
    ValidationError, ValidationResult, ValidationCode, FieldRules,
    validation_success, validation_failure

Functions:
    validate_field, combine

Domain rule sets live in ``entitykit.validation.rules``.
"""

from entitykit.validation.fields import combine, validate_field
from entitykit.validation.models import (
    FieldRules,
    ValidationCode,
    ValidationError,
    ValidationResult,
    validation_failure,
    validation_success,
)

__all__ = [
    "FieldRules",
    "ValidationCode",
    "ValidationError",
    "ValidationResult",
    "combine",
    "validate_field",
    "validation_failure",
    "validation_success",
]
