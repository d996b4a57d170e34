"""Domain rule sets: one ``(dto) -> ValidationResult`` function per entity kind.

Each function validates the fields of a candidate mapping in a fixed order and
combines the per-field results, so errors come back ordered by field.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from entitykit.domain.enums import ItemStatus, UserRole

from .fields import combine, validate_field
from .models import FieldRules, ValidationResult

EMAIL_PATTERN = r"[^\s@]+@[^\s@]+\.[^\s@]+"
SKU_PATTERN = r"[A-Za-z0-9][A-Za-z0-9_-]*"

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100

EMAIL_RULES = FieldRules(
    pattern=EMAIL_PATTERN,
    pattern_message="Invalid email format",
    label="Email",
)
USER_ROLE_RULES = FieldRules(
    choices=tuple(r.value for r in UserRole),
    label="Role",
)
ITEM_STATUS_RULES = FieldRules(
    choices=tuple(s.value for s in ItemStatus),
    label="Status",
)


def name_rules(label: str) -> FieldRules:
    return FieldRules(
        min_length=NAME_MIN_LENGTH,
        max_length=NAME_MAX_LENGTH,
        label=label,
    )


def validate_email(email: Any) -> ValidationResult:
    return validate_field("email", email, EMAIL_RULES)


def validate_name(name: Any, field: str = "name") -> ValidationResult:
    return validate_field(field, name, name_rules(field))


def validate_user_dto(data: Mapping[str, Any]) -> ValidationResult:
    """email, name, role."""
    return combine(
        validate_email(data.get("email")),
        validate_name(data.get("name"), "name"),
        validate_field("role", data.get("role"), USER_ROLE_RULES),
    )


def validate_item_dto(data: Mapping[str, Any]) -> ValidationResult:
    """title, description, owner_id, status."""
    return combine(
        validate_name(data.get("title"), "title"),
        validate_field(
            "description", data.get("description"), FieldRules(label="Description"),
        ),
        validate_field("owner_id", data.get("owner_id"), FieldRules(label="Owner ID")),
        validate_field("status", data.get("status"), ITEM_STATUS_RULES),
    )


def validate_product_dto(data: Mapping[str, Any]) -> ValidationResult:
    """name, description, sku."""
    return combine(
        validate_name(data.get("name"), "name"),
        validate_field(
            "description", data.get("description"), FieldRules(label="Description"),
        ),
        validate_field(
            "sku",
            data.get("sku"),
            FieldRules(
                max_length=64,
                pattern=SKU_PATTERN,
                pattern_message="SKU may only contain letters, digits, '-' and '_'",
                label="SKU",
            ),
        ),
    )
