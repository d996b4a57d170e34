"""entitykit — generic entity management: entities, results, repositories,
pagination, validation and event notification.
"""

from entitykit.core.entity import Entity, stamp_new, touch
from entitykit.core.errors import (
    EntityKitError,
    Failure,
    FailureKind,
    InvariantViolation,
)
from entitykit.core.ids import new_id
from entitykit.core.result import Result, error, success, unwrap

__version__ = "0.1.0"

__all__ = [
    "Entity",
    "EntityKitError",
    "Failure",
    "FailureKind",
    "InvariantViolation",
    "Result",
    "error",
    "new_id",
    "stamp_new",
    "success",
    "touch",
    "unwrap",
]
