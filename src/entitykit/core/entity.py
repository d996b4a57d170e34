"""Entity base shape and timestamp helpers.

Every stored record is an :class:`Entity`: a frozen pydantic model with an
``id`` and UTC ``created_at``/``updated_at`` timestamps.  Records are
immutable snapshots; a change is a new copy passed back to ``save``.

Invariants:
    - ``id`` never changes after construction
    - ``created_at`` is set once and never changes
    - ``updated_at >= created_at``; refreshed on every successful mutation
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .clock import DEFAULT_CLOCK, IClock
from .ids import new_id

EntityT = TypeVar("EntityT", bound="Entity")


class Entity(BaseModel):
    """Base shape shared by all stored records."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id, min_length=1)
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="after")
    def _check_timestamps(self) -> Entity:
        if self.updated_at < self.created_at:
            raise ValueError("updated_at must not be earlier than created_at")
        return self


def stamp_new(clock: IClock | None = None) -> dict[str, datetime]:
    """Timestamp fields for a new entity; both set to the same instant."""
    now = (clock or DEFAULT_CLOCK).now()
    return {"created_at": now, "updated_at": now}


def touch(entity: EntityT, clock: IClock | None = None) -> EntityT:
    """Return a copy of *entity* with ``updated_at`` set to now.

    A clock reading earlier than the stored ``updated_at`` leaves it as is,
    so ``updated_at`` never moves backwards.
    """
    now = (clock or DEFAULT_CLOCK).now()
    return entity.model_copy(update={"updated_at": max(now, entity.updated_at)})


def is_valid_entity(obj: Any) -> bool:
    """True if *obj* carries the entity shape (string id, datetime stamps)."""
    return (
        isinstance(getattr(obj, "id", None), str)
        and isinstance(getattr(obj, "created_at", None), datetime)
        and isinstance(getattr(obj, "updated_at", None), datetime)
    )


def same_entity(a: Entity, b: Entity) -> bool:
    """Identity equality: two snapshots of the same record share an id."""
    return a.id == b.id
