"""Domain events published by services."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class EventType(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    READ = "read"


class DomainEvent(BaseModel, Generic[T]):
    """Lifecycle notification. Built right before publication, never stored."""

    model_config = ConfigDict(frozen=True)

    type: EventType
    payload: T
    timestamp: datetime
    source: str
