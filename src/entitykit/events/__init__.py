"""Event notification — domain events and the per-service notifier."""

from entitykit.events.models import DomainEvent, EventType
from entitykit.events.notifier import DeadLetter, EventHandler, EventNotifier

__all__ = [
    "DeadLetter",
    "DomainEvent",
    "EventHandler",
    "EventNotifier",
    "EventType",
]
