"""Per-service synchronous event notifier.

Handlers are called on the publishing thread, in subscription order.  Each
call is isolated: a failing handler is logged and recorded as a dead letter,
and delivery continues with the next one.

Delivery covers exactly the handlers subscribed when ``publish`` starts.
Handlers added or removed during a publish take effect from the next one.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, TypeVar

from entitykit.core.clock import DEFAULT_CLOCK, IClock
from entitykit.core.errors import InvariantViolation

from .models import DomainEvent, EventType

logger = logging.getLogger(__name__)

T = TypeVar("T")

EventHandler = Callable[[DomainEvent[T]], None]


@dataclass
class DeadLetter:
    """Record of a handler failure."""

    source: str
    event_type: str
    handler: str
    error: str
    timestamp: datetime = field(default_factory=DEFAULT_CLOCK.now)


def _handler_name(handler: Callable[..., Any]) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


class EventNotifier(Generic[T]):
    """Ordered list of handlers owned by a single service instance."""

    def __init__(
        self,
        source: str = "backend",
        clock: IClock | None = None,
        max_depth: int = 8,
        on_handler_error: Callable[[DomainEvent[T], Exception], None] | None = None,
    ) -> None:
        self._source = source
        self._clock = clock or DEFAULT_CLOCK
        self._max_depth = max_depth
        self._on_handler_error = on_handler_error
        # (token, handler) pairs; the token identifies one registration.
        self._handlers: list[tuple[object, EventHandler[T]]] = []
        self._local = threading.local()

        # Observability
        self._error_counts: Counter[str] = Counter()
        self._dead_letters: list[DeadLetter] = []
        self._delivered: int = 0

    @property
    def source(self) -> str:
        return self._source

    def subscribe(self, handler: EventHandler[T]) -> Callable[[], None]:
        """Register *handler*; the returned function unsubscribes it (idempotent)."""
        token = object()
        self._handlers.append((token, handler))

        def unsubscribe() -> None:
            for idx, (registered, _) in enumerate(self._handlers):
                if registered is token:
                    del self._handlers[idx]
                    break

        return unsubscribe

    def publish(self, event: DomainEvent[T]) -> None:
        """Deliver *event* to every current handler, isolating failures."""
        depth = getattr(self._local, "depth", 0)
        if depth >= self._max_depth:
            raise InvariantViolation(
                f"nested publish depth exceeded ({self._max_depth}) "
                f"for source={self._source} event={event.type.value}"
            )

        handlers = [handler for _, handler in self._handlers]
        self._local.depth = depth + 1
        try:
            for handler in handlers:
                self._deliver(handler, event)
        finally:
            self._local.depth = depth

    def emit(self, event_type: EventType, payload: T) -> DomainEvent[T]:
        """Build an event stamped with this notifier's clock and source, then publish it."""
        event: DomainEvent[T] = DomainEvent(
            type=event_type,
            payload=payload,
            timestamp=self._clock.now(),
            source=self._source,
        )
        self.publish(event)
        return event

    def clear(self) -> None:
        """Drop all handlers (owner teardown)."""
        self._handlers.clear()

    def _deliver(self, handler: EventHandler[T], event: DomainEvent[T]) -> None:
        try:
            handler(event)
            self._delivered += 1
        except Exception as exc:
            name = _handler_name(handler)
            self._error_counts[name] += 1
            self._dead_letters.append(
                DeadLetter(
                    source=self._source,
                    event_type=event.type.value,
                    handler=name,
                    error=str(exc),
                    timestamp=self._clock.now(),
                )
            )
            logger.exception(
                "Handler error source=%s event=%s handler=%s",
                self._source,
                event.type.value,
                name,
            )

            if self._on_handler_error is not None:
                try:
                    self._on_handler_error(event, exc)
                except Exception:
                    logger.warning("on_handler_error callback failed", exc_info=True)

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    @property
    def error_count(self) -> int:
        """Total handler failures since construction."""
        return sum(self._error_counts.values())

    def get_error_counts(self) -> dict[str, int]:
        """Per-handler failure counts."""
        return dict(self._error_counts)

    @property
    def messages_delivered(self) -> int:
        return self._delivered

    @property
    def dead_letters(self) -> list[DeadLetter]:
        """Snapshot of recorded handler failures."""
        return list(self._dead_letters)

    def clear_dead_letters(self) -> list[DeadLetter]:
        """Drain the dead-letter list and return all entries."""
        drained = self._dead_letters[:]
        self._dead_letters.clear()
        return drained
