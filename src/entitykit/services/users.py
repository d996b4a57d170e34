"""User service — registration, lookup, updates, deletion.

Every mutation that succeeds publishes a DomainEvent[UserDto] through the
service's own notifier.  Authentication is out of scope; ``record_login`` only
tracks the login counter for an already-authenticated user.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from entitykit.core.clock import IClock
from entitykit.core.config import EventsConfig, PaginationConfig
from entitykit.core.errors import Failure
from entitykit.core.ids import IdGenerator, new_id
from entitykit.core.result import Result, error, success, unwrap
from entitykit.domain.enums import UserRole
from entitykit.domain.users import (
    UserDto,
    UserRepository,
    create_user_record,
    record_user_login,
    to_user_dto,
)
from entitykit.events import EventHandler, EventNotifier, EventType
from entitykit.repository.pagination import PaginatedResponse, PaginationParams
from entitykit.validation.fields import combine, validate_field
from entitykit.validation.rules import (
    USER_ROLE_RULES,
    validate_name,
    validate_user_dto,
)

from .common import invalid, not_found, resolve_params

logger = logging.getLogger(__name__)


class UserService:
    def __init__(
        self,
        repository: UserRepository,
        *,
        clock: IClock | None = None,
        id_factory: IdGenerator = new_id,
        pagination: PaginationConfig | None = None,
        events: EventsConfig | None = None,
    ) -> None:
        events = events or EventsConfig()
        self._repository = repository
        self._clock = clock
        self._id_factory = id_factory
        self._pagination = pagination or PaginationConfig()
        self._notifier: EventNotifier[UserDto] = EventNotifier(
            source=events.source, clock=clock, max_depth=events.max_publish_depth,
        )

    @property
    def notifier(self) -> EventNotifier[UserDto]:
        return self._notifier

    def subscribe(self, handler: EventHandler[UserDto]) -> Callable[[], None]:
        """Register a handler for user events; returns the unsubscribe function."""
        return self._notifier.subscribe(handler)

    def register_user(
        self, email: str, name: str, role: UserRole = UserRole.USER,
    ) -> Result[UserDto, Failure]:
        """Validate, reject a taken email, then save and emit ``created``.

        The record is stamped with the service clock and touched again by the
        repository on save. ``created_at == updated_at`` holds when both share
        a clock that has not moved in between (a ``FixedClock``). With the
        default ``WallClock``, ``updated_at`` may be slightly later.
        """
        validation = validate_user_dto({"email": email, "name": name, "role": role})
        if not validation.ok:
            return invalid(validation)

        if self._repository.find_by_email(email).ok:
            return error(Failure.conflict("Email already in use"))

        user = create_user_record(
            email, name, role, clock=self._clock, id_factory=self._id_factory,
        )
        dto = to_user_dto(unwrap(self._repository.save(user)))
        logger.info("user registered id=%s", dto.id)
        self._notifier.emit(EventType.CREATED, dto)
        return success(dto)

    def get_user(self, user_id: str) -> Result[UserDto, Failure]:
        result = self._repository.find_by_id(user_id)
        if not result.ok:
            return not_found(result)
        return success(to_user_dto(unwrap(result)))

    def list_users(
        self, params: PaginationParams | None = None,
    ) -> Result[PaginatedResponse[UserDto], Failure]:
        page = unwrap(self._repository.find_paginated(
            resolve_params(params, self._pagination)
        ))
        return success(page.map_items(to_user_dto))

    def update_user(
        self,
        user_id: str,
        *,
        name: str | None = None,
        role: UserRole | None = None,
    ) -> Result[UserDto, Failure]:
        existing = self._repository.find_by_id(user_id)
        if not existing.ok:
            return not_found(existing)

        checks = []
        if name is not None:
            checks.append(validate_name(name, "name"))
        if role is not None:
            checks.append(validate_field("role", role, USER_ROLE_RULES))
        validation = combine(*checks)
        if not validation.ok:
            return invalid(validation)

        updates: dict[str, object] = {}
        if name is not None:
            updates["name"] = name
        if role is not None:
            updates["role"] = UserRole(role)
        updated = unwrap(existing).model_copy(update=updates)

        dto = to_user_dto(unwrap(self._repository.save(updated)))
        self._notifier.emit(EventType.UPDATED, dto)
        return success(dto)

    def record_login(self, user_id: str) -> Result[UserDto, Failure]:
        existing = self._repository.find_by_id(user_id)
        if not existing.ok:
            return not_found(existing)

        user = record_user_login(unwrap(existing), self._clock)
        dto = to_user_dto(unwrap(self._repository.save(user)))
        self._notifier.emit(EventType.UPDATED, dto)
        return success(dto)

    def delete_user(self, user_id: str) -> Result[None, Failure]:
        existing = self._repository.find_by_id(user_id)
        if not existing.ok:
            return not_found(existing)

        dto = to_user_dto(unwrap(existing))
        result = self._repository.delete(user_id)
        if not result.ok:
            return not_found(result)

        logger.info("user deleted id=%s", user_id)
        self._notifier.emit(EventType.DELETED, dto)
        return success(None)
