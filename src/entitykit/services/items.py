"""Item service — item lifecycle plus view tracking on reads."""

from __future__ import annotations

import logging
from collections.abc import Callable

from entitykit.core.clock import IClock
from entitykit.core.config import EventsConfig, PaginationConfig
from entitykit.core.errors import Failure
from entitykit.core.ids import IdGenerator, new_id
from entitykit.core.result import Result, success, unwrap
from entitykit.domain.enums import ItemStatus
from entitykit.domain.items import (
    ItemDto,
    ItemRepository,
    create_item_record,
    record_item_view,
    to_item_dto,
)
from entitykit.events import EventHandler, EventNotifier, EventType
from entitykit.repository.pagination import PaginatedResponse, PaginationParams
from entitykit.validation.fields import validate_field
from entitykit.validation.rules import ITEM_STATUS_RULES, validate_item_dto

from .common import invalid, not_found, resolve_params

logger = logging.getLogger(__name__)


class ItemService:
    def __init__(
        self,
        repository: ItemRepository,
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
        self._notifier: EventNotifier[ItemDto] = EventNotifier(
            source=events.source, clock=clock, max_depth=events.max_publish_depth,
        )

    @property
    def notifier(self) -> EventNotifier[ItemDto]:
        return self._notifier

    def subscribe(self, handler: EventHandler[ItemDto]) -> Callable[[], None]:
        return self._notifier.subscribe(handler)

    def create_item(
        self,
        title: str,
        description: str,
        owner_id: str,
        status: ItemStatus = ItemStatus.DRAFT,
    ) -> Result[ItemDto, Failure]:
        validation = validate_item_dto({
            "title": title,
            "description": description,
            "owner_id": owner_id,
            "status": status,
        })
        if not validation.ok:
            return invalid(validation)

        item = create_item_record(
            title, description, owner_id, status,
            clock=self._clock, id_factory=self._id_factory,
        )
        dto = to_item_dto(unwrap(self._repository.save(item)))
        logger.info("item created id=%s owner=%s", dto.id, owner_id)
        self._notifier.emit(EventType.CREATED, dto)
        return success(dto)

    def get_item(self, item_id: str) -> Result[ItemDto, Failure]:
        """Fetch an item, counting the read as a view."""
        result = self._repository.find_by_id(item_id)
        if not result.ok:
            return not_found(result)

        viewed = record_item_view(unwrap(result), self._clock)
        return success(to_item_dto(unwrap(self._repository.save(viewed))))

    def list_items(
        self, params: PaginationParams | None = None,
    ) -> Result[PaginatedResponse[ItemDto], Failure]:
        page = unwrap(self._repository.find_paginated(
            resolve_params(params, self._pagination)
        ))
        return success(page.map_items(to_item_dto))

    def get_items_by_owner(self, owner_id: str) -> Result[list[ItemDto], Failure]:
        items = unwrap(self._repository.find_by_owner(owner_id))
        return success([to_item_dto(i) for i in items])

    def update_item_status(
        self, item_id: str, status: ItemStatus,
    ) -> Result[ItemDto, Failure]:
        existing = self._repository.find_by_id(item_id)
        if not existing.ok:
            return not_found(existing)

        validation = validate_field("status", status, ITEM_STATUS_RULES)
        if not validation.ok:
            return invalid(validation)

        updated = unwrap(existing).model_copy(update={"status": ItemStatus(status)})
        dto = to_item_dto(unwrap(self._repository.save(updated)))
        self._notifier.emit(EventType.UPDATED, dto)
        return success(dto)

    def delete_item(self, item_id: str) -> Result[None, Failure]:
        existing = self._repository.find_by_id(item_id)
        if not existing.ok:
            return not_found(existing)

        dto = to_item_dto(unwrap(existing))
        result = self._repository.delete(item_id)
        if not result.ok:
            return not_found(result)

        self._notifier.emit(EventType.DELETED, dto)
        return success(None)
