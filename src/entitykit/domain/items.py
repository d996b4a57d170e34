"""Item records, the client-facing ItemDto, and the item repository."""

from __future__ import annotations

from datetime import datetime

from entitykit.core.clock import DEFAULT_CLOCK, IClock
from entitykit.core.entity import Entity, stamp_new, touch
from entitykit.core.ids import IdGenerator, new_id
from entitykit.core.result import Result
from entitykit.repository.base import DelegatingRepository
from entitykit.repository.queries import filter_items, top_n

from .enums import ItemStatus


class ItemDto(Entity):
    """Item shape shared with clients."""

    title: str
    description: str
    owner_id: str
    status: ItemStatus


class ItemRecord(Entity):
    """Server-side item record with view tracking and internal notes."""

    title: str
    description: str
    owner_id: str
    status: ItemStatus = ItemStatus.DRAFT
    views: int = 0
    last_viewed_at: datetime | None = None
    internal_notes: str | None = None


def create_item_record(
    title: str,
    description: str,
    owner_id: str,
    status: ItemStatus = ItemStatus.DRAFT,
    *,
    clock: IClock | None = None,
    id_factory: IdGenerator = new_id,
) -> ItemRecord:
    return ItemRecord(
        id=id_factory(),
        **stamp_new(clock),
        title=title,
        description=description,
        owner_id=owner_id,
        status=status,
    )


def record_item_view(item: ItemRecord, clock: IClock | None = None) -> ItemRecord:
    now = (clock or DEFAULT_CLOCK).now()
    updated = item.model_copy(update={"views": item.views + 1, "last_viewed_at": now})
    return touch(updated, clock)


def to_item_dto(item: ItemRecord) -> ItemDto:
    """Strip internal fields (views, notes) for clients."""
    return ItemDto(
        id=item.id,
        created_at=item.created_at,
        updated_at=item.updated_at,
        title=item.title,
        description=item.description,
        owner_id=item.owner_id,
        status=item.status,
    )


class ItemRepository(DelegatingRepository[ItemRecord]):
    def find_by_owner(self, owner_id: str) -> Result[list[ItemRecord], str]:
        return filter_items(self.snapshot(), lambda i: i.owner_id == owner_id)

    def find_by_status(self, status: ItemStatus) -> Result[list[ItemRecord], str]:
        return filter_items(self.snapshot(), lambda i: i.status == status)

    def find_most_viewed(self, limit: int) -> Result[list[ItemRecord], str]:
        return top_n(self.snapshot(), lambda i: i.views, limit)
