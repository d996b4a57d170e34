"""AppContext: repositories and services wired from one Settings object.

All components share a single clock so timestamps stay consistent and tests
can swap in a FixedClock.
"""

from __future__ import annotations

from dataclasses import dataclass

from entitykit.core.clock import DEFAULT_CLOCK, IClock
from entitykit.core.config import Settings
from entitykit.core.ids import IdGenerator, new_id
from entitykit.domain.items import ItemRepository
from entitykit.domain.products import ProductRepository
from entitykit.domain.users import UserRepository
from entitykit.observability.logger import get_logger, setup_logging
from entitykit.repository.memory import InMemoryRepository
from entitykit.services import ItemService, ProductService, UserService


@dataclass
class AppContext:
    settings: Settings
    clock: IClock
    users: UserRepository
    items: ItemRepository
    products: ProductRepository
    user_service: UserService
    item_service: ItemService
    product_service: ProductService

    def close(self) -> None:
        """Detach all event subscribers."""
        for service in (self.user_service, self.item_service, self.product_service):
            service.notifier.clear()


def build_context(
    settings: Settings | None = None,
    clock: IClock | None = None,
    id_factory: IdGenerator = new_id,
    configure_logging: bool = True,
) -> AppContext:
    """Create in-memory repositories and the services on top of them."""
    settings = settings or Settings()
    clock = clock or DEFAULT_CLOCK

    if configure_logging:
        setup_logging(
            level=settings.observability.log_level,
            format=settings.observability.log_format,
        )

    users = UserRepository(InMemoryRepository(clock=clock, name="users"))
    items = ItemRepository(InMemoryRepository(clock=clock, name="items"))
    products = ProductRepository(InMemoryRepository(clock=clock, name="products"))

    common = dict(
        clock=clock,
        id_factory=id_factory,
        pagination=settings.pagination,
        events=settings.events,
    )
    ctx = AppContext(
        settings=settings,
        clock=clock,
        users=users,
        items=items,
        products=products,
        user_service=UserService(users, **common),
        item_service=ItemService(items, **common),
        product_service=ProductService(products, **common),
    )
    get_logger(__name__).info(
        "context built", event_source=settings.events.source,
    )
    return ctx
