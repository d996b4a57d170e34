"""Shared fixtures for the entitykit test suite."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from entitykit.core.clock import FixedClock
from entitykit.core.config import EventsConfig, PaginationConfig
from entitykit.core.ids import SequentialIds
from entitykit.domain.items import ItemRepository
from entitykit.domain.products import ProductRepository
from entitykit.domain.users import UserRepository
from entitykit.repository.memory import InMemoryRepository
from entitykit.services import ItemService, ProductService, UserService


# ---------------------------------------------------------------------------
# Time and ids
# ---------------------------------------------------------------------------

@pytest.fixture
def clock() -> FixedClock:
    """Deterministic clock starting 2024-06-01 UTC."""
    return FixedClock(datetime(2024, 6, 1, tzinfo=timezone.utc))


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds("test")


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------

@pytest.fixture
def memory_repo(clock) -> InMemoryRepository:
    return InMemoryRepository(clock=clock, name="test")


@pytest.fixture
def user_repo(clock) -> UserRepository:
    return UserRepository(InMemoryRepository(clock=clock, name="users"))


@pytest.fixture
def item_repo(clock) -> ItemRepository:
    return ItemRepository(InMemoryRepository(clock=clock, name="items"))


@pytest.fixture
def product_repo(clock) -> ProductRepository:
    return ProductRepository(InMemoryRepository(clock=clock, name="products"))


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------

@pytest.fixture
def pagination_config() -> PaginationConfig:
    return PaginationConfig(default_page_size=10, max_page_size=50)


@pytest.fixture
def user_service(user_repo, clock, ids, pagination_config) -> UserService:
    return UserService(
        user_repo, clock=clock, id_factory=ids,
        pagination=pagination_config, events=EventsConfig(),
    )


@pytest.fixture
def item_service(item_repo, clock, ids, pagination_config) -> ItemService:
    return ItemService(
        item_repo, clock=clock, id_factory=ids,
        pagination=pagination_config, events=EventsConfig(),
    )


@pytest.fixture
def product_service(product_repo, clock, ids, pagination_config) -> ProductService:
    return ProductService(
        product_repo, clock=clock, id_factory=ids,
        pagination=pagination_config, events=EventsConfig(),
    )
