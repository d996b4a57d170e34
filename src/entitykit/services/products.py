"""Product service — catalog maintenance.

Reads publish a ``read`` event; stock, deactivation, creation and deletion
publish their lifecycle events.  Price and tag edits are saved silently.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from entitykit.core.clock import IClock
from entitykit.core.config import EventsConfig, PaginationConfig
from entitykit.core.errors import Failure
from entitykit.core.ids import IdGenerator, new_id
from entitykit.core.result import Result, error, success, unwrap
from entitykit.domain.enums import ProductCategory
from entitykit.domain.products import (
    Price,
    Product,
    ProductRepository,
    create_product,
)
from entitykit.events import EventHandler, EventNotifier, EventType
from entitykit.repository.pagination import PaginatedResponse, PaginationParams
from entitykit.validation.models import (
    ValidationCode,
    ValidationError,
    validation_failure,
)
from entitykit.validation.rules import validate_product_dto

from .common import invalid, not_found, resolve_params

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(
        self,
        repository: ProductRepository,
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
        self._notifier: EventNotifier[Product] = EventNotifier(
            source=events.source, clock=clock, max_depth=events.max_publish_depth,
        )

    @property
    def notifier(self) -> EventNotifier[Product]:
        return self._notifier

    def subscribe(self, handler: EventHandler[Product]) -> Callable[[], None]:
        return self._notifier.subscribe(handler)

    def create_product(
        self,
        name: str,
        description: str,
        sku: str,
        price: Price,
        category: ProductCategory = ProductCategory.OTHER,
    ) -> Result[Product, Failure]:
        validation = validate_product_dto(
            {"name": name, "description": description, "sku": sku}
        )
        if not validation.ok:
            return invalid(validation)

        if self._repository.find_by_sku(sku).ok:
            return error(Failure.conflict(f"SKU {sku} already exists"))

        product = create_product(
            name, description, sku, price, category,
            clock=self._clock, id_factory=self._id_factory,
        )
        saved = unwrap(self._repository.save(product))
        logger.info("product created id=%s sku=%s", saved.id, sku)
        self._notifier.emit(EventType.CREATED, saved)
        return success(saved)

    def get_product(self, product_id: str) -> Result[Product, Failure]:
        result = self._repository.find_by_id(product_id)
        if not result.ok:
            return not_found(result)

        product = unwrap(result)
        self._notifier.emit(EventType.READ, product)
        return success(product)

    def list_products(
        self, params: PaginationParams | None = None,
    ) -> Result[PaginatedResponse[Product], Failure]:
        return success(unwrap(self._repository.find_paginated(
            resolve_params(params, self._pagination)
        )))

    def update_stock(self, product_id: str, quantity: int) -> Result[Product, Failure]:
        existing = self._repository.find_by_id(product_id)
        if not existing.ok:
            return not_found(existing)

        if quantity < 0:
            return invalid(validation_failure([
                ValidationError(
                    field="stock_quantity",
                    message="Stock quantity must not be negative",
                    code=ValidationCode.MIN_VALUE.value,
                )
            ]))

        saved = self._save_changes(unwrap(existing), stock_quantity=quantity)
        self._notifier.emit(EventType.UPDATED, saved)
        return success(saved)

    def update_price(self, product_id: str, price: Price) -> Result[Product, Failure]:
        existing = self._repository.find_by_id(product_id)
        if not existing.ok:
            return not_found(existing)
        return success(self._save_changes(unwrap(existing), price=price))

    def add_tags(self, product_id: str, tags: Iterable[str]) -> Result[Product, Failure]:
        """Append *tags*, dropping duplicates and keeping first-seen order."""
        existing = self._repository.find_by_id(product_id)
        if not existing.ok:
            return not_found(existing)

        product = unwrap(existing)
        merged = tuple(dict.fromkeys([*product.tags, *tags]))
        return success(self._save_changes(product, tags=merged))

    def deactivate(self, product_id: str) -> Result[Product, Failure]:
        existing = self._repository.find_by_id(product_id)
        if not existing.ok:
            return not_found(existing)

        saved = self._save_changes(unwrap(existing), is_active=False)
        self._notifier.emit(EventType.UPDATED, saved)
        return success(saved)

    def delete_product(self, product_id: str) -> Result[None, Failure]:
        existing = self._repository.find_by_id(product_id)
        if not existing.ok:
            return not_found(existing)

        result = self._repository.delete(product_id)
        if not result.ok:
            return not_found(result)

        self._notifier.emit(EventType.DELETED, unwrap(existing))
        return success(None)

    def _save_changes(self, product: Product, **changes: object) -> Product:
        return unwrap(self._repository.save(product.model_copy(update=changes)))
