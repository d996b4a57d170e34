"""Product records and the product repository.

Products have no separate DTO; the record is the client shape.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from entitykit.core.clock import IClock
from entitykit.core.entity import Entity, stamp_new
from entitykit.core.ids import IdGenerator, new_id
from entitykit.core.result import Result
from entitykit.repository.base import DelegatingRepository
from entitykit.repository.queries import filter_items, find_first

from .enums import ProductCategory


class Price(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(ge=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)


class Product(Entity):
    is_active: bool = True
    name: str
    description: str
    sku: str
    price: Price
    category: ProductCategory = ProductCategory.OTHER
    stock_quantity: int = Field(default=0, ge=0)
    tags: tuple[str, ...] = ()


def create_product(
    name: str,
    description: str,
    sku: str,
    price: Price,
    category: ProductCategory = ProductCategory.OTHER,
    *,
    clock: IClock | None = None,
    id_factory: IdGenerator = new_id,
) -> Product:
    return Product(
        id=id_factory(),
        **stamp_new(clock),
        name=name,
        description=description,
        sku=sku,
        price=price,
        category=category,
    )


def format_price(price: Price) -> str:
    """``"USD 12.50"``."""
    return f"{price.currency} {price.amount:.2f}"


def is_in_stock(product: Product) -> bool:
    return product.stock_quantity > 0 and product.is_active


class ProductRepository(DelegatingRepository[Product]):
    def find_by_category(self, category: ProductCategory) -> Result[list[Product], str]:
        return filter_items(self.snapshot(), lambda p: p.category == category)

    def find_by_sku(self, sku: str) -> Result[Product, str]:
        return find_first(
            self.snapshot(),
            lambda p: p.sku == sku,
            f"Product with sku {sku} not found",
        )

    def search_by_name(self, query: str) -> Result[list[Product], str]:
        """Case-insensitive substring match on the product name."""
        needle = query.lower()
        return filter_items(self.snapshot(), lambda p: needle in p.name.lower())

    def find_low_stock(self, threshold: int) -> Result[list[Product], str]:
        return filter_items(self.snapshot(), lambda p: p.stock_quantity < threshold)
