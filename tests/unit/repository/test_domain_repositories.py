"""Test user, item and product repositories and their record helpers."""

from decimal import Decimal

import pytest

from entitykit.core.result import unwrap
from entitykit.domain.enums import ItemStatus, ProductCategory, UserRole
from entitykit.domain.items import (
    ItemDto,
    ItemRepository,
    create_item_record,
    record_item_view,
    to_item_dto,
)
from entitykit.domain.products import (
    Price,
    create_product,
    format_price,
    is_in_stock,
)
from entitykit.domain.users import (
    UserDto,
    UserRepository,
    create_user_record,
    record_user_login,
    to_user_dto,
)
from entitykit.repository import InMemoryRepository, Repository


class TestComposition:
    def test_domain_repositories_satisfy_protocol(self, user_repo, item_repo, product_repo):
        for repo in (user_repo, item_repo, product_repo):
            assert isinstance(repo, Repository)

    def test_default_store_is_in_memory(self):
        repo = UserRepository()
        assert isinstance(repo.store, InMemoryRepository)

    def test_store_is_shared_not_copied(self, clock):
        store = InMemoryRepository(clock=clock)
        repo = ItemRepository(store)
        repo.save(create_item_record("Title", "d", "o-1", clock=clock, id_factory=lambda: "i-1"))
        assert store.exists("i-1")


class TestUsers:
    def test_create_user_record(self, clock, ids):
        user = create_user_record("a@b.com", "Ann", clock=clock, id_factory=ids)
        assert user.id == "test-1"
        assert user.role is UserRole.USER
        assert user.login_count == 0
        assert user.created_at == user.updated_at == clock.now()

    def test_record_login(self, clock, ids):
        user = create_user_record("a@b.com", "Ann", clock=clock, id_factory=ids)
        clock.advance(10)
        logged = record_user_login(user, clock)
        assert logged.login_count == 1
        assert logged.last_login_at == clock.now()
        assert logged.updated_at == clock.now()
        assert user.login_count == 0

    def test_to_user_dto_strips_server_fields(self, clock, ids):
        user = create_user_record("a@b.com", "Ann", UserRole.ADMIN, clock=clock, id_factory=ids)
        dto = to_user_dto(user)
        assert isinstance(dto, UserDto)
        assert dto.model_dump().keys() == {
            "id", "created_at", "updated_at", "email", "name", "role",
        }
        assert dto.role is UserRole.ADMIN

    def test_queries(self, user_repo, clock, ids):
        ann = create_user_record("ann@x.io", "Ann", UserRole.ADMIN, clock=clock, id_factory=ids)
        bob = create_user_record("bob@x.io", "Bob", clock=clock, id_factory=ids)
        bob = bob.model_copy(update={"is_verified": True})
        user_repo.save(ann)
        user_repo.save(bob)

        assert unwrap(user_repo.find_by_email("bob@x.io")).id == bob.id
        assert user_repo.find_by_email("zed@x.io").error == "User with email zed@x.io not found"
        assert [u.id for u in unwrap(user_repo.find_by_role(UserRole.ADMIN))] == [ann.id]
        assert [u.id for u in unwrap(user_repo.find_verified())] == [bob.id]
        assert user_repo.find_by_role(UserRole.GUEST).value == []


class TestItems:
    def test_record_view(self, clock, ids):
        item = create_item_record("Lamp", "desk lamp", "o-1", clock=clock, id_factory=ids)
        clock.advance(5)
        viewed = record_item_view(record_item_view(item, clock), clock)
        assert viewed.views == 2
        assert viewed.last_viewed_at == clock.now()

    def test_to_item_dto(self, clock, ids):
        item = create_item_record("Lamp", "desk lamp", "o-1", clock=clock, id_factory=ids)
        item = item.model_copy(update={"internal_notes": "secret", "views": 4})
        dto = to_item_dto(item)
        assert isinstance(dto, ItemDto)
        assert "internal_notes" not in dto.model_dump()
        assert "views" not in dto.model_dump()

    def test_queries(self, item_repo, clock, ids):
        a = create_item_record("Lamp", "d", "o-1", ItemStatus.PUBLISHED, clock=clock, id_factory=ids)
        b = create_item_record("Desk", "d", "o-2", clock=clock, id_factory=ids)
        c = create_item_record("Chair", "d", "o-1", clock=clock, id_factory=ids)
        for record, views in ((a, 3), (b, 10), (c, 1)):
            item_repo.save(record.model_copy(update={"views": views}))

        assert [i.id for i in unwrap(item_repo.find_by_owner("o-1"))] == [a.id, c.id]
        assert [i.id for i in unwrap(item_repo.find_by_status(ItemStatus.DRAFT))] == [b.id, c.id]
        assert [i.id for i in unwrap(item_repo.find_most_viewed(2))] == [b.id, a.id]

    def test_queries_do_not_mutate(self, item_repo, clock, ids):
        item_repo.save(create_item_record("Lamp", "d", "o-1", clock=clock, id_factory=ids))
        before = unwrap(item_repo.find_all())
        item_repo.find_most_viewed(5)
        item_repo.find_by_owner("o-1")
        assert unwrap(item_repo.find_all()) == before


class TestProducts:
    def _product(self, clock, ids, name, sku, **updates):
        product = create_product(
            name, "desc", sku, Price(amount=Decimal("9.5")),
            ProductCategory.BOOKS, clock=clock, id_factory=ids,
        )
        return product.model_copy(update=updates)

    def test_create_defaults(self, clock, ids):
        product = self._product(clock, ids, "Atlas", "BK-1")
        assert product.is_active is True
        assert product.stock_quantity == 0
        assert product.tags == ()

    def test_format_price(self):
        assert format_price(Price(amount=Decimal("12.5"), currency="EUR")) == "EUR 12.50"

    def test_negative_price_rejected(self):
        from pydantic import ValidationError as PydanticValidationError

        with pytest.raises(PydanticValidationError):
            Price(amount=Decimal("-1"))

    def test_is_in_stock(self, clock, ids):
        assert not is_in_stock(self._product(clock, ids, "A", "S1"))
        assert is_in_stock(self._product(clock, ids, "A", "S2", stock_quantity=3))
        assert not is_in_stock(
            self._product(clock, ids, "A", "S3", stock_quantity=3, is_active=False)
        )

    def test_queries(self, product_repo, clock, ids):
        atlas = self._product(clock, ids, "World Atlas", "BK-1", stock_quantity=2)
        lamp = self._product(
            clock, ids, "Lamp", "HM-1", category=ProductCategory.HOME, stock_quantity=20,
        )
        product_repo.save(atlas)
        product_repo.save(lamp)

        assert [p.id for p in unwrap(product_repo.find_by_category(ProductCategory.HOME))] == [lamp.id]
        assert unwrap(product_repo.find_by_sku("BK-1")).id == atlas.id
        assert product_repo.find_by_sku("none").ok is False
        assert [p.id for p in unwrap(product_repo.search_by_name("ATLAS"))] == [atlas.id]
        assert [p.id for p in unwrap(product_repo.find_low_stock(5))] == [atlas.id]
