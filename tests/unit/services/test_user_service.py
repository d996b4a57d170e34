"""Tests for UserService."""

from entitykit.core.clock import WallClock
from entitykit.core.errors import FailureKind
from entitykit.core.result import unwrap
from entitykit.domain.enums import UserRole
from entitykit.domain.users import UserRepository
from entitykit.events import EventType
from entitykit.repository import PaginationParams
from entitykit.repository.memory import InMemoryRepository
from entitykit.services import UserService


class TestRegisterUser:
    def test_register_lifecycle(self, user_service):
        """register -> get -> list -> delete -> get (not found)."""
        created = user_service.register_user("a@b.com", "Ann")
        assert created.ok
        user = unwrap(created)
        assert user.id == "test-1"
        assert user.created_at == user.updated_at

        assert unwrap(user_service.get_user(user.id)).id == user.id

        page = unwrap(user_service.list_users(PaginationParams(page=1, page_size=10)))
        assert [u.id for u in page.items] == [user.id]
        assert page.total == 1
        assert page.total_pages == 1

        assert user_service.delete_user(user.id).ok

        missing = user_service.get_user(user.id)
        assert not missing.ok
        assert missing.error.kind is FailureKind.NOT_FOUND

    def test_validation_failure_saves_nothing(self, user_service, user_repo):
        result = user_service.register_user("bad", "A")
        assert not result.ok
        assert result.error.kind is FailureKind.VALIDATION_FAILED
        assert [e.field for e in result.error.errors] == ["email", "name"]
        assert result.error.message.startswith("Validation failed: ")
        assert user_repo.find_all().value == []

    def test_duplicate_email_conflict(self, user_service):
        user_service.register_user("a@b.com", "Ann")
        result = user_service.register_user("a@b.com", "Another")
        assert result.error.kind is FailureKind.CONFLICT
        assert result.error.message == "Email already in use"

    def test_created_event(self, user_service):
        events = []
        user_service.subscribe(events.append)
        user = unwrap(user_service.register_user("a@b.com", "Ann", UserRole.ADMIN))
        [event] = events
        assert event.type is EventType.CREATED
        assert event.payload == user
        assert event.source == "backend"

    def test_no_event_on_failure(self, user_service):
        events = []
        user_service.subscribe(events.append)
        user_service.register_user("", "")
        assert events == []


class TestUpdateUser:
    def test_update_name_and_role(self, user_service, clock):
        user = unwrap(user_service.register_user("a@b.com", "Ann"))
        clock.advance(60)
        updated = unwrap(user_service.update_user(user.id, name="Annie", role=UserRole.ADMIN))
        assert updated.name == "Annie"
        assert updated.role is UserRole.ADMIN
        assert updated.created_at == user.created_at
        assert updated.updated_at == clock.now()

    def test_update_emits_event(self, user_service):
        user = unwrap(user_service.register_user("a@b.com", "Ann"))
        events = []
        user_service.subscribe(events.append)
        user_service.update_user(user.id, name="Annie")
        assert [e.type for e in events] == [EventType.UPDATED]

    def test_update_invalid_name(self, user_service):
        user = unwrap(user_service.register_user("a@b.com", "Ann"))
        result = user_service.update_user(user.id, name="A", role="superuser")
        assert [e.code for e in result.error.errors] == ["MIN_LENGTH", "INVALID_CHOICE"]
        assert unwrap(user_service.get_user(user.id)).name == "Ann"

    def test_update_missing(self, user_service):
        assert user_service.update_user("nope", name="X Y").error.kind is FailureKind.NOT_FOUND


class TestRecordLogin:
    def test_login_counter(self, user_service, user_repo):
        user = unwrap(user_service.register_user("a@b.com", "Ann"))
        user_service.record_login(user.id)
        user_service.record_login(user.id)
        assert unwrap(user_repo.find_by_id(user.id)).login_count == 2

    def test_login_missing(self, user_service):
        assert not user_service.record_login("ghost").ok


class TestDeleteUser:
    def test_delete_emits_pre_delete_snapshot(self, user_service):
        user = unwrap(user_service.register_user("a@b.com", "Ann"))
        events = []
        user_service.subscribe(events.append)
        assert user_service.delete_user(user.id).value is None
        [event] = events
        assert event.type is EventType.DELETED
        assert event.payload.id == user.id

    def test_delete_missing(self, user_service):
        result = user_service.delete_user("ghost")
        assert result.error.kind is FailureKind.NOT_FOUND
        assert "ghost" in result.error.message


class TestListUsers:
    def test_default_page_size_from_config(self, user_service):
        for n in range(12):
            user_service.register_user(f"u{n}@x.io", f"User {n}")
        page = unwrap(user_service.list_users())
        assert page.page_size == 10
        assert len(page.items) == 10
        assert page.total_pages == 2

    def test_page_size_clamped(self, user_service):
        page = unwrap(user_service.list_users(PaginationParams(page=1, page_size=500)))
        assert page.page_size == 50

    def test_sorted_listing(self, user_service):
        for name in ("Cy", "Al", "Bo"):
            user_service.register_user(f"{name.lower()}@x.io", name)
        page = unwrap(user_service.list_users(
            PaginationParams(page=1, page_size=10, sort_by="name", sort_order="desc")
        ))
        assert [u.name for u in page.items] == ["Cy", "Bo", "Al"]

    def test_items_are_dtos(self, user_service):
        user_service.register_user("a@b.com", "Ann")
        [item] = unwrap(user_service.list_users()).items
        assert "login_count" not in item.model_dump()


def test_register_with_wall_clock_keeps_stamps_ordered():
    clock = WallClock()
    service = UserService(UserRepository(InMemoryRepository(clock=clock)), clock=clock)
    user = unwrap(service.register_user("w@b.com", "Walt"))
    assert user.created_at <= user.updated_at
