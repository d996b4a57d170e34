"""User records, the client-facing UserDto, and the user repository."""

from __future__ import annotations

from datetime import datetime

from entitykit.core.clock import DEFAULT_CLOCK, IClock
from entitykit.core.entity import Entity, stamp_new, touch
from entitykit.core.ids import IdGenerator, new_id
from entitykit.core.result import Result
from entitykit.repository.base import DelegatingRepository
from entitykit.repository.queries import filter_items, find_first

from .enums import UserRole


class UserDto(Entity):
    """User shape shared with clients."""

    email: str
    name: str
    role: UserRole


class UserRecord(Entity):
    """Server-side user record."""

    email: str
    name: str
    role: UserRole = UserRole.USER
    last_login_at: datetime | None = None
    login_count: int = 0
    is_verified: bool = False


def create_user_record(
    email: str,
    name: str,
    role: UserRole = UserRole.USER,
    *,
    clock: IClock | None = None,
    id_factory: IdGenerator = new_id,
) -> UserRecord:
    return UserRecord(
        id=id_factory(),
        **stamp_new(clock),
        email=email,
        name=name,
        role=role,
    )


def record_user_login(user: UserRecord, clock: IClock | None = None) -> UserRecord:
    """Bump the login counter and stamp ``last_login_at``."""
    now = (clock or DEFAULT_CLOCK).now()
    updated = user.model_copy(
        update={"last_login_at": now, "login_count": user.login_count + 1}
    )
    return touch(updated, clock)


def to_user_dto(user: UserRecord) -> UserDto:
    return UserDto(
        id=user.id,
        created_at=user.created_at,
        updated_at=user.updated_at,
        email=user.email,
        name=user.name,
        role=user.role,
    )


class UserRepository(DelegatingRepository[UserRecord]):
    """User store with lookups by email, role and verification state."""

    def find_by_email(self, email: str) -> Result[UserRecord, str]:
        return find_first(
            self.snapshot(),
            lambda u: u.email == email,
            f"User with email {email} not found",
        )

    def find_by_role(self, role: UserRole) -> Result[list[UserRecord], str]:
        return filter_items(self.snapshot(), lambda u: u.role == role)

    def find_verified(self) -> Result[list[UserRecord], str]:
        return filter_items(self.snapshot(), lambda u: u.is_verified)
