"""User aggregate and the repository contract it is persisted through."""
from __future__ import annotations

import enum
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Protocol, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from accounts.core.deadline import Deadline


class UserStatus(str, enum.Enum):
    NORMAL = "normal"
    FROZEN = "frozen"


class UserError(Exception):
    """Base exception for user domain rules."""


class UserNotFoundError(UserError):
    """Raised when no stored user has the requested id."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class FrozenUserError(UserError):
    """Raised when renaming a frozen user."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"User {user_id} is frozen and cannot change name")
        self.user_id = user_id


class RepositoryError(Exception):
    """Raised when the underlying store fails (I/O, connectivity, decoding)."""


class StoreTimeoutError(RepositoryError):
    """Raised when the caller's deadline expires before the store call completes."""


class User:
    """
    A user account.

    ``user_id`` and ``registered_at`` are fixed at construction. Instances are
    detached snapshots: mutating one has no effect on the store until it is
    put back through a repository.
    """

    __slots__ = ("_user_id", "_registered_at", "name", "status")

    def __init__(
        self,
        user_id: str,
        name: str,
        status: UserStatus = UserStatus.NORMAL,
        registered_at: Optional[datetime] = None,
    ) -> None:
        self._user_id = user_id
        self.name = name
        self.status = UserStatus(status)
        if registered_at is None:
            registered_at = datetime.now(timezone.utc)
        elif registered_at.tzinfo is None:
            registered_at = registered_at.replace(tzinfo=timezone.utc)
        else:
            registered_at = registered_at.astimezone(timezone.utc)
        self._registered_at = registered_at

    @classmethod
    def new(cls, name: str) -> "User":
        """Create a brand new user with a random UUID4 id."""
        return cls(str(uuid.uuid4()), name, UserStatus.NORMAL, datetime.now(timezone.utc))

    @classmethod
    def dummy(cls, user_id: str = "", name: str = "") -> "User":
        """Valid user with fixed values, for tests."""
        return cls(user_id, name, UserStatus.NORMAL, datetime.fromtimestamp(0, timezone.utc))

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def registered_at(self) -> datetime:
        return self._registered_at

    def is_frozen(self) -> bool:
        return self.status == UserStatus.FROZEN

    def freeze(self) -> None:
        """Freeze the user. No-op when already frozen."""
        self.status = UserStatus.FROZEN

    def unfreeze(self) -> None:
        """Lift the freeze. No-op when the user is not frozen."""
        self.status = UserStatus.NORMAL

    def change_name(self, name: str) -> None:
        """Rename the user; frozen users keep their current name."""
        if self.is_frozen():
            raise FrozenUserError(self._user_id)
        self.name = name

    def _key(self) -> tuple:
        return (self._user_id, self.name, self.status, self._registered_at)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._user_id)

    def __repr__(self) -> str:
        return (
            f"User(user_id={self._user_id!r}, name={self.name!r}, "
            f"status={self.status.value!r}, registered_at={self._registered_at.isoformat()!r})"
        )


class UserRepository(Protocol):
    """
    Persistence boundary for users.

    ``list`` pages through users ordered by id. Pass ``""`` as
    ``exclusive_start_key`` on the first call; while the returned
    ``last_evaluated_key`` is non-empty, pass it back to continue. An empty
    ``last_evaluated_key`` means the scan is complete: feeding ``""`` back in
    would restart it from the beginning. ``limit`` caps the page size; zero or
    a negative value returns every remaining user.

    ``delete`` is idempotent: deleting an unknown id succeeds.
    """

    def get(self, user_id: str, *, deadline: Optional["Deadline"] = None) -> User:
        ...

    def list(
        self,
        exclusive_start_key: str = "",
        limit: int = 0,
        *,
        deadline: Optional["Deadline"] = None,
    ) -> Tuple[List[User], str]:
        ...

    def put(self, user: User, *, deadline: Optional["Deadline"] = None) -> None:
        ...

    def delete(self, user_id: str, *, deadline: Optional["Deadline"] = None) -> None:
        ...
