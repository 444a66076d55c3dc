"""Domain model for user accounts (aggregate, errors, repository protocol)."""

from .users import (
    FrozenUserError,
    RepositoryError,
    StoreTimeoutError,
    User,
    UserError,
    UserNotFoundError,
    UserRepository,
    UserStatus,
)

__all__ = [
    "FrozenUserError",
    "RepositoryError",
    "StoreTimeoutError",
    "User",
    "UserError",
    "UserNotFoundError",
    "UserRepository",
    "UserStatus",
]
