"""User use cases (register, rename, freeze, scan)."""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple

from accounts.core.deadline import Deadline
from accounts.domain.users import User, UserRepository

logger = logging.getLogger("accounts.services.users")


def iter_all_users(
    repository: UserRepository,
    page_size: int = 100,
    *,
    deadline: Optional[Deadline] = None,
) -> Iterator[User]:
    """Walk every stored user, page by page, until the cursor comes back empty."""
    cursor = ""
    while True:
        users, cursor = repository.list(cursor, page_size, deadline=deadline)
        yield from users
        if not cursor:
            return


class UserService:
    """Orchestrates the User aggregate and a UserRepository."""

    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository

    def get_user(self, user_id: str, *, deadline: Optional[Deadline] = None) -> User:
        return self.repository.get(user_id, deadline=deadline)

    def register(self, name: str, *, deadline: Optional[Deadline] = None) -> User:
        user = User.new(name)
        self.repository.put(user, deadline=deadline)
        logger.info("registered user %s", user.user_id)
        return user

    def rename(self, user_id: str, name: str, *, deadline: Optional[Deadline] = None) -> User:
        user = self.repository.get(user_id, deadline=deadline)
        user.change_name(name)
        self.repository.put(user, deadline=deadline)
        return user

    def freeze(self, user_id: str, *, deadline: Optional[Deadline] = None) -> User:
        user = self.repository.get(user_id, deadline=deadline)
        if not user.is_frozen():
            user.freeze()
            self.repository.put(user, deadline=deadline)
            logger.info("froze user %s", user_id)
        return user

    def unfreeze(self, user_id: str, *, deadline: Optional[Deadline] = None) -> User:
        user = self.repository.get(user_id, deadline=deadline)
        if user.is_frozen():
            user.unfreeze()
            self.repository.put(user, deadline=deadline)
            logger.info("unfroze user %s", user_id)
        return user

    def remove(self, user_id: str, *, deadline: Optional[Deadline] = None) -> None:
        self.repository.delete(user_id, deadline=deadline)

    def list_page(
        self,
        exclusive_start_key: str = "",
        limit: int = 0,
        *,
        deadline: Optional[Deadline] = None,
    ) -> Tuple[List[User], str]:
        return self.repository.list(exclusive_start_key, limit, deadline=deadline)

    def iter_users(self, page_size: int = 100, *, deadline: Optional[Deadline] = None) -> Iterator[User]:
        return iter_all_users(self.repository, page_size, deadline=deadline)
