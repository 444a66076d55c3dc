"""In-memory UserRepository, used as the test double and for local runs."""
from __future__ import annotations

import threading
from typing import Dict, List, Optional, Tuple

from accounts.core.deadline import Deadline
from accounts.domain.users import User, UserNotFoundError

from .common import check_deadline, document_to_user, user_to_document
from .pagination import key_range, paginate


class InMemoryUserRepository:
    """Keeps serialized documents so callers only ever receive detached copies."""

    def __init__(self) -> None:
        self._documents: Dict[str, dict] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._documents)

    def get(self, user_id: str, *, deadline: Optional[Deadline] = None) -> User:
        check_deadline(deadline, "get")
        with self._lock:
            document = self._documents.get(user_id)
        if document is None:
            raise UserNotFoundError(user_id)
        return document_to_user(user_id, document)

    def list(
        self,
        exclusive_start_key: str = "",
        limit: int = 0,
        *,
        deadline: Optional[Deadline] = None,
    ) -> Tuple[List[User], str]:
        check_deadline(deadline, "list")
        with self._lock:
            keys = key_range(sorted(self._documents), exclusive_start_key, limit)
            page, last_evaluated_key = paginate(keys, limit, key=lambda key: key)
            documents = [(key, self._documents[key]) for key in page]
        return [document_to_user(key, document) for key, document in documents], last_evaluated_key

    def put(self, user: User, *, deadline: Optional[Deadline] = None) -> None:
        check_deadline(deadline, "put")
        document = user_to_document(user)
        with self._lock:
            self._documents[user.user_id] = document

    def delete(self, user_id: str, *, deadline: Optional[Deadline] = None) -> None:
        check_deadline(deadline, "delete")
        with self._lock:
            self._documents.pop(user_id, None)
