"""Helpers shared by the repository backends (deadlines, document codec)."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional

from accounts.core.deadline import Deadline
from accounts.domain.users import RepositoryError, StoreTimeoutError, User, UserStatus


def check_deadline(deadline: Optional[Deadline], operation: str) -> None:
    if deadline is not None and deadline.expired():
        raise StoreTimeoutError(f"Deadline exceeded during {operation}")


def user_to_document(user: User) -> dict:
    """Serialize a user into the stored document (the id is the document key)."""
    return {
        "name": user.name,
        "status": user.status.value,
        "registered_at": user.registered_at.isoformat(),
    }


def document_to_user(user_id: str, document: Mapping[str, Any]) -> User:
    try:
        registered_at = document["registered_at"]
        if isinstance(registered_at, str):
            registered_at = datetime.fromisoformat(registered_at)
        return User(
            user_id,
            str(document.get("name") or ""),
            UserStatus(document["status"]),
            registered_at,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise RepositoryError(f"Failed to decode stored user {user_id}") from exc
