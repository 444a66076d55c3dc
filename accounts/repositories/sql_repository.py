"""User repository backed by SQLAlchemy (one row per user document)."""
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from accounts.core.config import get_settings
from accounts.core.deadline import Deadline, resolve_deadline
from accounts.db.models import UserDocument
from accounts.db.session import get_sessionmaker
from accounts.domain.users import RepositoryError, User, UserNotFoundError, UserStatus

from .common import check_deadline
from .pagination import fetch_size, paginate

logger = logging.getLogger("accounts.repositories.sql")


def _record_to_user(record: UserDocument) -> User:
    try:
        return User(record.id, record.name or "", UserStatus(record.status), record.registered_at)
    except (TypeError, ValueError, AttributeError) as exc:
        raise RepositoryError(f"Failed to decode stored user {record.id}") from exc


def _user_to_record(user: User) -> UserDocument:
    return UserDocument(
        id=user.user_id,
        name=user.name,
        status=user.status.value,
        registered_at=user.registered_at,
    )


_UPSERT_INSERTS = {"sqlite": sqlite.insert, "postgresql": postgresql.insert}


def _upsert_statement(dialect_name: str, user: User):
    """Single-statement INSERT ... ON CONFLICT DO UPDATE, or None when the dialect has none."""
    insert = _UPSERT_INSERTS.get(dialect_name)
    if insert is None:
        return None
    stmt = insert(UserDocument).values(
        id=user.user_id,
        name=user.name,
        status=user.status.value,
        registered_at=user.registered_at,
    )
    return stmt.on_conflict_do_update(
        index_elements=[UserDocument.id],
        set_={
            "name": stmt.excluded.name,
            "status": stmt.excluded.status,
            "registered_at": stmt.excluded.registered_at,
        },
    )


class SQLUserRepository:
    """
    UserRepository over a SQL table keyed by user id.

    ``session_factory`` is the store handle; when omitted the process-wide
    sessionmaker from accounts.db.session is used.
    """

    def __init__(
        self,
        session_factory: Optional[Callable[[], Session]] = None,
        *,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self._session_factory = session_factory
        if timeout_seconds is None:
            timeout_seconds = get_settings().store_timeout_seconds
        self._timeout_seconds = timeout_seconds

    def _session(self) -> Session:
        factory = self._session_factory or get_sessionmaker()
        return factory()

    def _deadline(self, deadline: Optional[Deadline]) -> Optional[Deadline]:
        return resolve_deadline(deadline, self._timeout_seconds)

    def get(self, user_id: str, *, deadline: Optional[Deadline] = None) -> User:
        deadline = self._deadline(deadline)
        check_deadline(deadline, "get")
        try:
            with self._session() as session:
                record = session.get(UserDocument, user_id)
                check_deadline(deadline, "get")
                if record is None:
                    raise UserNotFoundError(user_id)
                return _record_to_user(record)
        except SQLAlchemyError as exc:
            logger.warning("get user %s failed: %s", user_id, exc)
            raise RepositoryError(f"Failed to get user {user_id}") from exc

    def list(
        self,
        exclusive_start_key: str = "",
        limit: int = 0,
        *,
        deadline: Optional[Deadline] = None,
    ) -> Tuple[List[User], str]:
        deadline = self._deadline(deadline)
        check_deadline(deadline, "list")
        stmt = select(UserDocument).order_by(UserDocument.id)
        if exclusive_start_key:
            stmt = stmt.where(UserDocument.id > exclusive_start_key)
        size = fetch_size(limit)
        if size is not None:
            stmt = stmt.limit(size)
        try:
            with self._session() as session:
                rows = session.execute(stmt).scalars().all()
                check_deadline(deadline, "list")
                records, last_evaluated_key = paginate(rows, limit, key=lambda record: record.id)
                users = [_record_to_user(record) for record in records]
        except SQLAlchemyError as exc:
            logger.warning("list users after %r failed: %s", exclusive_start_key, exc)
            raise RepositoryError("Failed to list users") from exc
        logger.debug("listed %d users after %r (next=%r)", len(users), exclusive_start_key, last_evaluated_key)
        return users, last_evaluated_key

    def put(self, user: User, *, deadline: Optional[Deadline] = None) -> None:
        deadline = self._deadline(deadline)
        check_deadline(deadline, "put")
        try:
            with self._session() as session:
                stmt = _upsert_statement(session.get_bind().dialect.name, user)
                if stmt is None:
                    session.merge(_user_to_record(user))
                else:
                    session.execute(stmt)
                session.flush()
                if deadline is not None and deadline.expired():
                    session.rollback()
                    check_deadline(deadline, "put")
                session.commit()
        except SQLAlchemyError as exc:
            logger.warning("put user %s failed: %s", user.user_id, exc)
            raise RepositoryError(f"Failed to save user {user.user_id}") from exc
        logger.debug("saved user %s", user.user_id)

    def delete(self, user_id: str, *, deadline: Optional[Deadline] = None) -> None:
        deadline = self._deadline(deadline)
        check_deadline(deadline, "delete")
        try:
            with self._session() as session:
                session.execute(delete(UserDocument).where(UserDocument.id == user_id))
                if deadline is not None and deadline.expired():
                    session.rollback()
                    check_deadline(deadline, "delete")
                session.commit()
        except SQLAlchemyError as exc:
            logger.warning("delete user %s failed: %s", user_id, exc)
            raise RepositoryError(f"Failed to delete user {user_id}") from exc
        logger.debug("deleted user %s", user_id)
