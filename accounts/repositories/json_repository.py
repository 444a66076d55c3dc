"""
User repository backed by a single JSON file.

The file holds ``{"users": {user_id: document}}``. Every write rewrites the
file through its own temporary sibling that is renamed into place, so a
failed write leaves the previous content intact. Writers on the same file
are serialized by a per-path thread lock and a ``<file>.lock`` file lock,
so separate handles and separate processes can share one store.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from filelock import FileLock, Timeout

from accounts.core.deadline import Deadline, resolve_deadline
from accounts.domain.users import RepositoryError, StoreTimeoutError, User, UserNotFoundError

from .common import check_deadline, document_to_user, user_to_document
from .pagination import key_range, paginate

logger = logging.getLogger("accounts.repositories.json")

_path_locks: Dict[Path, threading.Lock] = {}
_path_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    with _path_locks_guard:
        lock = _path_locks.get(path)
        if lock is None:
            lock = _path_locks[path] = threading.Lock()
        return lock


class JsonUserRepository:
    """UserRepository over a JSON document file."""

    def __init__(self, path: Path | str, *, timeout_seconds: float = 0.0) -> None:
        self.path = Path(path).expanduser().resolve()
        self._timeout_seconds = timeout_seconds
        self._lock = _lock_for(self.path)
        self._file_lock = FileLock(str(self.path) + ".lock")

    @contextmanager
    def _writing(self, deadline: Optional[Deadline], operation: str) -> Iterator[None]:
        """Hold the thread and file locks for one read-modify-write."""
        timeout = min(deadline.remaining(), threading.TIMEOUT_MAX) if deadline is not None else -1
        if not self._lock.acquire(timeout=timeout):
            raise StoreTimeoutError(f"Deadline exceeded waiting for {self.path} during {operation}")
        try:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self._file_lock.acquire(timeout=timeout)
            except Timeout as exc:
                raise StoreTimeoutError(f"Deadline exceeded waiting for {self.path} during {operation}") from exc
            except OSError as exc:
                raise RepositoryError(f"Failed to lock user store {self.path}") from exc
            try:
                yield
            finally:
                self._file_lock.release()
        finally:
            self._lock.release()

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                db = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("reading %s failed: %s", self.path, exc)
            raise RepositoryError(f"Failed to read user store {self.path}") from exc
        users = db.get("users") if isinstance(db, dict) else None
        if not isinstance(users, dict):
            raise RepositoryError(f"User store {self.path} is malformed")
        return users

    def _save(self, users: dict, deadline: Optional[Deadline], operation: str) -> None:
        tmp = None
        try:
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=self.path.name + ".", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump({"users": users}, f, ensure_ascii=False, indent=2)
            check_deadline(deadline, operation)
            os.replace(tmp, self.path)
            tmp = None
        except OSError as exc:
            logger.warning("writing %s failed: %s", self.path, exc)
            raise RepositoryError(f"Failed to write user store {self.path}") from exc
        finally:
            if tmp is not None and os.path.exists(tmp):
                os.unlink(tmp)

    def get(self, user_id: str, *, deadline: Optional[Deadline] = None) -> User:
        deadline = resolve_deadline(deadline, self._timeout_seconds)
        check_deadline(deadline, "get")
        users = self._load()
        document = users.get(user_id)
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
        deadline = resolve_deadline(deadline, self._timeout_seconds)
        check_deadline(deadline, "list")
        users = self._load()
        keys = key_range(sorted(users), exclusive_start_key, limit)
        page, last_evaluated_key = paginate(keys, limit, key=lambda key: key)
        return [document_to_user(key, users[key]) for key in page], last_evaluated_key

    def put(self, user: User, *, deadline: Optional[Deadline] = None) -> None:
        deadline = resolve_deadline(deadline, self._timeout_seconds)
        check_deadline(deadline, "put")
        with self._writing(deadline, "put"):
            users = self._load()
            users[user.user_id] = user_to_document(user)
            self._save(users, deadline, "put")
        logger.debug("saved user %s", user.user_id)

    def delete(self, user_id: str, *, deadline: Optional[Deadline] = None) -> None:
        deadline = resolve_deadline(deadline, self._timeout_seconds)
        check_deadline(deadline, "delete")
        with self._writing(deadline, "delete"):
            users = self._load()
            if users.pop(user_id, None) is None:
                return
            self._save(users, deadline, "delete")
        logger.debug("deleted user %s", user_id)
