"""Pick the repository backend configured for this process."""
from __future__ import annotations

from typing import Optional

from accounts.core.config import Settings, get_settings
from accounts.domain.users import UserRepository

from .json_repository import JsonUserRepository
from .memory_repository import InMemoryUserRepository
from .sql_repository import SQLUserRepository


def build_repository(settings: Optional[Settings] = None) -> UserRepository:
    settings = settings or get_settings()
    if settings.store_backend == "memory":
        return InMemoryUserRepository()
    if settings.store_backend == "json":
        return JsonUserRepository(settings.store_path, timeout_seconds=settings.store_timeout_seconds)
    return SQLUserRepository(timeout_seconds=settings.store_timeout_seconds)
