"""
Persistence adapters for users.

Every adapter satisfies accounts.domain.UserRepository, so services and
routers can take any of them: SQL (default), a JSON file, or memory (tests).
"""

from .factory import build_repository
from .json_repository import JsonUserRepository
from .memory_repository import InMemoryUserRepository
from .sql_repository import SQLUserRepository

__all__ = [
    "InMemoryUserRepository",
    "JsonUserRepository",
    "SQLUserRepository",
    "build_repository",
]
