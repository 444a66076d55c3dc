"""
Configuration helpers for the accounts service.

Routers, repositories and scripts read settings from here instead of
fetching os.environ directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

DEFAULT_STORE_PATH = Path(__file__).resolve().parents[1] / "data" / "users.json"
STORE_BACKENDS = ("sql", "json", "memory")


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    store_backend: str
    store_path: Path
    store_timeout_seconds: float
    default_page_size: int
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _float(value: str | None, default: float = 0.0) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    backend = (os.getenv("USER_STORE_BACKEND") or "sql").strip().lower()
    if backend not in STORE_BACKENDS:
        raise RuntimeError(f"USER_STORE_BACKEND must be one of {', '.join(STORE_BACKENDS)}, got {backend!r}")

    store_path = (os.getenv("USER_STORE_PATH") or "").strip()
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=(os.getenv("DATABASE_URL") or "").strip(),
        store_backend=backend,
        store_path=Path(store_path).expanduser() if store_path else DEFAULT_STORE_PATH,
        store_timeout_seconds=max(0.0, _float(os.getenv("STORE_TIMEOUT_SECONDS"), 5.0)),
        default_page_size=_int(os.getenv("DEFAULT_PAGE_SIZE"), 100),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
