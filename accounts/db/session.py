"""Engine/session helpers for the SQL backend."""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from accounts.core.config import get_settings

Base = declarative_base()


def build_engine(url: str, *, timeout_seconds: float = 0.0):
    """Create an engine for ``url``; for SQLite the timeout bounds the driver's lock wait."""
    url = (url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
    connect_args = {}
    if url.startswith("sqlite") and timeout_seconds > 0:
        connect_args["timeout"] = timeout_seconds
    return create_engine(url, future=True, pool_pre_ping=True, connect_args=connect_args)


@lru_cache
def get_engine():
    settings = get_settings()
    return build_engine(settings.database_url, timeout_seconds=settings.store_timeout_seconds)


@lru_cache
def get_sessionmaker() -> sessionmaker:
    return sessionmaker(bind=get_engine(), autoflush=False, autocommit=False, future=True)


@contextmanager
def get_session() -> Session:
    session: Session = get_sessionmaker()()
    try:
        yield session
    finally:
        session.close()
