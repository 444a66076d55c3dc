"""FastAPI application for the accounts service."""
from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from accounts.core.config import get_settings
from accounts.core.logs import configure_logging
from accounts.domain.users import UserRepository
from accounts.repositories import build_repository
from accounts.routers import users as users_router


def create_app(repository: Optional[UserRepository] = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (``--factory accounts.app:create_app``)."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Accounts API")
    app.state.settings = settings
    app.state.user_repository = repository if repository is not None else build_repository(settings)
    app.include_router(users_router.router)
    return app
