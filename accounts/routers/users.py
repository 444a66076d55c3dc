"""Read endpoint for user accounts."""
from __future__ import annotations

import logging
from datetime import timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from accounts.domain.users import RepositoryError, User, UserNotFoundError, UserRepository, UserStatus

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger("accounts.routers.users")

USER_ID_MAX_LENGTH = 100
NAME_MAX_LENGTH = 100


def _get_repository(request: Request) -> UserRepository:
    repo = getattr(getattr(request.app, "state", None), "user_repository", None)
    if repo is None:
        raise RuntimeError("UserRepository is not configured")
    return repo


def _error(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse({"message": message, "code": code}, status_code=status_code)


def _format_timestamp(user: User) -> str:
    value = user.registered_at.astimezone(timezone.utc).isoformat()
    return value.replace("+00:00", "Z")


def _user_body(user: User) -> dict:
    body = {
        "name": user.name,
        "status": user.status.value,
        "registeredAt": _format_timestamp(user),
    }
    if not 1 <= len(body["name"]) <= NAME_MAX_LENGTH:
        raise ValueError(f"name must have 1 to {NAME_MAX_LENGTH} characters")
    if body["status"] not in {status.value for status in UserStatus}:
        raise ValueError(f"unknown status {body['status']!r}")
    return body


@router.get("/{user_id}")
def get_user(user_id: str, request: Request):
    if not 1 <= len(user_id) <= USER_ID_MAX_LENGTH:
        return _error(400, "BadRequest", f"user id must have 1 to {USER_ID_MAX_LENGTH} characters")
    repo = _get_repository(request)
    try:
        user = repo.get(user_id)
    except UserNotFoundError:
        return _error(404, "UserNotFound", "User not found")
    except RepositoryError:
        logger.exception("failed to load user %s", user_id)
        return _error(500, "InternalServerError", "Failed to load user")
    try:
        body = _user_body(user)
    except ValueError:
        logger.exception("invalid response for user %s", user_id)
        return _error(500, "InternalServerError", "Invalid user data")
    return body
