from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from accounts.app import create_app  # noqa: E402
from accounts.core import config as core_config  # noqa: E402
from accounts.domain.users import RepositoryError, User, UserStatus  # noqa: E402
from accounts.repositories import InMemoryUserRepository  # noqa: E402


class _BrokenRepository(InMemoryUserRepository):
    def get(self, user_id, *, deadline=None):
        raise RepositoryError("store unavailable")


@pytest.fixture()
def repo():
    core_config.get_settings.cache_clear()
    return InMemoryUserRepository()


@pytest.fixture()
def client(repo):
    return TestClient(create_app(repository=repo))


@pytest.mark.parametrize(
    "user,expected",
    [
        (
            User("U1", "ユーザー１", UserStatus.NORMAL, datetime(1000, 1, 1, tzinfo=timezone.utc)),
            {"name": "ユーザー１", "status": "normal", "registeredAt": "1000-01-01T00:00:00Z"},
        ),
        (
            User("U2", "ユーザー２", UserStatus.FROZEN, datetime(2000, 1, 1, tzinfo=timezone.utc)),
            {"name": "ユーザー２", "status": "frozen", "registeredAt": "2000-01-01T00:00:00Z"},
        ),
    ],
)
def test_get_user_ok(client, repo, user, expected):
    repo.put(user)
    resp = client.get(f"/users/{user.user_id}")
    assert resp.status_code == 200
    assert resp.json() == expected


def test_get_user_unknown_id(client):
    resp = client.get("/users/U404")
    assert resp.status_code == 404
    assert resp.json()["code"] == "UserNotFound"


def test_get_user_rejects_long_id(client):
    resp = client.get("/users/" + "a" * 101)
    assert resp.status_code == 400
    assert resp.json()["code"] == "BadRequest"


def test_get_user_store_failure_is_server_error():
    core_config.get_settings.cache_clear()
    client = TestClient(create_app(repository=_BrokenRepository()))
    resp = client.get("/users/U1")
    assert resp.status_code == 500
    assert resp.json()["code"] == "InternalServerError"


def test_get_user_with_invalid_stored_name_is_server_error(client, repo):
    repo.put(User.dummy("U1", ""))
    resp = client.get("/users/U1")
    assert resp.status_code == 500
    assert resp.json()["code"] == "InternalServerError"
