from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from accounts.core import config as core_config  # noqa: E402


def _load_cli():
    spec = importlib.util.spec_from_file_location("manage_users", ROOT / "scripts" / "manage_users.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture()
def cli(tmp_path, monkeypatch):
    monkeypatch.setenv("USER_STORE_BACKEND", "json")
    monkeypatch.setenv("USER_STORE_PATH", str(tmp_path / "users.json"))
    core_config.get_settings.cache_clear()
    yield _load_cli()
    core_config.get_settings.cache_clear()


def test_create_freeze_and_list(cli, capsys):
    assert cli.main(["create", "--name", "Alice"]) == 0
    user_id = capsys.readouterr().out.split("\t")[0]

    assert cli.main(["freeze", user_id]) == 0
    assert "\tfrozen\t" in capsys.readouterr().out

    assert cli.main(["list", "--page-size", "1"]) == 0
    out = capsys.readouterr().out
    assert user_id in out
    assert "1 user(s)" in out

    assert cli.main(["delete", user_id]) == 0
    assert cli.main(["list"]) == 0
    assert "0 user(s)" in capsys.readouterr().out
