#!/usr/bin/env python3
"""
Manage users directly in the configured store.

Usage:
  python scripts/manage_users.py init-db
  python scripts/manage_users.py create --name Alice
  python scripts/manage_users.py show <user_id>
  python scripts/manage_users.py rename <user_id> --name Bob
  python scripts/manage_users.py freeze <user_id>
  python scripts/manage_users.py unfreeze <user_id>
  python scripts/manage_users.py delete <user_id>
  python scripts/manage_users.py list [--page-size 50]
"""
from __future__ import annotations

import argparse
import sys
from typing import Sequence

from accounts.core.config import get_settings
from accounts.core.logs import configure_logging
from accounts.db.create_tables import create_all
from accounts.domain.users import RepositoryError, User, UserError
from accounts.repositories import build_repository
from accounts.services.user_service import UserService


def _describe(user: User) -> str:
    return f"{user.user_id}\t{user.status.value}\t{user.registered_at.isoformat()}\t{user.name}"


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Manage user accounts")
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create the user table (SQL backend)")

    create = sub.add_parser("create", help="Register a new user")
    create.add_argument("--name", required=True, help="Display name")

    for name, help_text in (
        ("show", "Print one user"),
        ("freeze", "Freeze a user"),
        ("unfreeze", "Lift a user's freeze"),
        ("delete", "Delete a user (no error when absent)"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("user_id")

    rename = sub.add_parser("rename", help="Change a user's name")
    rename.add_argument("user_id")
    rename.add_argument("--name", required=True, help="New display name")

    listing = sub.add_parser("list", help="List every user ordered by id")
    listing.add_argument("--page-size", type=int, default=None, help="Users fetched per store call")
    return ap.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)
    if args.command == "init-db":
        create_all()
        print("OK: user table ready")
        return 0

    svc = UserService(build_repository(settings))

    if args.command == "create":
        print(_describe(svc.register(args.name)))
    elif args.command == "show":
        print(_describe(svc.get_user(args.user_id)))
    elif args.command == "rename":
        print(_describe(svc.rename(args.user_id, args.name)))
    elif args.command == "freeze":
        print(_describe(svc.freeze(args.user_id)))
    elif args.command == "unfreeze":
        print(_describe(svc.unfreeze(args.user_id)))
    elif args.command == "delete":
        svc.remove(args.user_id)
        print(f"OK: {args.user_id} removed")
    elif args.command == "list":
        page_size = args.page_size or settings.default_page_size
        count = 0
        for user in svc.iter_users(page_size):
            print(_describe(user))
            count += 1
        print(f"{count} user(s)")
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except (UserError, RepositoryError) as exc:
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
