#!/usr/bin/env python3
"""Create an admin account. The first account becomes the super-admin."""

import argparse
import getpass

from sqlmodel import Session

from linkhub.db import engine, init_db
from linkhub.exceptions import DuplicateName, ValidationError
from linkhub.services.users import provision_user


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--username")
    parser.add_argument("--password", help="prompted for when omitted")
    role = parser.add_mutually_exclusive_group()
    role.add_argument("--super", dest="super_admin", action="store_true", default=None)
    role.add_argument("--regular", dest="super_admin", action="store_false")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    username = args.username or input("Username: ").strip()
    password = args.password or getpass.getpass("Password: ")

    init_db()
    with Session(engine) as session:
        try:
            user = provision_user(session, username, password, super_admin=args.super_admin)
        except DuplicateName:
            print(f"Error: username '{username.lower()}' already exists.")
            return 1
        except ValidationError as e:
            print(f"Error: {e.detail}")
            return 1

    kind = "super-admin" if user.is_super_admin else "admin"
    print(f"Created {kind} '{user.username}' (id={user.id})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
