#!/usr/bin/env python3
"""Create the database schema."""

from linkhub.core.config import settings
from linkhub.db import init_db


def main() -> None:
    init_db()
    print(f"Schema ready at {settings.DATABASE_URL}")


if __name__ == "__main__":
    main()
