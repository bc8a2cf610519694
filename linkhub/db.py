from __future__ import annotations

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from linkhub.core.config import settings


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _build_engine():
    connect_args = {}
    is_sqlite = settings.DATABASE_URL.startswith("sqlite")
    if is_sqlite:
        connect_args = {"check_same_thread": False}
    engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)
    if is_sqlite:
        enable_sqlite_foreign_keys(engine)
    return engine


engine = _build_engine()


def init_db(bind: Engine | None = None) -> None:
    """Create database tables in environments without migrations."""
    # registers every table on SQLModel.metadata
    import linkhub.models  # noqa: F401

    SQLModel.metadata.create_all(bind=bind or engine)


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


SessionDep = Annotated[Session, Depends(get_session)]
