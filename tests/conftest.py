from typing import Dict, List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from linkhub.core.limiter import limiter
from linkhub.core.security import create_access_token, get_password_hash
from linkhub.db import enable_sqlite_foreign_keys, get_session, init_db
from linkhub.main import app
from linkhub.models import ROLE_ADMIN, ROLE_SUPERADMIN, User
from linkhub.schemas import PushMessage
from linkhub.services.fanout import get_notifier

PASSWORD = "correct horse"


class RecordingNotifier:
    """Stands in for websocket delivery; keeps every message it is handed."""

    def __init__(self):
        self.messages: List[PushMessage] = []

    async def deliver(self, messages: List[PushMessage]) -> None:
        self.messages.extend(messages)

    def on(self, channel: str) -> List[PushMessage]:
        return [m for m in self.messages if m.channel == channel]

    def events(self, channel: str) -> List[str]:
        return [m.event for m in self.on(channel)]

    def clear(self) -> None:
        self.messages.clear()


@pytest.fixture(scope="session")
def password_hash() -> str:
    return get_password_hash(PASSWORD)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def users(session, password_hash) -> Dict[str, User]:
    """root is the super-admin (id 1); alice, bob and carol are plain admins (ids 2-4)."""
    accounts = {
        "root": User(username="root", hashed_password=password_hash, role=ROLE_SUPERADMIN),
        "alice": User(username="alice", hashed_password=password_hash, role=ROLE_ADMIN),
        "bob": User(username="bob", hashed_password=password_hash, role=ROLE_ADMIN),
        "carol": User(username="carol", hashed_password=password_hash, role=ROLE_ADMIN),
    }
    for user in accounts.values():
        session.add(user)
        session.flush()
    session.commit()
    for user in accounts.values():
        session.refresh(user)
    return accounts


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def client(engine, notifier):
    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_notifier] = lambda: notifier
    limiter.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}
