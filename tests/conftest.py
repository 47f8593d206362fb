from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.core.auth import Identity, auth_service
from app.db.database import Database
from app.db.stores import CategoryStore, PostStore
from app.main import app
from app.services.content_service import ContentService

ALICE = Identity(email="alice@x.com", name="Alice")
BOB = Identity(email="bob@x.com", name="Bob")


class FakeClock:
    """Часы, которые сдвигаются на секунду при каждом вызове."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


def auth_headers(email: str, **claims) -> dict:
    token = auth_service.create_access_token({"email": email, **claims})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def database():
    """In-memory SQLite с созданными таблицами."""
    db = Database("sqlite://").connect(create_tables=True)
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    s = database.session()
    yield s
    s.close()


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 1, 1, tzinfo=timezone.utc))


@pytest.fixture
def category_store(session):
    return CategoryStore(session)


@pytest.fixture
def post_store(session):
    return PostStore(session)


@pytest.fixture
def service(category_store, post_store, clock):
    return ContentService(category_store, post_store, clock=clock)


@pytest.fixture
def client(database):
    """Клиент API поверх тестового хранилища (startup не запускается)."""
    app.state.database = database
    yield TestClient(app)
    app.state.database = None
