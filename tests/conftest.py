import asyncio
import os

# Configure before the app (and its settings) are imported
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.core.auth import create_session_token
from app.database import get_storage
from app.main import app
from app.schemas.user import UserUpsert
from app.storage.memory import MemoryStorage


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def client(storage, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth_client(client):
    r = client.get("/api/login", follow_redirects=False)
    assert r.status_code == 302
    return client


@pytest.fixture
def login_as(client, storage):
    """Returns a client logged in as a freshly created user."""
    clients = []

    def _login(user_id: str, first_name: str = "Other") -> TestClient:
        asyncio.run(storage.upsert_user(UserUpsert(id=user_id, email=f"{user_id}@example.com", first_name=first_name)))
        other = TestClient(app)
        other.cookies.set(settings.SESSION_COOKIE_NAME, create_session_token(user_id))
        clients.append(other)
        return other

    yield _login
    for c in clients:
        c.close()


@pytest.fixture
def make_goal(auth_client):
    def _make(**fields):
        body = {"title": "Run 5k", "category": "health", "progress": 0}
        body.update(fields)
        r = auth_client.post("/api/goals", json=body)
        assert r.status_code == 200, r.text
        return r.json()

    return _make
