import os
from dataclasses import dataclass

# Settings are read at import time; tests never touch a real database.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient

from search_portal.core.rate_limiter import rate_limiter
from search_portal.database import get_db
from search_portal.dependencies import get_current_admin, get_current_analyst, get_current_user
from search_portal.main import app


@dataclass
class StubUser:
    id: str = "user-1"
    username: str = "viewer"
    email: str | None = "user@example.com"
    role: str = "viewer"
    is_active: bool = True
    password_hash: str = "hashed-password"
    created_at: object | None = None


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    rate_limiter.reset()
    yield
    rate_limiter.reset()


@pytest.fixture
def stub_user() -> StubUser:
    return StubUser()


@pytest.fixture
def analyst_user() -> StubUser:
    return StubUser(id="analyst-1", username="analyst", email="analyst@example.com", role="analyst")


@pytest.fixture
def admin_user() -> StubUser:
    return StubUser(id="admin-1", username="admin", email="admin@example.com", role="admin")


def _db_override():
    yield object()


@pytest.fixture
def client(stub_user: StubUser):
    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_user] = lambda: stub_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def analyst_client(analyst_user: StubUser):
    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_user] = lambda: analyst_user
    app.dependency_overrides[get_current_analyst] = lambda: analyst_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(admin_user: StubUser):
    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_user] = lambda: admin_user
    app.dependency_overrides[get_current_analyst] = lambda: admin_user
    app.dependency_overrides[get_current_admin] = lambda: admin_user
    yield TestClient(app)
    app.dependency_overrides.clear()
