import os
import sys
import pytest

CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from fastapi.testclient import TestClient
from drivepro.domain.entities import User, Role
from drivepro.infrastructure.ratelimit import limiter
from drivepro.infrastructure.repositories import InMemoryStore, get_store
from drivepro.infrastructure.security import create_access_token
from drivepro.main import app

PASSWORD = "password123"


@pytest.fixture
def store():
    """Fresh store: one admin, one active instructor, two students"""
    store = InMemoryStore()
    for user in (
        User("u-admin", "Alice Admin", "admin@drivepro.com", PASSWORD, Role.ADMIN),
        User("u-ivan", "Ivan Instructor", "instructor@drivepro.com", PASSWORD, Role.INSTRUCTOR),
        User("u-sarah", "Sarah Student", "student@drivepro.com", PASSWORD, Role.STUDENT),
        User("u-carl", "Carl Student", "carl@drivepro.com", PASSWORD, Role.STUDENT),
    ):
        store.users.add(user)
    return store


@pytest.fixture
def admin(store):
    return store.users.get("u-admin")


@pytest.fixture
def instructor(store):
    return store.users.get("u-ivan")


@pytest.fixture
def student(store):
    return store.users.get("u-sarah")


@pytest.fixture
def other_student(store):
    return store.users.get("u-carl")


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Login limits are kept in process memory, start every test from zero"""
    limiter.reset()
    yield


@pytest.fixture
def client(store):
    """Test client bound to the per-test store"""
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    if get_store in app.dependency_overrides:
        del app.dependency_overrides[get_store]


@pytest.fixture
def auth():
    """Builds an Authorization header for a user"""
    def _auth(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user)}"}
    return _auth
