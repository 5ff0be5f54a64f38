"""
Pytest configuration and shared fixtures.

Every test gets a fresh in-memory SQLite store seeded with lookup rows.
The environment is set before the application is imported so settings
pick it up.
"""

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("TOKEN_KEY", "test-signing-key-0123456789abcdef0123456789")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient

from app.db.session import DataStore, get_db
from app.models import City, Country, Skill, State
from app.services import auth_service
from main import app

STRONG_PASSWORD = "Str0ng!Pass"

SKILLS = [
    ("Python", "PY"),
    ("JavaScript", "JS"),
    ("SQL", "SQL"),
    ("Node.js", "NODE"),
    ("React", "REACT"),
    ("Docker", "DOCKER"),
]


def _seed(store: DataStore) -> None:
    with store.session() as db:
        # parents are flushed first; the lookup tables have no relationship() to order inserts
        db.add(Country(id=1, name="United States"))
        db.flush()
        db.add(State(id=1, country_id=1, name="California"))
        db.flush()
        db.add(City(id=1, state_id=1, name="San Francisco"))
        for index, (name, code) in enumerate(SKILLS, start=1):
            db.add(Skill(id=index, name=name, code=code))
        db.commit()


@pytest.fixture
def store():
    store = DataStore("sqlite://")
    store.create_all()
    _seed(store)
    yield store
    store.dispose()


@pytest.fixture
def db(store):
    with store.session() as session:
        yield session


@pytest.fixture
def client(store):
    def override_get_db():
        with store.session() as session:
            yield session

    app.state.store = store
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user_account(db):
    """A registered, active user and its token."""
    return auth_service.register_user(db, "Jane Doe", "jane@example.com", STRONG_PASSWORD, "1234567890")


@pytest.fixture
def super_admin_account(db):
    # first admin registered becomes super_admin
    return auth_service.register_admin(db, "Root Admin", "root@example.com", STRONG_PASSWORD, "9876543210")


@pytest.fixture
def admin_account(db, super_admin_account):
    return auth_service.register_admin(db, "Plain Admin", "plain@example.com", STRONG_PASSWORD, "9876543211")
