# Set test environment before any application or db imports.
import os

os.environ["TESTING"] = "true"
os.environ["TESTING_DATABASE_URL"] = "sqlite:///:memory:"

import pytest
from fastapi.testclient import TestClient

from db import SessionLocal, get_db
from main import app
from models import Base
from models.station import Station  # noqa: F401 - register with Base
from models.user import User  # noqa: F401
from repositories.user_repository import create_user
from utils.security import create_access_token, hash_password

TEST_PASSWORD = "s3cret-pass"


def _get_engine():
    """Engine used by the app (in-memory when TESTING=true)."""
    return SessionLocal.kw["bind"]


@pytest.fixture(scope="session")
def engine():
    """One in-memory engine per test run."""
    return _get_engine()


@pytest.fixture
def db_session(engine):
    """Function-scoped session on freshly created tables; tables are dropped on teardown.

    Repositories commit, so a wrapping transaction cannot isolate tests on SQLite.
    """
    Base.metadata.create_all(engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)


def _override_get_db(session):
    """Return a generator that yields the given session (for dependency override)."""
    def override():
        yield session
    return override


@pytest.fixture
def client(db_session):
    """API test client; overrides get_db to use the test db_session, cleared on teardown."""
    app.dependency_overrides[get_db] = _override_get_db(db_session)
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def api_http(db_session):
    """TestClient rooted at /api, for driving client.api.ApiClient against the real app."""
    app.dependency_overrides[get_db] = _override_get_db(db_session)
    try:
        with TestClient(app, base_url="http://testserver/api") as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def user(db_session):
    """A registered user whose password is TEST_PASSWORD."""
    return create_user(
        db_session,
        name="Ada Lovelace",
        email="ada@example.com",
        password_hash=hash_password(TEST_PASSWORD),
    )


@pytest.fixture
def user_password():
    """Plain-text password of the `user` fixture."""
    return TEST_PASSWORD


@pytest.fixture
def auth_headers(user):
    """Bearer header for the `user` fixture."""
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role)}"}


@pytest.fixture
def station_body():
    """A valid station create payload (fresh dict per test)."""
    return {
        "name": "Main St",
        "location": {"lat": 40.0, "lng": -73.0},
        "status": "active",
        "powerOutput": 50,
        "connectorType": "CCS",
    }
