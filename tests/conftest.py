"""
Pytest configuration and fixtures for Reactivities API tests.
"""
import itertools
import os
from datetime import timedelta

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from reactivities.database import Base, get_db, utcnow
from reactivities.limiter import limiter
from reactivities.main import app
from reactivities.models import Activity, ActivityAttendee, User
from reactivities.auth import get_password_hash, create_access_token
from reactivities.photo_store import DeletionResult, PhotoStore, get_photo_store

# Disable rate limiting for tests
limiter.enabled = False

# Use in-memory SQLite for tests with shared connection
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = "testpassword123"
PASSWORD_HASH = get_password_hash(PASSWORD)

# Global session for sharing across requests
_test_session = None


def get_test_db():
    """Get the shared test database session."""
    yield _test_session


def auth_headers_for(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': user.id})}"}


class FakePhotoStore(PhotoStore):
    """Records deletions instead of calling a remote service."""

    def __init__(self, ok: bool = True):
        self.ok = ok
        self.deleted = []

    def delete_photo(self, public_id: str) -> DeletionResult:
        self.deleted.append(public_id)
        if self.ok:
            return DeletionResult(ok=True)
        return DeletionResult(ok=False, error="Photo store unavailable")


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    global _test_session

    Base.metadata.create_all(bind=engine)
    _test_session = TestingSessionLocal()
    app.dependency_overrides[get_db] = get_test_db

    yield _test_session

    app.dependency_overrides.clear()
    _test_session.close()
    _test_session = None
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Create a test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="function")
def photo_store(db):
    """Replace the remote photo store with a recording fake."""
    store = FakePhotoStore()
    app.dependency_overrides[get_photo_store] = lambda: store
    return store


@pytest.fixture(scope="function")
def make_user(db):
    """Factory for users with the shared test password."""
    counter = itertools.count(1)

    def _make(display_name=None, email=None):
        n = next(counter)
        user = User(
            email=email or f"user{n}@example.com",
            hashed_password=PASSWORD_HASH,
            display_name=display_name or f"User {n}",
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture(scope="function")
def make_activity(db):
    """Factory for activities with a host and optional extra attendees."""
    counter = itertools.count(1)

    def _make(host, date=None, attendees=(), title=None, category="drinks"):
        n = next(counter)
        activity = Activity(
            title=title or f"Activity {n}",
            description="Test activity",
            category=category,
            date=date or utcnow() + timedelta(days=n),
            city="London",
            venue="The Pub",
        )
        db.add(activity)
        db.flush()
        db.add(ActivityAttendee(user_id=host.id, activity_id=activity.id, is_host=True))
        for attendee in attendees:
            db.add(ActivityAttendee(user_id=attendee.id, activity_id=activity.id, is_host=False))
        db.commit()
        db.refresh(activity)
        return activity

    return _make


@pytest.fixture(scope="function")
def test_user(make_user):
    """Create a test user."""
    return make_user(display_name="Test User", email="test@example.com")


@pytest.fixture(scope="function")
def auth_headers(test_user):
    """Get auth headers for the test user."""
    return auth_headers_for(test_user)


@pytest.fixture(scope="function")
def headers_for():
    """Build auth headers for any user."""
    return auth_headers_for
