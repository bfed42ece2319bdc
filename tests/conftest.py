"""Pytest fixtures — per-test SQLite database for fast, isolated tests."""
import os
from datetime import datetime, timezone, timedelta

SQLITE_URL = "sqlite:///./test.db"
os.environ.setdefault("DATABASE_URL", SQLITE_URL)

import pytest  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from eventhost.database import Base, get_db  # noqa: E402
from eventhost.main import app  # noqa: E402

# Import all models so they register with Base.metadata
from eventhost.models.user import User                  # noqa: F401,E402
from eventhost.models.event import Event                # noqa: F401,E402
from eventhost.models.rsvp import Rsvp                  # noqa: F401,E402
from eventhost.models.comment import Comment            # noqa: F401,E402
from eventhost.models.mention import Mention            # noqa: F401,E402
from eventhost.models.notification import Notification  # noqa: F401,E402


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # Enable WAL mode for better concurrency
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db(session_factory):
    """Yield a database session, closed after the test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(session_factory):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers: create records via the API, return the JSON response dict
# ---------------------------------------------------------------------------
def auth(user: dict) -> dict:
    """Headers identifying ``user`` as the request principal."""
    return {"X-User-Id": user["id"]}


def create_test_user(client: TestClient, name: str = "Test User", email: str = None) -> dict:
    """Helper — POST /api/users and return response JSON."""
    email = email or f"{name.lower().replace(' ', '.')}@example.com"
    resp = client.post("/api/users/", json={"name": name, "email": email})
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_test_event(client: TestClient, host: dict, title: str = "Test Event",
                      max_guests: int = 10, is_private: bool = True,
                      start_offset_hours: int = 24) -> dict:
    """Helper — POST /api/events as ``host`` and return response JSON."""
    start = datetime.now(timezone.utc) + timedelta(hours=start_offset_hours)
    resp = client.post("/api/events/", headers=auth(host), json={
        "title": title,
        "date_time": start.isoformat(),
        "location": "Community Hall",
        "max_guests": max_guests,
        "is_private": is_private,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def invite(client: TestClient, host: dict, event: dict, invitees: list) -> dict:
    """Helper — POST /api/rsvps/bulk and return response JSON."""
    resp = client.post("/api/rsvps/bulk", headers=auth(host), json={
        "event_id": event["id"],
        "invitee_ids": [u["id"] for u in invitees],
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def set_status(client: TestClient, invitee: dict, rsvp: dict, new_status: str):
    """Helper — PATCH /api/rsvps/{id} as the invitee, returns the raw response."""
    return client.patch(f"/api/rsvps/{rsvp['id']}", headers=auth(invitee), json={"status": new_status})


# ---------------------------------------------------------------------------
# Helpers: create rows directly for service-level tests
# ---------------------------------------------------------------------------
def make_user(db, name: str) -> User:
    user = User(name=name, email=f"{name.lower()}@example.com")
    db.add(user)
    db.commit()
    return user


def make_event(db, host: User, max_guests: int = 3, is_private: bool = True) -> Event:
    event = Event(
        title="Board Games",
        date_time=datetime.now(timezone.utc) + timedelta(days=1),
        location="Library",
        max_guests=max_guests,
        is_private=is_private,
        user_id=host.id,
    )
    db.add(event)
    db.commit()
    return event
