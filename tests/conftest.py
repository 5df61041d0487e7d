import os

os.environ.setdefault("PYTEST_RUNNING", "1")

from datetime import datetime
from itertools import count

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from meetup.api.auth import session_claims
from meetup.api.main import app
from meetup.db import models
from meetup.db.database import get_db
from meetup.utils.statuses import TYPE_IN_PERSON
from meetup.utils.token_crypto import create_access_token, hash_password

# Hashing is slow by design; every factory user shares one hash of "password"
TEST_PASSWORD = "password"
_PASSWORD_HASH = hash_password(TEST_PASSWORD)

LONG_ABOUT = "A friendly group that meets regularly to share a common interest together."


@pytest.fixture(autouse=True)
def _csrf_disabled(monkeypatch):
    # CSRF behaviour has its own tests; everything else talks to the API directly
    monkeypatch.setenv("CSRF_PROTECTION", "false")
    yield


@pytest.fixture
def _engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    models.Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


# Fresh schema per test; the app shares the test's session
@pytest.fixture
def db_session(_engine):
    session = sessionmaker(bind=_engine, autoflush=False, autocommit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def db(db_session):
    return db_session


@pytest.fixture
def client(db_session):
    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def auth_headers():
    def _headers(user: models.User) -> dict:
        token = create_access_token(session_claims(user))
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def user_factory(db_session: Session):
    seq = count(1)

    def _create(username: str = None, email: str = None, first_name: str = "Test", last_name: str = "User"):
        n = next(seq)
        username = username or f"user{n}"
        user = models.User(
            first_name=first_name,
            last_name=last_name,
            email=email or f"{username.lower()}@example.com",
            username=username,
            hashed_password=_PASSWORD_HASH,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _create


@pytest.fixture
def group_factory(db_session: Session):
    def _create(organizer: models.User, **overrides):
        fields = {
            "name": "Weekend Hikers",
            "about": LONG_ABOUT,
            "type": TYPE_IN_PERSON,
            "private": False,
            "city": "Denver",
            "state": "CO",
        }
        fields.update(overrides)
        group = models.Group(organizer_id=organizer.id, **fields)
        db_session.add(group)
        db_session.commit()
        db_session.refresh(group)
        return group
    return _create


@pytest.fixture
def membership_factory(db_session: Session):
    def _create(group: models.Group, user: models.User, status: str = "member"):
        m = models.Membership(group_id=group.id, user_id=user.id, status=status)
        db_session.add(m)
        db_session.commit()
        db_session.refresh(m)
        return m
    return _create


@pytest.fixture
def venue_factory(db_session: Session):
    def _create(group: models.Group, **overrides):
        fields = {"address": "123 Main St", "city": "Denver", "state": "CO", "lat": 39.74, "lng": -104.99}
        fields.update(overrides)
        venue = models.Venue(group_id=group.id, **fields)
        db_session.add(venue)
        db_session.commit()
        db_session.refresh(venue)
        return venue
    return _create


@pytest.fixture
def event_factory(db_session: Session):
    def _create(group: models.Group, venue: models.Venue = None, **overrides):
        fields = {
            "name": "Summit Sunrise Hike",
            "description": "Meet at the trailhead before dawn.",
            "type": TYPE_IN_PERSON,
            "capacity": 10,
            "price": 0.0,
            "start_date": datetime(2031, 5, 1, 6, 0, 0),
            "end_date": datetime(2031, 5, 1, 11, 0, 0),
        }
        fields.update(overrides)
        event = models.Event(group_id=group.id, venue_id=venue.id if venue else None, **fields)
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)
        return event
    return _create


@pytest.fixture
def attendance_factory(db_session: Session):
    def _create(event: models.Event, user: models.User, status: str = "attending"):
        a = models.Attendance(event_id=event.id, user_id=user.id, status=status)
        db_session.add(a)
        db_session.commit()
        db_session.refresh(a)
        return a
    return _create


@pytest.fixture
def group_with_roles(user_factory, group_factory, membership_factory):
    """A group with one user per role: organizer, co-host, member, pending, outsider."""
    organizer = user_factory("organizer")
    co_host = user_factory("cohost")
    member = user_factory("member")
    pending = user_factory("pending")
    outsider = user_factory("outsider")
    group = group_factory(organizer)
    membership_factory(group, co_host, "co-host")
    membership_factory(group, member, "member")
    membership_factory(group, pending, "pending")
    return {
        "group": group,
        "organizer": organizer,
        "co_host": co_host,
        "member": member,
        "pending": pending,
        "outsider": outsider,
    }
