"""Shared pytest fixtures: in-memory database, users, events and an API client."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-access-secret")
os.environ.setdefault("JWT_REFRESH_SECRET", "test-refresh-secret")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("ENCRYPTION_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("SMTP_HOST", "")

from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from werkzeug.security import generate_password_hash  # noqa: E402
from atams.db import Base  # noqa: E402

from app.api.deps import get_notifier  # noqa: E402
from app.db.session import get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Event, User  # noqa: E402
from app.models.enums import ROLE_LEVELS, UserRole  # noqa: E402
from app.services.jwt_service import JwtService  # noqa: E402

PASSWORD = "secret123"


class FakeNotifier:
    """Records notifications instead of sending email."""

    def __init__(self):
        self.registrations = []
        self.certificates = []
        self.announcements = []

    def notify_registration_confirmed(self, email, name, event_title):
        self.registrations.append((email, name, event_title))
        return True

    def notify_certificate_issued(self, email, name, event_title, certificate_number):
        self.certificates.append((email, name, event_title, certificate_number))
        return True

    def notify_announcement(self, email, event_title, title, message):
        self.announcements.append((email, event_title, title, message))
        return True


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def client(session_factory, notifier):
    """API client bound to the test database and the fake notifier."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(role=UserRole.STUDENT, first_name="Test", last_name="User", email=None):
        counter["n"] += 1
        user = User(
            u_email=email or f"{role.value.lower()}{counter['n']}@campus.edu",
            u_password=generate_password_hash(PASSWORD),
            u_first_name=first_name,
            u_last_name=last_name,
            u_role=role.value,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def student(make_user):
    return make_user(UserRole.STUDENT, first_name="Sam", last_name="Student")


@pytest.fixture
def organizer(make_user):
    return make_user(UserRole.ORGANIZER, first_name="Olga", last_name="Organizer")


@pytest.fixture
def other_organizer(make_user):
    return make_user(UserRole.ORGANIZER, first_name="Oscar", last_name="Other")


@pytest.fixture
def admin(make_user):
    return make_user(UserRole.ADMIN, first_name="Ada", last_name="Admin")


@pytest.fixture
def make_event(db):
    def _make_event(organizer, **overrides):
        start = datetime.now(timezone.utc) + timedelta(days=1)
        data = {
            "ev_title": "Intro to Robotics",
            "ev_description": "Hands-on workshop",
            "ev_event_type": "WORKSHOP",
            "ev_category": "TECHNICAL",
            "ev_start_at": start,
            "ev_end_at": start + timedelta(hours=2),
            "ev_venue": "Main Hall",
            "ev_state": "PUBLISHED",
            "ev_attendance_method": "MANUAL",
            "ev_organizer_id": organizer.u_id,
        }
        data.update(overrides)
        event = Event(**data)
        db.add(event)
        db.commit()
        db.refresh(event)
        return event

    return _make_event


@pytest.fixture
def event(make_event, organizer):
    return make_event(organizer)


@pytest.fixture
def geofence_event(make_event, organizer):
    """Geofenced event centered on (0, 0) with a 100 m radius."""
    return make_event(
        organizer,
        ev_title="Campus Fair",
        ev_attendance_method="GEOFENCE",
        ev_latitude=0.0,
        ev_longitude=0.0,
        ev_geofence_radius=100.0,
    )


def actor_for(user):
    """Actor dict as produced by the auth dependency."""
    role = UserRole(user.u_role)
    return {
        "user_id": user.u_id,
        "email": user.u_email,
        "role": role.value,
        "role_level": ROLE_LEVELS[role],
        "full_name": user.full_name,
    }


def auth_headers(user):
    token = JwtService().create_access_token(user.u_id, user.u_role)
    return {"Authorization": f"Bearer {token}"}
