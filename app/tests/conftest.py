import os

# Keep the application's own engine off the filesystem during tests
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import fakeredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine, StaticPool, create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm.session import Session

from app.database.db import Base, enable_sqlite_foreign_keys, get_db
from app.main import app
from app.models.attendees import Attendee
from app.models.events import Event

# Use an in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
engine: Engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def setup_database():
    """Fresh tables for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


# Override the database dependency
def override_get_db():
    db: Session = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture
def session_factory():
    return TestingSessionLocal


@pytest.fixture
def db_session():
    db: Session = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def fake_redis():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture(autouse=True)
def redis_client(fake_redis, monkeypatch: pytest.MonkeyPatch):
    """Route every Redis user (locks, admin sessions) to the fake server."""
    monkeypatch.setattr("app.services.registrations.get_redis_client", lambda: fake_redis)
    monkeypatch.setattr("app.services.auth.get_redis_client", lambda: fake_redis)
    return fake_redis


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(client: TestClient) -> dict[str, str]:
    response = client.post("/auth/login", json={"username": "admin", "password": "admin321"})
    assert response.status_code == 200, f"Unexpected status: {response.status_code}"
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def make_event(db_session: Session):
    """Factory creating events straight in the database."""

    def _make_event(title: str = "Workshop", capacity=None, active: bool = True) -> Event:
        event = Event(
            title=title,
            description="",
            date="2026-11-20T19:00",
            location="Sao Paulo",
            capacity=capacity,
            active=active,
        )
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)
        return event

    return _make_event


@pytest.fixture
def add_attendees(db_session: Session):
    """Factory filling an event with ``n`` attendees."""

    def _add_attendees(event: Event, n: int) -> list[Attendee]:
        attendees = [
            Attendee(
                event_id=event.id,
                full_name=f"Guest {i}",
                email=f"guest{i}@example.com",
                phone="11 99999-0000",
                company="ACME",
                registration_date=f"2026-10-{(i % 28) + 1:02d}T10:00:00Z",
                synced_to_crm=False,
            )
            for i in range(n)
        ]
        db_session.add_all(attendees)
        db_session.commit()
        return attendees

    return _add_attendees


@pytest.fixture
def registration_form() -> dict:
    return {
        "full_name": "Maria Silva",
        "email": "a@x.com",
        "confirm_email": "a@x.com",
        "phone": "11 98888-7777",
        "company": "Soes",
    }
