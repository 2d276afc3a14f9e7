"""
Concurrent registrations against a limited event.

Each worker uses its own database session, as separate requests would, and
all of them share one Redis server for the per-event lock.
"""
from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker

from app.database.db import Base, enable_sqlite_foreign_keys
from app.models.attendees import Attendee
from app.models.events import Event
from app.services.admission import SoldOutError
from app.services.registrations import register_attendee


@pytest.fixture
def file_session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'race.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


def test_concurrent_registrations_respect_capacity(file_session_factory, registration_form):
    with file_session_factory() as db:
        event = Event(title="Race Event", date="2026-11-20", location="Hall", capacity=3)
        db.add(event)
        db.commit()
        event_id = event.id

    def attempt(i: int) -> str:
        form = {**registration_form, "email": f"u{i}@x.com", "confirm_email": f"u{i}@x.com"}
        db = file_session_factory()
        try:
            register_attendee(db, event_id=event_id, form=form)
            return "admitted"
        except SoldOutError:
            return "sold_out"
        finally:
            db.close()

    with ThreadPoolExecutor(max_workers=10) as executor:
        results = list(executor.map(attempt, range(10)))

    assert results.count("admitted") == 3
    assert results.count("sold_out") == 7

    with file_session_factory() as db:
        count = db.scalar(select(func.count(Attendee.id)).where(Attendee.event_id == event_id))
    assert count == 3
