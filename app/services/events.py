import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.attendees import Attendee
from app.models.events import Event, new_id
from app.services.admission import compute_stats

logger = logging.getLogger(__name__)

EVENT_FIELDS = ("id", "title", "description", "date", "location", "image_url", "capacity", "active")


class EventNotFoundError(Exception):
    pass


def event_to_dict(event: Event, count: int) -> dict:
    data = {field: getattr(event, field) for field in EVENT_FIELDS}
    data["stats"] = compute_stats(event.capacity, count)
    return data


def count_attendees(db: Session, event_id: str) -> int:
    count = db.scalar(select(func.count(Attendee.id)).where(Attendee.event_id == event_id))
    return int(count or 0)


def list_events(db: Session, *, active_only: bool = False) -> list[dict]:
    """Return events with their attendance stats, ordered by date."""
    counts = dict(
        db.execute(
            select(Attendee.event_id, func.count(Attendee.id)).group_by(Attendee.event_id)
        ).all()
    )

    stmt = select(Event).order_by(Event.date, Event.title)
    if active_only:
        stmt = stmt.where(Event.active.is_(True))

    return [event_to_dict(e, int(counts.get(e.id, 0))) for e in db.scalars(stmt)]


def get_event(db: Session, event_id: str) -> Optional[Event]:
    return db.get(Event, event_id)


def get_event_with_stats(db: Session, event_id: str, *, active_only: bool = False) -> dict:
    event = db.get(Event, event_id)
    if not event or (active_only and not event.active):
        return {}
    return event_to_dict(event, count_attendees(db, event_id))


def save_event(db: Session, data: dict) -> Event:
    """Create the event or overwrite the one with the same id."""
    event_id = data.get("id") or new_id()
    event = db.get(Event, event_id)
    if event is None:
        event = Event(id=event_id)
        db.add(event)

    for field in EVENT_FIELDS:
        if field == "id" or field not in data:
            continue
        setattr(event, field, data[field])
    if event.active is None:
        event.active = True

    db.commit()
    db.refresh(event)
    return event


def delete_event(db: Session, event_id: str) -> bool:
    """Delete an event together with all of its attendees."""
    event = db.get(Event, event_id)
    if not event:
        return False

    removed = len(event.attendees)
    db.delete(event)
    db.commit()
    logger.info("Deleted event %s and %d attendee(s)", event_id, removed)
    return True
