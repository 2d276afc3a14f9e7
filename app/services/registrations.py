import logging
from datetime import datetime, timezone
from typing import Optional

import redis
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import REGISTRATION_LOCK_TIMEOUT, REGISTRATION_LOCK_WAIT
from app.core.redis_config import get_redis_client
from app.models.attendees import Attendee
from app.models.events import Event, new_id
from app.services.admission import (
    MissingFieldError,
    RegistrationError,
    SoldOutError,
    admit_registration,
    missing_contact_fields,
    validate_registration_form,
)
from app.services.events import EventNotFoundError
from app.services.settings import get_webhook_url
from app.services.webhook import send_to_crm

logger = logging.getLogger(__name__)

CONTACT_FIELDS = ("full_name", "email", "phone", "company")


class RegistrationBusyError(RegistrationError):
    reason = "busy"


class AttendeeNotFoundError(Exception):
    pass


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def list_attendees(db: Session, event_id: Optional[str] = None) -> list[Attendee]:
    stmt = select(Attendee).order_by(Attendee.registration_date)
    if event_id:
        stmt = stmt.where(Attendee.event_id == event_id)
    return list(db.scalars(stmt))


def get_attendee(db: Session, attendee_id: str) -> Optional[Attendee]:
    return db.get(Attendee, attendee_id)


def _deliver_and_save(db: Session, event: Event, form: dict) -> Attendee:
    """Send the new attendee to the CRM, then persist it with the outcome."""
    attendee = Attendee(
        id=new_id(),
        event_id=event.id,
        full_name=form["full_name"],
        email=form["email"],
        phone=form["phone"],
        company=form["company"],
        registration_date=utc_now_iso(),
        synced_to_crm=False,
    )
    attendee.synced_to_crm = send_to_crm(attendee, event, get_webhook_url(db))

    db.add(attendee)
    db.commit()
    db.refresh(attendee)
    return attendee


def _release(lock, event_id: str) -> None:
    try:
        lock.release()
    except redis.exceptions.LockNotOwnedError:  # type: ignore
        # The lock TTL ran out mid-registration; the outcome above still stands
        logger.warning("Registration lock for event %s expired before release", event_id)


def register_attendee(db: Session, *, event_id: str, form: dict) -> Attendee:
    """
    Self-registration of an attendee.

    The form is validated before anything else is touched. The admission check
    reads the attendee list fresh from storage, and the check plus the insert run
    under a per-event Redis lock so two last-slot submissions cannot both pass.
    """
    validate_registration_form(form)

    event = db.get(Event, event_id)
    if not event or not event.active:
        raise EventNotFoundError("Event not found")

    redis_client = get_redis_client()
    lock = redis_client.lock(
        f"event_lock:{event_id}",
        timeout=REGISTRATION_LOCK_TIMEOUT,
        blocking_timeout=REGISTRATION_LOCK_WAIT,
    )

    try:
        acquired = lock.acquire(blocking=True, blocking_timeout=REGISTRATION_LOCK_WAIT)
    except redis.exceptions.LockError:  # type: ignore
        acquired = False
    if not acquired:
        raise RegistrationBusyError("Registration is busy, please try again.")

    try:
        # Another submission may have committed, or the event may have been
        # deleted, while we waited for the lock
        db.expire_all()
        event = db.get(Event, event_id)
        if not event or not event.active:
            raise EventNotFoundError("Event not found")

        current_attendees = list_attendees(db, event_id)
        try:
            admit_registration(event, current_attendees)
        except SoldOutError:
            logger.info("Registration rejected for event %s: sold out", event_id)
            raise

        attendee = _deliver_and_save(db, event, form)
    finally:
        _release(lock, event_id)

    logger.info(
        "Registered attendee %s for event %s (crm synced: %s)",
        attendee.id,
        event_id,
        attendee.synced_to_crm,
    )
    return attendee


def create_attendee(db: Session, *, event_id: str, data: dict) -> Attendee:
    """Manual entry by an organizer; capacity is not enforced."""
    missing = missing_contact_fields(data)
    if missing:
        raise MissingFieldError(missing)

    event = db.get(Event, event_id)
    if not event:
        raise EventNotFoundError("Event not found")

    attendee = _deliver_and_save(db, event, data)
    logger.info("Organizer added attendee %s to event %s", attendee.id, event_id)
    return attendee


def update_attendee(db: Session, attendee_id: str, data: dict) -> Attendee:
    attendee = db.get(Attendee, attendee_id)
    if not attendee:
        raise AttendeeNotFoundError("Attendee not found")

    for field in CONTACT_FIELDS:
        if data.get(field) is not None:
            setattr(attendee, field, data[field])

    db.commit()
    db.refresh(attendee)
    return attendee


def delete_attendee(db: Session, attendee_id: str) -> bool:
    attendee = db.get(Attendee, attendee_id)
    if not attendee:
        return False

    db.delete(attendee)
    db.commit()
    logger.info("Deleted attendee %s", attendee_id)
    return True


def resync_attendee(db: Session, attendee_id: str) -> bool:
    """Deliver an existing attendee to the CRM again and record the outcome."""
    attendee = db.get(Attendee, attendee_id)
    if not attendee:
        return False

    attendee.synced_to_crm = send_to_crm(attendee, attendee.event, get_webhook_url(db))
    db.commit()
    return attendee.synced_to_crm
