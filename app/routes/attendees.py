import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from kombu.exceptions import OperationalError
from sqlalchemy.orm import Session

from app.core.deps import require_admin
from app.database.db import get_db
from app.schemas.attendees import AttendeeCreate, AttendeeOut, AttendeeUpdate, SyncQueuedOut
from app.services.admission import MissingFieldError
from app.services.auth import AdminSession
from app.services.events import EventNotFoundError, get_event
from app.services.exports import attendees_to_csv
from app.services.registrations import (
    AttendeeNotFoundError,
    create_attendee,
    delete_attendee,
    get_attendee,
    list_attendees,
    update_attendee,
)
from app.tasks import sync_attendee_task

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


def _existing_event(db: Session, event_id: str):
    event = get_event(db, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.get("/attendees", response_model=list[AttendeeOut])
def all_attendees(
    event_id: Optional[str] = Query(default=None, alias="eventId"),
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(require_admin),
):
    return list_attendees(db, event_id)


@router.get("/events/{event_id}/attendees", response_model=list[AttendeeOut])
def event_attendees(
    event_id: str,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(require_admin),
):
    _existing_event(db, event_id)
    return list_attendees(db, event_id)


@router.post("/events/{event_id}/attendees", response_model=AttendeeOut, status_code=201)
def add_attendee(
    event_id: str,
    payload: AttendeeCreate,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(require_admin),
):
    try:
        return create_attendee(db, event_id=event_id, data=payload.model_dump())
    except MissingFieldError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except EventNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/events/{event_id}/attendees/export")
def export_attendees(
    event_id: str,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(require_admin),
):
    _existing_event(db, event_id)
    content = attendees_to_csv(list_attendees(db, event_id))
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="inscritos.csv"'},
    )


@router.put("/attendees/{attendee_id}", response_model=AttendeeOut)
def edit_attendee(
    attendee_id: str,
    payload: AttendeeUpdate,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(require_admin),
):
    try:
        return update_attendee(db, attendee_id, payload.model_dump(exclude_unset=True))
    except AttendeeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/attendees/{attendee_id}", status_code=204)
def remove_attendee(
    attendee_id: str,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(require_admin),
):
    if not delete_attendee(db, attendee_id):
        raise HTTPException(status_code=404, detail="Attendee not found")


@router.post("/attendees/{attendee_id}/sync", response_model=SyncQueuedOut, status_code=202)
def sync_attendee(
    attendee_id: str,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(require_admin),
):
    if not get_attendee(db, attendee_id):
        raise HTTPException(status_code=404, detail="Attendee not found")

    # durable background work so a slow webhook never blocks the admin view
    try:
        sync_attendee_task.delay(attendee_id)
        queued = True
    except OperationalError as e:
        logger.warning("Could not enqueue CRM sync for attendee %s: %s", attendee_id, e)
        queued = False

    return {"attendee_id": attendee_id, "queued": queued}
