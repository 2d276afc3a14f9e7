from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.deps import require_admin
from app.database.db import get_db
from app.schemas.events import EventIn, EventOut, EventWithStatsOut
from app.services.auth import AdminSession
from app.services.events import (
    delete_event,
    get_event,
    get_event_with_stats,
    list_events,
    save_event,
)

router = APIRouter(prefix="/events", tags=["events"])
admin_router = APIRouter(prefix="/admin/events", tags=["admin"])


@router.get("", response_model=list[EventWithStatsOut])
def public_events(db: Session = Depends(get_db)):
    return list_events(db, active_only=True)


@router.get("/{event_id}", response_model=EventWithStatsOut)
def public_event(event_id: str, db: Session = Depends(get_db)):
    event = get_event_with_stats(db, event_id, active_only=True)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@admin_router.get("", response_model=list[EventWithStatsOut])
def all_events(db: Session = Depends(get_db), admin: AdminSession = Depends(require_admin)):
    return list_events(db)


@admin_router.post("", response_model=EventOut)
def create_event(
    payload: EventIn,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(require_admin),
):
    return save_event(db, payload.model_dump())


@admin_router.put("/{event_id}", response_model=EventOut)
def update_event(
    event_id: str,
    payload: EventIn,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(require_admin),
):
    if not get_event(db, event_id):
        raise HTTPException(status_code=404, detail="Event not found")
    return save_event(db, {**payload.model_dump(), "id": event_id})


@admin_router.delete("/{event_id}", status_code=204)
def remove_event(
    event_id: str,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(require_admin),
):
    if not delete_event(db, event_id):
        raise HTTPException(status_code=404, detail="Event not found")
