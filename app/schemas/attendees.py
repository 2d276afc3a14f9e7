from typing import Optional

from pydantic import Field

from app.schemas.base import CamelModel


class RegistrationRequest(CamelModel):
    # Presence is checked by the admission engine so every rejection
    # carries the same shape.
    full_name: Optional[str] = None
    email: Optional[str] = None
    confirm_email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None


class AttendeeCreate(CamelModel):
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None


class AttendeeUpdate(CamelModel):
    full_name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = Field(default=None, min_length=1)
    phone: Optional[str] = Field(default=None, min_length=1)
    company: Optional[str] = Field(default=None, min_length=1)


class AttendeeOut(CamelModel):
    id: str
    event_id: str
    full_name: str
    email: str
    phone: str
    company: str
    registration_date: str
    synced_to_crm: bool


class SyncQueuedOut(CamelModel):
    attendee_id: str
    queued: bool
