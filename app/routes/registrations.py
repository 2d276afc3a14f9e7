from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database.db import get_db
from app.schemas.attendees import AttendeeOut, RegistrationRequest
from app.services.admission import EmailMismatchError, MissingFieldError, SoldOutError
from app.services.events import EventNotFoundError
from app.services.registrations import RegistrationBusyError, register_attendee

router = APIRouter(prefix="/events", tags=["registrations"])


@router.post("/{event_id}/register", response_model=AttendeeOut, status_code=201)
def register(event_id: str, payload: RegistrationRequest, db: Session = Depends(get_db)):
    try:
        return register_attendee(db, event_id=event_id, form=payload.model_dump())
    except (MissingFieldError, EmailMismatchError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    except EventNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SoldOutError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except RegistrationBusyError as e:
        raise HTTPException(status_code=503, detail=str(e))
