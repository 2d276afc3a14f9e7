import logging

from app.core.celery_config import celery_app
from app.database.db import SessionLocal
from app.services.registrations import resync_attendee

logger = logging.getLogger(__name__)


@celery_app.task(bind=True)
def sync_attendee_task(self, attendee_id: str):
    """Re-deliver one attendee to the CRM webhook on organizer request."""
    db = SessionLocal()
    try:
        synced = resync_attendee(db, attendee_id)
    finally:
        db.close()
    logger.info("CRM resync for attendee %s finished (synced: %s)", attendee_id, synced)
    return synced
