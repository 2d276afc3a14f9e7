import logging
from typing import Optional

import httpx

from app.core.config import WEBHOOK_TIMEOUT
from app.models.attendees import Attendee
from app.models.events import Event

logger = logging.getLogger(__name__)

LEAD_ORIGIN = "SOES App"


def build_lead_payload(attendee: Attendee, event: Event) -> dict:
    return {
        "action": "new_lead",
        "lead": {
            "name": attendee.full_name,
            "email": attendee.email,
            "phone": attendee.phone,
            "company": attendee.company,
            "origin": LEAD_ORIGIN,
            "note": f"Inscrito no evento: {event.title} em {event.date}",
        },
    }


def send_to_crm(attendee: Attendee, event: Event, webhook_url: Optional[str]) -> bool:
    """
    Deliver a new lead to the CRM webhook.

    Returns whether the webhook accepted it. Delivery problems are logged and
    reported as False, never raised.
    """
    if not webhook_url or not webhook_url.strip():
        logger.info("CRM webhook URL not configured, skipping sync for attendee %s", attendee.id)
        return False

    payload = build_lead_payload(attendee, event)
    try:
        response = httpx.post(webhook_url, json=payload, timeout=httpx.Timeout(WEBHOOK_TIMEOUT))
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning("CRM sync failed for attendee %s: %s", attendee.id, e)
        return False

    if not response.is_success:
        logger.warning(
            "CRM webhook rejected attendee %s with status %s", attendee.id, response.status_code
        )
        return False

    logger.info("Attendee %s synced to CRM", attendee.id)
    return True
