"""
Capacity and admission rules for event registration.

Every view that shows remaining spots goes through ``compute_stats`` so the
public listing, the detail page and the admin tables agree.
"""
from typing import Iterable, Mapping, Optional

URGENT_SPOTS_THRESHOLD = 5

REQUIRED_CONTACT_FIELDS = ("full_name", "email", "phone", "company")


class RegistrationError(Exception):
    reason = "rejected"


class SoldOutError(RegistrationError):
    reason = "sold_out"


class EmailMismatchError(RegistrationError):
    reason = "email_mismatch"


class MissingFieldError(RegistrationError):
    reason = "missing_fields"

    def __init__(self, fields: list[str]):
        self.fields = fields
        super().__init__(f"Missing required fields: {', '.join(fields)}")


def compute_stats(capacity: Optional[int], current_count: int) -> dict:
    """
    Derive sold-out and urgency flags from a capacity and an attendee count.

    ``capacity=None`` means unlimited, while ``capacity=0`` is a real limit
    of zero spots. ``spots_left`` goes negative when an event is over capacity.
    """
    if capacity is None:
        return {
            "count": current_count,
            "is_sold_out": False,
            "spots_left": None,
            "is_urgent": False,
        }

    spots_left = capacity - current_count
    return {
        "count": current_count,
        "is_sold_out": current_count >= capacity,
        "spots_left": spots_left,
        "is_urgent": 0 < spots_left <= URGENT_SPOTS_THRESHOLD,
    }


def admit_registration(event, current_attendees: Iterable) -> None:
    """Raise SoldOutError if ``event`` has no spot left for one more attendee."""
    count = sum(1 for a in current_attendees if a.event_id == event.id)
    stats = compute_stats(event.capacity, count)
    if stats["is_sold_out"]:
        raise SoldOutError("Event is sold out.")


def missing_contact_fields(form: Mapping) -> list[str]:
    missing = []
    for field in REQUIRED_CONTACT_FIELDS:
        value = form.get(field)
        if value is None or not str(value).strip():
            missing.append(field)
    return missing


def validate_registration_form(form: Mapping) -> None:
    """
    Check a self-registration form before any admission or delivery work.

    Both emails must match exactly; no case folding or trimming is applied.
    """
    missing = missing_contact_fields(form)
    if missing:
        raise MissingFieldError(missing)

    if form.get("email") != form.get("confirm_email"):
        raise EmailMismatchError("Email addresses do not match.")
