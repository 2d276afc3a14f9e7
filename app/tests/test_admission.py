"""
Test the capacity / sold-out / admission rules.
"""
from types import SimpleNamespace

import pytest

from app.services.admission import (
    EmailMismatchError,
    MissingFieldError,
    SoldOutError,
    admit_registration,
    compute_stats,
    validate_registration_form,
)


def _event(capacity, event_id="evt-1"):
    return SimpleNamespace(id=event_id, capacity=capacity)


def _attendees(n, event_id="evt-1"):
    return [SimpleNamespace(event_id=event_id) for _ in range(n)]


class TestComputeStats:
    """Test compute_stats."""

    @pytest.mark.parametrize("count", [0, 1, 5, 1000])
    def test_unlimited_capacity_never_sells_out(self, count):
        stats = compute_stats(None, count)

        assert stats == {
            "count": count,
            "is_sold_out": False,
            "spots_left": None,
            "is_urgent": False,
        }

    @pytest.mark.parametrize(
        "capacity, count, sold_out, spots_left",
        [
            (10, 0, False, 10),
            (10, 9, False, 1),
            (10, 10, True, 0),
            (10, 12, True, -2),
            (0, 0, True, 0),
        ],
    )
    def test_limited_capacity(self, capacity, count, sold_out, spots_left):
        stats = compute_stats(capacity, count)

        assert stats["count"] == count
        assert stats["is_sold_out"] is sold_out
        assert stats["spots_left"] == spots_left

    def test_zero_capacity_is_not_unlimited(self):
        """A limit of zero must not be mistaken for 'no limit'."""
        stats = compute_stats(0, 0)

        assert stats["is_sold_out"] is True
        assert stats["spots_left"] == 0

    @pytest.mark.parametrize(
        "capacity, count, urgent",
        [
            (10, 4, False),  # 6 left
            (10, 5, True),  # 5 left
            (10, 9, True),  # 1 left
            (10, 10, False),  # 0 left
            (10, 11, False),  # over capacity
            (None, 0, False),
        ],
    )
    def test_urgency_window(self, capacity, count, urgent):
        assert compute_stats(capacity, count)["is_urgent"] is urgent

    def test_is_pure(self):
        assert compute_stats(5, 4) == compute_stats(5, 4)


class TestAdmitRegistration:
    """Test admit_registration."""

    def test_full_event_is_rejected(self):
        with pytest.raises(SoldOutError, match="sold out"):
            admit_registration(_event(10), _attendees(10))

    def test_last_spot_then_sold_out(self):
        event = _event(5)
        attendees = _attendees(4)

        stats = compute_stats(event.capacity, len(attendees))
        assert stats["spots_left"] == 1
        assert stats["is_urgent"] is True

        admit_registration(event, attendees)
        attendees.append(SimpleNamespace(event_id=event.id))

        assert compute_stats(event.capacity, len(attendees))["is_sold_out"] is True
        with pytest.raises(SoldOutError):
            admit_registration(event, attendees)

    def test_unlimited_event_always_admits(self):
        attendees = _attendees(1000)

        admit_registration(_event(None), attendees)

        assert compute_stats(None, len(attendees))["is_urgent"] is False

    def test_zero_capacity_rejects_first_registration(self):
        with pytest.raises(SoldOutError):
            admit_registration(_event(0), [])

    def test_attendees_of_other_events_are_ignored(self):
        attendees = _attendees(3, event_id="other") + _attendees(1)

        admit_registration(_event(2), attendees)

    def test_check_is_only_as_fresh_as_its_input(self):
        """Two checks against the same stale list both pass; callers must serialize."""
        event = _event(1)
        snapshot = []

        admit_registration(event, snapshot)
        admit_registration(event, snapshot)


class TestValidateRegistrationForm:
    """Test validate_registration_form."""

    def test_matching_emails_pass(self, registration_form):
        validate_registration_form(registration_form)

    def test_email_confirmation_is_case_sensitive(self, registration_form):
        registration_form["confirm_email"] = "A@x.com"

        with pytest.raises(EmailMismatchError):
            validate_registration_form(registration_form)

    def test_email_confirmation_is_not_trimmed(self, registration_form):
        registration_form["confirm_email"] = "a@x.com "

        with pytest.raises(EmailMismatchError):
            validate_registration_form(registration_form)

    @pytest.mark.parametrize("field", ["full_name", "email", "phone", "company"])
    def test_required_fields(self, registration_form, field):
        registration_form[field] = "   "

        with pytest.raises(MissingFieldError) as exc:
            validate_registration_form(registration_form)

        assert exc.value.fields == [field]
        assert exc.value.reason == "missing_fields"

    def test_missing_fields_reported_before_mismatch(self):
        with pytest.raises(MissingFieldError) as exc:
            validate_registration_form({"email": "a@x.com", "confirm_email": "b@x.com"})

        assert exc.value.fields == ["full_name", "phone", "company"]
