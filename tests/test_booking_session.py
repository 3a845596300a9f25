import logging
from datetime import date

import pytest
from pydantic import ValidationError

import careplan
from careplan import config
from careplan.modules.booking.booking_session import BookingSession, IncompleteItineraryError
from careplan.modules.templates.template_registry import (
    HOSPITAL_APPOINTMENT,
    MULTI_DAY_EVENT,
    SCHOOL_RUN,
    SINGLE_DAY_EVENT,
)
from careplan.schemas.session_record import SessionRecord

PARENT = "10 Elm St"
SESSION_DATE = date(2026, 3, 2)


@pytest.fixture
def zoo_session():
    session = BookingSession.start(parent_address=PARENT).select_mode(SINGLE_DAY_EVENT)
    return session.update({
        "eventAddress": "Zoo",
        "eventStartTime": "10:00",
        "eventEndTime": "13:00",
    }).with_notes("Bring inhaler")


# ── Editing ───────────────────────────────────────────────────────────────

def test_select_mode_initialises_itinerary():
    session = BookingSession.start(parent_address=PARENT).select_mode(SINGLE_DAY_EVENT)
    assert session.mode_key == SINGLE_DAY_EVENT
    assert session.data["pickupAddress"] == PARENT
    assert session.data["dropoffSameAsPickup"] is True


def test_reselecting_same_mode_is_a_no_op(zoo_session):
    assert zoo_session.select_mode(SINGLE_DAY_EVENT) is zoo_session
    assert zoo_session.change_mode(SINGLE_DAY_EVENT) is zoo_session


def test_update_without_change_keeps_session(zoo_session):
    assert zoo_session.update({"eventAddress": "Zoo"}) is zoo_session
    assert zoo_session.with_notes("Bring inhaler") is zoo_session


def test_sessions_are_snapshots(zoo_session):
    moved = zoo_session.update({"eventAddress": "Aquarium"})
    assert zoo_session.data["eventAddress"] == "Zoo"
    assert moved.data["eventAddress"] == "Aquarium"


def test_change_mode_carries_over_entries(zoo_session):
    session = zoo_session.change_mode(HOSPITAL_APPOINTMENT)
    assert session.data["hospitalPickupAddress"] == PARENT
    assert session.data["hospitalAddress"] == "Zoo"
    assert session.data["waitingRoomDuration"] == "1"
    assert session.additional_notes == "Bring inhaler"


def test_change_to_mode_without_itinerary(zoo_session):
    session = zoo_session.change_mode("babysitting")
    assert session.strategy is None
    assert session.data == {}


# ── Derived state ─────────────────────────────────────────────────────────

def test_validation_and_duration(zoo_session):
    assert zoo_session.validation().valid
    assert zoo_session.suggested_duration(remaining_hours=10) == 7.0
    assert zoo_session.suggested_duration(remaining_hours=4) == 4.0
    assert zoo_session.section_validations() == {"event": True, "transport": True, "options": True}


def test_mode_without_itinerary_skips_derived_state():
    session = BookingSession.start().select_mode("babysitting")
    assert session.validation() is None
    assert session.suggested_duration(remaining_hours=10) is None
    assert session.preview(remaining_hours=10) is None
    assert session.section_validations() == {}


def test_preview(zoo_session):
    preview = zoo_session.preview(remaining_hours=10)
    assert preview.start_time == "06:00"
    assert preview.end_time == "13:00"


# ── Submit / edit ─────────────────────────────────────────────────────────

def test_submit_builds_record(zoo_session):
    record = zoo_session.submit(SESSION_DATE, remaining_hours=10, selected_activity_ids=["a1"], trainer_id="t9")
    assert record.start_time == "06:00"
    assert record.end_time == "13:00"
    assert record.duration == 7.0
    assert record.selected_activity_ids == ["a1"]
    assert record.trainer_id == "t9"
    assert record.notes.startswith("Bring inhaler\n\n")
    assert "📅 EVENT ITINERARY" in record.notes

    payload = record.to_payload()
    assert payload["date"] == "2026-03-02"
    assert payload["startTime"] == "08:00"
    assert payload["endTime"] == "15:00"
    assert payload["trainerChoice"] is False


def test_submit_with_explicit_times(zoo_session):
    record = zoo_session.submit(SESSION_DATE, remaining_hours=10, start_time="09:00", duration=2)
    assert record.start_time == "09:00"
    assert record.end_time == "11:00"


def test_submit_incomplete_itinerary_raises():
    session = BookingSession.start().select_mode(SCHOOL_RUN)
    with pytest.raises(IncompleteItineraryError) as exc:
        session.submit(SESSION_DATE, remaining_hours=10)
    assert "School address" in exc.value.missing_fields
    assert "Drop-off address" in exc.value.missing_fields


def test_submit_without_itinerary_uses_defaults():
    session = BookingSession.start().select_mode("babysitting").with_notes("Loves drawing")
    record = session.submit(SESSION_DATE, remaining_hours=10)
    assert record.start_time == "09:00"
    assert record.duration == 0.5
    assert record.notes == "Loves drawing"


def test_load_for_edit_restores_session(zoo_session):
    record = zoo_session.submit(SESSION_DATE, remaining_hours=10)
    loaded = BookingSession.load_for_edit(record, parent_address=PARENT)
    assert loaded.mode_key == SINGLE_DAY_EVENT
    assert loaded.additional_notes == "Bring inhaler"
    assert loaded.data["eventAddress"] == "Zoo"
    assert loaded.data["dropoffSameAsPickup"] is True
    # Re-saving an untouched session writes the same notes
    assert loaded.notes_text() == record.notes


def test_load_for_edit_reads_older_event_notes():
    sep = config.NOTE_SEPARATOR
    notes = "\n".join([
        "Bring snacks",
        "",
        sep,
        "📅 EVENT ITINERARY",
        sep,
        "",
        "📍 Pickup Address: 10 Elm St",
        "   Time: 09:00",
        "🎯 Event Address: City Zoo",
        "   Time: 10:00 – 13:00",
        "🚗 Drop-off: Same as pickup",
        "✈️ Travel included: Yes",
        sep,
    ])
    record = SessionRecord(date=SESSION_DATE, start_time="09:00", duration=7, end_time="16:00", notes=notes)
    loaded = BookingSession.load_for_edit(record, parent_address=PARENT)
    assert loaded.mode_key == SINGLE_DAY_EVENT
    assert loaded.data["pickupTime"] == "09:00"
    assert loaded.data["eventStartTime"] == "10:00"
    assert loaded.data["eventEndTime"] == "13:00"
    assert loaded.validation().valid


def test_load_for_edit_with_freeform_notes():
    record = SessionRecord(date=SESSION_DATE, start_time="09:00", duration=1, end_time="10:00", notes="Just notes")
    loaded = BookingSession.load_for_edit(record)
    assert loaded.mode_key is None
    assert loaded.additional_notes == "Just notes"


def test_reset_after_submit_keeps_custom_pickup(zoo_session):
    session = zoo_session.update({"pickupAddress": "Grandma's house"})
    reset = session.reset_after_submit()
    assert reset.mode_key == SINGLE_DAY_EVENT
    assert reset.data["pickupAddress"] == "Grandma's house"
    assert reset.data["eventAddress"] == ""
    assert reset.data["parentAddress"] == PARENT
    assert reset.additional_notes == ""


def test_reset_after_submit_for_hospital_clears_pickup():
    session = BookingSession.start(parent_address=PARENT).select_mode(HOSPITAL_APPOINTMENT)
    session = session.update({"hospitalPickupAddress": "Grandma's house", "hospitalAddress": "St Mary's"})
    reset = session.reset_after_submit()
    assert reset.data["hospitalPickupAddress"] == ""
    assert reset.data["hospitalAddress"] == ""


def test_reset_after_submit_for_multi_day_event_clears_pickup():
    session = BookingSession.start(parent_address=PARENT).select_mode(MULTI_DAY_EVENT)
    session = session.update({"pickupAddress": "Grandma's house", "eventAddress": "Camp"})
    reset = session.reset_after_submit()
    assert reset.data["pickupAddress"] == ""
    assert reset.data["eventAddress"] == ""


# ── Session record ────────────────────────────────────────────────────────

def test_session_record_rejects_bad_times():
    with pytest.raises(ValidationError):
        SessionRecord(date=SESSION_DATE, start_time="soon", duration=1, end_time="10:00")
    with pytest.raises(ValidationError):
        SessionRecord(date=SESSION_DATE, start_time="09:00", duration=0, end_time="10:00")


def test_session_record_accepts_camel_case():
    record = SessionRecord.model_validate({
        "date": "2026-03-02",
        "startTime": "9:00",
        "duration": 1.5,
        "endTime": "10:30",
        "trainerChoice": True,
    })
    assert record.start_time == "09:00"
    assert record.trainer_choice is True


def test_configure_logging():
    careplan.configure_logging("debug")
    assert logging.getLogger("careplan").level == logging.DEBUG
    careplan.configure_logging("WARNING")
