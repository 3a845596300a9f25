import pytest

from careplan.modules.store.itinerary_store import patch
from careplan.modules.strategies.strategy_factory import get_strategy, has_itinerary, list_strategies
from careplan.modules.templates.template_registry import (
    EXAM_SUPPORT,
    HOSPITAL_APPOINTMENT,
    MULTI_DAY_EVENT,
    SCHOOL_RUN,
    SINGLE_DAY_EVENT,
)
from careplan.schemas.mode_records import (
    MODE_RECORDS,
    HospitalAppointmentRecord,
    MultiDayEventRecord,
    SingleDayEventRecord,
)

PARENT = "10 Elm St"


def zoo_trip(strategy, **overrides):
    fields = {"eventAddress": "Zoo", "eventStartTime": "10:00", "eventEndTime": "13:00"}
    fields.update(overrides)
    return patch(strategy.initialize_data(PARENT), fields)


# ── Factory ───────────────────────────────────────────────────────────────

def test_unknown_mode_resolves_to_none():
    assert get_strategy("unknown-mode") is None
    assert get_strategy(None) is None
    assert not has_itinerary("unknown-mode")


def test_strategies_in_registration_order():
    assert [s.key for s in list_strategies()] == [
        SINGLE_DAY_EVENT, MULTI_DAY_EVENT, HOSPITAL_APPOINTMENT, EXAM_SUPPORT, SCHOOL_RUN,
    ]


@pytest.mark.parametrize("mode", [SINGLE_DAY_EVENT, MULTI_DAY_EVENT, HOSPITAL_APPOINTMENT, EXAM_SUPPORT, SCHOOL_RUN])
def test_every_strategy_has_template_and_sections(mode):
    strategy = get_strategy(mode)
    assert strategy.template.name == mode
    assert set(strategy.get_section_validations(strategy.initialize_data(PARENT))) == set(strategy.sections)


# ── Initial data ──────────────────────────────────────────────────────────

def test_single_day_initial_values():
    data = get_strategy(SINGLE_DAY_EVENT).initialize_data(PARENT)
    assert data["pickupAddress"] == PARENT
    assert data["parentAddress"] == PARENT
    assert data["dropoffSameAsPickup"] is True
    assert data["includeTravel"] is True


def test_hospital_and_exam_defaults():
    assert get_strategy(HOSPITAL_APPOINTMENT).initialize_data(PARENT)["waitingRoomDuration"] == "1"
    assert get_strategy(EXAM_SUPPORT).initialize_data(PARENT)["examDuration"] == "2"


def test_school_run_drops_off_at_parent_address():
    data = get_strategy(SCHOOL_RUN).initialize_data(PARENT)
    assert data["schoolDropoffAddress"] == PARENT
    assert data["schoolDropoffSameAsPickup"] is False
    assert data["includeHomework"] is False


# ── Typed records ─────────────────────────────────────────────────────────

def test_record_view_of_data():
    strategy = get_strategy(SINGLE_DAY_EVENT)
    rec = strategy.record(zoo_trip(strategy))
    assert isinstance(rec, SingleDayEventRecord)
    assert rec.event_address == "Zoo"
    assert rec.to_data()["eventStartTime"] == "10:00"


@pytest.mark.parametrize("raw, stored", [
    ("1.5", "1.5"),
    (1.5, "1.5"),
    ("-2", "0"),
    ("abc", "0"),
    (None, "0"),
])
def test_hours_fields_are_normalised(raw, stored):
    rec = HospitalAppointmentRecord.from_data({"waitingRoomDuration": raw})
    assert rec.waiting_room_duration == stored


def test_record_coerces_flags_and_days():
    rec = MultiDayEventRecord.from_data({"dropoffSameAsPickup": "yes", "numberOfDays": "0"})
    assert rec.dropoff_same_as_pickup is True
    assert rec.number_of_days == "1"
    assert MultiDayEventRecord.from_data({"numberOfDays": "many"}).number_of_days == "2"


# ── Duration ──────────────────────────────────────────────────────────────

def test_single_day_duration():
    strategy = get_strategy(SINGLE_DAY_EVENT)
    assert strategy.calculate_duration(zoo_trip(strategy), remaining_hours=10) == 7.0


def test_single_day_without_travel_books_event_only():
    strategy = get_strategy(SINGLE_DAY_EVENT)
    data = zoo_trip(strategy, includeTravel=False)
    assert strategy.calculate_duration(data, remaining_hours=10) == 3.0


@pytest.mark.parametrize("homework, hours", [(True, 4.0), (False, 3.0)])
def test_school_run_duration(homework, hours):
    strategy = get_strategy(SCHOOL_RUN)
    data = patch(strategy.initialize_data(PARENT), {
        "schoolAddress": "Oakfield Primary",
        "schoolPickupTime": "15:00",
        "schoolEndTime": "18:00",
        "includeHomework": homework,
    })
    assert strategy.calculate_duration(data, remaining_hours=10) == hours


def test_school_run_homework_needs_a_window():
    strategy = get_strategy(SCHOOL_RUN)
    data = patch(strategy.initialize_data(PARENT), {"includeHomework": True})
    assert strategy.duration_breakdown(data).total == 0.0


# ── Pickup ────────────────────────────────────────────────────────────────

def test_single_day_pickup_suggestions():
    strategy = get_strategy(SINGLE_DAY_EVENT)
    data = zoo_trip(strategy)
    assert strategy.get_pickup_suggestions(data) == ["06:00", "06:30", "07:00", "07:30", "08:00"]
    assert strategy.get_effective_pickup_time(data) == "06:00"


def test_school_run_pickup_is_school_pickup_time():
    strategy = get_strategy(SCHOOL_RUN)
    data = patch(strategy.initialize_data(PARENT), {"schoolPickupTime": "15:00"})
    assert strategy.get_pickup_suggestions(data) == []
    assert strategy.get_effective_pickup_time(data) == "15:00"


def test_effective_start_falls_back():
    strategy = get_strategy(SINGLE_DAY_EVENT)
    data = strategy.initialize_data("")
    assert strategy.get_effective_start_time(data) == "09:00"
    assert strategy.get_effective_start_time(data, fallback="11:00") == "11:00"
    data = patch(data, {"eventStartTime": "10:00"})
    assert strategy.get_effective_start_time(data) == "10:00"


# ── Validation ────────────────────────────────────────────────────────────

def test_exam_requires_positive_duration():
    strategy = get_strategy(EXAM_SUPPORT)
    data = patch(strategy.initialize_data(PARENT), {
        "examVenue": "Northside High",
        "examTime": "09:00",
        "examDuration": "0",
    })
    result = strategy.validate(data)
    assert result.missing_fields == ("Exam duration",)
    assert strategy.validate(patch(data, {"examDuration": "2"})).valid


def test_school_run_requires_dropoff_unless_same_as_pickup():
    strategy = get_strategy(SCHOOL_RUN)
    data = patch(strategy.initialize_data(""), {
        "schoolAddress": "Oakfield Primary",
        "schoolPickupTime": "15:00",
        "schoolEndTime": "18:00",
    })
    assert strategy.validate(data).missing_fields == ("Drop-off address",)
    assert strategy.validate(patch(data, {"schoolDropoffSameAsPickup": True})).valid
    assert strategy.validate(patch(data, {"schoolDropoffAddress": "Gran's"})).valid


def test_hospital_sections_unlock_in_order():
    strategy = get_strategy(HOSPITAL_APPOINTMENT)
    data = strategy.initialize_data("")
    assert strategy.get_section_validations(data) == {
        "appointment": False, "waiting": False, "transport": False,
    }
    data = patch(data, {"hospitalAddress": "St Mary's", "appointmentTime": "14:00"})
    assert strategy.get_section_validations(data) == {
        "appointment": True, "waiting": True, "transport": False,
    }
    data = patch(data, {"hospitalPickupAddress": PARENT})
    assert strategy.get_section_validations(data)["transport"] is True


def test_single_day_sections():
    strategy = get_strategy(SINGLE_DAY_EVENT)
    assert strategy.get_section_validations(zoo_trip(strategy)) == {
        "event": True, "transport": True, "options": True,
    }
    bad_window = zoo_trip(strategy, eventEndTime="09:00")
    assert strategy.get_section_validations(bad_window)["event"] is False


# ── Preview ───────────────────────────────────────────────────────────────

def test_single_day_preview():
    strategy = get_strategy(SINGLE_DAY_EVENT)
    preview = strategy.preview_summary(zoo_trip(strategy), remaining_hours=10)
    assert preview.start_time == "06:00"
    assert preview.end_time == "13:00"
    assert preview.duration_hours == 7.0
    assert preview.travel_before == 2.0
    assert preview.travel_after == 2.0
    assert preview.summary == "Event at Zoo • 06:00 → 13:00 (7h)"


def test_multi_day_preview_mentions_day_count():
    strategy = get_strategy(MULTI_DAY_EVENT)
    preview = strategy.preview_summary(zoo_trip(strategy, numberOfDays="3"), remaining_hours=10)
    assert preview.summary.startswith("Day 1 of 3 • Event at Zoo")


def test_preview_needs_a_start_time():
    strategy = get_strategy(HOSPITAL_APPOINTMENT)
    assert strategy.preview_summary(strategy.initialize_data(""), remaining_hours=10) is None


def test_every_strategy_uses_its_mode_record():
    assert set(MODE_RECORDS) == {s.key for s in list_strategies()}
    for strategy in list_strategies():
        assert strategy.record_type is MODE_RECORDS[strategy.key]
