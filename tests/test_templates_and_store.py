import pytest

from careplan.modules.store import itinerary_store
from careplan.modules.templates.template_registry import (
    EXAM_SUPPORT,
    HOSPITAL_APPOINTMENT,
    MULTI_DAY_EVENT,
    SCHOOL_RUN,
    SINGLE_DAY_EVENT,
    get_all_field_keys,
    get_template_for_mode,
    list_template_modes,
)
from careplan.modules.tool_usage.time_tool import TimeTool
from careplan.schemas.itinerary_data import ItineraryData
from careplan.schemas.segments import StopSegment, TransportSegment, WaitSegment


@pytest.fixture
def single_day():
    return get_template_for_mode(SINGLE_DAY_EVENT)


@pytest.fixture
def hospital():
    return get_template_for_mode(HOSPITAL_APPOINTMENT)


# ── Template registry ─────────────────────────────────────────────────────

def test_all_modes_registered():
    assert list_template_modes() == [
        SINGLE_DAY_EVENT, MULTI_DAY_EVENT, HOSPITAL_APPOINTMENT, EXAM_SUPPORT, SCHOOL_RUN,
    ]


def test_unknown_mode_has_no_template():
    assert get_template_for_mode("babysitting") is None


def test_hospital_template_shape(hospital):
    kinds = [type(seg) for seg in hospital.segments]
    assert kinds == [TransportSegment, StopSegment, WaitSegment]
    assert hospital.stop.label == "Hospital"
    assert hospital.stop.end_time_key is None
    assert hospital.wait.duration_key == "waitingRoomDuration"


def test_school_run_has_no_transport():
    template = get_template_for_mode(SCHOOL_RUN)
    assert template.transport is None
    assert template.stop.address_key == "schoolAddress"


def test_field_keys_in_declaration_order(single_day):
    assert get_all_field_keys(single_day) == [
        "pickupAddress", "pickupTime", "dropoffAddress", "dropoffSameAsPickup",
        "eventAddress", "eventStartTime", "eventEndTime",
    ]


def test_multi_day_declares_dropoff_time():
    template = get_template_for_mode(MULTI_DAY_EVENT)
    assert "dropoffTime" in get_all_field_keys(template)


# ── Store ─────────────────────────────────────────────────────────────────

def test_initialize_defaults(single_day):
    data = itinerary_store.initialize(single_day)
    assert data == {
        "pickupAddress": "",
        "pickupTime": "",
        "dropoffAddress": "",
        "dropoffSameAsPickup": False,
        "eventAddress": "",
        "eventStartTime": "",
        "eventEndTime": "",
        "includeTravel": True,
        "parentAddress": "",
    }


def test_initialize_wait_defaults_to_zero(hospital):
    data = itinerary_store.initialize(hospital)
    assert data["waitingRoomDuration"] == "0"
    assert data["medicalNotes"] == ""


def test_patch_is_idempotent(single_day):
    data = itinerary_store.initialize(single_day)
    partial = {"eventAddress": "Zoo", "eventStartTime": "10:00"}
    once = itinerary_store.patch(data, partial)
    twice = itinerary_store.patch(once, partial)
    assert once == twice
    # No-op patch hands back the same record
    assert twice is once


def test_patch_never_removes_keys(single_day):
    data = itinerary_store.initialize(single_day)
    patched = itinerary_store.patch(data, {"eventAddress": "Zoo"})
    assert set(data) <= set(patched)
    assert patched["eventAddress"] == "Zoo"
    # The original record is untouched
    assert data["eventAddress"] == ""


def test_patch_with_empty_partial_returns_input(single_day):
    data = itinerary_store.initialize(single_day)
    assert itinerary_store.patch(data, None) is data
    assert itinerary_store.patch(data, {}) is data


def test_itinerary_data_is_read_only():
    data = ItineraryData({"eventAddress": "Zoo"})
    with pytest.raises(TypeError):
        data["eventAddress"] = "Park"  # type: ignore[index]


def test_get_with_default(single_day):
    data = itinerary_store.initialize(single_day)
    assert itinerary_store.get(data, "eventAddress") == ""
    assert itinerary_store.get(data, "nope", "fallback") == "fallback"


def test_carry_over_maps_roles_across_templates(single_day, hospital):
    old = itinerary_store.patch(itinerary_store.initialize(single_day), {
        "pickupAddress": "10 Elm St",
        "pickupTime": "09:00",
        "eventAddress": "City Zoo",
        "parentAddress": "10 Elm St",
    })
    new = itinerary_store.carry_over(single_day, old, hospital, itinerary_store.initialize(hospital))
    assert new["hospitalPickupAddress"] == "10 Elm St"
    assert new["hospitalPickupTime"] == "09:00"
    assert new["hospitalAddress"] == "City Zoo"
    assert new["parentAddress"] == "10 Elm St"
    # Keys of the old mode are never copied in
    assert "eventAddress" not in new


def test_carry_over_keeps_same_named_keys(single_day):
    multi = get_template_for_mode(MULTI_DAY_EVENT)
    old = itinerary_store.patch(itinerary_store.initialize(single_day), {
        "eventAddress": "Festival Field", "eventStartTime": "11:00",
    })
    new = itinerary_store.carry_over(single_day, old, multi, itinerary_store.initialize(multi))
    assert new["eventAddress"] == "Festival Field"
    assert new["eventStartTime"] == "11:00"
    assert new["numberOfDays"] == "2"


def test_carry_over_skips_empty_values(single_day, hospital):
    old = itinerary_store.initialize(single_day)
    fresh = itinerary_store.patch(itinerary_store.initialize(hospital), {"hospitalPickupAddress": "Home"})
    new = itinerary_store.carry_over(single_day, old, hospital, fresh)
    assert new["hospitalPickupAddress"] == "Home"


@pytest.mark.parametrize("pickup, retained", [
    ("Grandma's house", "Grandma's house"),
    ("Parent's address", ""),
    ("My address", ""),
])
def test_reset_for_next_booking(single_day, pickup, retained):
    data = itinerary_store.patch(itinerary_store.initialize(single_day), {
        "pickupAddress": pickup,
        "pickupTime": "08:00",
        "eventAddress": "Zoo",
        "eventStartTime": "10:00",
        "dropoffSameAsPickup": True,
        "parentAddress": "10 Elm St",
    })
    reset = itinerary_store.reset_for_next_booking(single_day, data, retain_pickup=True)
    assert reset["pickupAddress"] == retained
    assert reset["pickupTime"] == ""
    assert reset["eventAddress"] == ""
    assert reset["eventStartTime"] == ""
    assert reset["dropoffSameAsPickup"] is False
    assert reset["parentAddress"] == "10 Elm St"


def test_reset_without_retain_clears_pickup(single_day):
    data = itinerary_store.patch(itinerary_store.initialize(single_day), {"pickupAddress": "Grandma's house"})
    reset = itinerary_store.reset_for_next_booking(single_day, data)
    assert reset["pickupAddress"] == ""


def test_reset_wait_back_to_zero(hospital):
    data = itinerary_store.patch(itinerary_store.initialize(hospital), {"waitingRoomDuration": "2"})
    reset = itinerary_store.reset_for_next_booking(hospital, data)
    assert reset["waitingRoomDuration"] == "0"


# ── Clock helpers ─────────────────────────────────────────────────────────

@pytest.mark.parametrize("value, minutes", [
    ("09:30", 570),
    ("9:30", 570),
    ("00:00", 0),
    ("23:59:59", 1439),
    ("", None),
    ("25:00", None),
    ("noon", None),
    (None, None),
])
def test_to_minutes(value, minutes):
    assert TimeTool.to_minutes(value) == minutes


def test_from_minutes_wraps():
    assert TimeTool.from_minutes(570) == "09:30"
    assert TimeTool.from_minutes(-30) == "23:30"


def test_gap_hours_requires_positive_window():
    assert TimeTool.gap_hours("10:00", "13:30") == 3.5
    assert TimeTool.gap_hours("13:00", "10:00") is None
    assert TimeTool.gap_hours("10:00", "") is None


@pytest.mark.parametrize("value, hours", [
    ("1.5", 1.5),
    (2, 2.0),
    ("", 0.0),
    ("abc", 0.0),
    ("-1", 0.0),
    ("nan", 0.0),
    (True, 0.0),
])
def test_parse_hours(value, hours):
    assert TimeTool.parse_hours(value) == hours


def test_format_hours():
    assert TimeTool.format_hours(3) == "3h"
    assert TimeTool.format_hours(4.5) == "4h 30m"
