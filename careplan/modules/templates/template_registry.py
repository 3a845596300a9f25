"""
modules/templates/template_registry.py
----------------------------------------
Template Registry: the itinerary shape of every booking mode.

Composition only, no behaviour. Adding a booking mode means adding one
Template here (plus its strategy and note label table); the estimation and
validation services work from the segment declarations alone.

Registered templates:

  single-day-event      Transport → Stop("Event", start + end)
  multi-day-event       Transport (with booked return time) → Stop("Event")   [day 1]
  hospital-appointment  Transport → Stop("Hospital", start) → Wait("Waiting room")
  exam-support          Transport → Stop("Exam venue", start)   + examDuration
  school-run            Stop("School", start + end)             + dropoff extras
"""

from __future__ import annotations
from types import MappingProxyType
from typing import Mapping, Optional

from careplan.schemas.segments import (
    DropoffFieldKeys,
    PickupFieldKeys,
    PickupSuggestionSource,
    StopSegment,
    Template,
    TransportSegment,
    WaitSegment,
)


SINGLE_DAY_EVENT = "single-day-event"
MULTI_DAY_EVENT = "multi-day-event"
HOSPITAL_APPOINTMENT = "hospital-appointment"
EXAM_SUPPORT = "exam-support"
SCHOOL_RUN = "school-run"


# ─────────────────────────────────────────────────────────────────────────────
# Template definitions
# ─────────────────────────────────────────────────────────────────────────────

def _event_transport(dropoff_time_key: Optional[str] = None) -> TransportSegment:
    return TransportSegment(
        pickup=PickupFieldKeys(address="pickupAddress", time="pickupTime"),
        dropoff=DropoffFieldKeys(
            address="dropoffAddress",
            same_as_pickup="dropoffSameAsPickup",
            time=dropoff_time_key,
        ),
        suggestions=PickupSuggestionSource(
            event_time_key="eventStartTime",
            from_address_key="pickupAddress",
            to_address_key="eventAddress",
        ),
    )


_EVENT_STOP = StopSegment(
    label="Event",
    address_key="eventAddress",
    start_time_key="eventStartTime",
    end_time_key="eventEndTime",
)


_TEMPLATES: dict[str, Template] = {
    SINGLE_DAY_EVENT: Template(
        name=SINGLE_DAY_EVENT,
        segments=(_event_transport(), _EVENT_STOP),
        extra_fields=(("includeTravel", True), ("parentAddress", "")),
    ),
    MULTI_DAY_EVENT: Template(
        name=MULTI_DAY_EVENT,
        segments=(_event_transport(dropoff_time_key="dropoffTime"), _EVENT_STOP),
        extra_fields=(
            ("includeTravel", True),
            ("numberOfDays", "2"),
            ("overnightLocation", ""),
            ("parentAddress", ""),
        ),
    ),
    HOSPITAL_APPOINTMENT: Template(
        name=HOSPITAL_APPOINTMENT,
        segments=(
            TransportSegment(
                pickup=PickupFieldKeys(address="hospitalPickupAddress", time="hospitalPickupTime"),
                dropoff=DropoffFieldKeys(
                    address="hospitalDropoffAddress",
                    same_as_pickup="hospitalDropoffSameAsPickup",
                ),
                suggestions=PickupSuggestionSource(
                    event_time_key="appointmentTime",
                    from_address_key="hospitalPickupAddress",
                    to_address_key="hospitalAddress",
                ),
            ),
            StopSegment(label="Hospital", address_key="hospitalAddress", start_time_key="appointmentTime"),
            WaitSegment(duration_key="waitingRoomDuration", label="Waiting room"),
        ),
        extra_fields=(("medicalNotes", ""), ("parentAddress", "")),
    ),
    EXAM_SUPPORT: Template(
        name=EXAM_SUPPORT,
        segments=(
            TransportSegment(
                pickup=PickupFieldKeys(address="examPickupAddress", time="examPickupTime"),
                dropoff=DropoffFieldKeys(
                    address="examDropoffAddress",
                    same_as_pickup="examDropoffSameAsPickup",
                ),
                suggestions=PickupSuggestionSource(
                    event_time_key="examTime",
                    from_address_key="examPickupAddress",
                    to_address_key="examVenue",
                ),
            ),
            StopSegment(label="Exam venue", address_key="examVenue", start_time_key="examTime"),
        ),
        fixed_duration_key="examDuration",
        extra_fields=(("examDuration", "2"), ("examAccommodations", ""), ("parentAddress", "")),
    ),
    SCHOOL_RUN: Template(
        name=SCHOOL_RUN,
        segments=(
            StopSegment(
                label="School",
                address_key="schoolAddress",
                start_time_key="schoolPickupTime",
                end_time_key="schoolEndTime",
            ),
        ),
        extra_fields=(
            ("schoolDropoffAddress", ""),
            ("schoolDropoffSameAsPickup", False),
            ("includeHomework", False),
            ("parentAddress", ""),
        ),
    ),
}

# Built once at import; read-only afterwards.
TEMPLATES: Mapping[str, Template] = MappingProxyType(_TEMPLATES)


# ─────────────────────────────────────────────────────────────────────────────
# Lookup
# ─────────────────────────────────────────────────────────────────────────────

def get_template_for_mode(mode_key: str) -> Optional[Template]:
    """
    Resolve a booking mode to its itinerary template.

    Returns:
        Template, or None for modes with no itinerary (callers skip
        itinerary validation / estimation entirely).
    """
    return TEMPLATES.get(mode_key)


def list_template_modes() -> list[str]:
    return list(TEMPLATES)


def get_all_field_keys(template: Template) -> list[str]:
    """Every field key the template's segments bind, in declaration order, de-duplicated."""
    keys: list[str] = []
    for seg in template.segments:
        if isinstance(seg, TransportSegment):
            candidates = [seg.pickup.address, seg.pickup.time,
                          seg.dropoff.address, seg.dropoff.same_as_pickup, seg.dropoff.time]
        elif isinstance(seg, StopSegment):
            candidates = [seg.address_key, seg.start_time_key, seg.end_time_key]
        else:
            candidates = [seg.duration_key]
        for key in candidates:
            if key and key not in keys:
                keys.append(key)
    return keys
