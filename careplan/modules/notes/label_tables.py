"""
modules/notes/label_tables.py
-------------------------------
Per-mode label tables for the session-note text format.

These strings are a persisted contract: notes written by earlier versions
must keep parsing, so headers and labels never change. New labels may be
added; retired spellings move to `aliases`.

Field kinds:
    TEXT     "<icon> Label: value"
    BLOCK    "<icon> Label:" then the value on following indented line(s)
    BOOL     "<icon> Label: Yes|No"
    HOURS    "<icon> Label: 1.5 hour(s)"
    DROPOFF  block address, or the literal "Same as pickup" (sets flag_key)

Older notes follow some address rows with a "   Time: ..." line; a row
that lists continuation_keys reads that line back into those keys (a range
"10:00 – 13:00" splits across two keys).
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from careplan.modules.templates.template_registry import (
    EXAM_SUPPORT,
    HOSPITAL_APPOINTMENT,
    MULTI_DAY_EVENT,
    SCHOOL_RUN,
    SINGLE_DAY_EVENT,
)
from careplan.schemas.mode_records import (
    ExamSupportRecord,
    HospitalAppointmentRecord,
    ModeRecord,
    MultiDayEventRecord,
    SchoolRunRecord,
    SingleDayEventRecord,
)


class FieldKind(str, Enum):
    TEXT = "TEXT"
    BLOCK = "BLOCK"
    BOOL = "BOOL"
    HOURS = "HOURS"
    DROPOFF = "DROPOFF"


@dataclass(frozen=True)
class NoteField:
    key: str                             # itinerary field key
    label: str                           # matched as "<label>:"
    icon: str
    kind: FieldKind = FieldKind.TEXT
    flag_key: Optional[str] = None       # DROPOFF only: same-as-pickup flag
    aliases: tuple[str, ...] = ()        # older spellings still accepted on parse
    optional: bool = False               # omitted from the text when blank
    time_key: Optional[str] = None       # legacy inline "<address> at HH:MM" fills this key
    continuation_keys: tuple[str, ...] = ()  # legacy "Time:" line under the row fills these keys

    @property
    def labels(self) -> tuple[str, ...]:
        return (self.label,) + self.aliases


@dataclass(frozen=True)
class NoteLayout:
    mode_key: str
    header: str                          # "<icon> TITLE"
    record_type: type[ModeRecord]
    fields: tuple[NoteField, ...]

    @property
    def header_title(self) -> str:
        """Header without its icon; accepted on parse for icon-stripped notes."""
        parts = self.header.split(" ", 1)
        return parts[1] if len(parts) == 2 else self.header


# ─────────────────────────────────────────────────────────────────────────────
# Shared rows
# ─────────────────────────────────────────────────────────────────────────────

def _pickup_rows(address_key: str, time_key: str) -> tuple[NoteField, ...]:
    return (
        NoteField(address_key, "Pickup Address", "📍", FieldKind.BLOCK,
                  aliases=("Pickup",), time_key=time_key,
                  continuation_keys=(time_key,)),
        NoteField(time_key, "Pickup Time", "⏰", FieldKind.TEXT),
    )


def _dropoff_row(address_key: str, flag_key: str) -> NoteField:
    return NoteField(address_key, "Drop-off Address", "🚗", FieldKind.DROPOFF,
                     flag_key=flag_key, aliases=("Drop-off",))


_EVENT_ROWS: tuple[NoteField, ...] = (
    *_pickup_rows("pickupAddress", "pickupTime"),
    NoteField("eventAddress", "Event Address", "🎯", FieldKind.BLOCK,
              continuation_keys=("eventStartTime", "eventEndTime")),
    NoteField("eventStartTime", "Event Start Time", "⏰"),
    NoteField("eventEndTime", "Event End Time", "⏰"),
    _dropoff_row("dropoffAddress", "dropoffSameAsPickup"),
)


# ─────────────────────────────────────────────────────────────────────────────
# Layouts
# ─────────────────────────────────────────────────────────────────────────────

_LAYOUTS: dict[str, NoteLayout] = {
    SINGLE_DAY_EVENT: NoteLayout(
        mode_key=SINGLE_DAY_EVENT,
        header="📅 EVENT ITINERARY",
        record_type=SingleDayEventRecord,
        fields=(
            *_EVENT_ROWS,
            NoteField("includeTravel", "Travel included", "✈️", FieldKind.BOOL),
        ),
    ),
    MULTI_DAY_EVENT: NoteLayout(
        mode_key=MULTI_DAY_EVENT,
        header="📅 MULTI-DAY EVENT ITINERARY",
        record_type=MultiDayEventRecord,
        fields=(
            *_EVENT_ROWS,
            NoteField("dropoffTime", "Drop-off Time", "⏰"),
            NoteField("numberOfDays", "Number of Days", "🗓️"),
            NoteField("overnightLocation", "Overnight Location", "🏨", FieldKind.BLOCK, optional=True),
            NoteField("includeTravel", "Travel included", "✈️", FieldKind.BOOL),
        ),
    ),
    HOSPITAL_APPOINTMENT: NoteLayout(
        mode_key=HOSPITAL_APPOINTMENT,
        header="🏥 HOSPITAL APPOINTMENT DETAILS",
        record_type=HospitalAppointmentRecord,
        fields=(
            *_pickup_rows("hospitalPickupAddress", "hospitalPickupTime"),
            NoteField("hospitalAddress", "Hospital/Clinic Address", "🏥", FieldKind.BLOCK,
                      aliases=("Hospital",)),
            NoteField("appointmentTime", "Appointment Time", "⏰", aliases=("Appointment",)),
            NoteField("waitingRoomDuration", "Waiting Room Duration", "⏱️", FieldKind.HOURS,
                      aliases=("Waiting Room",)),
            _dropoff_row("hospitalDropoffAddress", "hospitalDropoffSameAsPickup"),
            NoteField("medicalNotes", "Medical Notes", "📝", FieldKind.BLOCK, optional=True),
        ),
    ),
    EXAM_SUPPORT: NoteLayout(
        mode_key=EXAM_SUPPORT,
        header="📝 EXAM SUPPORT DETAILS",
        record_type=ExamSupportRecord,
        fields=(
            *_pickup_rows("examPickupAddress", "examPickupTime"),
            NoteField("examVenue", "Exam Venue", "📍", FieldKind.BLOCK, aliases=("Venue",)),
            NoteField("examTime", "Exam Time", "⏰", aliases=("Exam Start Time",)),
            NoteField("examDuration", "Exam Duration", "⏱️", FieldKind.HOURS, aliases=("Duration",)),
            _dropoff_row("examDropoffAddress", "examDropoffSameAsPickup"),
            NoteField("examAccommodations", "Accommodations", "📝", FieldKind.BLOCK, optional=True),
        ),
    ),
    SCHOOL_RUN: NoteLayout(
        mode_key=SCHOOL_RUN,
        header="🏫 SCHOOL RUN DETAILS",
        record_type=SchoolRunRecord,
        fields=(
            NoteField("schoolAddress", "School Address", "🏫", FieldKind.BLOCK, aliases=("School",)),
            NoteField("schoolPickupTime", "School Pickup Time", "⏰", aliases=("Pickup",)),
            NoteField("schoolEndTime", "School End Time", "⏰", aliases=("School End",)),
            _dropoff_row("schoolDropoffAddress", "schoolDropoffSameAsPickup"),
            NoteField("includeHomework", "Homework", "📚", FieldKind.BOOL),
        ),
    ),
}

LAYOUTS: Mapping[str, NoteLayout] = MappingProxyType(_LAYOUTS)
