"""
schemas/mode_records.py
------------------------
Strongly-typed itinerary record per booking mode.

ItineraryData stays the generic store the form patches; these models are the
typed view over it. Each field carries its legacy camelCase key as alias,
which is the adapter between struct fields and the field keys persisted in
session notes:

    record = HospitalAppointmentRecord.from_data(data)
    record.waiting_room_duration      # "1.5"
    record.to_data()["waitingRoomDuration"]

Validators coerce instead of raising: the engine is a completion aid and
every function must be total over whatever the form currently holds.
"""

from __future__ import annotations
from collections.abc import Mapping
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from careplan.schemas.itinerary_data import ItineraryData, as_flag
from careplan.modules.tool_usage.time_tool import TimeTool


class ModeRecord(BaseModel):
    """Base for all per-mode records."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    mode_key: ClassVar[str] = ""

    parent_address: str = Field(default="", alias="parentAddress")

    @field_validator("*", mode="before")
    @classmethod
    def _none_to_default(cls, v: Any, info) -> Any:
        field_info = cls.model_fields.get(info.field_name)
        if v is None and field_info is not None:
            return field_info.default
        if isinstance(v, str) and field_info is not None and field_info.annotation is bool:
            return as_flag(v)
        if isinstance(v, (int, float)) and not isinstance(v, bool) and field_info is not None \
                and field_info.annotation is str:
            return str(v)
        return v

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> "ModeRecord":
        return cls.model_validate(dict(data))

    def to_data(self) -> ItineraryData:
        return ItineraryData(self.model_dump(by_alias=True))

    def hours(self, field_name: str) -> float:
        return TimeTool.parse_hours(getattr(self, field_name))


def _normalise_hours(v: Any) -> str:
    """Decimal-hours strings stay as entered when valid, otherwise "0"."""
    if isinstance(v, str) and v.strip() and TimeTool.parse_hours(v) > 0:
        return v.strip()
    hours = TimeTool.parse_hours(v)
    if hours == 0:
        return "0"
    return f"{hours:g}"


# ─────────────────────────────────────────────────────────────────────────────
# Event modes
# ─────────────────────────────────────────────────────────────────────────────

class SingleDayEventRecord(ModeRecord):
    mode_key: ClassVar[str] = "single-day-event"

    pickup_address: str = Field(default="", alias="pickupAddress")
    pickup_time: str = Field(default="", alias="pickupTime")
    dropoff_address: str = Field(default="", alias="dropoffAddress")
    dropoff_same_as_pickup: bool = Field(default=False, alias="dropoffSameAsPickup")
    event_address: str = Field(default="", alias="eventAddress")
    event_start_time: str = Field(default="", alias="eventStartTime")
    event_end_time: str = Field(default="", alias="eventEndTime")
    include_travel: bool = Field(default=True, alias="includeTravel")


class MultiDayEventRecord(SingleDayEventRecord):
    """Day 1 of a multi-day event; later days are not modeled."""
    mode_key: ClassVar[str] = "multi-day-event"

    dropoff_time: str = Field(default="", alias="dropoffTime")
    number_of_days: str = Field(default="2", alias="numberOfDays")
    overnight_location: str = Field(default="", alias="overnightLocation")

    @field_validator("number_of_days")
    @classmethod
    def _at_least_one_day(cls, v: str) -> str:
        try:
            days = int(str(v).strip())
        except ValueError:
            return "2"
        return str(max(days, 1))


# ─────────────────────────────────────────────────────────────────────────────
# Hospital appointment
# ─────────────────────────────────────────────────────────────────────────────

class HospitalAppointmentRecord(ModeRecord):
    mode_key: ClassVar[str] = "hospital-appointment"

    hospital_pickup_address: str = Field(default="", alias="hospitalPickupAddress")
    hospital_pickup_time: str = Field(default="", alias="hospitalPickupTime")
    hospital_dropoff_address: str = Field(default="", alias="hospitalDropoffAddress")
    hospital_dropoff_same_as_pickup: bool = Field(default=False, alias="hospitalDropoffSameAsPickup")
    hospital_address: str = Field(default="", alias="hospitalAddress")
    appointment_time: str = Field(default="", alias="appointmentTime")
    waiting_room_duration: str = Field(default="0", alias="waitingRoomDuration")
    medical_notes: str = Field(default="", alias="medicalNotes")

    @field_validator("waiting_room_duration")
    @classmethod
    def _non_negative_hours(cls, v: str) -> str:
        return _normalise_hours(v)


# ─────────────────────────────────────────────────────────────────────────────
# Exam support
# ─────────────────────────────────────────────────────────────────────────────

class ExamSupportRecord(ModeRecord):
    mode_key: ClassVar[str] = "exam-support"

    exam_pickup_address: str = Field(default="", alias="examPickupAddress")
    exam_pickup_time: str = Field(default="", alias="examPickupTime")
    exam_dropoff_address: str = Field(default="", alias="examDropoffAddress")
    exam_dropoff_same_as_pickup: bool = Field(default=False, alias="examDropoffSameAsPickup")
    exam_venue: str = Field(default="", alias="examVenue")
    exam_time: str = Field(default="", alias="examTime")
    exam_duration: str = Field(default="0", alias="examDuration")
    exam_accommodations: str = Field(default="", alias="examAccommodations")

    @field_validator("exam_duration")
    @classmethod
    def _non_negative_hours(cls, v: str) -> str:
        return _normalise_hours(v)


# ─────────────────────────────────────────────────────────────────────────────
# School run
# ─────────────────────────────────────────────────────────────────────────────

class SchoolRunRecord(ModeRecord):
    mode_key: ClassVar[str] = "school-run"

    school_address: str = Field(default="", alias="schoolAddress")
    school_pickup_time: str = Field(default="", alias="schoolPickupTime")
    school_end_time: str = Field(default="", alias="schoolEndTime")
    school_dropoff_address: str = Field(default="", alias="schoolDropoffAddress")
    school_dropoff_same_as_pickup: bool = Field(default=False, alias="schoolDropoffSameAsPickup")
    include_homework: bool = Field(default=False, alias="includeHomework")


MODE_RECORDS: dict[str, type[ModeRecord]] = {
    rec.mode_key: rec
    for rec in (
        SingleDayEventRecord,
        MultiDayEventRecord,
        HospitalAppointmentRecord,
        ExamSupportRecord,
        SchoolRunRecord,
    )
}
