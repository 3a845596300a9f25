"""
modules/strategies/hospital_appointment.py
--------------------------------------------
Hospital appointment: transport + waiting-room support.

On-site time is the waiting-room estimate plus a fixed one-hour appointment.
Sections unlock in order: appointment → waiting → transport.
"""

from __future__ import annotations
from collections.abc import Mapping
from typing import Any

from careplan.modules.strategies.base_strategy import BaseItineraryStrategy, ModeMetadata
from careplan.modules.templates.template_registry import HOSPITAL_APPOINTMENT
from careplan.modules.tool_usage.time_tool import TimeTool
from careplan.schemas.mode_records import HospitalAppointmentRecord


class HospitalAppointmentStrategy(BaseItineraryStrategy):
    key = HOSPITAL_APPOINTMENT
    name = "Hospital Appointment"
    description = "Transport + waiting-room support."
    metadata = ModeMetadata(
        title="Hospital support",
        short_desc="Transport + waiting-room support",
        icon="stethoscope",
        required=("hospital_support",),
    )
    sections = ("appointment", "waiting", "transport")
    record_type = HospitalAppointmentRecord

    def initial_values(self, parent_address: str) -> dict[str, Any]:
        values = super().initial_values(parent_address)
        values["waitingRoomDuration"] = "1"
        return values

    def get_section_validations(self, data: Mapping[str, Any]) -> dict[str, bool]:
        rec = self.record(data)
        appointment = bool(
            rec.hospital_address.strip() and TimeTool.to_minutes(rec.appointment_time) is not None
        )
        # Any non-negative estimate is acceptable, "0" included.
        waiting = appointment and bool(rec.waiting_room_duration)
        transport = waiting and bool(
            rec.hospital_pickup_address.strip() and self.get_effective_pickup_time(data)
        )
        return {
            "appointment": appointment,
            "waiting": waiting,
            "transport": transport,
        }
