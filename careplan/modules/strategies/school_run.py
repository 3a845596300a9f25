"""
modules/strategies/school_run.py
----------------------------------
School run + after-school care.

The session starts when the trainer collects the child at school, so there
is no pickup leg to estimate or suggest: the effective pickup time is the
school pickup time. Duration is the school window plus an optional
homework hour. A drop-off address is required unless the child is dropped
back where they were collected.
"""

from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Optional

from careplan import config
from careplan.modules.strategies.base_strategy import BaseItineraryStrategy, ModeMetadata
from careplan.modules.templates.template_registry import SCHOOL_RUN
from careplan.modules.tool_usage.time_tool import TimeTool
from careplan.schemas.mode_records import SchoolRunRecord
from careplan.schemas.results import DurationBreakdown


class SchoolRunStrategy(BaseItineraryStrategy):
    key = SCHOOL_RUN
    name = "School Run + After-School"
    description = "Morning/afternoon run, homework + activities."
    metadata = ModeMetadata(
        title="School run",
        short_desc="Morning/afternoon + homework",
        icon="school",
        badge="Weekdays",
        popular=True,
        required=("school_run",),
    )
    sections = ("school", "transport", "options")
    record_type = SchoolRunRecord

    def initial_values(self, parent_address: str) -> dict[str, Any]:
        return {
            "parentAddress": parent_address,
            "schoolDropoffAddress": parent_address,
            "schoolDropoffSameAsPickup": False,
            "includeHomework": False,
        }

    def _dropoff_ok(self, rec: SchoolRunRecord) -> bool:
        return rec.school_dropoff_same_as_pickup or bool(rec.school_dropoff_address.strip())

    def extra_missing_fields(self, data: Mapping[str, Any]) -> list[str]:
        if self._dropoff_ok(self.record(data)):
            return []
        return ["Drop-off address"]

    def get_section_validations(self, data: Mapping[str, Any]) -> dict[str, bool]:
        rec = self.record(data)
        school = bool(
            rec.school_address.strip()
            and TimeTool.gap_hours(rec.school_pickup_time, rec.school_end_time) is not None
        )
        return {
            "school": school,
            "transport": school and self._dropoff_ok(rec),
            "options": True,
        }

    def duration_breakdown(self, data: Mapping[str, Any]) -> DurationBreakdown:
        breakdown = super().duration_breakdown(data)
        if breakdown.on_site <= 0:
            return breakdown
        if self.record(data).include_homework:
            return DurationBreakdown(on_site=breakdown.on_site + config.HOMEWORK_HOURS)
        return breakdown

    def get_pickup_suggestions(self, data: Mapping[str, Any]) -> list[str]:
        return []

    def get_effective_pickup_time(self, data: Mapping[str, Any]) -> Optional[str]:
        pickup = self.record(data).school_pickup_time.strip()
        return pickup if TimeTool.to_minutes(pickup) is not None else None
