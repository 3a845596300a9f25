"""
modules/strategies/exam_support.py
------------------------------------
Exam support: calm prep + in-exam support at the exam venue.
On-site time is the explicit exam duration field.
"""

from __future__ import annotations
from collections.abc import Mapping
from typing import Any

from careplan.modules.strategies.base_strategy import BaseItineraryStrategy, ModeMetadata
from careplan.modules.templates.template_registry import EXAM_SUPPORT
from careplan.modules.tool_usage.time_tool import TimeTool
from careplan.schemas.mode_records import ExamSupportRecord


class ExamSupportStrategy(BaseItineraryStrategy):
    key = EXAM_SUPPORT
    name = "Exam Support"
    description = "Calm prep + in-exam support."
    metadata = ModeMetadata(
        title="Exam support",
        short_desc="Calm prep + in-exam support",
        icon="book-open",
        required=("exam_support",),
    )
    sections = ("exam", "transport")
    record_type = ExamSupportRecord

    def initial_values(self, parent_address: str) -> dict[str, Any]:
        values = super().initial_values(parent_address)
        values["examDuration"] = "2"
        return values

    def extra_missing_fields(self, data: Mapping[str, Any]) -> list[str]:
        if self.record(data).hours("exam_duration") <= 0:
            return ["Exam duration"]
        return []

    def get_section_validations(self, data: Mapping[str, Any]) -> dict[str, bool]:
        rec = self.record(data)
        exam = bool(
            rec.exam_venue.strip()
            and TimeTool.to_minutes(rec.exam_time) is not None
            and rec.hours("exam_duration") > 0
        )
        transport = exam and bool(rec.exam_pickup_address.strip() and self.get_effective_pickup_time(data))
        return {
            "exam": exam,
            "transport": transport,
        }
