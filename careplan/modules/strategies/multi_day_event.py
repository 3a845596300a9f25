"""
modules/strategies/multi_day_event.py
---------------------------------------
Multi-day event. Only day 1 is modeled: pickup → event → return, where the
return (drop-off) time may be booked explicitly. Later days are the same
session repeated and are not estimated here.
"""

from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Optional

from careplan.modules.strategies.base_strategy import ModeMetadata, SessionPreview
from careplan.modules.strategies.single_day_event import SingleDayEventStrategy
from careplan.modules.templates.template_registry import MULTI_DAY_EVENT
from careplan.schemas.mode_records import MultiDayEventRecord


class MultiDayEventStrategy(SingleDayEventStrategy):
    key = MULTI_DAY_EVENT
    name = "Multi-Day Event"
    description = "Day 1 itinerary of a multi-day event; later days repeat it."
    metadata = ModeMetadata(
        title="Multi-day event",
        short_desc="Festivals, camps, tournaments",
        icon="calendar-range",
        badge="",
        popular=False,
        required=("travel_escort",),
    )
    sections = ("event", "transport", "options")
    record_type = MultiDayEventRecord
    retains_pickup_on_reset = False

    def initial_values(self, parent_address: str) -> dict[str, Any]:
        values = super().initial_values(parent_address)
        values["numberOfDays"] = "2"
        return values

    def preview_summary(self, data: Mapping[str, Any], remaining_hours: float) -> Optional[SessionPreview]:
        preview = super().preview_summary(data, remaining_hours)
        if preview is None:
            return None
        days = self.record(data).number_of_days
        return SessionPreview(
            start_time=preview.start_time,
            end_time=preview.end_time,
            duration_hours=preview.duration_hours,
            travel_before=preview.travel_before,
            travel_after=preview.travel_after,
            summary=f"Day 1 of {days} • {preview.summary}",
        )
