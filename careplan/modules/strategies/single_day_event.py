"""
modules/strategies/single_day_event.py
----------------------------------------
Single-day event: pickup → event → drop-off, travel included.

Sections:
    event      address + a start/end window with end after start
    transport  pickup address + a pickup time (entered or suggested)
    options    never blocks
"""

from __future__ import annotations
from collections.abc import Mapping
from typing import Any

from careplan.modules.strategies.base_strategy import BaseItineraryStrategy, ModeMetadata
from careplan.modules.templates.template_registry import SINGLE_DAY_EVENT
from careplan.modules.tool_usage.time_tool import TimeTool
from careplan.schemas.mode_records import SingleDayEventRecord
from careplan.schemas.results import DurationBreakdown


class SingleDayEventStrategy(BaseItineraryStrategy):
    key = SINGLE_DAY_EVENT
    name = "Single-Day Event"
    description = "Pickup → Event → Drop-off. Travel included."
    metadata = ModeMetadata(
        title="Single-day event",
        short_desc="Event with travel",
        icon="car",
        badge="Most booked",
        popular=True,
        required=("travel_escort",),
    )
    sections = ("event", "transport", "options")
    record_type = SingleDayEventRecord
    retains_pickup_on_reset = True

    def initial_values(self, parent_address: str) -> dict[str, Any]:
        values = super().initial_values(parent_address)
        values["includeTravel"] = True
        return values

    def get_section_validations(self, data: Mapping[str, Any]) -> dict[str, bool]:
        rec = self.record(data)
        event_valid = bool(
            rec.event_address.strip()
            and TimeTool.gap_hours(rec.event_start_time, rec.event_end_time) is not None
        )
        transport_valid = bool(rec.pickup_address.strip() and self.get_effective_pickup_time(data))
        return {
            "event": event_valid,
            "transport": transport_valid,
            "options": True,
        }

    def duration_breakdown(self, data: Mapping[str, Any]) -> DurationBreakdown:
        breakdown = super().duration_breakdown(data)
        if not self.record(data).include_travel:
            # Parent handles transport; only the on-site window is booked.
            return DurationBreakdown(on_site=breakdown.on_site)
        return breakdown
