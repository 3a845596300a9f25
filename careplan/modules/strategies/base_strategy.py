"""
modules/strategies/base_strategy.py
-------------------------------------
Abstract base class for booking-mode strategies.
Each concrete strategy (single-day event, hospital appointment, …) binds a
template to its validation, duration, pickup-suggestion and preview
behaviour. The defaults here delegate to the generic services; a strategy
overrides only what its mode does differently.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Optional

from careplan import config
from careplan.modules.estimation import duration_estimator, pickup_suggester
from careplan.modules.store import itinerary_store
from careplan.modules.templates.template_registry import get_template_for_mode
from careplan.modules.tool_usage.time_tool import TimeTool
from careplan.modules.validation import itinerary_validator
from careplan.schemas.itinerary_data import ItineraryData
from careplan.schemas.mode_records import ModeRecord
from careplan.schemas.results import DurationBreakdown, ValidationResult
from careplan.schemas.segments import Template


@dataclass(frozen=True)
class ModeMetadata:
    """Display metadata for the mode picker."""
    title: str
    short_desc: str
    icon: str                                  # icon reference, resolved by the UI
    badge: str = ""
    popular: bool = False
    required: tuple[str, ...] = ()             # service tags the mode needs


@dataclass(frozen=True)
class SessionPreview:
    """What the booking summary shows for the current itinerary."""
    start_time: str
    end_time: str
    duration_hours: float
    travel_before: float
    travel_after: float
    summary: str


class BaseItineraryStrategy(ABC):
    """
    Mode-specific behaviour bundle.
    Concrete strategies set the class attributes and implement
    `get_section_validations()`.
    """

    key: ClassVar[str] = ""
    name: ClassVar[str] = ""
    description: ClassVar[str] = ""
    metadata: ClassVar[ModeMetadata]
    sections: ClassVar[tuple[str, ...]] = ()
    record_type: ClassVar[type[ModeRecord]] = ModeRecord
    retains_pickup_on_reset: ClassVar[bool] = False

    @property
    def template(self) -> Template:
        template = get_template_for_mode(self.key)
        if template is None:
            raise LookupError(f"no template registered for mode '{self.key}'")
        return template

    # ── Data ──────────────────────────────────────────────────────────────

    def initial_values(self, parent_address: str) -> dict[str, Any]:
        """Mode-specific starting values layered over the template defaults."""
        values: dict[str, Any] = {"parentAddress": parent_address}
        transport = self.template.transport
        if transport is not None:
            values[transport.pickup.address] = parent_address
            values[transport.dropoff.same_as_pickup] = True
        return values

    def initialize_data(self, parent_address: Optional[str] = None) -> ItineraryData:
        base = itinerary_store.initialize(self.template)
        return itinerary_store.patch(base, self.initial_values(parent_address or ""))

    def record(self, data: Mapping[str, Any]) -> ModeRecord:
        """Typed view of data for this mode."""
        return self.record_type.from_data(data)

    # ── Validation ────────────────────────────────────────────────────────

    @abstractmethod
    def get_section_validations(self, data: Mapping[str, Any]) -> dict[str, bool]:
        """
        Section name → whether the section is complete.
        Drives progressive disclosure of the booking wizard.
        """
        ...

    def extra_missing_fields(self, data: Mapping[str, Any]) -> list[str]:
        """Required mode fields not modeled as segments."""
        return []

    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        result = itinerary_validator.validate(self.template, data)
        extra = [f for f in self.extra_missing_fields(data) if f not in result.missing_fields]
        if not extra:
            return result
        return ValidationResult.from_missing(list(result.missing_fields) + extra)

    # ── Duration ──────────────────────────────────────────────────────────

    def duration_breakdown(self, data: Mapping[str, Any]) -> DurationBreakdown:
        return duration_estimator.estimate_breakdown(self.template, data)

    def calculate_duration(self, data: Mapping[str, Any], remaining_hours: float) -> float:
        return duration_estimator.clamp_hours(self.duration_breakdown(data).total, remaining_hours)

    # ── Pickup ────────────────────────────────────────────────────────────

    def get_pickup_suggestions(self, data: Mapping[str, Any]) -> list[str]:
        return pickup_suggester.template_pickup_suggestions(self.template, data)

    def get_effective_pickup_time(self, data: Mapping[str, Any]) -> Optional[str]:
        """Explicit pickup time, else the earliest suggestion, else None."""
        return pickup_suggester.template_effective_pickup_time(self.template, data)

    def get_effective_start_time(self, data: Mapping[str, Any], fallback: Optional[str] = None) -> str:
        """Session start: effective pickup, else the stop's start time, else fallback."""
        pickup = self.get_effective_pickup_time(data)
        if pickup:
            return pickup
        stop = self.template.stop
        if stop is not None and stop.start_time_key:
            start = data.get(stop.start_time_key)
            if isinstance(start, str) and TimeTool.to_minutes(start) is not None:
                return start.strip()
        return fallback or config.DEFAULT_START_TIME

    # ── Preview ───────────────────────────────────────────────────────────

    def describe_stop(self, data: Mapping[str, Any]) -> str:
        stop = self.template.stop
        if stop is None:
            return self.name
        address = data.get(stop.address_key)
        if isinstance(address, str) and address.strip():
            return f"{stop.label} at {address.strip()}"
        return f"{stop.label} (address pending)"

    def preview_summary(self, data: Mapping[str, Any], remaining_hours: float) -> Optional[SessionPreview]:
        """
        Session preview for the booking summary.
        Returns None until a start time can be determined.
        """
        start = self.get_effective_pickup_time(data)
        if not start:
            stop = self.template.stop
            if stop is None or not stop.start_time_key:
                return None
            start_val = data.get(stop.start_time_key)
            if not isinstance(start_val, str) or TimeTool.to_minutes(start_val) is None:
                return None
            start = start_val.strip()
        breakdown = self.duration_breakdown(data)
        hours = self.calculate_duration(data, remaining_hours)
        end = TimeTool.add_hours(start, hours) or start
        summary = f"{self.describe_stop(data)} • {start} → {end} ({TimeTool.format_hours(hours)})"
        return SessionPreview(
            start_time=start,
            end_time=end,
            duration_hours=hours,
            travel_before=breakdown.outbound,
            travel_after=breakdown.inbound,
            summary=summary,
        )
