"""
schemas/results.py
-------------------
Value objects returned by the pure services (validation, estimation, notes).
None of these are errors: the caller decides what to do with them.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from careplan.schemas.itinerary_data import ItineraryData


@dataclass(frozen=True)
class ValidationResult:
    """Completeness of an itinerary. missing_fields holds human-readable names."""
    valid: bool
    missing_fields: tuple[str, ...] = ()

    @classmethod
    def from_missing(cls, missing: list[str]) -> "ValidationResult":
        return cls(valid=not missing, missing_fields=tuple(missing))


@dataclass(frozen=True)
class DurationBreakdown:
    """
    Unclamped duration components [hours].

    on_site  : stop window, wait + appointment, or fixed duration
    outbound : pickup → stop travel (heuristic or actual gap)
    inbound  : stop → dropoff travel (heuristic or actual gap)
    """
    on_site: float = 0.0
    outbound: float = 0.0
    inbound: float = 0.0

    @property
    def travel(self) -> float:
        return self.outbound + self.inbound

    @property
    def total(self) -> float:
        return self.on_site + self.outbound + self.inbound


@dataclass(frozen=True)
class NoteRecord:
    """Logical view of a persisted notes string: freeform half + itinerary half."""
    itinerary_data: ItineraryData = field(default_factory=ItineraryData)
    additional_notes: str = ""

    @property
    def has_itinerary(self) -> bool:
        return len(self.itinerary_data) > 0
