"""schemas — value types shared across the itinerary engine."""

from careplan.schemas.itinerary_data import ItineraryData
from careplan.schemas.results import DurationBreakdown, NoteRecord, ValidationResult
from careplan.schemas.segments import (
    DropoffFieldKeys, PickupFieldKeys, PickupSuggestionSource,
    Segment, StopSegment, Template, TransportSegment, WaitSegment,
)
from careplan.schemas.mode_records import MODE_RECORDS, ModeRecord
from careplan.schemas.session_record import SessionRecord

__all__ = [
    "ItineraryData",
    "DurationBreakdown",
    "NoteRecord",
    "ValidationResult",
    "DropoffFieldKeys",
    "PickupFieldKeys",
    "PickupSuggestionSource",
    "Segment",
    "StopSegment",
    "Template",
    "TransportSegment",
    "WaitSegment",
    "MODE_RECORDS",
    "ModeRecord",
    "SessionRecord",
]
