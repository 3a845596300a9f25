"""
schemas/segments.py
--------------------
Dataclass definitions for itinerary segments and templates.

A Template is the ordered itinerary shape of one booking mode. It declares
composition only: which segments exist and which field keys each segment
binds in the itinerary data record. Behaviour lives in the services.

Segment variants:
    TransportSegment — pickup leg + return leg (pickup / dropoff field keys)
    StopSegment      — the destination (address + optional start/end times)
    WaitSegment      — an on-site waiting period in decimal hours
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional, Union


@dataclass(frozen=True)
class PickupFieldKeys:
    address: str
    time: str


@dataclass(frozen=True)
class DropoffFieldKeys:
    address: str
    same_as_pickup: str
    time: Optional[str] = None        # only declared where the return time is booked


@dataclass(frozen=True)
class PickupSuggestionSource:
    """Keys the pickup-suggestion service reads: arrival time + both addresses."""
    event_time_key: str
    from_address_key: str
    to_address_key: str


@dataclass(frozen=True)
class TransportSegment:
    pickup: PickupFieldKeys
    dropoff: DropoffFieldKeys
    suggestions: Optional[PickupSuggestionSource] = None
    kind: str = field(default="transport", init=False)


@dataclass(frozen=True)
class StopSegment:
    label: str                        # human label, e.g. "Event", "Hospital"
    address_key: str
    start_time_key: Optional[str] = None
    end_time_key: Optional[str] = None
    kind: str = field(default="stop", init=False)


@dataclass(frozen=True)
class WaitSegment:
    duration_key: str                 # decimal hours, stored as a string
    label: str
    kind: str = field(default="wait", init=False)


Segment = Union[TransportSegment, StopSegment, WaitSegment]


@dataclass(frozen=True)
class Template:
    """
    Named, ordered list of segments for one booking mode.

    fixed_duration_key : mode field holding an explicit on-site duration in
                         hours (used when no stop window / wait applies).
    extra_fields       : mode-specific keys not modeled as segments, with
                         their initial values, as (key, default) pairs.
    """
    name: str
    segments: tuple[Segment, ...]
    fixed_duration_key: Optional[str] = None
    extra_fields: tuple[tuple[str, Any], ...] = ()

    def __post_init__(self):
        # Accept lists at construction; store tuples so the template stays immutable.
        object.__setattr__(self, "segments", tuple(self.segments))
        object.__setattr__(self, "extra_fields", tuple(tuple(p) for p in self.extra_fields))

    # ── Segment lookup ────────────────────────────────────────────────────

    @property
    def transport(self) -> Optional[TransportSegment]:
        return next((s for s in self.segments if isinstance(s, TransportSegment)), None)

    @property
    def stop(self) -> Optional[StopSegment]:
        return next((s for s in self.segments if isinstance(s, StopSegment)), None)

    @property
    def wait(self) -> Optional[WaitSegment]:
        return next((s for s in self.segments if isinstance(s, WaitSegment)), None)
