"""
modules/estimation/pickup_suggester.py
----------------------------------------
Candidate pickup times derived from a destination arrival time.

Algorithm:
    travel_minutes = 120 if addresses differ else 60
    primary        = arrival - travel_minutes
    primary < floor             → no suggestions (UI falls back to manual entry)
    candidates     = primary + {0, -30, -60, -90, -120}
                     filtered ≥ floor, de-duplicated, sorted ascending

Addresses are compared as trimmed, case-insensitive strings. This is a naive
textual check, not geocoding: "10 Elm St" and "10 Elm Street" count as
different places.
"""

from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Optional

from careplan import config
from careplan.modules.tool_usage.time_tool import TimeTool
from careplan.schemas.segments import Template


def normalise_address(address: object) -> str:
    return address.strip().lower() if isinstance(address, str) else ""


def addresses_differ(a: object, b: object) -> bool:
    """True only when both addresses are filled in and textually different."""
    na, nb = normalise_address(a), normalise_address(b)
    return bool(na) and bool(nb) and na != nb


def travel_minutes(from_address: object, to_address: object) -> int:
    if addresses_differ(from_address, to_address):
        return config.TRAVEL_MINUTES_DIFFERENT_ADDRESS
    return config.TRAVEL_MINUTES_SAME_ADDRESS


def primary_pickup_minutes(arrival_time: str, from_address: str, to_address: str) -> Optional[int]:
    """Arrival minus the travel heuristic, in minutes after midnight (may be negative)."""
    arrival = TimeTool.to_minutes(arrival_time)
    if arrival is None:
        return None
    return arrival - travel_minutes(from_address, to_address)


def suggest_pickup_times(
    arrival_time: str,
    from_address: str,
    to_address: str,
    floor: Optional[str] = None,
    offsets: Optional[list[int]] = None,
) -> list[str]:
    """
    Suggested pickup times for reaching to_address by arrival_time.

    Args:
        arrival_time : "HH:MM" the child must arrive at the destination.
        floor        : earliest acceptable suggestion; defaults to config.PICKUP_SUGGESTION_FLOOR.
        offsets      : minute offsets from the primary; defaults to config.PICKUP_OFFSETS_MINUTES.

    Returns:
        Sorted "HH:MM" strings, all ≥ floor. Empty when any input is missing
        or the primary suggestion itself falls before the floor.
    """
    if not (arrival_time and normalise_address(from_address) and normalise_address(to_address)):
        return []
    floor_min = TimeTool.to_minutes(floor or config.PICKUP_SUGGESTION_FLOOR)
    if floor_min is None:
        floor_min = 0
    primary = primary_pickup_minutes(arrival_time, from_address, to_address)
    if primary is None or primary < floor_min:
        return []

    offsets = config.PICKUP_OFFSETS_MINUTES if offsets is None else offsets
    candidates = {primary}
    for off in offsets:
        candidate = primary + off
        if candidate >= floor_min:
            candidates.add(candidate)
    return [TimeTool.from_minutes(m) for m in sorted(candidates)]


# ─────────────────────────────────────────────────────────────────────────────
# Template-driven helpers
# ─────────────────────────────────────────────────────────────────────────────

def template_pickup_suggestions(template: Template, data: Mapping[str, Any]) -> list[str]:
    """Suggestions for the template's transport leg, read via its suggestion source keys."""
    transport = template.transport
    if transport is None or transport.suggestions is None:
        return []
    src = transport.suggestions
    arrival, origin, dest = data.get(src.event_time_key), data.get(src.from_address_key), data.get(src.to_address_key)
    if not all(isinstance(v, str) for v in (arrival, origin, dest)):
        return []
    return suggest_pickup_times(arrival, origin, dest)


def template_effective_pickup_time(template: Template, data: Mapping[str, Any]) -> Optional[str]:
    """
    Explicit pickup time when entered, else the earliest suggested
    candidate, else None.
    """
    transport = template.transport
    if transport is None:
        return None
    explicit = data.get(transport.pickup.time)
    if isinstance(explicit, str) and explicit.strip():
        return explicit.strip()
    suggestions = template_pickup_suggestions(template, data)
    return suggestions[0] if suggestions else None
