"""
modules/store/itinerary_store.py
----------------------------------
Itinerary Data Store: storage semantics for ItineraryData.

No validation happens here. Every operation is pure and returns a new
record (or the same record when nothing changed), so the booking form may
call patch() on every keystroke.

Operations:
    initialize(template)                → record with every declared key at its default
    patch(current, partial)             → shallow merge, never removes keys
    get(data, key, default)             → single value
    carry_over(old_t, old, new_t, new)  → best-effort preservation on mode change
    reset_for_next_booking(t, data, …)  → clear times / addresses after a submit
"""

from __future__ import annotations
import logging
from collections.abc import Mapping
from typing import Any, Optional

from careplan.schemas.itinerary_data import ItineraryData
from careplan.schemas.segments import StopSegment, Template, TransportSegment, WaitSegment

logger = logging.getLogger(__name__)

# Pickup addresses that merely point at the parent's own address are not
# retained between bookings; the fresh record re-defaults them.
_GENERIC_PICKUP_MARKERS = ("parent", "my address")


def _segment_defaults(template: Template) -> dict[str, Any]:
    defaults: dict[str, Any] = {}
    for seg in template.segments:
        if isinstance(seg, TransportSegment):
            defaults[seg.pickup.address] = ""
            defaults[seg.pickup.time] = ""
            defaults[seg.dropoff.address] = ""
            defaults[seg.dropoff.same_as_pickup] = False
            if seg.dropoff.time:
                defaults[seg.dropoff.time] = ""
        elif isinstance(seg, StopSegment):
            defaults[seg.address_key] = ""
            if seg.start_time_key:
                defaults[seg.start_time_key] = ""
            if seg.end_time_key:
                defaults[seg.end_time_key] = ""
        elif isinstance(seg, WaitSegment):
            defaults[seg.duration_key] = "0"
    return defaults


def initialize(template: Template) -> ItineraryData:
    """Every declared field key at its type default ("" / False / "0"), plus mode extras."""
    fields = _segment_defaults(template)
    for key, default in template.extra_fields:
        fields.setdefault(key, default)
    return ItineraryData(fields)


def patch(current: Mapping[str, Any], partial: Optional[Mapping[str, Any]]) -> ItineraryData:
    """
    Shallow-merge partial into current.

    Returns:
        A new ItineraryData; existing keys are never dropped. When the patch
        changes nothing the input record itself is returned.
    """
    if not isinstance(current, ItineraryData):
        current = ItineraryData(current)
    if not partial:
        return current
    changed = any(key not in current or current[key] != value for key, value in partial.items())
    if not changed:
        return current
    merged = current.to_dict()
    merged.update(partial)
    return ItineraryData(merged)


def get(data: Mapping[str, Any], key: str, default: Any = None) -> Any:
    return data.get(key, default)


# ─────────────────────────────────────────────────────────────────────────────
# Mode change
# ─────────────────────────────────────────────────────────────────────────────

def _role_keys(template: Template) -> dict[str, str]:
    """Map itinerary roles to the keys this template uses for them."""
    roles: dict[str, str] = {}
    transport = template.transport
    if transport is not None:
        roles["pickup_address"] = transport.pickup.address
        roles["pickup_time"] = transport.pickup.time
        roles["dropoff_address"] = transport.dropoff.address
        roles["dropoff_same_as_pickup"] = transport.dropoff.same_as_pickup
    stop = template.stop
    if stop is not None:
        roles["stop_address"] = stop.address_key
    return roles


def _has_value(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return value is not None


def carry_over(
    old_template: Optional[Template],
    old_data: Mapping[str, Any],
    new_template: Template,
    new_data: ItineraryData,
) -> ItineraryData:
    """
    Preserve what the user already entered when the booking mode changes.

    1. Keys present in both records keep their old non-empty value.
    2. Keys playing the same itinerary role (pickup address, dropoff, stop
       address, …) are mapped across differently-named templates.
    Only keys of the new record are ever written.
    """
    preserved: dict[str, Any] = {}
    for key in new_data:
        if key in old_data and _has_value(old_data[key]):
            preserved[key] = old_data[key]

    if old_template is not None:
        old_roles = _role_keys(old_template)
        new_roles = _role_keys(new_template)
        for role, new_key in new_roles.items():
            old_key = old_roles.get(role)
            if old_key is None or new_key in preserved:
                continue
            value = old_data.get(old_key)
            if _has_value(value):
                preserved[new_key] = value

    logger.debug("carry_over %s → %s preserved %s",
                 old_template.name if old_template else None, new_template.name, sorted(preserved))
    return patch(new_data, preserved)


# ─────────────────────────────────────────────────────────────────────────────
# Post-submit reset
# ─────────────────────────────────────────────────────────────────────────────

def reset_for_next_booking(
    template: Template,
    data: Mapping[str, Any],
    retain_pickup: bool = False,
    fresh: Optional[ItineraryData] = None,
) -> ItineraryData:
    """
    Clear the record for the next booking after a successful submission.

    All segment times and addresses return to empty, wait durations to "0"
    and the dropoff flag to False. parentAddress survives. When retain_pickup
    is set, a custom pickup address (not a "parent"/"my address" placeholder)
    is kept as well.

    Args:
        fresh: mode-specific initial record to start from; defaults to initialize(template).
    """
    base = fresh if fresh is not None else initialize(template)
    kept: dict[str, Any] = {key: value for key, value in _segment_defaults(template).items()}

    parent = data.get("parentAddress")
    if isinstance(parent, str) and parent:
        kept["parentAddress"] = parent

    transport = template.transport
    if retain_pickup and transport is not None:
        pickup = data.get(transport.pickup.address)
        if isinstance(pickup, str) and pickup.strip():
            lowered = pickup.lower()
            if not any(marker in lowered for marker in _GENERIC_PICKUP_MARKERS):
                kept[transport.pickup.address] = pickup

    return patch(base, kept)
