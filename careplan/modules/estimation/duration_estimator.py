"""
modules/estimation/duration_estimator.py
------------------------------------------
Duration Estimation Service: total estimated session hours for an itinerary.

On-site time (first rule that applies to the template's stop):
    stop start + end declared  → end - start   (0 if missing or end ≤ start)
    stop start only + wait     → wait hours + ON_SITE_WAIT_HOURS
    template fixed duration    → value of template.fixed_duration_key

Travel time (only when the template has a transport segment):
    outbound  pickup → stop     explicit pickup time + stop start with a
                                positive gap → the gap; else heuristic
    inbound   stop → dropoff    dropoff time declared + stop end + dropoff
                                time with a positive gap → the gap; else heuristic
    heuristic                   addresses differ → 2h, otherwise 1h
    A set same-as-pickup flag substitutes the pickup address for the dropoff.

Result = clamp(total, MIN_SESSION_HOURS, max(MIN_SESSION_HOURS, remaining_hours)).
Pure: identical inputs always give identical output.
"""

from __future__ import annotations
from collections.abc import Mapping
from typing import Any

from careplan import config
from careplan.modules.estimation.pickup_suggester import addresses_differ
from careplan.modules.tool_usage.time_tool import TimeTool
from careplan.schemas.itinerary_data import as_flag
from careplan.schemas.results import DurationBreakdown
from careplan.schemas.segments import StopSegment, Template, TransportSegment, WaitSegment


def _text(data: Mapping[str, Any], key: str | None) -> str:
    if key is None:
        return ""
    value = data.get(key)
    return value if isinstance(value, str) else ""


def heuristic_travel_hours(from_address: str, to_address: str) -> float:
    """Fixed travel assumption: different places 2h, same place 1h."""
    if addresses_differ(from_address, to_address):
        return config.TRAVEL_MINUTES_DIFFERENT_ADDRESS / 60.0
    return config.TRAVEL_MINUTES_SAME_ADDRESS / 60.0


def clamp_hours(hours: float, remaining_hours: float) -> float:
    """Clamp to [MIN_SESSION_HOURS, max(MIN_SESSION_HOURS, remaining_hours)]."""
    floor = config.MIN_SESSION_HOURS
    try:
        ceiling = max(floor, float(remaining_hours))
    except (TypeError, ValueError):
        ceiling = floor
    if ceiling != ceiling:          # NaN ceiling
        ceiling = floor
    return min(max(floor, hours), ceiling)


# ─────────────────────────────────────────────────────────────────────────────
# Components
# ─────────────────────────────────────────────────────────────────────────────

def _on_site_hours(template: Template, data: Mapping[str, Any], stop: StopSegment | None) -> float:
    if stop is None:
        return 0.0
    if stop.start_time_key and stop.end_time_key:
        gap = TimeTool.gap_hours(data.get(stop.start_time_key), data.get(stop.end_time_key))
        return gap or 0.0
    wait: WaitSegment | None = template.wait
    if stop.start_time_key and wait is not None:
        return TimeTool.parse_hours(data.get(wait.duration_key, "0")) + config.ON_SITE_WAIT_HOURS
    if template.fixed_duration_key:
        return TimeTool.parse_hours(data.get(template.fixed_duration_key, "0"))
    return 0.0


def _outbound_hours(data: Mapping[str, Any], transport: TransportSegment, stop: StopSegment | None) -> float:
    pickup_address = _text(data, transport.pickup.address)
    stop_address = _text(data, stop.address_key) if stop else ""
    if stop is not None and stop.start_time_key:
        gap = TimeTool.gap_hours(data.get(transport.pickup.time), data.get(stop.start_time_key))
        if gap is not None:
            return gap
    return heuristic_travel_hours(pickup_address, stop_address)


def _inbound_hours(data: Mapping[str, Any], transport: TransportSegment, stop: StopSegment | None) -> float:
    if as_flag(data.get(transport.dropoff.same_as_pickup)):
        dropoff_address = _text(data, transport.pickup.address)
    else:
        dropoff_address = _text(data, transport.dropoff.address)
    stop_address = _text(data, stop.address_key) if stop else ""
    if transport.dropoff.time and stop is not None and stop.end_time_key:
        gap = TimeTool.gap_hours(data.get(stop.end_time_key), data.get(transport.dropoff.time))
        if gap is not None:
            return gap
    return heuristic_travel_hours(stop_address, dropoff_address)


# ─────────────────────────────────────────────────────────────────────────────
# Public API
# ─────────────────────────────────────────────────────────────────────────────

def estimate_breakdown(template: Template, data: Mapping[str, Any]) -> DurationBreakdown:
    """Unclamped on-site / outbound / inbound hours for the itinerary."""
    stop = template.stop
    on_site = _on_site_hours(template, data, stop)
    transport = template.transport
    if transport is None:
        return DurationBreakdown(on_site=on_site)
    return DurationBreakdown(
        on_site=on_site,
        outbound=_outbound_hours(data, transport, stop),
        inbound=_inbound_hours(data, transport, stop),
    )


def estimate(template: Template, data: Mapping[str, Any], remaining_hours: float) -> float:
    """
    Total estimated session hours.

    Args:
        template        : itinerary shape of the active mode.
        data            : current itinerary record.
        remaining_hours : booking-package hours still available (upper clamp).

    Returns:
        Hours in [0.5, max(0.5, remaining_hours)].
    """
    return clamp_hours(estimate_breakdown(template, data).total, remaining_hours)
