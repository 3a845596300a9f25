"""
modules/validation/itinerary_validator.py
-------------------------------------------
Validation Service: per-segment completeness of an itinerary.

Rules per segment type:

  TRANSPORT:
    v1 — pickup address non-blank                        → "Pickup address"
    v2 — pickup time entered, or a pickup suggestion
         can be derived from the destination time        → "Pickup time"

  STOP:
    v1 — address non-blank                               → "<Label> address"
    v2 — declared start time entered                     → "<Label> start time"
    v3 — declared end time entered                       → "<Label> end time"

  WAIT:
    never required (absent duration reads as "0")

Missing fields are returned, never raised; whether an incomplete itinerary
blocks submission is the caller's decision.
"""

from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Callable

from careplan.modules.estimation.pickup_suggester import template_effective_pickup_time
from careplan.schemas.results import ValidationResult
from careplan.schemas.segments import Segment, StopSegment, Template, TransportSegment, WaitSegment


def _blank(value: Any) -> bool:
    if isinstance(value, str):
        return not value.strip()
    return not value


# ─────────────────────────────────────────────────────────────────────────────
# Per-segment checks
# ─────────────────────────────────────────────────────────────────────────────

def _check_transport(seg: TransportSegment, template: Template, data: Mapping[str, Any]) -> list[str]:
    missing: list[str] = []
    if _blank(data.get(seg.pickup.address)):
        missing.append("Pickup address")
    if _blank(data.get(seg.pickup.time)) and template_effective_pickup_time(template, data) is None:
        missing.append("Pickup time")
    return missing


def _check_stop(seg: StopSegment, template: Template, data: Mapping[str, Any]) -> list[str]:
    missing: list[str] = []
    if _blank(data.get(seg.address_key)):
        missing.append(f"{seg.label} address")
    if seg.start_time_key and _blank(data.get(seg.start_time_key)):
        missing.append(f"{seg.label} start time")
    if seg.end_time_key and _blank(data.get(seg.end_time_key)):
        missing.append(f"{seg.label} end time")
    return missing


def _check_wait(seg: WaitSegment, template: Template, data: Mapping[str, Any]) -> list[str]:
    return []


_DISPATCH: dict[type, Callable[[Any, Template, Mapping[str, Any]], list[str]]] = {
    TransportSegment: _check_transport,
    StopSegment:      _check_stop,
    WaitSegment:      _check_wait,
}


# ─────────────────────────────────────────────────────────────────────────────
# Public API
# ─────────────────────────────────────────────────────────────────────────────

def segment_missing_fields(seg: Segment, template: Template, data: Mapping[str, Any]) -> list[str]:
    fn = _DISPATCH.get(type(seg))
    if fn is None:
        # Unknown segment type: nothing required
        return []
    return fn(seg, template, data)


def validate(template: Template, data: Mapping[str, Any]) -> ValidationResult:
    """
    Completeness of data against template.

    Returns:
        ValidationResult(valid, missing_fields) with missing fields in
        segment declaration order.
    """
    missing: list[str] = []
    for seg in template.segments:
        for name in segment_missing_fields(seg, template, data):
            if name not in missing:
                missing.append(name)
    return ValidationResult.from_missing(missing)
