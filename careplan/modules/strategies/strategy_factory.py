"""
modules/strategies/strategy_factory.py
----------------------------------------
Strategy Factory: resolves a booking-mode key to its strategy.

The table is built once at import from a fixed list of concrete strategies
and is read-only afterwards. A miss is not an error: it means the mode has
no itinerary requirement, and callers skip itinerary validation and
duration estimation entirely.
"""

from __future__ import annotations
import logging
from types import MappingProxyType
from typing import Mapping, Optional

from careplan.modules.strategies.base_strategy import BaseItineraryStrategy
from careplan.modules.strategies.exam_support import ExamSupportStrategy
from careplan.modules.strategies.hospital_appointment import HospitalAppointmentStrategy
from careplan.modules.strategies.multi_day_event import MultiDayEventStrategy
from careplan.modules.strategies.school_run import SchoolRunStrategy
from careplan.modules.strategies.single_day_event import SingleDayEventStrategy

logger = logging.getLogger(__name__)


_STRATEGIES: Mapping[str, BaseItineraryStrategy] = MappingProxyType({
    s.key: s
    for s in (
        SingleDayEventStrategy(),
        MultiDayEventStrategy(),
        HospitalAppointmentStrategy(),
        ExamSupportStrategy(),
        SchoolRunStrategy(),
    )
})


def get_strategy(mode_key: Optional[str]) -> Optional[BaseItineraryStrategy]:
    """
    Returns:
        The mode's strategy, or None when the mode has no itinerary.
    """
    strategy = _STRATEGIES.get(mode_key) if mode_key else None
    if strategy is None:
        logger.debug("no itinerary strategy for mode %r", mode_key)
    return strategy


def has_itinerary(mode_key: Optional[str]) -> bool:
    return bool(mode_key) and mode_key in _STRATEGIES


def list_strategies() -> list[BaseItineraryStrategy]:
    """All strategies in registration order (mode-picker order)."""
    return list(_STRATEGIES.values())
