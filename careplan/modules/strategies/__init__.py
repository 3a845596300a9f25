"""modules/strategies — Per-mode itinerary strategies."""

from careplan.modules.strategies.base_strategy import BaseItineraryStrategy, ModeMetadata, SessionPreview
from careplan.modules.strategies.single_day_event import SingleDayEventStrategy
from careplan.modules.strategies.multi_day_event import MultiDayEventStrategy
from careplan.modules.strategies.hospital_appointment import HospitalAppointmentStrategy
from careplan.modules.strategies.exam_support import ExamSupportStrategy
from careplan.modules.strategies.school_run import SchoolRunStrategy
from careplan.modules.strategies.strategy_factory import get_strategy, has_itinerary, list_strategies

__all__ = [
    "BaseItineraryStrategy",
    "ModeMetadata",
    "SessionPreview",
    "SingleDayEventStrategy",
    "MultiDayEventStrategy",
    "HospitalAppointmentStrategy",
    "ExamSupportStrategy",
    "SchoolRunStrategy",
    "get_strategy",
    "has_itinerary",
    "list_strategies",
]
