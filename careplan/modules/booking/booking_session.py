"""
modules/booking/booking_session.py
------------------------------------
Booking session: the flow a parent goes through for one session, as
immutable snapshots.

    session = BookingSession.start(parent_address="10 Elm St")
    session = session.select_mode("hospital-appointment")
    session = session.update({"hospitalAddress": "St Mary's", "appointmentTime": "14:00"})
    session.validation()                  # ValidationResult
    record = session.submit(date(2026, 3, 2), remaining_hours=6)
    session = session.reset_after_submit()

Every step returns a new BookingSession (or self when nothing changed).
Modes without a strategy carry no itinerary: validation and duration
estimation are skipped for them and their notes stay freeform.
"""

from __future__ import annotations
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Iterable, Optional

from careplan import config
from careplan.modules.notes.codec_factory import (
    detect_note_mode,
    format_session_notes,
    parse_session_notes,
)
from careplan.modules.store import itinerary_store
from careplan.modules.strategies.base_strategy import BaseItineraryStrategy, SessionPreview
from careplan.modules.strategies.strategy_factory import get_strategy
from careplan.modules.tool_usage.time_tool import TimeTool
from careplan.schemas.itinerary_data import ItineraryData
from careplan.schemas.results import ValidationResult
from careplan.schemas.session_record import SessionRecord

logger = logging.getLogger(__name__)


class IncompleteItineraryError(ValueError):
    """Raised by submit() when required itinerary fields are still missing."""

    def __init__(self, missing_fields: Iterable[str]):
        self.missing_fields = tuple(missing_fields)
        super().__init__(f"itinerary incomplete: {', '.join(self.missing_fields)}")


@dataclass(frozen=True)
class BookingSession:
    mode_key: Optional[str] = None
    data: ItineraryData = field(default_factory=ItineraryData)
    additional_notes: str = ""
    parent_address: str = ""

    @classmethod
    def start(cls, parent_address: str = "") -> "BookingSession":
        return cls(parent_address=parent_address or "")

    @property
    def strategy(self) -> Optional[BaseItineraryStrategy]:
        return get_strategy(self.mode_key) if self.mode_key else None

    # ── Editing ───────────────────────────────────────────────────────────

    def select_mode(self, mode_key: Optional[str]) -> "BookingSession":
        """Pick a mode from scratch: the itinerary starts from the mode's initial values."""
        if mode_key == self.mode_key:
            return self
        strategy = get_strategy(mode_key)
        data = strategy.initialize_data(self.parent_address) if strategy else ItineraryData()
        return replace(self, mode_key=mode_key, data=data)

    def change_mode(self, mode_key: Optional[str]) -> "BookingSession":
        """Switch mode keeping whatever the user already entered that the new mode can use."""
        if mode_key == self.mode_key:
            return self
        old = self.strategy
        new = get_strategy(mode_key)
        if new is None:
            return replace(self, mode_key=mode_key, data=ItineraryData())
        fresh = new.initialize_data(self.parent_address)
        data = itinerary_store.carry_over(old.template if old else None, self.data, new.template, fresh)
        logger.debug("mode %s → %s", self.mode_key, mode_key)
        return replace(self, mode_key=mode_key, data=data)

    def update(self, partial: Optional[Mapping[str, Any]]) -> "BookingSession":
        data = itinerary_store.patch(self.data, partial)
        if data is self.data:
            return self
        return replace(self, data=data)

    def with_notes(self, additional_notes: Optional[str]) -> "BookingSession":
        notes = additional_notes or ""
        if notes == self.additional_notes:
            return self
        return replace(self, additional_notes=notes)

    # ── Derived state ─────────────────────────────────────────────────────

    def validation(self) -> Optional[ValidationResult]:
        """None when the mode carries no itinerary."""
        strategy = self.strategy
        return strategy.validate(self.data) if strategy else None

    def section_validations(self) -> dict[str, bool]:
        strategy = self.strategy
        return strategy.get_section_validations(self.data) if strategy else {}

    def suggested_duration(self, remaining_hours: float) -> Optional[float]:
        strategy = self.strategy
        return strategy.calculate_duration(self.data, remaining_hours) if strategy else None

    def preview(self, remaining_hours: float) -> Optional[SessionPreview]:
        strategy = self.strategy
        return strategy.preview_summary(self.data, remaining_hours) if strategy else None

    def notes_text(self) -> str:
        return format_session_notes(self.mode_key, self.data, self.additional_notes)

    # ── Submit / edit ─────────────────────────────────────────────────────

    def submit(
        self,
        session_date: date,
        remaining_hours: float,
        selected_activity_ids: Iterable[str] = (),
        custom_activities: Iterable[str] = (),
        trainer_choice: bool = False,
        trainer_id: Optional[str] = None,
        start_time: Optional[str] = None,
        duration: Optional[float] = None,
    ) -> SessionRecord:
        """
        Build the record to persist.

        Itinerary modes derive start time and duration from the itinerary
        unless explicitly overridden; other modes use start_time (default
        config.DEFAULT_START_TIME) and duration (default the session minimum).

        Raises:
            IncompleteItineraryError: required itinerary fields are missing.
            pydantic.ValidationError: the resulting record is malformed.
        """
        strategy = self.strategy
        if strategy is not None:
            result = strategy.validate(self.data)
            if not result.valid:
                raise IncompleteItineraryError(result.missing_fields)
            start = start_time or strategy.get_effective_start_time(self.data)
            hours = duration if duration is not None else strategy.calculate_duration(self.data, remaining_hours)
        else:
            start = start_time or config.DEFAULT_START_TIME
            hours = duration if duration is not None else config.MIN_SESSION_HOURS

        end = TimeTool.add_hours(start, hours) or start
        return SessionRecord(
            date=session_date,
            start_time=start,
            duration=hours,
            end_time=end,
            selected_activity_ids=list(selected_activity_ids),
            custom_activities=list(custom_activities),
            trainer_choice=trainer_choice,
            trainer_id=trainer_id,
            notes=self.notes_text(),
        )

    @classmethod
    def load_for_edit(
        cls,
        record: SessionRecord,
        mode_key: Optional[str] = None,
        parent_address: str = "",
    ) -> "BookingSession":
        """Rebuild a session from a stored record; the mode is detected from the notes when not given."""
        mode = mode_key or detect_note_mode(record.notes)
        parsed = parse_session_notes(mode, record.notes)
        strategy = get_strategy(mode)
        if strategy is None:
            return cls(mode_key=mode, additional_notes=parsed.additional_notes, parent_address=parent_address)
        base = strategy.initialize_data(parent_address)
        return cls(
            mode_key=mode,
            data=itinerary_store.patch(base, parsed.itinerary_data),
            additional_notes=parsed.additional_notes,
            parent_address=parent_address,
        )

    def reset_after_submit(self) -> "BookingSession":
        """Clear the itinerary for the next booking in the same mode."""
        strategy = self.strategy
        if strategy is None:
            return replace(self, additional_notes="")
        parent = self.data.text("parentAddress") or self.parent_address
        data = itinerary_store.reset_for_next_booking(
            strategy.template,
            self.data,
            retain_pickup=strategy.retains_pickup_on_reset,
            fresh=strategy.initialize_data(parent),
        )
        return replace(self, data=data, additional_notes="")
