"""
schemas/session_record.py
--------------------------
The persisted shape of one booked session.

`notes` holds exactly the note codec's output; on edit the same string is
fed back through the codec to rebuild the itinerary.
"""

from __future__ import annotations
from datetime import date as Date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from careplan.modules.tool_usage.time_tool import TimeTool


class SessionRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: Date
    start_time: str = Field(alias="startTime")
    duration: float
    end_time: str = Field(alias="endTime")
    selected_activity_ids: List[str] = Field(default_factory=list, alias="selectedActivityIds")
    custom_activities: List[str] = Field(default_factory=list, alias="customActivities")
    trainer_choice: bool = Field(default=False, alias="trainerChoice")
    trainer_id: Optional[str] = Field(default=None, alias="trainerId")
    notes: str = ""

    @field_validator("start_time", "end_time")
    def must_be_clock_time(cls, v):
        minutes = TimeTool.to_minutes(v)
        if minutes is None:
            raise ValueError(f"'{v}' is not an HH:MM time")
        return TimeTool.from_minutes(minutes)

    @field_validator("duration")
    def duration_must_be_positive(cls, v):
        if v <= 0:
            raise ValueError("duration must be positive")
        return v

    def to_payload(self) -> dict:
        """camelCase dict for the persistence boundary."""
        return self.model_dump(by_alias=True, mode="json")
