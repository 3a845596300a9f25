"""
modules/tool_usage/time_tool.py
---------------------------------
Arithmetic tool: "HH:MM" clock parsing and duration arithmetic used by the
estimation, suggestion and booking modules.
Local computation only; no routing or calendar service is involved.

Clock values in itinerary data are plain "HH:MM" strings as entered in the
booking form. Anything that does not parse is treated as "not entered".
"""

from __future__ import annotations
from datetime import datetime, timedelta
from typing import Any, Optional


_MINUTES_PER_DAY = 24 * 60


class TimeTool:
    """
    Wraps clock-string operations.
    All methods are static and total: bad input yields None / 0, never raises.
    """

    @staticmethod
    def to_minutes(value: Any) -> Optional[int]:
        """
        Parse a "HH:MM" (or "HH:MM:SS") clock string into minutes after midnight.

        Returns:
            Minutes in [0, 1439], or None when the value is blank or malformed.
        """
        if not isinstance(value, str):
            return None
        text = value.strip()
        if not text:
            return None
        for fmt in ("%H:%M", "%H:%M:%S"):
            try:
                parsed = datetime.strptime(text, fmt)
            except ValueError:
                continue
            return parsed.hour * 60 + parsed.minute
        return None

    @staticmethod
    def from_minutes(minutes: int) -> str:
        """Render minutes after midnight as "HH:MM" (wraps past midnight)."""
        minutes = int(minutes) % _MINUTES_PER_DAY
        return f"{minutes // 60:02d}:{minutes % 60:02d}"

    @staticmethod
    def gap_hours(start: Any, end: Any) -> Optional[float]:
        """
        Hours from start to end.

        Returns:
            Positive hour count, or None if either clock is missing or end <= start.
        """
        s = TimeTool.to_minutes(start)
        e = TimeTool.to_minutes(end)
        if s is None or e is None or e <= s:
            return None
        return (e - s) / 60.0

    @staticmethod
    def add_hours(clock: str, hours: float) -> Optional[str]:
        """
        Advance a clock string by a number of hours.

        Returns:
            New "HH:MM" string, or None if clock does not parse.
            NOTE: wraps at midnight; the booking covers a single day.
        """
        base = TimeTool.to_minutes(clock)
        if base is None:
            return None
        dt = datetime(2000, 1, 1) + timedelta(minutes=base + round(hours * 60))
        return dt.strftime("%H:%M")

    @staticmethod
    def parse_hours(value: Any) -> float:
        """
        Read a decimal-hours field ("1.5", 2, "") as a non-negative float.
        Blank, malformed, negative or non-finite input reads as 0.0.
        """
        if isinstance(value, bool):
            return 0.0
        if isinstance(value, (int, float)):
            hours = float(value)
        elif isinstance(value, str):
            try:
                hours = float(value.strip())
            except ValueError:
                return 0.0
        else:
            return 0.0
        if hours != hours or hours in (float("inf"), float("-inf")) or hours < 0:
            return 0.0
        return hours

    @staticmethod
    def format_hours(hours: float) -> str:
        """Human-readable duration: 3 → "3h", 4.5 → "4h 30m"."""
        h = int(hours)
        m = round((hours - h) * 60)
        if m == 60:
            h, m = h + 1, 0
        if m == 0:
            return f"{h}h"
        return f"{h}h {m}m"
