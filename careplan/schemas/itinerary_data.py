"""
schemas/itinerary_data.py
--------------------------
ItineraryData: the generic, mode-agnostic field-value record.

Keys are the legacy field names declared by the active template
(e.g. "pickupAddress", "eventStartTime"). Values are strings or booleans as
entered in the booking form. The record is immutable: every store operation
returns a new instance, so it is safe to recompute on every keystroke.
"""

from __future__ import annotations
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Iterator, Optional

_TRUE_WORDS = ("1", "true", "yes")


def as_flag(value: Any) -> bool:
    """Boolean reading of a form value; "false", "no" and "0" strings read as False."""
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_WORDS
    return bool(value)


class ItineraryData(Mapping):
    """Read-only mapping of field key → value."""

    __slots__ = ("_fields",)

    def __init__(self, fields: Optional[Mapping[str, Any]] = None):
        self._fields = MappingProxyType(dict(fields or {}))

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            return dict(self._fields) == dict(other)
        return NotImplemented

    def __hash__(self):
        return hash(tuple(sorted((k, repr(v)) for k, v in self._fields.items())))

    def __repr__(self) -> str:
        return f"ItineraryData({dict(self._fields)!r})"

    def text(self, key: Optional[str]) -> str:
        """Value of key as a string; non-strings and missing keys read as ""."""
        if key is None:
            return ""
        value = self._fields.get(key)
        return value if isinstance(value, str) else ""

    def flag(self, key: Optional[str]) -> bool:
        if key is None:
            return False
        return as_flag(self._fields.get(key))

    def to_dict(self) -> dict[str, Any]:
        return dict(self._fields)
