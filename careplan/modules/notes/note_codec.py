"""
modules/notes/note_codec.py
-----------------------------
Session Note Codec: itinerary data ↔ the human-readable notes text stored
on a session.

Layout written by format_notes():

    <freeform notes>

    ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    <mode header>
    ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    <field lines>
    ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

Parsing is a line scanner, not a grammar: find the header, then match each
line against the mode's label table (label_tables.py holds the data, this module
holds the one matcher). Notes written by older versions of the format keep
parsing through the label aliases and the next-line value fallback. Text
that carries no recognised header is returned whole as additional notes.
"""

from __future__ import annotations
import logging
import re
from collections.abc import Mapping
from typing import Any, Optional, Sequence

from careplan import config
from careplan.modules.notes.label_tables import FieldKind, NoteField, NoteLayout
from careplan.modules.tool_usage.time_tool import TimeTool
from careplan.schemas.itinerary_data import ItineraryData, as_flag
from careplan.schemas.results import NoteRecord

logger = logging.getLogger(__name__)

_LEGACY_ADDRESS_AT_TIME = re.compile(r"^(?P<address>.*\S)\s+at\s+(?P<time>\d{1,2}:\d{2}|—)$")
_HOURS_NUMBER = re.compile(r"[-+]?\d+(?:\.\d+)?")
_TIME_RANGE_SPLIT = re.compile(r"\s*–\s*")
_CONTINUATION_LABELS = ("Time",)


# ─────────────────────────────────────────────────────────────────────────────
# Line scanner helpers (mode-agnostic)
# ─────────────────────────────────────────────────────────────────────────────

def is_separator(line: str) -> bool:
    stripped = line.strip()
    return bool(stripped) and set(stripped) <= set(config.NOTE_SEPARATOR)


def find_header(lines: Sequence[str], headers: Sequence[str]) -> Optional[int]:
    """Index of the first line equal (after trimming) to one of headers."""
    for idx, line in enumerate(lines):
        if line.strip() in headers:
            return idx
    return None


def split_notes(text: str, headers: Sequence[str]) -> Optional[tuple[str, list[str]]]:
    """
    Split a notes string at the first recognised header.

    Returns:
        (additional_notes, lines after the header), or None when no header
        is present. The separator right above the header belongs to the
        itinerary half.
    """
    lines = text.splitlines()
    idx = find_header(lines, headers)
    if idx is None:
        return None
    cut = idx - 1 if idx > 0 and is_separator(lines[idx - 1]) else idx
    additional = "\n".join(lines[:cut]).strip()
    return additional, lines[idx + 1:]


def match_label(line: str, labels: Sequence[str]) -> Optional[str]:
    """
    Inline value after "<label>:" when line carries one of labels.

    Only icons, punctuation or whitespace may precede the label, so that
    "Pickup:" never matches inside "School Pickup:".
    """
    for label in labels:
        token = f"{label}:"
        pos = line.find(token)
        if pos < 0:
            continue
        if any(ch.isalnum() for ch in line[:pos]):
            continue
        return line[pos + len(token):].strip()
    return None


def continuation_value(line: str) -> Optional[str]:
    """Value of an older "   Time: ..." line written under an address row."""
    return match_label(line, _CONTINUATION_LABELS)


# ─────────────────────────────────────────────────────────────────────────────
# Codec
# ─────────────────────────────────────────────────────────────────────────────

class SessionNoteCodec:
    """Formats and parses notes for one booking mode, driven by its NoteLayout."""

    def __init__(self, layout: NoteLayout):
        self.layout = layout

    @property
    def mode_key(self) -> str:
        return self.layout.mode_key

    @property
    def headers(self) -> tuple[str, str]:
        return (self.layout.header, self.layout.header_title)

    # ── Format ────────────────────────────────────────────────────────────

    def format_notes(self, data: Mapping[str, Any], additional_notes: Optional[str] = "") -> str:
        values = self.layout.record_type.from_data(data).to_data()
        body: list[str] = []
        for field in self.layout.fields:
            body.extend(self._render(field, values))

        sep = config.NOTE_SEPARATOR
        itinerary = "\n".join([sep, self.layout.header, sep, "", *body, sep])
        notes = (additional_notes or "").strip()
        if not notes:
            return itinerary
        return f"{notes}\n\n{itinerary}"

    def _render(self, field: NoteField, values: Mapping[str, Any]) -> list[str]:
        value = values.get(field.key)
        prefix = f"{field.icon} {field.label}:"

        if field.kind is FieldKind.BOOL:
            return [f"{prefix} {'Yes' if value else 'No'}"]
        if field.kind is FieldKind.HOURS:
            return [f"{prefix} {value or '0'} hour(s)"]

        text = str(value or "").strip()
        if field.kind is FieldKind.DROPOFF and field.flag_key and values.get(field.flag_key):
            text = config.NOTE_SAME_AS_PICKUP
        if field.optional and not text:
            return []

        if field.kind in (FieldKind.BLOCK, FieldKind.DROPOFF):
            lines = (text or config.NOTE_EMPTY_VALUE).splitlines()
            return [prefix] + [f"{config.NOTE_BLOCK_INDENT}{line.rstrip()}" for line in lines]
        return [f"{prefix} {text or config.NOTE_EMPTY_VALUE}"]

    # ── Parse ─────────────────────────────────────────────────────────────

    def parse_notes(self, text: Optional[str]) -> NoteRecord:
        text = text or ""
        split = split_notes(text, self.headers)
        if split is None:
            logger.debug("no %s header in notes; treating as freeform", self.mode_key)
            return NoteRecord(additional_notes=text)
        additional, body = split
        return NoteRecord(
            itinerary_data=ItineraryData(self._scan(body)),
            additional_notes=additional,
        )

    def extract_additional_notes(self, text: Optional[str]) -> str:
        return self.parse_notes(text).additional_notes

    def _match(self, line: str) -> Optional[tuple[NoteField, str]]:
        for field in self.layout.fields:
            value = match_label(line, field.labels)
            if value is not None:
                return field, value
        return None

    def _scan(self, lines: list[str]) -> dict[str, Any]:
        parsed: dict[str, Any] = {}
        i = 0
        while i < len(lines):
            line = lines[i]
            i += 1
            if not line.strip() or is_separator(line):
                continue
            hit = self._match(line)
            if hit is None:
                continue
            field, inline = hit
            if inline:
                self._decode(field, inline, parsed, inline=True)
            else:
                block, i = self._read_block(lines, i, field)
                self._decode(field, block, parsed, inline=False)
            if field.continuation_keys and i < len(lines):
                rest = continuation_value(lines[i])
                if rest is not None:
                    self._decode_continuation(field, rest, parsed)
                    i += 1
        return parsed

    def _read_block(self, lines: list[str], start: int, field: NoteField) -> tuple[str, int]:
        """Value lines under a bare label. Returns (value, next index)."""
        def ends_block(line: str) -> bool:
            return bool(field.continuation_keys) and continuation_value(line) is not None

        values: list[str] = []
        j = start
        while j < len(lines) and lines[j][:1].isspace() and not is_separator(lines[j]) \
                and not ends_block(lines[j]):
            values.append(lines[j].strip())
            j += 1
        if values:
            return "\n".join(values).strip(), j

        # Older notes put the value on the next line without indentation.
        if j < len(lines):
            nxt = lines[j]
            if nxt.strip() and not is_separator(nxt) and self._match(nxt) is None \
                    and not ends_block(nxt):
                return nxt.strip(), j + 1
        return "", j

    def _decode_continuation(self, field: NoteField, raw: str, parsed: dict[str, Any]) -> None:
        keys = field.continuation_keys
        parts = _TIME_RANGE_SPLIT.split(raw.strip(), maxsplit=len(keys) - 1) if len(keys) > 1 else [raw]
        for key, part in zip(keys, parts):
            part = part.strip()
            parsed[key] = "" if part == config.NOTE_EMPTY_VALUE else part

    def _decode(self, field: NoteField, raw: str, parsed: dict[str, Any], inline: bool) -> None:
        value = "" if raw.strip() == config.NOTE_EMPTY_VALUE else raw.strip()

        if field.kind is FieldKind.BOOL:
            parsed[field.key] = as_flag(value)
            return

        if field.kind is FieldKind.HOURS:
            m = _HOURS_NUMBER.search(value)
            parsed[field.key] = m.group(0) if m and TimeTool.parse_hours(m.group(0)) > 0 else "0"
            return

        if field.kind is FieldKind.DROPOFF:
            if value.lower() == config.NOTE_SAME_AS_PICKUP.lower():
                parsed[field.flag_key] = True
            else:
                parsed[field.key] = value
                parsed[field.flag_key] = False
            return

        if inline and field.time_key:
            m = _LEGACY_ADDRESS_AT_TIME.match(value)
            if m:
                time = m.group("time")
                parsed[field.key] = m.group("address")
                parsed[field.time_key] = "" if time == config.NOTE_EMPTY_VALUE else time
                return

        parsed[field.key] = value
