"""
modules/notes/codec_factory.py
--------------------------------
Note Codec Factory: mode key → SessionNoteCodec.

Modes without an itinerary have no codec; their notes are plain freeform
text and pass through unchanged.
"""

from __future__ import annotations
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Optional

from careplan.modules.notes.label_tables import LAYOUTS
from careplan.modules.notes.note_codec import SessionNoteCodec, find_header, split_notes
from careplan.schemas.results import NoteRecord

logger = logging.getLogger(__name__)


_CODECS: Mapping[str, SessionNoteCodec] = MappingProxyType({
    mode_key: SessionNoteCodec(layout) for mode_key, layout in LAYOUTS.items()
})

_ALL_HEADERS: tuple[str, ...] = tuple(h for codec in _CODECS.values() for h in codec.headers)


def get_note_codec(mode_key: Optional[str]) -> Optional[SessionNoteCodec]:
    codec = _CODECS.get(mode_key) if mode_key else None
    if codec is None:
        logger.debug("no note codec for mode %r", mode_key)
    return codec


def format_session_notes(mode_key: Optional[str], data: Mapping[str, Any],
                         additional_notes: Optional[str] = "") -> str:
    codec = get_note_codec(mode_key)
    if codec is None:
        return (additional_notes or "").strip()
    return codec.format_notes(data, additional_notes)


def parse_session_notes(mode_key: Optional[str], text: Optional[str]) -> NoteRecord:
    codec = get_note_codec(mode_key)
    if codec is None:
        return NoteRecord(additional_notes=text or "")
    return codec.parse_notes(text)


def detect_note_mode(text: Optional[str]) -> Optional[str]:
    """
    Mode whose header appears first in text, or None for freeform notes.
    Used when loading a session whose mode was not stored alongside it.
    """
    lines = (text or "").splitlines()
    best: Optional[tuple[int, str]] = None
    for mode_key, codec in _CODECS.items():
        idx = find_header(lines, codec.headers)
        if idx is not None and (best is None or idx < best[0]):
            best = (idx, mode_key)
    return best[1] if best else None


def extract_additional_notes(text: Optional[str]) -> str:
    """Freeform half of any session's notes, whatever its mode."""
    split = split_notes(text or "", _ALL_HEADERS)
    if split is None:
        return text or ""
    return split[0]
