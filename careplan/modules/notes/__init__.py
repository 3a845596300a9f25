"""modules/notes — Session note codec."""

from careplan.modules.notes.note_codec import SessionNoteCodec
from careplan.modules.notes.codec_factory import (
    detect_note_mode, extract_additional_notes, format_session_notes,
    get_note_codec, parse_session_notes,
)

__all__ = [
    "SessionNoteCodec",
    "detect_note_mode",
    "extract_additional_notes",
    "format_session_notes",
    "get_note_codec",
    "parse_session_notes",
]
