"""
modules/validation/progressive_disclosure.py
----------------------------------------------
Progressive disclosure of booking-wizard sections.

A small state machine keyed by section name. Its only automatic transition
trigger is a change in the section validations derived from the itinerary;
there are no timers and no external events.

    enabled(section) ⇔ every earlier section validates
    open (auto)      = first enabled section that does not validate,
                       or nothing once every section validates

Manual toggle() may open or collapse an enabled section; disabled sections
cannot be opened.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Mapping, Optional


@dataclass(frozen=True)
class DisclosureState:
    sections: tuple[str, ...]
    validations: tuple[tuple[str, bool], ...] = ()
    open_section: Optional[str] = None
    auto_expand: bool = True

    # ── Construction ───────────────────────────────────────────────────────

    @classmethod
    def start(cls, sections: list[str], auto_expand: bool = True) -> "DisclosureState":
        """Initial state: nothing validated yet, first section open."""
        state = cls(sections=tuple(sections), auto_expand=auto_expand)
        return replace(state, open_section=sections[0] if sections and auto_expand else None)

    # ── Queries ────────────────────────────────────────────────────────────

    def is_valid(self, section: str) -> bool:
        return dict(self.validations).get(section, False)

    def is_enabled(self, section: str) -> bool:
        if section not in self.sections:
            return False
        for earlier in self.sections[: self.sections.index(section)]:
            if not self.is_valid(earlier):
                return False
        return True

    def is_open(self, section: str) -> bool:
        return self.open_section == section

    @property
    def all_valid(self) -> bool:
        return all(self.is_valid(s) for s in self.sections)

    # ── Transitions ────────────────────────────────────────────────────────

    def apply_validations(self, validations: Mapping[str, bool]) -> "DisclosureState":
        """
        Advance on new section validations.
        Returns self unchanged when the validation map did not change.
        """
        new_validations = tuple((s, bool(validations.get(s, False))) for s in self.sections)
        if new_validations == self.validations:
            return self
        state = replace(self, validations=new_validations)
        if not self.auto_expand:
            if state.open_section is not None and not state.is_enabled(state.open_section):
                state = replace(state, open_section=None)
            return state
        next_open = next(
            (s for s in self.sections if state.is_enabled(s) and not state.is_valid(s)),
            None,
        )
        return replace(state, open_section=next_open)

    def toggle(self, section: str) -> "DisclosureState":
        """Open an enabled section, or collapse it if already open."""
        if not self.is_enabled(section):
            return self
        if self.open_section == section:
            return replace(self, open_section=None)
        return replace(self, open_section=section)
