"""
Constants and enums for the voicing system.

No magic strings - use enums for constrained values.
"""

from __future__ import annotations

from enum import Enum

# Highest fret considered on a 24-fret neck
MAX_FRET = 24

# Ergonomic span limits (max fret - min fret)
DEFAULT_CLOSED_SPAN = 4
DEFAULT_DROP_SPAN = 5
DEFAULT_TENSION_SPAN = 5


class VoicingFamily(str, Enum):
    """
    How the four chord tones are spread across the strings.

    CLOSED is root position only; the drop families apply to all four
    closed inversions.
    """

    CLOSED = "closed"
    DROP_2 = "drop2"
    DROP_3 = "drop3"

    @property
    def label(self) -> str:
        """Display label used in tabs and text output."""
        return _FAMILY_LABELS[self]

    @property
    def default_span(self) -> int:
        """Default max fret span for plain (non-tension) voicings."""
        return DEFAULT_CLOSED_SPAN if self == VoicingFamily.CLOSED else DEFAULT_DROP_SPAN

    @classmethod
    def parse(cls, value: str | VoicingFamily) -> VoicingFamily:
        """Parse a family from 'closed', 'Root Pos', 'drop2', 'Drop 2', etc."""
        if isinstance(value, VoicingFamily):
            return value

        token = value.strip().lower().replace(" ", "").replace("-", "").replace("_", "")
        aliases = {
            "closed": cls.CLOSED,
            "rootpos": cls.CLOSED,
            "rootposition": cls.CLOSED,
            "root": cls.CLOSED,
            "drop2": cls.DROP_2,
            "d2": cls.DROP_2,
            "drop3": cls.DROP_3,
            "d3": cls.DROP_3,
        }
        if token not in aliases:
            raise ValueError(f"Unknown voicing family: {value}")
        return aliases[token]


_FAMILY_LABELS: dict[VoicingFamily, str] = {
    VoicingFamily.CLOSED: "Root Pos",
    VoicingFamily.DROP_2: "Drop 2",
    VoicingFamily.DROP_3: "Drop 3",
}


class ErrorMessages:
    """Standardized error messages."""

    INVALID_KEY = "Unsupported key input: '{key}'. Expected a note name like 'C', 'F#' or 'Bb'."
    INVALID_SCALE = "Unknown scale: '{scale}'."
    INVALID_STRING = "String number must be an integer from 1 (high E) to 6 (low E), got {string}."
    INVALID_FRET = "Fret must be an integer from 0 to {max_fret}, got {fret}."
    INVALID_FAMILY = "Unknown voicing family: '{family}'. Use 'closed', 'drop2' or 'drop3'."
    INVALID_STRING_GROUPS = (
        "Invalid string-group input: '{groups}'. Use Top, Middle, Bottom, Upper or Lower "
        "(comma-separated allowed)."
    )
    NO_VOICINGS = "No voicings found for the selected note in the current key."


class SuccessMessages:
    """Standardized success messages."""

    VOICINGS_FOUND = "Found {count} voicing(s)."
    MIDI_EXPORTED = "Exported {count} voicing(s) to {path}."
