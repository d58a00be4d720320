"""
Voicing model - one playable four-note fingering.

A Voicing is the output boundary of the search engine: what chord it spells,
how the chord is laid out (family, inversion, degree order), and where it sits
on the neck (strings, frets, MIDI notes). Instances are immutable and
serialize to plain JSON with model_dump(mode="json").
"""

from __future__ import annotations

from itertools import combinations
from typing import Any

from pydantic import BaseModel, Field

from chuk_mcp_fretboard.constants import VoicingFamily
from chuk_mcp_fretboard.core.fretboard import GuitarString


class ChordInfo(BaseModel):
    """The diatonic chord a voicing realizes."""

    root: str = Field(..., description="Root note name (e.g., 'A', 'F#')")
    root_pc: int = Field(..., ge=0, le=11, description="Root pitch class (0-11)")
    quality: str = Field(..., description="Quality tag ('m7') or '[t-f-s]' when unknown")
    display_quality: str = Field(..., description="Display quality (e.g., 'Min 7')")
    symbol: str = Field(..., description="Chord symbol (e.g., 'Am7')")
    formula: tuple[int, int, int, int] = Field(..., description="Semitone offsets from the root")
    scale_degree: int = Field(..., ge=1, le=7, description="Scale degree the chord is built on")

    model_config = {"frozen": True}


class TensionInfo(BaseModel):
    """A 9/11/13 substituted for the root or fifth."""

    degree: int = Field(..., description="Tension degree (9, 11 or 13)")
    replaces: int = Field(..., description="Chord degree that is not sounded (1 or 5)")
    label: str = Field(..., description="Badge text (e.g., '9 for 1')")

    model_config = {"frozen": True}


class FretPosition(BaseModel):
    """Note name and fret on one string."""

    note: str
    fret: int

    model_config = {"frozen": True}


class Voicing(BaseModel):
    """
    A four-note fingering, voices listed low to high pitch.

    `strings`, `frets`, `midis`, `note_order`, `degree_labels` and
    `note_names` are parallel tuples: index 0 is the bass voice.
    """

    chord: ChordInfo
    family: VoicingFamily
    inversion: str = Field(..., description="Inversion named by the bass degree ('Root', '1st', ...)")

    note_order: tuple[int, int, int, int] = Field(..., description="Chord degrees, low to high")
    degree_labels: tuple[str, str, str, str] = Field(..., description="Spelled degrees ('5 1 3 b7')")
    note_names: tuple[str, str, str, str] = Field(..., description="Note names, low to high")

    string_group_name: str = Field(..., description="top/middle/bottom/upper/lower/custom")
    string_group_rank: int = Field(99, description="Sort rank of the string group")
    strings: tuple[int, int, int, int] = Field(..., description="String numbers, low to high pitch")
    frets: tuple[int, int, int, int]
    midis: tuple[int, int, int, int]
    fret_span: int = Field(..., ge=0)

    display_quality: str = Field(..., description="Quality as shown, tension-aware ('Min 11')")
    symbol: str = Field(..., description="Symbol as shown, tension-aware ('Am11')")
    tension: TensionInfo | None = None
    b9_warning: bool = Field(False, description="Two voices sit a minor ninth apart")

    model_config = {"frozen": True}

    @property
    def lowest_string(self) -> int:
        """String carrying the bass voice."""
        return self.strings[0]

    @property
    def highest_string(self) -> int:
        """String carrying the melody voice."""
        return self.strings[-1]

    @property
    def inversion_label(self) -> str:
        """Inversion as printed in text lines ('2nd Inv Drop 2', 'Root Inv')."""
        if self.family == VoicingFamily.CLOSED:
            return f"{self.inversion} Inv"
        return f"{self.inversion} Inv {self.family.label}"

    def contains_position(self, string: int, fret: int) -> bool:
        """True when this voicing plays the given fret on the given string."""
        return any(s == string and f == fret for s, f in zip(self.strings, self.frets))

    def voicing_map(self) -> dict[str, dict[str, Any]]:
        """
        Per-string note and fret, keyed by string name.

        {"d": {"note": "F", "fret": 3}, "g": {...}, ...}
        """
        return {
            GuitarString(s).app_name: FretPosition(note=n, fret=f).model_dump()
            for s, f, n in zip(self.strings, self.frets, self.note_names)
        }

    def sort_key(self) -> tuple[Any, ...]:
        """Deterministic ordering: group, root, quality, inversion, frets."""
        return (
            self.string_group_rank,
            self.chord.root,
            self.display_quality,
            self.inversion,
            self.frets,
            self.family.value,
            self.tension.label if self.tension is not None else "",
            self.strings,
        )

    def to_text(self, index: int = 0) -> str:
        """
        One-line summary, numbered from index + 1.

        1. G7 - 2nd Inv Drop 2 - 5 1 3 b7 - R6 - [ 10 10 9 10 ]
        """
        line = (
            f"{index + 1}. {self.symbol} - {self.inversion_label} - "
            f"{' '.join(self.degree_labels)} - R{self.lowest_string} - "
            f"[ {' '.join(str(f) for f in self.frets)} ]"
        )
        if self.tension is not None:
            line += f" ({self.tension.label})"
        return line


def has_minor_ninth(midis: tuple[int, ...] | list[int]) -> bool:
    """True when any two notes are a minor ninth (or compound b9) apart."""
    return any(abs(b - a) > 12 and abs(b - a) % 12 == 1 for a, b in combinations(midis, 2))
