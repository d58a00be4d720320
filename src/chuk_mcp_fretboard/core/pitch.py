"""
Pitch primitives - PitchClass.

PitchClass represents the 12 chromatic pitches (octave-independent).
All pitch arithmetic is modulo 12; intervals are plain semitone integers.
"""

from __future__ import annotations

from enum import IntEnum

# Display name mappings (module level to avoid IntEnum member issues)
_SHARP_NAMES: list[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
_FLAT_NAMES: list[str] = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]

# Enharmonic spellings that fall outside the sharp/flat name lists
_ENHARMONIC_NAMES: dict[str, int] = {
    "B#": 0,
    "E#": 5,
    "Fb": 4,
    "Cb": 11,
}


def mod12(n: int) -> int:
    """Collapse any semitone value to a pitch-class value (0-11)."""
    return n % 12


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11).

    Octave-independent - C4 and C5 are both PitchClass.C.
    Enharmonic equivalents share the same value (C# == Db == 1).

    Spelling is a display concern, handled at serialization.
    Internally, we use sharp names (Cs, Ds, etc.).
    """

    C = 0
    Cs = 1  # C# / Db
    D = 2
    Ds = 3  # D# / Eb
    E = 4
    F = 5
    Fs = 6  # F# / Gb
    G = 7
    Gs = 8  # G# / Ab
    A = 9
    As = 10  # A# / Bb
    B = 11

    def transpose(self, semitones: int) -> PitchClass:
        """Transpose by a number of semitones (positive or negative)."""
        return PitchClass(mod12(self.value + semitones))

    def interval_to(self, other: PitchClass) -> int:
        """Ascending semitone distance from this pitch class to another (0-11)."""
        return mod12(other.value - self.value)

    def spell(self, prefer_flats: bool = False) -> str:
        """Get human-readable name."""
        names = _FLAT_NAMES if prefer_flats else _SHARP_NAMES
        return names[self.value]

    @classmethod
    def from_midi(cls, midi_note: int) -> PitchClass:
        """Extract pitch class from MIDI note number."""
        return cls(mod12(midi_note))

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """
        Parse a pitch class from a note name.

        Accepts sharps, flats and enharmonic spellings ('C', 'c#', 'Db',
        'B#', 'Cb'). A trailing ' major' is tolerated so 'Bb major' parses
        as Bb. The result is always stored under its sharp name.
        """
        if not isinstance(name, str):
            raise ValueError(f"Unknown pitch class: {name!r}")

        cleaned = name.strip()
        if cleaned.lower().endswith(" major"):
            cleaned = cleaned[: -len(" major")].strip()
        if not cleaned:
            raise ValueError(f"Unknown pitch class: {name!r}")

        pretty = cleaned[0].upper() + cleaned[1:]

        if pretty in _SHARP_NAMES:
            return cls(_SHARP_NAMES.index(pretty))
        if pretty in _FLAT_NAMES:
            return cls(_FLAT_NAMES.index(pretty))
        if pretty in _ENHARMONIC_NAMES:
            return cls(_ENHARMONIC_NAMES[pretty])

        # Enum member names (Cs, Ds, ...)
        for member in cls:
            if member.name.upper() == pretty.upper():
                return member

        raise ValueError(f"Unknown pitch class: {name!r}")
