"""
Core music primitives - the Radix layer.

These are the invariants everything else composes on:
- PitchClass: The 12 chromatic pitch classes (0-11)
- GuitarString / StringGroup: Standard-tuning fretboard geometry
- ScaleType: Semitone formula defining a scale
- Key: Root + scale type, decides what is diatonic
- ChordQuality: Interval signatures of four-note chords
- Chord: Concrete chord with root, quality and formula
- TensionCatalog: Which 9/11/13 substitutions a chord may take
"""

from chuk_mcp_fretboard.core.chord import (
    CHORD_DEGREES,
    Chord,
    ChordQuality,
    degree_label,
    diatonic_seventh_chords,
)
from chuk_mcp_fretboard.core.fretboard import (
    ADJACENT_GROUPS,
    DROP3_GROUPS,
    OPEN_STRING_MIDI,
    GuitarString,
    StringGroup,
    frets_producing,
    midi_at,
    parse_string_groups,
    pitch_class_at,
)
from chuk_mcp_fretboard.core.pitch import PitchClass, mod12
from chuk_mcp_fretboard.core.scale import SCALE_CATALOG, Key, ScaleType
from chuk_mcp_fretboard.core.tension import (
    SUBSTITUTIONS,
    TensionCatalog,
    TensionDegree,
    TensionSubstitution,
)

__all__ = [
    # Pitch
    "PitchClass",
    "mod12",
    # Fretboard
    "OPEN_STRING_MIDI",
    "GuitarString",
    "StringGroup",
    "ADJACENT_GROUPS",
    "DROP3_GROUPS",
    "pitch_class_at",
    "midi_at",
    "frets_producing",
    "parse_string_groups",
    # Scale
    "SCALE_CATALOG",
    "ScaleType",
    "Key",
    # Chord
    "CHORD_DEGREES",
    "ChordQuality",
    "Chord",
    "degree_label",
    "diatonic_seventh_chords",
    # Tension
    "SUBSTITUTIONS",
    "TensionCatalog",
    "TensionDegree",
    "TensionSubstitution",
]
