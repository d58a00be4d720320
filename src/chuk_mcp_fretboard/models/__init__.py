"""
Pydantic models for the voicing system.

This module provides:
- Voicing: One playable four-note fingering
- ChordInfo: The diatonic chord a voicing realizes
- TensionInfo: A 9/11/13 substitution badge
- FretPosition: Note and fret on one string
"""

from chuk_mcp_fretboard.models.voicing import (
    ChordInfo,
    FretPosition,
    TensionInfo,
    Voicing,
    has_minor_ninth,
)

__all__ = [
    "ChordInfo",
    "FretPosition",
    "TensionInfo",
    "Voicing",
    "has_minor_ninth",
]
