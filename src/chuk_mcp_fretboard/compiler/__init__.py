"""
Export pipeline - turns voicings into files.

    Voicing list -> MidiEvent list (block chords) -> MIDI File
"""

from chuk_mcp_fretboard.compiler.midi import (
    GUITAR_PROGRAM,
    TICKS_PER_BEAT,
    MidiEvent,
    beats_to_ticks,
    events_to_midi,
    voicings_to_events,
    voicings_to_midi,
)

__all__ = [
    "GUITAR_PROGRAM",
    "TICKS_PER_BEAT",
    "MidiEvent",
    "beats_to_ticks",
    "events_to_midi",
    "voicings_to_events",
    "voicings_to_midi",
]
