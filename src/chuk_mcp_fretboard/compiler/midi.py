"""
MIDI export - hear the voicings you found.

Voicings become block chords, one after another, each held for a fixed number
of beats. Conversion goes Voicing -> MidiEvent -> mido MidiFile.
All operations are deterministic: same input -> same output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mido import Message, MetaMessage, MidiFile, MidiTrack

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chuk_mcp_fretboard.models.voicing import Voicing


# Standard ticks per beat (quarter note)
TICKS_PER_BEAT = 480

# GM program 25 (0-indexed 24): Acoustic Guitar (nylon)
GUITAR_PROGRAM = 24

DEFAULT_VELOCITY = 80


@dataclass(frozen=True)
class MidiEvent:
    """
    A single MIDI note event.

    All times are in ticks (absolute from start of track).
    """

    pitch: int  # MIDI note number (0-127)
    start_ticks: int
    duration_ticks: int
    velocity: int  # 0-127
    channel: int = 0  # 0-15

    def __post_init__(self) -> None:
        """Validate MIDI ranges."""
        if not 0 <= self.pitch <= 127:
            raise ValueError(f"Pitch must be 0-127, got {self.pitch}")
        if not 0 <= self.velocity <= 127:
            raise ValueError(f"Velocity must be 0-127, got {self.velocity}")
        if not 0 <= self.channel <= 15:
            raise ValueError(f"Channel must be 0-15, got {self.channel}")
        if self.start_ticks < 0:
            raise ValueError(f"Start ticks must be >= 0, got {self.start_ticks}")
        if self.duration_ticks < 0:
            raise ValueError(f"Duration ticks must be >= 0, got {self.duration_ticks}")


def events_to_midi(
    events: Sequence[MidiEvent],
    tempo_bpm: int = 120,
    ticks_per_beat: int = TICKS_PER_BEAT,
    program: int | None = GUITAR_PROGRAM,
) -> MidiFile:
    """
    Convert a sequence of MidiEvents to a single-track MidiFile.

    Args:
        events: Sequence of MidiEvent objects
        tempo_bpm: Tempo in beats per minute
        ticks_per_beat: Resolution (default 480)
        program: GM program to select on every used channel, or None to skip

    Returns:
        A mido MidiFile ready to be saved
    """
    if tempo_bpm <= 0:
        raise ValueError(f"Tempo must be > 0, got {tempo_bpm}")

    mid = MidiFile(ticks_per_beat=ticks_per_beat)
    track = MidiTrack()
    mid.tracks.append(track)

    track.append(MetaMessage("set_tempo", tempo=int(60_000_000 / tempo_bpm), time=0))

    if program is not None:
        for channel in sorted({e.channel for e in events}):
            track.append(Message("program_change", channel=channel, program=program, time=0))

    messages: list[tuple[int, Message]] = []
    for event in events:
        messages.append(
            (
                event.start_ticks,
                Message(
                    "note_on",
                    channel=event.channel,
                    note=event.pitch,
                    velocity=event.velocity,
                    time=0,
                ),
            )
        )
        messages.append(
            (
                event.start_ticks + event.duration_ticks,
                Message(
                    "note_off",
                    channel=event.channel,
                    note=event.pitch,
                    velocity=0,
                    time=0,
                ),
            )
        )

    # note_off before note_on at the same tick so repeated notes retrigger
    messages.sort(key=lambda x: (x[0], x[1].type != "note_off"))

    current_time = 0
    for abs_time, msg in messages:
        msg.time = abs_time - current_time
        track.append(msg)
        current_time = abs_time

    track.append(MetaMessage("end_of_track", time=0))
    return mid


def voicings_to_events(
    voicings: Sequence[Voicing],
    beats_per_chord: float = 2.0,
    velocity: int = DEFAULT_VELOCITY,
    strum_ticks: int = 0,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> list[MidiEvent]:
    """
    Lay voicings out as consecutive block chords.

    With strum_ticks > 0 each voice enters that many ticks after the one
    below it, like a downstroke. Every voice still ends with its chord.
    """
    if beats_per_chord <= 0:
        raise ValueError(f"Beats per chord must be > 0, got {beats_per_chord}")

    chord_ticks = beats_to_ticks(beats_per_chord, ticks_per_beat)
    events: list[MidiEvent] = []
    for i, voicing in enumerate(voicings):
        start = i * chord_ticks
        for voice, pitch in enumerate(voicing.midis):
            offset = min(voice * strum_ticks, chord_ticks)
            events.append(
                MidiEvent(
                    pitch=pitch,
                    start_ticks=start + offset,
                    duration_ticks=chord_ticks - offset,
                    velocity=velocity,
                )
            )
    return events


def voicings_to_midi(
    voicings: Sequence[Voicing],
    tempo_bpm: int = 90,
    beats_per_chord: float = 2.0,
    velocity: int = DEFAULT_VELOCITY,
    strum_ticks: int = 0,
) -> MidiFile:
    """
    Render voicings as a MIDI file of block chords.

    Example:
        voicings = VoicingEngine().search("C", "Major", 2, 5)
        voicings_to_midi(voicings[:4]).save("voicings.mid")
    """
    events = voicings_to_events(voicings, beats_per_chord, velocity, strum_ticks)
    return events_to_midi(events, tempo_bpm=tempo_bpm)


def beats_to_ticks(beats: float, ticks_per_beat: int = TICKS_PER_BEAT) -> int:
    """Convert a beat position to ticks."""
    return int(beats * ticks_per_beat)
