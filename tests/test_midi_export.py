"""
MIDI export tests - voicings as block chords.
"""

from pathlib import Path

import pytest
from mido import MidiFile

from chuk_mcp_fretboard.compiler.midi import (
    GUITAR_PROGRAM,
    TICKS_PER_BEAT,
    MidiEvent,
    beats_to_ticks,
    events_to_midi,
    voicings_to_events,
    voicings_to_midi,
)
from chuk_mcp_fretboard.voicing import VoicingEngine


class TestMidiEvent:
    """Test MidiEvent dataclass."""

    def test_create_valid_event(self) -> None:
        """Can create a valid MIDI event."""
        event = MidiEvent(pitch=60, start_ticks=0, duration_ticks=480, velocity=100)
        assert event.pitch == 60
        assert event.channel == 0

    def test_event_validation(self) -> None:
        """Out-of-range values are rejected."""
        with pytest.raises(ValueError, match="Pitch must be 0-127"):
            MidiEvent(pitch=128, start_ticks=0, duration_ticks=480, velocity=100)
        with pytest.raises(ValueError, match="Velocity must be 0-127"):
            MidiEvent(pitch=60, start_ticks=0, duration_ticks=480, velocity=128)
        with pytest.raises(ValueError, match="Channel must be 0-15"):
            MidiEvent(pitch=60, start_ticks=0, duration_ticks=480, velocity=100, channel=16)
        with pytest.raises(ValueError, match="Start ticks"):
            MidiEvent(pitch=60, start_ticks=-1, duration_ticks=480, velocity=100)


class TestEventsToMidi:
    """Test events_to_midi."""

    def test_tempo_and_program(self) -> None:
        """Tempo and guitar program lead the track."""
        mid = events_to_midi([MidiEvent(60, 0, 480, 90)], tempo_bpm=120)
        track = mid.tracks[0]
        assert track[0].type == "set_tempo"
        assert track[0].tempo == 500_000
        assert track[1].type == "program_change"
        assert track[1].program == GUITAR_PROGRAM
        assert track[-1].type == "end_of_track"

    def test_no_program(self) -> None:
        """Program selection can be skipped."""
        mid = events_to_midi([MidiEvent(60, 0, 480, 90)], program=None)
        assert all(msg.type != "program_change" for msg in mid.tracks[0])

    def test_invalid_tempo(self) -> None:
        """Tempo must be positive."""
        with pytest.raises(ValueError):
            events_to_midi([], tempo_bpm=0)

    def test_delta_times(self) -> None:
        """Note-off comes before the next note-on at the same tick."""
        events = [MidiEvent(60, 0, 480, 90), MidiEvent(60, 480, 480, 90)]
        notes = [m for m in events_to_midi(events).tracks[0] if m.type in ("note_on", "note_off")]
        assert [(m.type, m.time) for m in notes] == [
            ("note_on", 0),
            ("note_off", 480),
            ("note_on", 0),
            ("note_off", 480),
        ]


class TestVoicingExport:
    """Test voicing-to-MIDI conversion."""

    @pytest.fixture
    def voicings(self):
        """A few C major drop 2 voicings."""
        return VoicingEngine().search("C", "Major", 5, 10, "drop2")[:3]

    def test_block_chords(self, voicings) -> None:
        """Four notes per chord, chords back to back."""
        events = voicings_to_events(voicings, beats_per_chord=2)
        assert len(events) == 4 * len(voicings)
        chord_ticks = beats_to_ticks(2)
        assert {e.start_ticks for e in events[4:8]} == {chord_ticks}
        assert [e.pitch for e in events[:4]] == list(voicings[0].midis)

    def test_strum(self, voicings) -> None:
        """Strummed voices enter one after another and end together."""
        events = voicings_to_events(voicings[:1], beats_per_chord=1, strum_ticks=30)
        assert [e.start_ticks for e in events] == [0, 30, 60, 90]
        assert {e.start_ticks + e.duration_ticks for e in events} == {TICKS_PER_BEAT}

    def test_invalid_length(self, voicings) -> None:
        """Chords need a positive length."""
        with pytest.raises(ValueError):
            voicings_to_events(voicings, beats_per_chord=0)

    def test_save_and_reload(self, voicings, temp_midi_path: Path) -> None:
        """Saved files reload with every note."""
        voicings_to_midi(voicings, tempo_bpm=100).save(str(temp_midi_path))
        loaded = MidiFile(str(temp_midi_path))
        note_ons = [m for m in loaded.tracks[0] if m.type == "note_on" and m.velocity > 0]
        assert len(note_ons) == 4 * len(voicings)
        assert loaded.ticks_per_beat == TICKS_PER_BEAT

    def test_deterministic(self, voicings) -> None:
        """Same voicings give the same track."""
        a = voicings_to_midi(voicings)
        b = voicings_to_midi(voicings)
        assert [str(m) for m in a.tracks[0]] == [str(m) for m in b.tracks[0]]
