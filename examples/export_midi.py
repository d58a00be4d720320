#!/usr/bin/env python3
"""
Example: Hear the voicings.

Renders the drop 2 voicings of C major that hold the G on the A string (10th
fret) as a MIDI file of block chords, one strummed and one straight.

Usage:
    python examples/export_midi.py
    # Creates: examples/output/c_major_drop2.mid, examples/output/c_major_drop2_strum.mid
"""

from pathlib import Path

from chuk_mcp_fretboard.compiler.midi import voicings_to_midi
from chuk_mcp_fretboard.voicing import VoicingEngine


def main() -> None:
    """Generate example MIDI files."""
    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)

    voicings = VoicingEngine().search("C", "Major", 5, 10, "drop2")
    print(f"Found {len(voicings)} voicings:")
    for i, v in enumerate(voicings):
        print(f"  {v.to_text(i)}")

    print("\nGenerating c_major_drop2.mid...")
    voicings_to_midi(voicings, tempo_bpm=80).save(str(output_dir / "c_major_drop2.mid"))
    print(f"  Created: {output_dir / 'c_major_drop2.mid'}")

    print("\nGenerating c_major_drop2_strum.mid...")
    strummed = voicings_to_midi(voicings, tempo_bpm=80, strum_ticks=40)
    strummed.save(str(output_dir / "c_major_drop2_strum.mid"))
    print(f"  Created: {output_dir / 'c_major_drop2_strum.mid'}")

    print("\nDone! Open the MIDI files in your DAW to hear them.")


if __name__ == "__main__":
    main()
