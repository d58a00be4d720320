#!/usr/bin/env python3
"""
Example: Find voicings around a note.

Prints every closed, drop 2 and drop 3 voicing in C major that holds the E on
the B string at the 5th fret, then the tension voicings for drop 2.

Usage:
    python examples/find_voicings.py
    python examples/find_voicings.py G Mixolydian 3 7
"""

import sys

from chuk_mcp_fretboard.constants import VoicingFamily
from chuk_mcp_fretboard.core import pitch_class_at
from chuk_mcp_fretboard.voicing import InvalidQueryError, VoicingEngine, filter_by_pinned_strings


def main() -> None:
    """Print voicings for a key, scale and anchor position."""
    key, scale, string, fret = "C", "Major", 2, 5
    if len(sys.argv) == 5:
        key, scale = sys.argv[1], sys.argv[2]
        string, fret = int(sys.argv[3]), int(sys.argv[4])

    engine = VoicingEngine()

    try:
        for family in VoicingFamily:
            voicings = engine.search(key, scale, string, fret, family)
            print(f"\n{family.label} ({len(voicings)})")
            for i, v in enumerate(voicings):
                warning = "  [b9]" if v.b9_warning else ""
                print(f"  {v.to_text(i)}{warning}")
    except InvalidQueryError as e:
        print(f"Error: {e}")
        sys.exit(1)

    anchor = pitch_class_at(string, fret).spell()
    tensions = [
        v
        for v in engine.search(key, scale, string, fret, VoicingFamily.DROP_2, with_tensions=True)
        if v.tension is not None
    ]
    print(f"\nDrop 2 tension voicings holding {anchor} ({len(tensions)})")
    for i, v in enumerate(tensions):
        print(f"  {v.to_text(i)}")

    # Pin the melody to the high E string
    pinned = filter_by_pinned_strings(engine.search(key, scale, string, fret, "drop2"), melody_string=1)
    print(f"\nDrop 2 with the melody on string 1 ({len(pinned)})")
    for i, v in enumerate(pinned):
        print(f"  {v.to_text(i)}  {v.voicing_map()}")


if __name__ == "__main__":
    main()
