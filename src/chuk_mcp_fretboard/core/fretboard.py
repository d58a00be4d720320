"""
Fretboard primitives - GuitarString, StringGroup and fret arithmetic.

Standard tuning only (E A D G B E). Strings are numbered the way guitarists
read tab: 1 = high E, 6 = low E. String groups are listed low to high pitch,
so the first string of a group carries the bass voice.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar

from chuk_mcp_fretboard.constants import MAX_FRET

from .pitch import PitchClass, mod12

# Open-string MIDI notes, standard tuning
OPEN_STRING_MIDI: dict[int, int] = {
    1: 64,  # E4 (high E)
    2: 59,  # B3
    3: 55,  # G3
    4: 50,  # D3
    5: 45,  # A2
    6: 40,  # E2 (low E)
}

# String names used by the fretboard UI and the voicing map
_STRING_NAMES: dict[int, str] = {
    1: "high-e",
    2: "b",
    3: "g",
    4: "d",
    5: "a",
    6: "low-e",
}


class GuitarString(IntEnum):
    """The six strings of a standard-tuned guitar, numbered high to low."""

    HIGH_E = 1
    B = 2
    G = 3
    D = 4
    A = 5
    LOW_E = 6

    @property
    def open_midi(self) -> int:
        """MIDI note of the open string."""
        return OPEN_STRING_MIDI[self.value]

    @property
    def app_name(self) -> str:
        """Identifier used in voicing maps ('high-e', 'b', ..., 'low-e')."""
        return _STRING_NAMES[self.value]

    @classmethod
    def from_name(cls, name: str) -> GuitarString:
        """Resolve a voicing-map string name back to a string."""
        key = name.strip().lower()
        for number, string_name in _STRING_NAMES.items():
            if string_name == key:
                return cls(number)
        raise ValueError(f"Unknown string name: {name}")


def pitch_class_at(string: int, fret: int) -> PitchClass:
    """Pitch class sounded by a string at a fret."""
    return PitchClass(mod12(OPEN_STRING_MIDI[string] + fret))


def midi_at(string: int, fret: int) -> int:
    """Absolute MIDI note sounded by a string at a fret."""
    return OPEN_STRING_MIDI[string] + fret


def frets_producing(string: int, target: int, max_fret: int = MAX_FRET) -> list[int]:
    """
    Every fret (0..max_fret) on a string that sounds the target pitch class.

    Hits are spaced 12 frets apart. Returns an empty list only when
    max_fret is negative.
    """
    open_midi = OPEN_STRING_MIDI[string]
    first = mod12(target - open_midi)
    return list(range(first, max_fret + 1, 12))


@dataclass(frozen=True)
class StringGroup:
    """
    An ordered set of four strings, low to high pitch.

    Closed and drop-2 voicings use adjacent strings; drop-3 voicings skip one
    interior string because the bass voice sits two octaves under the melody.
    """

    name: str
    strings: tuple[int, int, int, int]
    rank: int = 99

    # Presets (defined after class)
    TOP: ClassVar[StringGroup]
    MIDDLE: ClassVar[StringGroup]
    BOTTOM: ClassVar[StringGroup]
    DROP3_UPPER: ClassVar[StringGroup]
    DROP3_LOWER: ClassVar[StringGroup]

    def __post_init__(self) -> None:
        if len(self.strings) != 4:
            raise ValueError(f"String group needs 4 strings, got {len(self.strings)}")
        for s in self.strings:
            if s not in OPEN_STRING_MIDI:
                raise ValueError(f"String must be 1-6, got {s}")
        if len(set(self.strings)) != 4:
            raise ValueError(f"String group repeats a string: {self.strings}")

    @property
    def bass_string(self) -> int:
        """String carrying the lowest voice."""
        return self.strings[0]

    @property
    def melody_string(self) -> int:
        """String carrying the highest voice."""
        return self.strings[-1]

    def __contains__(self, string: object) -> bool:
        return string in self.strings

    def index_of(self, string: int) -> int:
        """Voice position (0 = bass) of a string within this group."""
        return self.strings.index(string)

    def __str__(self) -> str:
        return "-".join(str(s) for s in self.strings)

    @classmethod
    def from_strings(cls, strings: tuple[int, ...] | list[int]) -> StringGroup:
        """Return the matching preset, or a 'custom' group."""
        key = tuple(strings)
        for preset in _PRESETS:
            if preset.strings == key:
                return preset
        return cls("custom", key)  # type: ignore[arg-type]


StringGroup.TOP = StringGroup("top", (4, 3, 2, 1), 0)
StringGroup.MIDDLE = StringGroup("middle", (5, 4, 3, 2), 1)
StringGroup.BOTTOM = StringGroup("bottom", (6, 5, 4, 3), 2)
StringGroup.DROP3_UPPER = StringGroup("upper", (5, 3, 2, 1), 3)
StringGroup.DROP3_LOWER = StringGroup("lower", (6, 4, 3, 2), 4)

_PRESETS: tuple[StringGroup, ...] = (
    StringGroup.TOP,
    StringGroup.MIDDLE,
    StringGroup.BOTTOM,
    StringGroup.DROP3_UPPER,
    StringGroup.DROP3_LOWER,
)

# Adjacent 4-string windows, low to high
ADJACENT_GROUPS: tuple[StringGroup, ...] = (StringGroup.BOTTOM, StringGroup.MIDDLE, StringGroup.TOP)

# Drop 3 windows - bass skips one string from the upper three voices
DROP3_GROUPS: tuple[StringGroup, ...] = (StringGroup.DROP3_LOWER, StringGroup.DROP3_UPPER)

_GROUP_ALIASES: dict[str, str] = {
    "top": "top",
    "t": "top",
    "middle": "middle",
    "mid": "middle",
    "m": "middle",
    "bottom": "bottom",
    "bot": "bottom",
    "b": "bottom",
    "upper": "upper",
    "up": "upper",
    "u": "upper",
    "lower": "lower",
    "low": "lower",
    "l": "lower",
}


def parse_string_groups(raw: str | list[str] | None) -> list[str] | None:
    """
    Parse a string-group filter like 'Top', 'Top, Bottom', 'middle bottom', 't,b'.

    Returns canonical names in input order, or None (meaning all groups) for
    blank input. Raises ValueError when nothing recognizable is given.
    """
    if raw is None:
        return None

    if isinstance(raw, str):
        if not raw.strip():
            return None
        tokens = [t for t in re.split(r"[,\s]+", raw.lower()) if t]
    else:
        if not raw:
            return None
        tokens = [t.strip().lower() for t in raw if t and t.strip()]

    out: list[str] = []
    for token in tokens:
        canon = _GROUP_ALIASES.get(token)
        if canon and canon not in out:
            out.append(canon)

    if not out:
        raise ValueError(f"Invalid string-group input: {raw!r}")
    return out
