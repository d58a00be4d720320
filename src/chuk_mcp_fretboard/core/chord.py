"""
Chord primitives - ChordQuality, Chord, diatonic seventh chords.

Chords are four-tone stacks of thirds taken from a 7-note scale. A chord's
quality is read off its (third, fifth, seventh) interval signature. Novel
signatures never fail: they classify as UNKNOWN and are labelled with the
literal interval stack instead of a conventional name.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .pitch import PitchClass, mod12
from .scale import Key

ChordFormula = tuple[int, int, int, int]

# Chord degrees of a plain 7th chord, root first
CHORD_DEGREES: tuple[int, int, int, int] = (1, 3, 5, 7)

# Natural semitone offset of each degree, used for accidentals in labels
_NATURAL_OFFSETS: dict[int, int] = {1: 0, 3: 4, 5: 7, 7: 11, 9: 2, 11: 5, 13: 9}


class ChordQuality(str, Enum):
    """
    Closed set of four-note chord qualities, keyed by interval signature.

    UNKNOWN is the explicit fallback for stacks no table entry matches.
    """

    MAJOR_7 = "maj7"
    MINOR_7 = "m7"
    DOMINANT_7 = "7"
    HALF_DIMINISHED_7 = "m7b5"
    DIMINISHED_7 = "dim7"
    MINOR_MAJOR_7 = "mMaj7"
    AUGMENTED_MAJOR_7 = "augMaj7"
    AUGMENTED_7 = "aug7"
    MAJOR_7_FLAT_5 = "maj7b5"
    DOMINANT_7_FLAT_5 = "7b5"
    DOMINANT_7_SUS_4 = "7sus4"
    MINOR_7_SHARP_5 = "m7#5"
    MAJOR_6 = "6"
    MAJOR_6_FLAT_5 = "6b5"
    MINOR_6 = "m6"
    UNKNOWN = "unknown"

    @classmethod
    def from_intervals(cls, third: int, fifth: int, seventh: int) -> ChordQuality:
        """Classify an interval signature; unrecognized stacks give UNKNOWN."""
        return _SIGNATURES.get((third, fifth, seventh), cls.UNKNOWN)

    @property
    def display_name(self) -> str:
        """Human-readable quality ('Maj 7', 'Min 7b5', ...)."""
        return _DISPLAY_NAMES.get(self, self.value)

    @property
    def is_sixth(self) -> bool:
        """Sixth chords put a 6th where a 7th chord has its seventh."""
        return self in (ChordQuality.MAJOR_6, ChordQuality.MAJOR_6_FLAT_5, ChordQuality.MINOR_6)


_SIGNATURES: dict[tuple[int, int, int], ChordQuality] = {
    (4, 7, 11): ChordQuality.MAJOR_7,
    (3, 7, 10): ChordQuality.MINOR_7,
    (4, 7, 10): ChordQuality.DOMINANT_7,
    (3, 6, 10): ChordQuality.HALF_DIMINISHED_7,
    (3, 6, 9): ChordQuality.DIMINISHED_7,
    (3, 7, 11): ChordQuality.MINOR_MAJOR_7,
    (4, 8, 11): ChordQuality.AUGMENTED_MAJOR_7,
    (4, 8, 10): ChordQuality.AUGMENTED_7,
    (4, 6, 11): ChordQuality.MAJOR_7_FLAT_5,
    (4, 6, 10): ChordQuality.DOMINANT_7_FLAT_5,
    (5, 7, 10): ChordQuality.DOMINANT_7_SUS_4,
    (3, 8, 10): ChordQuality.MINOR_7_SHARP_5,
    (4, 7, 9): ChordQuality.MAJOR_6,
    (4, 6, 9): ChordQuality.MAJOR_6_FLAT_5,
    (3, 7, 9): ChordQuality.MINOR_6,
}

_DISPLAY_NAMES: dict[ChordQuality, str] = {
    ChordQuality.MAJOR_7: "Maj 7",
    ChordQuality.MINOR_7: "Min 7",
    ChordQuality.DOMINANT_7: "Dom 7",
    ChordQuality.HALF_DIMINISHED_7: "Min 7b5",
    ChordQuality.DIMINISHED_7: "Dim 7",
    ChordQuality.MINOR_MAJOR_7: "Min Maj7",
    ChordQuality.AUGMENTED_MAJOR_7: "Aug Maj7",
    ChordQuality.AUGMENTED_7: "Aug 7",
    ChordQuality.MAJOR_7_FLAT_5: "Maj 7b5",
    ChordQuality.DOMINANT_7_FLAT_5: "Dom 7b5",
    ChordQuality.DOMINANT_7_SUS_4: "Dom 7sus4",
    ChordQuality.MINOR_7_SHARP_5: "Min 7#5",
    ChordQuality.MAJOR_6: "Maj 6",
    ChordQuality.MAJOR_6_FLAT_5: "Maj 6b5",
    ChordQuality.MINOR_6: "Min 6",
}

# Derived sixth chords: source quality -> (sixth quality, fixed formula)
_SIXTH_EQUIVALENTS: dict[ChordQuality, tuple[ChordQuality, ChordFormula]] = {
    ChordQuality.MINOR_7: (ChordQuality.MAJOR_6, (0, 4, 7, 9)),
    ChordQuality.HALF_DIMINISHED_7: (ChordQuality.MINOR_6, (0, 3, 7, 9)),
}


def degree_label(degree: int, offset: int, quality: ChordQuality) -> str:
    """
    Spell a chord degree relative to its natural interval.

    degree_label(3, 3, m7) -> 'b3', degree_label(7, 9, dim7) -> 'bb7',
    degree_label(5, 8, aug7) -> '#5'. Sixth chords spell their top tone '6'
    and sus chords spell their 'third' as '4'.
    """
    if degree == 7 and quality.is_sixth:
        return "6"
    if degree == 3 and offset == 5:
        return "4"

    diff = mod12(offset - _NATURAL_OFFSETS.get(degree, offset) + 6) - 6
    if diff < 0:
        return "b" * -diff + str(degree)
    return "#" * diff + str(degree)


@dataclass(frozen=True)
class Chord:
    """
    A concrete four-note chord with a root pitch, quality and formula.

    Built once per query from a key; immutable.
    """

    root: PitchClass
    quality: ChordQuality
    formula: ChordFormula
    scale_degree: int

    @property
    def label(self) -> str:
        """Quality tag ('m7'), or the bracketed interval stack when unknown."""
        if self.quality == ChordQuality.UNKNOWN:
            return f"[{self.formula[1]}-{self.formula[2]}-{self.formula[3]}]"
        return self.quality.value

    @property
    def display_quality(self) -> str:
        """Display quality ('Min 7'), or the bracketed stack when unknown."""
        if self.quality == ChordQuality.UNKNOWN:
            return self.label
        return self.quality.display_name

    @property
    def symbol(self) -> str:
        """Chord symbol like 'Am7', 'G7', 'C6'."""
        return f"{self.root.spell()}{self.label}"

    def offset_of(self, degree: int) -> int:
        """Semitone offset of a chord degree (1, 3, 5, 7 or a 9/11/13 tension)."""
        if degree in CHORD_DEGREES:
            return self.formula[CHORD_DEGREES.index(degree)]
        return _NATURAL_OFFSETS[degree]

    def get_pitches(self) -> list[PitchClass]:
        """Chord tones, root first."""
        return [self.root.transpose(offset) for offset in self.formula]

    def contains(self, pitch: int) -> bool:
        """True when a pitch class is one of the chord tones."""
        return mod12(pitch) in {p.value for p in self.get_pitches()}

    def degree_labels(self, degrees: tuple[int, ...] | list[int]) -> list[str]:
        """Spell a low-to-high degree order for this chord ('5 1 3 b7')."""
        return [degree_label(d, self.offset_of(d), self.quality) for d in degrees]

    def __str__(self) -> str:
        return self.symbol


def _stack_thirds(scale_pcs: list[int], i: int) -> ChordFormula:
    root = scale_pcs[i]
    return (
        0,
        mod12(scale_pcs[(i + 2) % 7] - root),
        mod12(scale_pcs[(i + 4) % 7] - root),
        mod12(scale_pcs[(i + 6) % 7] - root),
    )


def diatonic_seventh_chords(
    key: Key | PitchClass | int,
    scale_formula: tuple[int, ...] | list[int] | None = None,
) -> list[Chord]:
    """
    Get all diatonic stacked-third 7th chords for a key.

    Accepts either a Key, or a root pitch class plus a scale formula.
    Scales without exactly 7 notes have no stacked-third harmony and
    yield an empty list.

    Every m7 also yields its enharmonic Maj6 a minor third above
    (Am7 = C6) and every m7b5 its Min6 (Bm7b5 = Dm6). These are
    appended after the 7 base chords.
    """
    if isinstance(key, Key):
        root_pc = key.root.value
        steps = key.scale.formula
    else:
        if scale_formula is None:
            raise ValueError("A scale formula is required when passing a bare root")
        root_pc = int(key)
        steps = tuple(scale_formula)

    if len(steps) != 7:
        return []

    scale_pcs = [mod12(root_pc + step) for step in steps]

    chords: list[Chord] = []
    for i, chord_root in enumerate(scale_pcs):
        formula = _stack_thirds(scale_pcs, i)
        quality = ChordQuality.from_intervals(formula[1], formula[2], formula[3])
        chords.append(Chord(PitchClass(chord_root), quality, formula, i + 1))

    sixths: list[Chord] = []
    for chord in chords:
        if chord.quality in _SIXTH_EQUIVALENTS:
            sixth_quality, sixth_formula = _SIXTH_EQUIVALENTS[chord.quality]
            sixths.append(
                Chord(
                    chord.root.transpose(chord.formula[1]),
                    sixth_quality,
                    sixth_formula,
                    chord.scale_degree,
                )
            )

    return chords + sixths
