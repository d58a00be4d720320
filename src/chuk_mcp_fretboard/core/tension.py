"""
Tension primitives - TensionDegree, TensionSubstitution, TensionCatalog.

A tension voicing swaps exactly one chord tone (the root or the fifth) for a
9th, 11th or 13th, so the voicing stays four notes and the replaced tone is
never sounded. Which tensions a chord may take is a fixed per-quality table;
a tension must also be diatonic to the governing key to be used.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .chord import Chord, ChordQuality
from .pitch import mod12
from .scale import Key


class TensionDegree(IntEnum):
    """Upper-structure degrees available for substitution."""

    NINTH = 9
    ELEVENTH = 11
    THIRTEENTH = 13

    @property
    def offset(self) -> int:
        """Semitones above the chord root (within the octave)."""
        return _TENSION_OFFSETS[self]


_TENSION_OFFSETS: dict[TensionDegree, int] = {
    TensionDegree.NINTH: 2,
    TensionDegree.ELEVENTH: 5,
    TensionDegree.THIRTEENTH: 9,
}


@dataclass(frozen=True)
class TensionSubstitution:
    """
    One substitution recipe: a tension replacing the root (1) or fifth (5).

    Examples:
        TensionSubstitution(TensionDegree.NINTH, 1) = 9 for the root
        TensionSubstitution(TensionDegree.THIRTEENTH, 5) = 13 for the fifth
    """

    tension: TensionDegree
    replaces: int

    def __post_init__(self) -> None:
        if self.replaces not in (1, 5):
            raise ValueError(f"A tension can only replace the root or fifth, got {self.replaces}")

    @property
    def label(self) -> str:
        """Badge text, e.g. '9 for 1'."""
        return f"{self.tension.value} for {self.replaces}"

    def __str__(self) -> str:
        return self.label


# The six fixed recipes, in display order
SUBSTITUTIONS: tuple[TensionSubstitution, ...] = (
    TensionSubstitution(TensionDegree.NINTH, 1),
    TensionSubstitution(TensionDegree.NINTH, 5),
    TensionSubstitution(TensionDegree.ELEVENTH, 1),
    TensionSubstitution(TensionDegree.ELEVENTH, 5),
    TensionSubstitution(TensionDegree.THIRTEENTH, 1),
    TensionSubstitution(TensionDegree.THIRTEENTH, 5),
)

_9, _11, _13 = TensionDegree.NINTH, TensionDegree.ELEVENTH, TensionDegree.THIRTEENTH

# Harmonically admissible tensions per quality
TENSION_MATRIX: dict[ChordQuality, frozenset[TensionDegree]] = {
    ChordQuality.MAJOR_7: frozenset({_9, _13}),
    ChordQuality.MINOR_7: frozenset({_9, _11, _13}),
    ChordQuality.DOMINANT_7: frozenset({_9, _13}),
    ChordQuality.HALF_DIMINISHED_7: frozenset({_9, _11}),
    ChordQuality.DIMINISHED_7: frozenset({_9, _11}),
    ChordQuality.MINOR_MAJOR_7: frozenset({_9, _11, _13}),
    ChordQuality.AUGMENTED_MAJOR_7: frozenset({_9}),
    ChordQuality.AUGMENTED_7: frozenset({_9}),
    ChordQuality.MAJOR_7_FLAT_5: frozenset({_9, _13}),
    ChordQuality.DOMINANT_7_FLAT_5: frozenset({_9, _13}),
    ChordQuality.DOMINANT_7_SUS_4: frozenset({_9, _13}),
    ChordQuality.MINOR_7_SHARP_5: frozenset({_9, _11}),
    ChordQuality.MAJOR_6: frozenset({_9}),
    ChordQuality.MAJOR_6_FLAT_5: frozenset({_9}),
    ChordQuality.MINOR_6: frozenset({_9, _11}),
}


def tension_name(base: str, tension: TensionDegree) -> str:
    """
    Tension-aware name for a quality label or display name.

    The first '7' becomes the tension ('Min 7' -> 'Min 11', 'm7b5' -> 'm11b5');
    names without a 7 get the tension appended ('Maj 6' -> 'Maj 6/9').
    """
    if base.startswith("["):
        return f"{base} add{tension.value}"
    if "7" in base:
        return base.replace("7", str(tension.value), 1)
    return f"{base}/{tension.value}"


class TensionCatalog:
    """
    Decides which substitution recipes apply to a chord in a key.

    Stateless; one instance can serve any number of concurrent queries.
    """

    def __init__(
        self,
        matrix: dict[ChordQuality, frozenset[TensionDegree]] | None = None,
        substitutions: tuple[TensionSubstitution, ...] = SUBSTITUTIONS,
    ):
        self.matrix = matrix if matrix is not None else TENSION_MATRIX
        self.substitutions = substitutions

    def allowed(self, quality: ChordQuality) -> frozenset[TensionDegree]:
        """Tensions admissible on a quality; empty for unknown stacks."""
        return self.matrix.get(quality, frozenset())

    @staticmethod
    def is_diatonic(
        chord_root: int,
        tension: TensionDegree,
        scale_root: int,
        scale_formula: tuple[int, ...] | list[int],
    ) -> bool:
        """True when the tension's pitch class belongs to the governing scale."""
        tension_pc = mod12(chord_root + tension.offset)
        return tension_pc in {mod12(scale_root + step) for step in scale_formula}

    def admissible(self, chord: Chord, key: Key) -> list[TensionSubstitution]:
        """Recipes whose tension is allowed for the quality and diatonic to the key."""
        allowed = self.allowed(chord.quality)
        return [
            sub
            for sub in self.substitutions
            if sub.tension in allowed
            and self.is_diatonic(chord.root.value, sub.tension, key.root.value, key.scale.formula)
        ]
