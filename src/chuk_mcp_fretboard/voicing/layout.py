"""
Voicing layouts - closed, drop 2 and drop 3 stacks.

A layout is four absolute semitone values (relative to the chord root, low to
high) plus the chord degree each value carries. Its adjacent gaps are the
contract the fretboard search checks fingerings against: matching pitch
classes alone would let any same-note shape through, matching gaps only lets
through the true closed/drop voicing.
"""

from __future__ import annotations

from dataclasses import dataclass

from chuk_mcp_fretboard.constants import VoicingFamily
from chuk_mcp_fretboard.core.chord import CHORD_DEGREES, ChordFormula
from chuk_mcp_fretboard.core.pitch import mod12
from chuk_mcp_fretboard.core.tension import TensionSubstitution

# Closed-position degree orders per inversion (low -> high)
CLOSED_DEGREE_ORDERS: tuple[tuple[int, int, int, int], ...] = (
    (1, 3, 5, 7),  # root position
    (3, 5, 7, 1),  # 1st inversion
    (5, 7, 1, 3),  # 2nd inversion
    (7, 1, 3, 5),  # 3rd inversion
)

_INVERSION_NAMES: dict[int, str] = {
    1: "Root",
    3: "1st",
    5: "2nd",
    7: "3rd",
    9: "9th",
    11: "11th",
    13: "13th",
}


def inversion_name(bass_degree: int) -> str:
    """Name an inversion by the degree in the bass."""
    return _INVERSION_NAMES.get(bass_degree, str(bass_degree))


@dataclass(frozen=True)
class VoicingLayout:
    """
    Absolute semitone layout of a four-note voicing.

    `absolute` is strictly ascending, relative to the chord root's octave
    (drop layouts may start below zero). `degrees` names the chord degree of
    each voice, low to high.
    """

    absolute: tuple[int, int, int, int]
    degrees: tuple[int, int, int, int]

    @property
    def intervals(self) -> tuple[int, int, int]:
        """Adjacent-voice gaps, low to high."""
        a = self.absolute
        return (a[1] - a[0], a[2] - a[1], a[3] - a[2])

    @property
    def bass_degree(self) -> int:
        return self.degrees[0]

    @property
    def inversion(self) -> str:
        """Inversion name from the bass degree of this layout."""
        return inversion_name(self.degrees[0])

    def target_pitch_classes(self, chord_root: int) -> tuple[int, int, int, int]:
        """Pitch class each voice must sound, low to high."""
        return tuple(mod12(chord_root + v) for v in self.absolute)  # type: ignore[return-value]


def closed_absolute_layout(formula: ChordFormula, inversion: int) -> tuple[int, int, int, int]:
    """
    Rotate a formula left by `inversion`, lifting wrapped tones an octave.

    closed_absolute_layout((0, 4, 7, 10), 2) -> (7, 10, 12, 16)
    """
    if not 0 <= inversion < 4:
        raise ValueError(f"Inversion must be 0-3, got {inversion}")
    rotated = list(formula[inversion:]) + [x + 12 for x in formula[:inversion]]
    return tuple(rotated)  # type: ignore[return-value]


def _rotate(order: tuple[int, ...], inversion: int) -> tuple[int, int, int, int]:
    return tuple(order[inversion:] + order[:inversion])  # type: ignore[return-value]


def closed_layout(
    formula: ChordFormula,
    inversion: int,
    degrees: tuple[int, int, int, int] = CHORD_DEGREES,
) -> VoicingLayout:
    """Closed-position layout for an inversion (0 = root position)."""
    return VoicingLayout(closed_absolute_layout(formula, inversion), _rotate(degrees, inversion))


def drop2_layout(closed: VoicingLayout) -> VoicingLayout:
    """Drop the 2nd-highest voice (index 2) an octave: [c2-12, c0, c1, c3]."""
    a, d = closed.absolute, closed.degrees
    return VoicingLayout((a[2] - 12, a[0], a[1], a[3]), (d[2], d[0], d[1], d[3]))


def drop3_layout(closed: VoicingLayout) -> VoicingLayout:
    """Drop the 3rd-highest voice (index 1) an octave: [c1-12, c0, c2, c3]."""
    a, d = closed.absolute, closed.degrees
    return VoicingLayout((a[1] - 12, a[0], a[2], a[3]), (d[1], d[0], d[2], d[3]))


def family_inversions(family: VoicingFamily) -> range:
    """Closed inversions a family is built from."""
    if family == VoicingFamily.CLOSED:
        return range(1)
    return range(4)


def build_layout(
    formula: ChordFormula,
    family: VoicingFamily,
    inversion: int,
    degrees: tuple[int, int, int, int] = CHORD_DEGREES,
) -> VoicingLayout:
    """
    Layout for a formula in a voicing family, built from a closed inversion.

    The resulting inversion name comes from the layout's own bass degree, so a
    drop 2 built from closed 2nd inversion can itself be a '1st' voicing.
    """
    closed = closed_layout(formula, inversion, degrees)
    if family == VoicingFamily.DROP_2:
        return drop2_layout(closed)
    if family == VoicingFamily.DROP_3:
        return drop3_layout(closed)
    return closed


def substituted_formula(
    formula: ChordFormula,
    substitution: TensionSubstitution,
) -> tuple[ChordFormula, tuple[int, int, int, int]] | None:
    """
    Swap the root or fifth of a formula for a tension.

    Returns the four tones re-stacked ascending within the octave together with
    their degree tags, ready for the usual rotation. Returns None when the
    tension would double an existing chord tone (no longer a 4-note voicing).

    substituted_formula((0, 3, 7, 10), 9 for 1) -> ((2, 3, 7, 10), (9, 3, 5, 7))
    """
    slot = CHORD_DEGREES.index(substitution.replaces)
    offsets = list(formula)
    degrees = list(CHORD_DEGREES)
    offsets[slot] = substitution.tension.offset
    degrees[slot] = substitution.tension.value

    if len({mod12(o) for o in offsets}) != 4:
        return None

    stacked = sorted(zip(offsets, degrees))
    new_formula = tuple(o for o, _ in stacked)
    new_degrees = tuple(d for _, d in stacked)
    return new_formula, new_degrees  # type: ignore[return-value]
