"""
Tests for voicing layouts.

Closed, drop 2 and drop 3 stacks, inversion naming and tension re-stacking.
"""

import pytest

from chuk_mcp_fretboard.constants import VoicingFamily
from chuk_mcp_fretboard.core import TensionDegree, TensionSubstitution
from chuk_mcp_fretboard.voicing import (
    CLOSED_DEGREE_ORDERS,
    build_layout,
    closed_absolute_layout,
    closed_layout,
    drop2_layout,
    drop3_layout,
    family_inversions,
    inversion_name,
    substituted_formula,
)

DOM7 = (0, 4, 7, 10)
MAJ7 = (0, 4, 7, 11)
MIN7 = (0, 3, 7, 10)


class TestClosedLayout:
    """Tests for closed-position stacks."""

    def test_rotation(self) -> None:
        """Wrapped tones move up an octave."""
        assert closed_absolute_layout(DOM7, 0) == (0, 4, 7, 10)
        assert closed_absolute_layout(DOM7, 1) == (4, 7, 10, 12)
        assert closed_absolute_layout(DOM7, 2) == (7, 10, 12, 16)
        assert closed_absolute_layout(DOM7, 3) == (10, 12, 16, 19)

    def test_always_ascending(self) -> None:
        """Every inversion is strictly increasing."""
        for inversion in range(4):
            layout = closed_absolute_layout(MIN7, inversion)
            assert list(layout) == sorted(set(layout))

    def test_invalid_inversion(self) -> None:
        """Only inversions 0-3 exist."""
        with pytest.raises(ValueError):
            closed_absolute_layout(DOM7, 4)

    def test_degree_orders(self) -> None:
        """Degree orders follow the rotation."""
        for inversion, order in enumerate(CLOSED_DEGREE_ORDERS):
            assert closed_layout(DOM7, inversion).degrees == order

    def test_intervals(self) -> None:
        """Adjacent gaps of a root-position maj7."""
        assert closed_layout(MAJ7, 0).intervals == (4, 3, 4)


class TestDropLayouts:
    """Tests for drop 2 and drop 3 stacks."""

    def test_drop2_from_root_position(self) -> None:
        """Drop 2 of a root-position G7 puts the fifth in the bass."""
        layout = drop2_layout(closed_layout(DOM7, 0))
        assert layout.absolute == (-5, 0, 4, 10)
        assert layout.degrees == (5, 1, 3, 7)
        assert layout.intervals == (5, 4, 6)
        assert layout.inversion == "2nd"

    def test_drop2_named_by_bass(self) -> None:
        """Drop 2 of closed 2nd inversion is root position."""
        layout = drop2_layout(closed_layout(DOM7, 2))
        assert layout.degrees == (1, 5, 7, 3)
        assert layout.inversion == "Root"

    def test_drop3(self) -> None:
        """Drop 3 of a root-position maj7 puts the third in the bass."""
        layout = drop3_layout(closed_layout(MAJ7, 0))
        assert layout.absolute == (-8, 0, 7, 11)
        assert layout.degrees == (3, 1, 5, 7)
        assert layout.intervals == (8, 7, 4)
        assert layout.inversion == "1st"

    def test_build_layout_by_family(self) -> None:
        """build_layout dispatches on the family."""
        assert build_layout(DOM7, VoicingFamily.CLOSED, 0).absolute == (0, 4, 7, 10)
        assert build_layout(DOM7, VoicingFamily.DROP_2, 0).absolute == (-5, 0, 4, 10)
        assert build_layout(DOM7, VoicingFamily.DROP_3, 0).absolute == (-8, 0, 7, 10)

    def test_drop_inversions_cover_every_bass(self) -> None:
        """Across four inversions each chord degree reaches the bass once."""
        for family in (VoicingFamily.DROP_2, VoicingFamily.DROP_3):
            basses = {build_layout(MIN7, family, i).bass_degree for i in family_inversions(family)}
            assert basses == {1, 3, 5, 7}

    def test_family_inversions(self) -> None:
        """Closed is root position only."""
        assert list(family_inversions(VoicingFamily.CLOSED)) == [0]
        assert list(family_inversions(VoicingFamily.DROP_2)) == [0, 1, 2, 3]

    def test_target_pitch_classes(self) -> None:
        """Targets wrap negative offsets."""
        layout = build_layout(DOM7, VoicingFamily.DROP_2, 0)
        # G7: D G B F
        assert layout.target_pitch_classes(7) == (2, 7, 11, 5)


class TestInversionName:
    """Tests for inversion naming."""

    def test_names(self) -> None:
        """Chord tones and tensions."""
        assert inversion_name(1) == "Root"
        assert inversion_name(3) == "1st"
        assert inversion_name(5) == "2nd"
        assert inversion_name(7) == "3rd"
        assert inversion_name(9) == "9th"
        assert inversion_name(13) == "13th"


class TestSubstitutedFormula:
    """Tests for tension re-stacking."""

    def test_ninth_for_root(self) -> None:
        """The 9 takes the root's place and the stack is re-sorted."""
        sub = TensionSubstitution(TensionDegree.NINTH, 1)
        assert substituted_formula(MIN7, sub) == ((2, 3, 7, 10), (9, 3, 5, 7))

    def test_thirteenth_for_fifth(self) -> None:
        """The 13 takes the fifth's place."""
        sub = TensionSubstitution(TensionDegree.THIRTEENTH, 5)
        assert substituted_formula(DOM7, sub) == ((0, 4, 9, 10), (1, 3, 13, 7))

    def test_eleventh_for_root_reorders(self) -> None:
        """An 11 above the third moves into the middle of the stack."""
        sub = TensionSubstitution(TensionDegree.ELEVENTH, 1)
        assert substituted_formula((0, 3, 6, 10), sub) == ((3, 5, 6, 10), (3, 11, 5, 7))

    def test_duplicate_tone_is_skipped(self) -> None:
        """A tension that doubles a chord tone is not a 4-note voicing."""
        sub = TensionSubstitution(TensionDegree.ELEVENTH, 5)
        assert substituted_formula((0, 5, 7, 10), sub) is None

    def test_replaced_tone_is_gone(self) -> None:
        """The replaced degree never appears in the result."""
        for sub in (
            TensionSubstitution(TensionDegree.NINTH, 1),
            TensionSubstitution(TensionDegree.NINTH, 5),
        ):
            result = substituted_formula(MAJ7, sub)
            assert result is not None
            _, degrees = result
            assert sub.replaces not in degrees
            assert len(degrees) == 4

    def test_tension_layout_rotates(self) -> None:
        """Tension stacks go through the usual drop 2 rotation."""
        sub = TensionSubstitution(TensionDegree.ELEVENTH, 1)
        formula, degrees = substituted_formula((0, 3, 6, 10), sub)  # type: ignore[misc]
        layout = build_layout(formula, VoicingFamily.DROP_2, 0, degrees)
        assert layout.absolute == (-6, 3, 5, 10)
        assert layout.degrees == (5, 3, 11, 7)
        assert layout.intervals == (9, 2, 5)
