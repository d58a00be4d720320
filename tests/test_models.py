"""
Tests for the Voicing output model.
"""

import pytest
from pydantic import ValidationError

from chuk_mcp_fretboard.constants import VoicingFamily
from chuk_mcp_fretboard.models import ChordInfo, TensionInfo, Voicing, has_minor_ninth


@pytest.fixture
def fmaj7() -> Voicing:
    """Fmaj7 root position on strings 5-4-3-2."""
    return Voicing(
        chord=ChordInfo(
            root="F",
            root_pc=5,
            quality="maj7",
            display_quality="Maj 7",
            symbol="Fmaj7",
            formula=(0, 4, 7, 11),
            scale_degree=4,
        ),
        family=VoicingFamily.CLOSED,
        inversion="Root",
        note_order=(1, 3, 5, 7),
        degree_labels=("1", "3", "5", "7"),
        note_names=("F", "A", "C", "E"),
        string_group_name="middle",
        string_group_rank=1,
        strings=(5, 4, 3, 2),
        frets=(8, 7, 5, 5),
        midis=(53, 57, 60, 64),
        fret_span=3,
        display_quality="Maj 7",
        symbol="Fmaj7",
    )


class TestVoicing:
    """Tests for the Voicing model."""

    def test_strings(self, fmaj7: Voicing) -> None:
        """Lowest and highest strings."""
        assert fmaj7.lowest_string == 5
        assert fmaj7.highest_string == 2

    def test_voicing_map(self, fmaj7: Voicing) -> None:
        """One entry per voice keyed by string name."""
        assert fmaj7.voicing_map() == {
            "a": {"note": "F", "fret": 8},
            "d": {"note": "A", "fret": 7},
            "g": {"note": "C", "fret": 5},
            "b": {"note": "E", "fret": 5},
        }

    def test_contains_position(self, fmaj7: Voicing) -> None:
        """Positions are (string, fret) pairs."""
        assert fmaj7.contains_position(2, 5)
        assert fmaj7.contains_position(5, 8)
        assert not fmaj7.contains_position(2, 8)

    def test_to_text_closed(self, fmaj7: Voicing) -> None:
        """Closed voicings print without a family label."""
        assert fmaj7.to_text(0) == "1. Fmaj7 - Root Inv - 1 3 5 7 - R5 - [ 8 7 5 5 ]"
        assert fmaj7.to_text(4).startswith("5. ")

    def test_to_text_tension(self, fmaj7: Voicing) -> None:
        """Tension voicings carry their badge."""
        v = fmaj7.model_copy(
            update={
                "family": VoicingFamily.DROP_2,
                "tension": TensionInfo(degree=9, replaces=1, label="9 for 1"),
                "symbol": "Fmaj9",
            }
        )
        assert v.to_text(1) == "2. Fmaj9 - Root Inv Drop 2 - 1 3 5 7 - R5 - [ 8 7 5 5 ] (9 for 1)"

    def test_json_shape(self, fmaj7: Voicing) -> None:
        """Dumps to plain JSON types."""
        data = fmaj7.model_dump(mode="json")
        assert data["family"] == "closed"
        assert data["frets"] == [8, 7, 5, 5]
        assert data["chord"]["symbol"] == "Fmaj7"
        assert data["tension"] is None
        assert data["b9_warning"] is False

    def test_frozen(self, fmaj7: Voicing) -> None:
        """Voicings are immutable."""
        with pytest.raises(ValidationError):
            fmaj7.frets = (1, 2, 3, 4)  # type: ignore[misc]

    def test_sort_key_rank_first(self, fmaj7: Voicing) -> None:
        """String-group rank leads the sort key."""
        top = fmaj7.model_copy(update={"string_group_rank": 0})
        assert top.sort_key() < fmaj7.sort_key()


class TestMinorNinth:
    """Tests for the b9 warning."""

    def test_minor_ninth(self) -> None:
        """13 semitones apart is a minor ninth."""
        assert has_minor_ninth([40, 53])
        assert has_minor_ninth([40, 45, 50, 65])

    def test_minor_second_is_not_flagged(self) -> None:
        """A semitone inside the octave is not a b9."""
        assert not has_minor_ninth([40, 41])
        assert not has_minor_ninth([53, 57, 60, 64])
