"""
Fretboard search - the combinatorial core.

Given four target pitch classes (low to high), a set of candidate string
groups and the expected adjacent-voice gaps, enumerate every fret assignment
that includes the anchor position. Each voice has at most three fret choices
on a 24-fret neck, so a group contributes at most 81 combinations.

All operations are pure: same input -> same output.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from chuk_mcp_fretboard.constants import MAX_FRET
from chuk_mcp_fretboard.core.fretboard import StringGroup, frets_producing, midi_at


@dataclass(frozen=True)
class FretMatch:
    """One fingering that satisfies every search constraint."""

    string_group: StringGroup
    frets: tuple[int, int, int, int]
    midis: tuple[int, int, int, int]

    @property
    def fret_span(self) -> int:
        return max(self.frets) - min(self.frets)


def _is_ascending(midis: Sequence[int]) -> bool:
    return all(lo < hi for lo, hi in zip(midis, midis[1:]))


def _gaps(midis: Sequence[int]) -> tuple[int, ...]:
    return tuple(hi - lo for lo, hi in zip(midis, midis[1:]))


def iter_fingerings(
    targets: Sequence[int],
    string_groups: Iterable[StringGroup],
    expected_intervals: Sequence[int],
    anchor_string: int,
    anchor_fret: int,
    max_fret_span: int,
    max_fret: int = MAX_FRET,
) -> Iterator[FretMatch]:
    """
    Lazily yield fingerings, group by group, in fret-candidate order.

    Args:
        targets: Pitch class per voice, low to high (4 values)
        string_groups: Candidate groups; groups without the anchor string are skipped
        expected_intervals: Required semitone gaps between adjacent voices (3 values)
        anchor_string: String that must be played
        anchor_fret: Fret that must be played on the anchor string
        max_fret_span: Largest allowed max(frets) - min(frets)
        max_fret: Highest fret considered

    Raises:
        ValueError: On malformed targets or intervals
    """
    if len(targets) != 4:
        raise ValueError(f"Expected 4 target pitch classes, got {len(targets)}")
    if len(expected_intervals) != 3:
        raise ValueError(f"Expected 3 intervals, got {len(expected_intervals)}")

    expected = tuple(expected_intervals)

    for group in string_groups:
        if anchor_string not in group:
            continue

        anchor_voice = group.index_of(anchor_string)
        candidates = [
            frets_producing(string, target, max_fret)
            for string, target in zip(group.strings, targets)
        ]

        for frets in itertools.product(*candidates):
            if frets[anchor_voice] != anchor_fret:
                continue
            if max(frets) - min(frets) > max_fret_span:
                continue

            midis = tuple(midi_at(s, f) for s, f in zip(group.strings, frets))
            if not _is_ascending(midis):
                continue
            if _gaps(midis) != expected:
                continue

            yield FretMatch(group, frets, midis)  # type: ignore[arg-type]


def find_fingerings(
    targets: Sequence[int],
    string_groups: Iterable[StringGroup],
    expected_intervals: Sequence[int],
    anchor_string: int,
    anchor_fret: int,
    max_fret_span: int,
    max_fret: int = MAX_FRET,
) -> list[FretMatch]:
    """
    Every fingering satisfying anchor, span, ascent and layout constraints.

    An empty list is a normal outcome, not an error.
    """
    return list(
        iter_fingerings(
            targets,
            string_groups,
            expected_intervals,
            anchor_string,
            anchor_fret,
            max_fret_span,
            max_fret,
        )
    )
