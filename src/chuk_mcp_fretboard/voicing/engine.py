"""
Voicing engine - orchestrates chord, layout and fretboard search.

For every diatonic chord that contains the anchor note, every inversion of the
requested family (and, on request, every admissible tension substitution) the
engine builds a target layout, runs the fretboard search and wraps each hit
into a Voicing. Results are sorted deterministically; nothing is deduplicated
because different string groups or inversions are distinct by construction.

The engine holds no per-query state, so one instance can serve concurrent
callers.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from chuk_mcp_fretboard.constants import (
    DEFAULT_TENSION_SPAN,
    MAX_FRET,
    ErrorMessages,
    VoicingFamily,
)
from chuk_mcp_fretboard.core.chord import CHORD_DEGREES, Chord, diatonic_seventh_chords
from chuk_mcp_fretboard.core.fretboard import (
    ADJACENT_GROUPS,
    DROP3_GROUPS,
    OPEN_STRING_MIDI,
    StringGroup,
    parse_string_groups,
    pitch_class_at,
)
from chuk_mcp_fretboard.core.pitch import PitchClass, mod12
from chuk_mcp_fretboard.core.scale import Key, ScaleType
from chuk_mcp_fretboard.core.tension import (
    TensionCatalog,
    TensionSubstitution,
    tension_name,
)
from chuk_mcp_fretboard.models.voicing import (
    ChordInfo,
    TensionInfo,
    Voicing,
    has_minor_ninth,
)
from chuk_mcp_fretboard.voicing.layout import (
    VoicingLayout,
    build_layout,
    family_inversions,
    substituted_formula,
)
from chuk_mcp_fretboard.voicing.search import FretMatch, find_fingerings

logger = logging.getLogger(__name__)


class InvalidQueryError(ValueError):
    """A query was rejected before any search ran."""


def family_string_groups(family: VoicingFamily) -> tuple[StringGroup, ...]:
    """Candidate string groups for a voicing family."""
    if family == VoicingFamily.DROP_3:
        return DROP3_GROUPS
    return ADJACENT_GROUPS


def _chord_info(chord: Chord) -> ChordInfo:
    return ChordInfo(
        root=chord.root.spell(),
        root_pc=chord.root.value,
        quality=chord.label,
        display_quality=chord.display_quality,
        symbol=chord.symbol,
        formula=chord.formula,
        scale_degree=chord.scale_degree,
    )


def _make_voicing(
    chord: Chord,
    family: VoicingFamily,
    layout: VoicingLayout,
    match: FretMatch,
    substitution: TensionSubstitution | None = None,
) -> Voicing:
    display_quality = chord.display_quality
    symbol = chord.symbol
    tension = None
    if substitution is not None:
        display_quality = tension_name(display_quality, substitution.tension)
        symbol = chord.root.spell() + tension_name(chord.label, substitution.tension)
        tension = TensionInfo(
            degree=substitution.tension.value,
            replaces=substitution.replaces,
            label=substitution.label,
        )

    group = match.string_group
    return Voicing(
        chord=_chord_info(chord),
        family=family,
        inversion=layout.inversion,
        note_order=layout.degrees,
        degree_labels=tuple(chord.degree_labels(layout.degrees)),
        note_names=tuple(PitchClass.from_midi(m).spell() for m in match.midis),
        string_group_name=group.name,
        string_group_rank=group.rank,
        strings=group.strings,
        frets=match.frets,
        midis=match.midis,
        fret_span=match.fret_span,
        display_quality=display_quality,
        symbol=symbol,
        tension=tension,
        b9_warning=has_minor_ninth(match.midis),
    )


def sort_voicings(voicings: Iterable[Voicing]) -> list[Voicing]:
    """
    Order voicings for display.

    String-group rank (top, middle, bottom, drop 3 upper, drop 3 lower,
    custom), then chord root, display quality, inversion and frets.
    """
    return sorted(voicings, key=lambda v: v.sort_key())


def filter_by_pinned_strings(
    voicings: Iterable[Voicing],
    bass_string: int | None = None,
    melody_string: int | None = None,
) -> list[Voicing]:
    """Keep voicings whose lowest and/or highest string matches a pinned string."""
    return [
        v
        for v in voicings
        if (bass_string is None or v.lowest_string == bass_string)
        and (melody_string is None or v.highest_string == melody_string)
    ]


def filter_containing(
    voicings: Iterable[Voicing],
    positions: Sequence[tuple[int, int]],
) -> list[Voicing]:
    """Keep voicings that play every (string, fret) position given."""
    return [v for v in voicings if all(v.contains_position(s, f) for s, f in positions)]


class VoicingEngine:
    """
    Finds every playable four-note voicing containing an anchor position.

    Usage:
        engine = VoicingEngine()
        voicings = engine.search("C", "Major", anchor_string=2, anchor_fret=5)
    """

    def __init__(self, max_fret: int = MAX_FRET, catalog: TensionCatalog | None = None):
        self.max_fret = max_fret
        self.catalog = catalog or TensionCatalog()

    # ---- validation -------------------------------------------------

    def _resolve_key(self, key_root: str | PitchClass, scale_name: str | ScaleType) -> Key:
        if isinstance(key_root, PitchClass):
            root = key_root
        else:
            try:
                root = PitchClass.parse(key_root)
            except ValueError as e:
                raise InvalidQueryError(ErrorMessages.INVALID_KEY.format(key=key_root)) from e

        if isinstance(scale_name, ScaleType):
            scale = scale_name
        else:
            try:
                scale = ScaleType.parse(scale_name)
            except ValueError as e:
                raise InvalidQueryError(ErrorMessages.INVALID_SCALE.format(scale=scale_name)) from e

        return Key(root, scale)

    def _validate_position(self, anchor_string: object, anchor_fret: object) -> None:
        if (
            not isinstance(anchor_string, int)
            or isinstance(anchor_string, bool)
            or anchor_string not in OPEN_STRING_MIDI
        ):
            raise InvalidQueryError(ErrorMessages.INVALID_STRING.format(string=anchor_string))
        if (
            not isinstance(anchor_fret, int)
            or isinstance(anchor_fret, bool)
            or not 0 <= anchor_fret <= self.max_fret
        ):
            raise InvalidQueryError(
                ErrorMessages.INVALID_FRET.format(max_fret=self.max_fret, fret=anchor_fret)
            )

    def _resolve_groups(
        self,
        family: VoicingFamily,
        string_groups: str | list[str] | None,
    ) -> tuple[StringGroup, ...]:
        candidates = family_string_groups(family)
        try:
            names = parse_string_groups(string_groups)
        except ValueError as e:
            raise InvalidQueryError(
                ErrorMessages.INVALID_STRING_GROUPS.format(groups=string_groups)
            ) from e
        if names is None:
            return candidates
        return tuple(g for g in candidates if g.name in names)

    # ---- search -----------------------------------------------------

    def search(
        self,
        key_root: str | PitchClass,
        scale_name: str | ScaleType,
        anchor_string: int,
        anchor_fret: int,
        family: VoicingFamily | str = VoicingFamily.CLOSED,
        with_tensions: bool = False,
        max_fret_span: int | None = None,
        string_groups: str | list[str] | None = None,
    ) -> list[Voicing]:
        """
        Enumerate every voicing that includes the anchor position.

        Args:
            key_root: Key root name ('C', 'F#', 'Bb') or PitchClass
            scale_name: Scale name from the catalog ('Major', 'Dorian', ...)
            anchor_string: String number, 1 = high E ... 6 = low E
            anchor_fret: Fret on the anchor string (0..max_fret)
            family: closed, drop2 or drop3
            with_tensions: Also return 9/11/13-substituted voicings
            max_fret_span: Override the family's default span limit
            string_groups: Optional group filter ('top', 'Top, Bottom', ['t', 'b'])

        Returns:
            Sorted voicings; empty when nothing fits (not an error)

        Raises:
            InvalidQueryError: On an unparseable key or scale, a string outside
                1-6, a fret outside 0..max_fret, or an unknown family/group
        """
        key = self._resolve_key(key_root, scale_name)
        self._validate_position(anchor_string, anchor_fret)
        try:
            family = VoicingFamily.parse(family)
        except ValueError as e:
            raise InvalidQueryError(ErrorMessages.INVALID_FAMILY.format(family=family)) from e
        if max_fret_span is not None and max_fret_span < 0:
            raise InvalidQueryError(f"Max fret span must be >= 0, got {max_fret_span}")
        groups = self._resolve_groups(family, string_groups)

        anchor_pc = pitch_class_at(anchor_string, anchor_fret).value
        chords = diatonic_seventh_chords(key)

        logger.debug(
            "Searching %s %s at string %d fret %d (%d chords, %d groups)",
            key,
            family.value,
            anchor_string,
            anchor_fret,
            len(chords),
            len(groups),
        )

        voicings: list[Voicing] = []
        plain_span = family.default_span if max_fret_span is None else max_fret_span

        for chord in chords:
            if not chord.contains(anchor_pc):
                continue
            for inversion in family_inversions(family):
                layout = build_layout(chord.formula, family, inversion, CHORD_DEGREES)
                voicings.extend(
                    self._search_layout(
                        chord, family, layout, groups, anchor_string, anchor_fret, plain_span
                    )
                )

        if with_tensions:
            tension_span = DEFAULT_TENSION_SPAN if max_fret_span is None else max_fret_span
            for chord in chords:
                voicings.extend(
                    self._search_tensions(
                        chord, key, family, groups, anchor_pc, anchor_string, anchor_fret, tension_span
                    )
                )

        logger.debug("Found %d voicings", len(voicings))
        return sort_voicings(voicings)

    def _search_layout(
        self,
        chord: Chord,
        family: VoicingFamily,
        layout: VoicingLayout,
        groups: Sequence[StringGroup],
        anchor_string: int,
        anchor_fret: int,
        max_fret_span: int,
        substitution: TensionSubstitution | None = None,
    ) -> list[Voicing]:
        matches = find_fingerings(
            layout.target_pitch_classes(chord.root.value),
            groups,
            layout.intervals,
            anchor_string,
            anchor_fret,
            max_fret_span,
            self.max_fret,
        )
        return [_make_voicing(chord, family, layout, m, substitution) for m in matches]

    def _search_tensions(
        self,
        chord: Chord,
        key: Key,
        family: VoicingFamily,
        groups: Sequence[StringGroup],
        anchor_pc: int,
        anchor_string: int,
        anchor_fret: int,
        max_fret_span: int,
    ) -> list[Voicing]:
        found: list[Voicing] = []
        for substitution in self.catalog.admissible(chord, key):
            substituted = substituted_formula(chord.formula, substitution)
            if substituted is None:
                continue
            formula, degrees = substituted
            if anchor_pc not in {mod12(chord.root.value + o) for o in formula}:
                continue
            for inversion in family_inversions(family):
                layout = build_layout(formula, family, inversion, degrees)
                found.extend(
                    self._search_layout(
                        chord,
                        family,
                        layout,
                        groups,
                        anchor_string,
                        anchor_fret,
                        max_fret_span,
                        substitution,
                    )
                )
        return found
