"""
Voicing search - layouts, fretboard search and the orchestrating engine.

Pipeline:
    Key -> diatonic chords -> layout (closed / drop 2 / drop 3, tensions)
        -> fretboard search -> sorted Voicing list
"""

from chuk_mcp_fretboard.voicing.engine import (
    InvalidQueryError,
    VoicingEngine,
    family_string_groups,
    filter_by_pinned_strings,
    filter_containing,
    sort_voicings,
)
from chuk_mcp_fretboard.voicing.layout import (
    CLOSED_DEGREE_ORDERS,
    VoicingLayout,
    build_layout,
    closed_absolute_layout,
    closed_layout,
    drop2_layout,
    drop3_layout,
    family_inversions,
    inversion_name,
    substituted_formula,
)
from chuk_mcp_fretboard.voicing.search import FretMatch, find_fingerings, iter_fingerings

__all__ = [
    # Engine
    "InvalidQueryError",
    "VoicingEngine",
    "family_string_groups",
    "filter_by_pinned_strings",
    "filter_containing",
    "sort_voicings",
    # Layout
    "CLOSED_DEGREE_ORDERS",
    "VoicingLayout",
    "build_layout",
    "closed_absolute_layout",
    "closed_layout",
    "drop2_layout",
    "drop3_layout",
    "family_inversions",
    "inversion_name",
    "substituted_formula",
    # Search
    "FretMatch",
    "find_fingerings",
    "iter_fingerings",
]
