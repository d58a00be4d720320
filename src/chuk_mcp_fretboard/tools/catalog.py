"""
Catalog tools - MCP tools for scale, chord and tension discovery.

These never touch the fretboard; they answer "what is diatonic here" so a
caller can pick a sensible anchor before searching.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_fretboard.constants import ErrorMessages
from chuk_mcp_fretboard.core import (
    SCALE_CATALOG,
    Chord,
    Key,
    PitchClass,
    ScaleType,
    TensionCatalog,
    diatonic_seventh_chords,
)

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _resolve_key(key: str, scale: str) -> Key:
    try:
        root = PitchClass.parse(key)
    except ValueError as e:
        raise ValueError(ErrorMessages.INVALID_KEY.format(key=key)) from e
    try:
        scale_type = ScaleType.parse(scale)
    except ValueError as e:
        raise ValueError(ErrorMessages.INVALID_SCALE.format(scale=scale)) from e
    return Key(root, scale_type)


def _chord_dict(chord: Chord) -> dict[str, Any]:
    return {
        "symbol": chord.symbol,
        "root": chord.root.spell(),
        "quality": chord.label,
        "display_quality": chord.display_quality,
        "formula": list(chord.formula),
        "scale_degree": chord.scale_degree,
        "notes": [p.spell() for p in chord.get_pitches()],
    }


def register_catalog_tools(
    mcp: ChukMCPServer,
    catalog: TensionCatalog | None = None,
) -> dict[str, Any]:
    """
    Register catalog discovery tools with the MCP server.

    Args:
        mcp: The MCP server instance
        catalog: Tension catalog (default table when omitted)

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}
    tension_catalog = catalog or TensionCatalog()

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_list_scales() -> str:
        """
        List every scale the voicing search understands.

        Only 7-note scales have diatonic 7th chords; the others are listed
        but always give empty voicing results.

        Returns:
            JSON string with scale names and formulas

        Example:
            fretboard_list_scales()
        """
        try:
            scales = [
                {
                    "name": name,
                    "formula": list(scale.formula),
                    "size": scale.size,
                    "has_seventh_chords": scale.is_heptatonic,
                }
                for name, scale in SCALE_CATALOG.items()
            ]
            return json.dumps({"status": "success", "count": len(scales), "scales": scales})
        except Exception as e:
            logger.exception("Failed to list scales")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_list_scales"] = fretboard_list_scales

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_diatonic_chords(key: str, scale: str) -> str:
        """
        List the diatonic 7th chords of a key, plus derived 6th chords.

        Args:
            key: Key root ('C', 'F#', 'Bb')
            scale: Scale name ('Major', 'Dorian', ...)

        Returns:
            JSON string with chords in scale order

        Example:
            fretboard_diatonic_chords(key="A", scale="Harmonic Minor")
        """
        try:
            k = _resolve_key(key, scale)
            chords = diatonic_seventh_chords(k)
            return json.dumps(
                {
                    "status": "success",
                    "key": str(k),
                    "count": len(chords),
                    "chords": [_chord_dict(c) for c in chords],
                }
            )
        except Exception as e:
            logger.exception("Failed to list diatonic chords")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_diatonic_chords"] = fretboard_diatonic_chords

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_list_tensions(key: str, scale: str) -> str:
        """
        List the tension substitutions each diatonic chord may take.

        A substitution is listed only when the tension is allowed on the
        chord quality and its note belongs to the scale.

        Args:
            key: Key root ('C', 'F#', 'Bb')
            scale: Scale name

        Returns:
            JSON string with per-chord substitution labels

        Example:
            fretboard_list_tensions(key="C", scale="Major")
        """
        try:
            k = _resolve_key(key, scale)
            chords = []
            for chord in diatonic_seventh_chords(k):
                subs = tension_catalog.admissible(chord, k)
                chords.append(
                    {
                        "symbol": chord.symbol,
                        "allowed": sorted(t.value for t in tension_catalog.allowed(chord.quality)),
                        "substitutions": [s.label for s in subs],
                    }
                )
            return json.dumps({"status": "success", "key": str(k), "chords": chords})
        except Exception as e:
            logger.exception("Failed to list tensions")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_list_tensions"] = fretboard_list_tensions

    return tools
