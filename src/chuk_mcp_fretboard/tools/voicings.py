"""
Voicing tools - MCP tools for voicing search and export.

Tools for finding voicings around an anchor note, and for exporting a
result list as MIDI or YAML.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from chuk_mcp_fretboard.compiler import voicings_to_midi
from chuk_mcp_fretboard.constants import ErrorMessages, SuccessMessages
from chuk_mcp_fretboard.models import Voicing
from chuk_mcp_fretboard.voicing import (
    InvalidQueryError,
    VoicingEngine,
    filter_by_pinned_strings,
    filter_containing,
)

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _parse_positions(positions: list[list[int]] | None) -> list[tuple[int, int]]:
    if not positions:
        return []
    parsed: list[tuple[int, int]] = []
    for pos in positions:
        if len(pos) != 2:
            raise InvalidQueryError(f"Position must be [string, fret], got {pos}")
        parsed.append((int(pos[0]), int(pos[1])))
    return parsed


def _select(voicings: list[Voicing], indices: list[int] | None) -> list[Voicing]:
    """Pick voicings by their 1-based result number."""
    if not indices:
        return voicings
    out: list[Voicing] = []
    for n in indices:
        if not 1 <= n <= len(voicings):
            raise InvalidQueryError(f"Voicing number {n} out of range 1-{len(voicings)}")
        out.append(voicings[n - 1])
    return out


def voicing_to_dict(voicing: Voicing, index: int) -> dict[str, Any]:
    """JSON-ready view of a voicing with its text line and voicing map."""
    data = voicing.model_dump(mode="json")
    data["number"] = index + 1
    data["text"] = voicing.to_text(index)
    data["voicing_map"] = voicing.voicing_map()
    return data


def register_voicing_tools(
    mcp: ChukMCPServer,
    engine: VoicingEngine,
    output_dir: Path,
) -> dict[str, Any]:
    """
    Register voicing search/export tools with the MCP server.

    Args:
        mcp: The MCP server instance
        engine: The voicing engine
        output_dir: Directory for output files

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    def run_query(
        key: str,
        scale: str,
        string: int,
        fret: int,
        family: str,
        with_tensions: bool,
        max_fret_span: int | None,
        string_groups: str | None,
        bass_string: int | None = None,
        melody_string: int | None = None,
        positions: list[list[int]] | None = None,
    ) -> list[Voicing]:
        voicings = engine.search(
            key,
            scale,
            string,
            fret,
            family=family,
            with_tensions=with_tensions,
            max_fret_span=max_fret_span,
            string_groups=string_groups,
        )
        if bass_string is not None or melody_string is not None:
            voicings = filter_by_pinned_strings(voicings, bass_string, melody_string)
        required = _parse_positions(positions)
        if required:
            voicings = filter_containing(voicings, required)
        return voicings

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_find_voicings(
        key: str,
        scale: str,
        string: int,
        fret: int,
        family: str = "closed",
        with_tensions: bool = False,
        max_fret_span: int | None = None,
        string_groups: str | None = None,
        bass_string: int | None = None,
        melody_string: int | None = None,
        positions: list[list[int]] | None = None,
    ) -> str:
        """
        Find every playable 4-note voicing that contains a fretboard note.

        Searches the diatonic 7th chords of the key (plus their 6th-chord
        equivalents) for fingerings that include the given string and fret.

        Args:
            key: Key root ('C', 'F#', 'Bb')
            scale: Scale name ('Major', 'Dorian', 'Harmonic Minor', ...)
            string: String number, 1 = high E ... 6 = low E
            fret: Fret on that string (0-24)
            family: 'closed', 'drop2' or 'drop3'
            with_tensions: Also include 9/11/13 substitutions
            max_fret_span: Override the default span (4 closed, 5 otherwise)
            string_groups: Optional filter ('Top', 'Top, Bottom', 't,b', 'upper')
            bass_string: Keep only voicings whose lowest string is this one
            melody_string: Keep only voicings whose highest string is this one
            positions: Extra [string, fret] pairs every voicing must contain

        Returns:
            JSON string with the sorted voicings

        Example:
            fretboard_find_voicings(key="C", scale="Major", string=2, fret=5)
        """
        try:
            voicings = run_query(
                key,
                scale,
                string,
                fret,
                family,
                with_tensions,
                max_fret_span,
                string_groups,
                bass_string,
                melody_string,
                positions,
            )

            message = (
                SuccessMessages.VOICINGS_FOUND.format(count=len(voicings))
                if voicings
                else ErrorMessages.NO_VOICINGS
            )
            return json.dumps(
                {
                    "status": "success",
                    "count": len(voicings),
                    "voicings": [voicing_to_dict(v, i) for i, v in enumerate(voicings)],
                    "message": message,
                }
            )
        except Exception as e:
            logger.exception("Failed to find voicings")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_find_voicings"] = fretboard_find_voicings

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_export_midi(
        key: str,
        scale: str,
        string: int,
        fret: int,
        family: str = "closed",
        with_tensions: bool = False,
        string_groups: str | None = None,
        numbers: list[int] | None = None,
        output_name: str | None = None,
        tempo_bpm: int = 90,
        beats_per_chord: float = 2.0,
    ) -> str:
        """
        Export voicings as a MIDI file of block chords.

        Runs the same search as fretboard_find_voicings, then writes the
        chosen results (all by default) one chord after another.

        Args:
            key: Key root ('C', 'F#', 'Bb')
            scale: Scale name
            string: Anchor string number (1-6)
            fret: Anchor fret
            family: 'closed', 'drop2' or 'drop3'
            with_tensions: Also include 9/11/13 substitutions
            string_groups: Optional string-group filter
            numbers: Result numbers to export (1-based, as listed)
            output_name: Optional output filename (without .mid extension)
            tempo_bpm: Playback tempo
            beats_per_chord: How long each chord is held

        Returns:
            JSON string with the file path

        Example:
            fretboard_export_midi(key="C", scale="Major", string=5, fret=10,
                                  family="drop2", numbers=[1, 2])
        """
        try:
            voicings = run_query(
                key, scale, string, fret, family, with_tensions, None, string_groups
            )
            if not voicings:
                return json.dumps({"status": "error", "message": ErrorMessages.NO_VOICINGS})

            selected = _select(voicings, numbers)
            midi = voicings_to_midi(selected, tempo_bpm=tempo_bpm, beats_per_chord=beats_per_chord)

            filename = f"{output_name or f'voicings_{key}_{string}_{fret}'}.mid"
            output_path = output_dir / filename
            output_dir.mkdir(parents=True, exist_ok=True)
            midi.save(str(output_path))

            return json.dumps(
                {
                    "status": "success",
                    "path": str(output_path),
                    "count": len(selected),
                    "chords": [v.symbol for v in selected],
                    "message": SuccessMessages.MIDI_EXPORTED.format(
                        count=len(selected), path=output_path
                    ),
                }
            )
        except Exception as e:
            logger.exception("Failed to export MIDI")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_export_midi"] = fretboard_export_midi

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_export_yaml(
        key: str,
        scale: str,
        string: int,
        fret: int,
        family: str = "closed",
        with_tensions: bool = False,
        string_groups: str | None = None,
    ) -> str:
        """
        Export a voicing search as YAML.

        Useful for saving a chord sheet or diffing results between keys.

        Args:
            key: Key root ('C', 'F#', 'Bb')
            scale: Scale name
            string: Anchor string number (1-6)
            fret: Anchor fret
            family: 'closed', 'drop2' or 'drop3'
            with_tensions: Also include 9/11/13 substitutions
            string_groups: Optional string-group filter

        Returns:
            JSON string with YAML content

        Example:
            fretboard_export_yaml(key="G", scale="Mixolydian", string=3, fret=7)
        """
        try:
            import yaml

            voicings = run_query(
                key, scale, string, fret, family, with_tensions, None, string_groups
            )
            doc = {
                "query": {
                    "key": key,
                    "scale": scale,
                    "string": string,
                    "fret": fret,
                    "family": family,
                    "with_tensions": with_tensions,
                },
                "voicings": [
                    {
                        "text": v.to_text(i),
                        "chord": v.symbol,
                        "inversion": v.inversion,
                        "degrees": list(v.degree_labels),
                        "strings": list(v.strings),
                        "frets": list(v.frets),
                        "tension": v.tension.label if v.tension else None,
                    }
                    for i, v in enumerate(voicings)
                ],
            }
            yaml_content = yaml.safe_dump(doc, default_flow_style=False, sort_keys=False)

            return json.dumps(
                {
                    "status": "success",
                    "count": len(voicings),
                    "yaml": yaml_content,
                }
            )
        except Exception as e:
            logger.exception("Failed to export YAML")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_export_yaml"] = fretboard_export_yaml

    return tools
