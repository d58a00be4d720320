"""
MCP tool implementations.

Tools are organized by domain:
- voicings - Voicing search and MIDI/YAML export
- catalog - Scale, chord and tension discovery
"""

from chuk_mcp_fretboard.tools.catalog import register_catalog_tools
from chuk_mcp_fretboard.tools.voicings import register_voicing_tools

__all__ = [
    "register_catalog_tools",
    "register_voicing_tools",
]
