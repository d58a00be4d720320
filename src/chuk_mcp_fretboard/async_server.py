#!/usr/bin/env python3
"""
Async Fretboard MCP Server using chuk-mcp-server

This server provides MCP tools for finding guitar chord voicings. Pick a key,
a scale and a note on the neck; the server finds every closed, drop 2 and
drop 3 voicing of the diatonic 7th chords that contains it.

The server provides tools for:
- Searching voicings around an anchor note, with tension substitutions
- Filtering by string group, pinned bass/melody string and extra notes
- Listing scales, diatonic chords and admissible tensions
- Exporting results to MIDI and YAML
"""

import logging
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_fretboard.constants import MAX_FRET
from chuk_mcp_fretboard.core import TensionCatalog
from chuk_mcp_fretboard.tools import register_catalog_tools, register_voicing_tools
from chuk_mcp_fretboard.voicing import VoicingEngine

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-fretboard")

# Paths - use standard project structure
BASE_PATH = Path.cwd()
OUTPUT_DIR = BASE_PATH / "output"

# Create the engine
tension_catalog = TensionCatalog()
voicing_engine = VoicingEngine(max_fret=MAX_FRET, catalog=tension_catalog)

# Register all tools
voicing_tools = register_voicing_tools(mcp, voicing_engine, OUTPUT_DIR)
catalog_tools = register_catalog_tools(mcp, tension_catalog)

# Export tool functions for direct access
fretboard_find_voicings = voicing_tools["fretboard_find_voicings"]
fretboard_export_midi = voicing_tools["fretboard_export_midi"]
fretboard_export_yaml = voicing_tools["fretboard_export_yaml"]

fretboard_list_scales = catalog_tools["fretboard_list_scales"]
fretboard_diatonic_chords = catalog_tools["fretboard_diatonic_chords"]
fretboard_list_tensions = catalog_tools["fretboard_list_tensions"]

logger.info("CHUK Fretboard MCP Server initialized")
logger.info(f"  Max fret: {MAX_FRET}")
logger.info(f"  Output dir: {OUTPUT_DIR}")
