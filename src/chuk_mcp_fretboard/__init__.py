"""
CHUK Fretboard - guitar chord voicing search as an MCP server.

Layers:
- core: pitch, fretboard, scale, chord and tension primitives
- voicing: layouts, fretboard search and the voicing engine
- models: pydantic output models
- compiler: MIDI export
- tools: MCP tool registration
"""

__version__ = "0.1.0"
