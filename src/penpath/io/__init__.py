"""Document I/O layer for penpath.

This module reads and writes the JSON documents the command line works
with. The editing core itself does no I/O.

Key responsibilities:
- Load path documents and event scripts
- Convert script entries to events and effects to dictionaries
- Save path documents and SVG previews

Key functions:
- load_path / load_event_script: Read documents
- save_path / write_svg: Write documents
"""

from penpath.io.converter import (
    AddShape,
    EditRequest,
    ScriptStep,
    effect_to_dict,
    step_from_dict,
)
from penpath.io.reader import load_event_script, load_path
from penpath.io.writer import render_svg, save_path, write_svg

__all__ = [
    "AddShape",
    "EditRequest",
    "ScriptStep",
    "effect_to_dict",
    "load_event_script",
    "load_path",
    "render_svg",
    "save_path",
    "step_from_dict",
    "write_svg",
]
