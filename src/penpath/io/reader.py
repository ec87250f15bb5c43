"""Readers for path documents and event scripts.

A path document is the JSON form of ``BezierPath.to_dict()``. An event
script is either a JSON list of steps or an object with a ``steps`` list;
see penpath.io.converter for the step format.
"""

import json
from pathlib import Path
from typing import Any

from penpath.domain import BezierPath
from penpath.exceptions import DocumentFormatError, DocumentLoadError, EventScriptError
from penpath.io.converter import ScriptStep, step_from_dict


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise DocumentLoadError(str(path), "file not found")
    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise DocumentLoadError(str(path), f"invalid JSON: {e}") from e
    except OSError as e:
        raise DocumentLoadError(str(path), str(e)) from e


def load_path(path: Path) -> BezierPath:
    """Load a path document.

    Args:
        path: JSON file holding one path

    Returns:
        The loaded path

    Raises:
        DocumentLoadError: If the file is missing or not valid JSON
        DocumentFormatError: If the JSON is not a path document
    """
    data = _read_json(path)
    if not isinstance(data, dict) or not isinstance(data.get("points"), list):
        raise DocumentFormatError(str(path), "expected an object with a 'points' list")
    try:
        return BezierPath.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise DocumentFormatError(str(path), f"invalid point data ({e})") from e


def load_event_script(path: Path) -> list[ScriptStep]:
    """Load an event script.

    Args:
        path: JSON file holding the script

    Returns:
        Events and host steps in order

    Raises:
        DocumentLoadError: If the file is missing or not valid JSON
        DocumentFormatError: If the JSON is not a script or a step is invalid
    """
    data = _read_json(path)
    if isinstance(data, dict):
        data = data.get("steps")
    if not isinstance(data, list):
        raise DocumentFormatError(str(path), "expected a list of steps")
    try:
        return [step_from_dict(entry, i) for i, entry in enumerate(data)]
    except EventScriptError as e:
        raise DocumentFormatError(str(path), str(e)) from e
