"""Converters between JSON documents and domain models.

This module handles the conversion between plain dictionaries (as read from
event scripts) and the pen tool's events and effects. Besides input events,
a script may contain two host steps:

- ``{"type": "shape", "path": {...}}`` registers an existing shape
- ``{"type": "edit", "shape": "<id>"}`` puts a shape into edit mode
"""

from dataclasses import dataclass
from typing import Any

from penpath.domain import (
    BezierPath,
    CursorChanged,
    DoubleClick,
    Effect,
    Event,
    EventTarget,
    HandleDrag,
    KeyDown,
    Modifiers,
    PointerDown,
    PointerMove,
    PointerUp,
    ReselectScheduled,
    ShapeDeleted,
    ShapesSelected,
    ShapeUpdated,
    TimerElapsed,
    TimerScheduled,
    ToolChanged,
    Vec,
)
from penpath.exceptions import EventScriptError


@dataclass(frozen=True)
class AddShape:
    """Script step registering an existing shape with the tool."""

    path: BezierPath


@dataclass(frozen=True)
class EditRequest:
    """Script step putting a registered shape into edit mode."""

    shape_id: str


ScriptStep = Event | AddShape | EditRequest

_POINTER_EVENTS: dict[str, type] = {
    "pointer_move": PointerMove,
    "pointer_up": PointerUp,
    "double_click": DoubleClick,
}


def _modifiers(data: dict[str, Any]) -> Modifiers:
    return Modifiers(
        shift=bool(data.get("shift", False)),
        alt=bool(data.get("alt", False)),
        ctrl=bool(data.get("ctrl", False)),
    )


def _point(data: dict[str, Any], index: int) -> Vec:
    try:
        return Vec(float(data["x"]), float(data["y"]))
    except (KeyError, TypeError, ValueError) as e:
        raise EventScriptError(index, f"missing or invalid coordinates ({e})") from e


def _number(data: dict[str, Any], key: str, default: float, index: int) -> float:
    try:
        return float(data.get(key, default))
    except (TypeError, ValueError) as e:
        raise EventScriptError(index, f"invalid '{key}' ({e})") from e


def step_from_dict(data: dict[str, Any], index: int) -> ScriptStep:
    """Convert one script entry to an event or host step.

    Args:
        data: Script entry with a ``type`` field
        index: Position of the entry, for error messages

    Returns:
        Event, AddShape or EditRequest

    Raises:
        EventScriptError: If the entry cannot be interpreted
    """
    if not isinstance(data, dict):
        raise EventScriptError(index, "entry is not an object")

    kind = data.get("type")
    time_ms = _number(data, "time_ms", 0.0, index)
    zoom = _number(data, "zoom", 1.0, index)

    if kind == "pointer_down":
        target_name = data.get("target", EventTarget.CANVAS.value)
        try:
            target = EventTarget(target_name)
        except ValueError as e:
            raise EventScriptError(index, f"unknown target '{target_name}'") from e
        return PointerDown(
            point=_point(data, index),
            zoom=zoom,
            target=target,
            modifiers=_modifiers(data),
            time_ms=time_ms,
        )

    if kind in _POINTER_EVENTS:
        return _POINTER_EVENTS[kind](
            point=_point(data, index),
            zoom=zoom,
            modifiers=_modifiers(data),
            time_ms=time_ms,
        )

    if kind == "key":
        if "key" not in data:
            raise EventScriptError(index, "key event without 'key'")
        return KeyDown(key=str(data["key"]), modifiers=_modifiers(data), time_ms=time_ms)

    if kind == "handle_drag":
        if "handle" not in data:
            raise EventScriptError(index, "handle drag without 'handle'")
        return HandleDrag(
            handle_id=str(data["handle"]),
            point=_point(data, index),
            zoom=zoom,
            modifiers=_modifiers(data),
            time_ms=time_ms,
        )

    if kind == "timer":
        return TimerElapsed(name=str(data.get("name", "")), time_ms=time_ms)

    if kind == "shape":
        try:
            return AddShape(BezierPath.from_dict(data["path"]))
        except (KeyError, TypeError, ValueError) as e:
            raise EventScriptError(index, f"invalid shape ({e})") from e

    if kind == "edit":
        if "shape" not in data:
            raise EventScriptError(index, "edit step without 'shape'")
        return EditRequest(str(data["shape"]))

    raise EventScriptError(index, f"unknown event type '{kind}'")


def effect_to_dict(effect: Effect) -> dict[str, Any]:
    """Serialize an effect for display or logging.

    Args:
        effect: Effect produced by the state machine

    Returns:
        Dictionary with a ``type`` field and the effect's data
    """
    if isinstance(effect, ShapeUpdated):
        return {"type": "shape_updated", "path": effect.path.to_dict()}
    if isinstance(effect, ShapeDeleted):
        return {"type": "shape_deleted", "shape": effect.shape_id}
    if isinstance(effect, ShapesSelected):
        return {"type": "shapes_selected", "shapes": list(effect.shape_ids)}
    if isinstance(effect, CursorChanged):
        return {"type": "cursor_changed", "cursor": effect.cursor.value}
    if isinstance(effect, ReselectScheduled):
        return {"type": "reselect_scheduled", "shape": effect.shape_id, "delay_ms": effect.delay_ms}
    if isinstance(effect, TimerScheduled):
        return {"type": "timer_scheduled", "name": effect.name, "delay_ms": effect.delay_ms}
    if isinstance(effect, ToolChanged):
        return {"type": "tool_changed", "tool": effect.tool}
    raise TypeError(f"Unknown effect: {effect!r}")
