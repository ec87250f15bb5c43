"""Core editing algorithms for penpath.

This module contains the core algorithms for:

- Curve algebra (evaluation, projection, subdivision, length, sampling)
- Bounds and renormalization (accurate curve bounds, stable-origin boxes)
- Point editing (selection, deletion, type toggling, insertion, dragging)
- The pen tool state machine (creating and editing paths from input events)

All geometry and editing functions are:
- Pure (inputs are never mutated)
- Silent on invariant violations (the input comes back unchanged)

Key functions:
- segment_between: Build the curve between two anchors
- accurate_bounds: Tight bounds over the rendered path
- renormalize: Re-base a path at its bounds origin
- to_path_data: SVG path data for a path
- transition: Pure (state, event) -> (state, effects) step

Key classes:
- Segment: A linear, quadratic or cubic segment
- PathHitTester: Zoom-aware hit testing
- PenTool: Stateful adapter around the state machine
"""

from penpath.core.bounds import (
    NormalizedPoints,
    accurate_bounds,
    bounds_changed,
    creation_bounds,
    edit_mode_bounds,
    recalculate_bounds,
    renormalize,
    rest_bounds,
    shape_center,
    single_point_bounds,
)
from penpath.core.curve import (
    Projection,
    Segment,
    SplitResult,
    path_length,
    path_segments,
    sample_path,
    segment_between,
)
from penpath.core.geometry import (
    constrain_angle,
    distance,
    nearest_point_on_line,
    normalize,
    smooth_control_points,
)
from penpath.core.hit_test import PathHitTester, SegmentHit
from penpath.core.interaction import (
    SegmentDrag,
    apply_handle_drag,
    apply_segment_drag,
    begin_segment_drag,
    clear_selection,
    delete_selected_points,
    enter_edit_mode,
    exit_edit_mode,
    handle_refs,
    insert_point_on_segment,
    select_point,
    toggle_edit_mode,
    toggle_point_type,
)
from penpath.core.machine import (
    CreatingState,
    DragSession,
    EditingState,
    IdleState,
    State,
    Transition,
    transition,
)
from penpath.core.path_data import format_number, normalize_points, to_path_data
from penpath.core.tool import PenTool

__all__ = [
    # Curve classes
    "Projection",
    "Segment",
    "SegmentHit",
    "SplitResult",
    # Bounds
    "NormalizedPoints",
    "accurate_bounds",
    "bounds_changed",
    "creation_bounds",
    "edit_mode_bounds",
    "recalculate_bounds",
    "renormalize",
    "rest_bounds",
    "shape_center",
    "single_point_bounds",
    # Curve functions
    "path_length",
    "path_segments",
    "sample_path",
    "segment_between",
    # Geometry functions
    "constrain_angle",
    "distance",
    "nearest_point_on_line",
    "normalize",
    "smooth_control_points",
    # Path data
    "format_number",
    "normalize_points",
    "to_path_data",
    # Interaction
    "PathHitTester",
    "SegmentDrag",
    "apply_handle_drag",
    "apply_segment_drag",
    "begin_segment_drag",
    "clear_selection",
    "delete_selected_points",
    "enter_edit_mode",
    "exit_edit_mode",
    "handle_refs",
    "insert_point_on_segment",
    "select_point",
    "toggle_edit_mode",
    "toggle_point_type",
    # State machine
    "CreatingState",
    "DragSession",
    "EditingState",
    "IdleState",
    "PenTool",
    "State",
    "Transition",
    "transition",
]
