"""Point-level editing operations on a path.

Every operation takes a BezierPath (or a point tuple) and returns a new
value; inputs are never mutated. Invariant violations such as deleting down
to fewer than two points are rejected by returning the input unchanged.
Malformed handle references are logged and ignored.
"""

from collections.abc import Sequence
from dataclasses import dataclass, replace

import structlog

from penpath.config import PenPathSettings, get_default_settings
from penpath.core.bounds import bounds_changed, renormalize
from penpath.core.curve import segment_between, segment_count
from penpath.core.geometry import smooth_control_points
from penpath.domain import AnchorPoint, BezierPath, HandleKind, HandleRef, Vec

logger = structlog.get_logger(__name__)


# === Edit mode ===


def toggle_edit_mode(path: BezierPath, settings: PenPathSettings | None = None) -> BezierPath:
    """Flip edit mode on or off."""
    if path.edit_mode:
        return exit_edit_mode(path, settings)
    return enter_edit_mode(path)


def enter_edit_mode(path: BezierPath) -> BezierPath:
    """Show point handles. The current selection is kept."""
    if path.edit_mode:
        return path
    return replace(path, edit_mode=True)


def exit_edit_mode(path: BezierPath, settings: PenPathSettings | None = None) -> BezierPath:
    """Hide point handles, clear the selection and renormalize."""
    settings = settings or get_default_settings()
    exited = replace(path, edit_mode=False, selected_point_indices=frozenset())
    return renormalize(exited, settings.bounds.min_extent)


# === Selection ===


def select_point(path: BezierPath, index: int, additive: bool = False) -> BezierPath:
    """Update the point selection after a click on an anchor.

    A plain click selects only ``index``, or clears the selection when
    ``index`` is already the sole selected point. An additive click toggles
    ``index`` in the existing selection.

    Args:
        path: Path being edited
        index: Clicked anchor index
        additive: Whether the selection modifier (shift) is held

    Returns:
        Path with the new selection; unchanged for an out-of-range index
    """
    if not 0 <= index < len(path.points):
        return path

    current = path.selected_point_indices
    if additive:
        selected = current - {index} if index in current else current | {index}
    elif current == {index}:
        selected = frozenset()
    else:
        selected = frozenset({index})

    logger.debug("Point selection changed", index=index, additive=additive, selected=sorted(selected))
    return replace(path, selected_point_indices=selected)


def clear_selection(path: BezierPath) -> BezierPath:
    if not path.selected_point_indices:
        return path
    return replace(path, selected_point_indices=frozenset())


# === Structural edits ===


def delete_selected_points(path: BezierPath, settings: PenPathSettings | None = None) -> BezierPath:
    """Delete the selected points.

    The deletion is rejected, leaving path and selection untouched, if it
    would leave fewer than two points.

    Args:
        path: Path being edited
        settings: Settings for renormalization

    Returns:
        Renormalized path without the selected points and with an empty
        selection, or the input path if nothing was deleted
    """
    selected = path.selected_point_indices
    if not selected:
        return path
    if len(path.points) - len(selected) < 2:
        logger.debug("Delete rejected", points=len(path.points), selected=len(selected))
        return path

    settings = settings or get_default_settings()
    points = list(path.points)
    for index in sorted(selected, reverse=True):
        if 0 <= index < len(points):
            del points[index]

    logger.debug("Deleted points", indices=sorted(selected), remaining=len(points))
    updated = replace(path, points=tuple(points), selected_point_indices=frozenset())
    return renormalize(updated, settings.bounds.min_extent)


def toggle_point_type(
    path: BezierPath,
    index: int,
    settings: PenPathSettings | None = None,
) -> BezierPath:
    """Convert a point between corner and smooth.

    A smooth point loses both control points. A corner point gets symmetric
    control points along the direction between its neighbours.

    Args:
        path: Path being edited
        index: Anchor index to convert
        settings: Settings for handle length and renormalization

    Returns:
        Updated path; unchanged for an out-of-range index
    """
    if not 0 <= index < len(path.points):
        return path

    settings = settings or get_default_settings()
    point = path.points[index]
    if point.is_smooth:
        converted = point.as_corner()
        logger.debug("Converted to corner point", index=index)
    else:
        prev, next_ = path.neighbors(index)
        cp1, cp2 = smooth_control_points(
            prev.position if prev is not None else None,
            point.position,
            next_.position if next_ is not None else None,
            settings.handles.control_offset,
        )
        converted = point.with_controls(cp1, cp2)
        logger.debug("Converted to smooth point", index=index)

    points = list(path.points)
    points[index] = converted
    updated = path.with_points(points)
    if bounds_changed(path.points, updated.points, path.is_closed, settings.bounds.change_threshold):
        updated = renormalize(updated, settings.bounds.min_extent)
    return updated


def insert_point_on_segment(
    path: BezierPath,
    segment_index: int,
    t: float,
    settings: PenPathSettings | None = None,
) -> BezierPath:
    """Split a segment and insert a new anchor at parameter t.

    The left endpoint's outgoing control and the right endpoint's incoming
    control, where present, take the values of the De Casteljau sub-curves.
    The new anchor is inserted between the endpoints (appended when the
    closing segment is split) and becomes the only selected point.

    Args:
        path: Path being edited
        segment_index: Segment to split
        t: Split parameter in [0, 1]
        settings: Settings for handle length, quadrature and renormalization

    Returns:
        Renormalized path with the new point; unchanged for an invalid
        segment index
    """
    n = len(path.points)
    if not 0 <= segment_index < segment_count(n, path.is_closed):
        logger.warning("Segment index out of range", segment_index=segment_index, points=n)
        return path

    settings = settings or get_default_settings()
    left_index = segment_index
    right_index = (segment_index + 1) % n
    p1 = path.points[left_index]
    p2 = path.points[right_index]

    result = segment_between(p1, p2).split(
        t,
        settings.handles.split_handle_fraction,
        settings.sampling.quadrature_order,
    )

    points = list(path.points)
    if p1.cp2 is not None:
        points[left_index] = replace(p1, cp2=result.left.controls[1])
    if p2.cp1 is not None:
        points[right_index] = replace(p2, cp1=result.right.controls[-2])

    if right_index == 0:
        points.append(result.point)
        new_index = len(points) - 1
    else:
        points.insert(right_index, result.point)
        new_index = right_index

    logger.debug("Inserted point", segment_index=segment_index, t=round(t, 4), index=new_index)
    updated = replace(path, points=tuple(points), selected_point_indices=frozenset({new_index}))
    return renormalize(updated, settings.bounds.min_extent)


# === Dragging ===


def apply_handle_drag(
    points: Sequence[AnchorPoint],
    handle: HandleRef | str,
    position: Vec,
    break_symmetry: bool = False,
) -> tuple[AnchorPoint, ...]:
    """Move one handle to a new position.

    Dragging an anchor translates it together with both control points.
    Dragging a control point moves only that control point, and unless
    ``break_symmetry`` is set the opposite control point (when present) is
    mirrored through the anchor.

    Args:
        points: Anchor points, in the same space as ``position``
        handle: Handle reference or host handle identifier
        position: New handle position
        break_symmetry: Leave the opposite control point alone

    Returns:
        Updated points; unchanged for a malformed or out-of-range handle
    """
    ref = HandleRef.parse(handle) if isinstance(handle, str) else handle
    if ref is None or not 0 <= ref.point_index < len(points):
        logger.warning("Ignoring drag of unknown handle", handle=str(handle), points=len(points))
        return tuple(points)

    point = points[ref.point_index]
    anchor = point.position
    if ref.kind is HandleKind.ANCHOR:
        moved = point.translated(position.x - anchor.x, position.y - anchor.y)
    else:
        mirrored = anchor - (position - anchor)
        if ref.kind is HandleKind.CP1:
            cp2 = mirrored if not break_symmetry and point.cp2 is not None else point.cp2
            moved = point.with_controls(position, cp2)
        else:
            cp1 = mirrored if not break_symmetry and point.cp1 is not None else point.cp1
            moved = point.with_controls(cp1, position)

    updated = list(points)
    updated[ref.point_index] = moved
    return tuple(updated)


@dataclass(frozen=True, slots=True)
class SegmentDrag:
    """Pre-drag control positions for pulling a segment.

    Attributes:
        segment_index: Segment being pulled
        left_index: Index of the segment's start anchor
        right_index: Index of the segment's end anchor
        left_cp2: Original outgoing control of the start anchor, or the anchor
        right_cp1: Original incoming control of the end anchor, or the anchor
    """

    segment_index: int
    left_index: int
    right_index: int
    left_cp2: Vec
    right_cp1: Vec


def begin_segment_drag(
    points: Sequence[AnchorPoint],
    is_closed: bool,
    segment_index: int,
) -> SegmentDrag | None:
    """Record the control positions a segment drag starts from.

    Returns:
        SegmentDrag, or None for an invalid segment index
    """
    n = len(points)
    if not 0 <= segment_index < segment_count(n, is_closed):
        return None
    left = points[segment_index]
    right = points[(segment_index + 1) % n]
    return SegmentDrag(
        segment_index=segment_index,
        left_index=segment_index,
        right_index=(segment_index + 1) % n,
        left_cp2=left.cp2 if left.cp2 is not None else left.position,
        right_cp1=right.cp1 if right.cp1 is not None else right.position,
    )


def apply_segment_drag(
    points: Sequence[AnchorPoint],
    drag: SegmentDrag,
    delta: Vec,
) -> tuple[AnchorPoint, ...]:
    """Pull a segment by moving its inner control points.

    Both facing controls become their pre-drag value plus ``delta``, so the
    curve bulges toward the pointer while the anchors stay put.

    Args:
        points: Anchor points
        drag: Pre-drag state from begin_segment_drag
        delta: Pointer movement since the drag started

    Returns:
        Updated points
    """
    updated = list(points)
    if drag.left_index >= len(updated) or drag.right_index >= len(updated):
        logger.warning("Segment drag no longer matches path", segment_index=drag.segment_index)
        return tuple(points)
    left = updated[drag.left_index]
    right = updated[drag.right_index]
    updated[drag.left_index] = replace(left, cp2=drag.left_cp2 + delta)
    updated[drag.right_index] = replace(right, cp1=drag.right_cp1 + delta)
    return tuple(updated)


def handle_refs(path: BezierPath) -> list[tuple[HandleRef, Vec]]:
    """List the draggable handles of a path in edit mode.

    Args:
        path: Path to inspect

    Returns:
        (handle, local position) pairs; empty when edit mode is off
    """
    if not path.edit_mode:
        return []
    handles: list[tuple[HandleRef, Vec]] = []
    for i, point in enumerate(path.points):
        handles.append((HandleRef(i, HandleKind.ANCHOR), point.position))
        if point.cp1 is not None:
            handles.append((HandleRef(i, HandleKind.CP1), point.cp1))
        if point.cp2 is not None:
            handles.append((HandleRef(i, HandleKind.CP2), point.cp2))
    return handles
