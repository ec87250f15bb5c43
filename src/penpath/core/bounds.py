"""Bounding boxes and coordinate renormalization for paths.

Bounds are always measured over the rendered curve, never over anchors
alone, because curvature can bulge past the anchor hull. At rest a path's
points are stored relative to the minimum corner of those bounds and the
shape position absorbs that corner, so local coordinates never go negative.

While a path is being drawn the box is instead kept symmetric around the
first click so the shape's origin does not jump as points are added.
"""

from collections.abc import Sequence
from dataclasses import dataclass, replace

from penpath.core.curve import path_segments
from penpath.domain import AnchorPoint, BezierPath, Bounds, Rect, Vec

DEFAULT_BOUNDS = Bounds(0.0, 0.0, 1.0, 1.0)


@dataclass(frozen=True)
class NormalizedPoints:
    """Points re-based to their bounding-box origin.

    Attributes:
        points: Anchor points shifted by ``-offset``
        w: Width of the bounds, at least the minimum extent
        h: Height of the bounds, at least the minimum extent
        offset: Minimum corner of the original bounds
    """

    points: tuple[AnchorPoint, ...]
    w: float
    h: float
    offset: Vec


def _point_and_controls(point: AnchorPoint) -> list[Vec]:
    positions = [point.position]
    if point.cp1 is not None:
        positions.append(point.cp1)
    if point.cp2 is not None:
        positions.append(point.cp2)
    return positions


def _shift(points: Sequence[AnchorPoint], dx: float, dy: float) -> tuple[AnchorPoint, ...]:
    return tuple(p.translated(dx, dy) for p in points)


def accurate_bounds(points: Sequence[AnchorPoint], is_closed: bool) -> Bounds:
    """Compute tight bounds over the rendered path.

    Args:
        points: Anchor points of the path
        is_closed: Whether the closing segment is included

    Returns:
        Union of every segment's bounding box. An empty path yields
        ``Bounds(0, 0, 1, 1)``; a single point yields the box of its anchor
        and control points.
    """
    if not points:
        return DEFAULT_BOUNDS
    if len(points) == 1:
        return Bounds.from_points(_point_and_controls(points[0]))

    first, *rest = path_segments(points, is_closed)
    result = first.bbox()
    for segment in rest:
        result = result.union(segment.bbox())
    return result


def recalculate_bounds(
    points: Sequence[AnchorPoint],
    is_closed: bool,
    min_extent: float = 1.0,
) -> NormalizedPoints:
    """Re-base points at their accurate bounds origin.

    Args:
        points: Anchor points of the path
        is_closed: Whether the closing segment is included
        min_extent: Smallest width or height reported

    Returns:
        NormalizedPoints whose offset the caller adds to the shape position
    """
    bounds = accurate_bounds(points, is_closed)
    return NormalizedPoints(
        points=_shift(points, -bounds.min_x, -bounds.min_y),
        w=max(min_extent, bounds.width),
        h=max(min_extent, bounds.height),
        offset=bounds.origin,
    )


def renormalize(path: BezierPath, min_extent: float = 1.0) -> BezierPath:
    """Renormalize a path so its local bounds start at (0, 0).

    The visual position is unchanged: the offset removed from the points is
    added to the shape position. Applying this twice is the same as once.

    Args:
        path: Path to normalize
        min_extent: Smallest width or height stored

    Returns:
        Normalized copy of the path
    """
    normalized = recalculate_bounds(path.points, path.is_closed, min_extent)
    return replace(
        path,
        points=normalized.points,
        x=path.x + normalized.offset.x,
        y=path.y + normalized.offset.y,
        w=normalized.w,
        h=normalized.h,
    )


def bounds_changed(
    prev: Sequence[AnchorPoint],
    next_: Sequence[AnchorPoint],
    is_closed: bool,
    threshold: float = 0.01,
) -> bool:
    """Check whether an edit moved or resized the accurate bounds.

    Args:
        prev: Points before the edit
        next_: Points after the edit
        is_closed: Whether the closing segment is included
        threshold: Largest change still treated as unchanged

    Returns:
        True if width, height or origin moved by more than the threshold
    """
    a = accurate_bounds(prev, is_closed)
    b = accurate_bounds(next_, is_closed)
    return (
        abs(a.width - b.width) > threshold
        or abs(a.height - b.height) > threshold
        or abs(a.min_x - b.min_x) > threshold
        or abs(a.min_y - b.min_y) > threshold
    )


def creation_bounds(
    points: Sequence[AnchorPoint],
    origin: Vec,
    padding: float = 10.0,
    min_extent: float = 1.0,
) -> tuple[Rect, tuple[AnchorPoint, ...]]:
    """Bounds for a path being drawn, kept symmetric about a fixed origin.

    The box extends equally on both sides of ``origin`` on each axis, far
    enough to cover every anchor and control point, plus padding.

    Args:
        points: Page-space points drawn so far (at least one)
        origin: Stable origin, normally the first click
        padding: Extra space on every side
        min_extent: Smallest width or height reported

    Returns:
        Tuple of (page-space box, points in that box's local space)
    """
    positions = [v for p in points for v in _point_and_controls(p)]
    box = Bounds.from_points(positions)
    half_w = max(origin.x - box.min_x, box.max_x - origin.x) + padding
    half_h = max(origin.y - box.min_y, box.max_y - origin.y) + padding
    min_x = origin.x - half_w
    min_y = origin.y - half_h
    rect = Rect(min_x, min_y, max(min_extent, 2 * half_w), max(min_extent, 2 * half_h))
    return rect, _shift(points, -min_x, -min_y)


def single_point_bounds(
    point: AnchorPoint,
    padding: float = 50.0,
    min_extent: float = 1.0,
) -> tuple[Rect, tuple[AnchorPoint, ...]]:
    """Padded bounds for a lone point so it stays visible and hit-testable.

    Args:
        point: Page-space point with optional control points
        padding: Extra space on every side
        min_extent: Smallest width or height reported

    Returns:
        Tuple of (page-space box, the point in that box's local space)
    """
    box = Bounds.from_points(_point_and_controls(point))
    min_x = box.min_x - padding
    min_y = box.min_y - padding
    rect = Rect(
        min_x,
        min_y,
        max(min_extent, box.width + 2 * padding),
        max(min_extent, box.height + 2 * padding),
    )
    return rect, _shift([point], -min_x, -min_y)


def edit_mode_bounds(path: BezierPath, min_extent: float = 1.0) -> Rect:
    """Local hit box while editing, following the live curve extent."""
    bounds = accurate_bounds(path.points, path.is_closed)
    return Rect(0.0, 0.0, max(min_extent, bounds.width), max(min_extent, bounds.height))


def rest_bounds(path: BezierPath) -> Rect:
    """Local hit box at rest, using the stored size."""
    return Rect(0.0, 0.0, path.w, path.h)


def shape_center(path: BezierPath) -> Vec:
    """Centre of the path's current local hit box."""
    rect = edit_mode_bounds(path) if path.edit_mode else rest_bounds(path)
    return Vec(rect.x + rect.w / 2, rect.y + rect.h / 2)
