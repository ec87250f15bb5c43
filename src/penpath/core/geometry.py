"""Vector helpers for pointer interaction.

This module provides the small pieces of planar geometry the editing layers
share:
- Distances and unit directions with a safe fallback
- 45 degree angle constraint for shift-drags
- Nearest point on a line segment
- Synthesized control points for a smooth anchor

All functions are pure and stateless.
"""

import math

from penpath.domain import Vec

_EPSILON = 1e-10

FALLBACK_DIRECTION = Vec(1.0, 0.0)


def distance(a: Vec, b: Vec) -> float:
    """Euclidean distance between two positions.

    Examples:
        >>> distance(Vec(0.0, 0.0), Vec(3.0, 4.0))
        5.0
    """
    return math.hypot(b.x - a.x, b.y - a.y)


def normalize(v: Vec) -> Vec:
    """Scale a vector to unit length.

    Args:
        v: Vector to normalize

    Returns:
        Unit vector in the same direction, or (1, 0) if ``v`` is near zero

    Examples:
        >>> normalize(Vec(0.0, 2.0))
        Vec(x=0.0, y=1.0)
        >>> normalize(Vec(0.0, 0.0))
        Vec(x=1.0, y=0.0)
    """
    length = math.hypot(v.x, v.y)
    if length < _EPSILON:
        return FALLBACK_DIRECTION
    return Vec(v.x / length, v.y / length)


def constrain_angle(offset: Vec) -> Vec:
    """Snap an offset vector to the nearest 45 degree direction.

    The length of the vector is preserved.

    Args:
        offset: Drag offset

    Returns:
        Offset rotated onto the closest multiple of 45 degrees

    Examples:
        >>> v = constrain_angle(Vec(10.0, 1.0))
        >>> round(v.x, 6), round(v.y, 6)
        (10.049876, 0.0)
    """
    length = math.hypot(offset.x, offset.y)
    if length < _EPSILON:
        return offset
    step = math.pi / 4
    angle = round(math.atan2(offset.y, offset.x) / step) * step
    return Vec(math.cos(angle) * length, math.sin(angle) * length)


def nearest_point_on_line(point: Vec, start: Vec, end: Vec) -> tuple[Vec, float, float]:
    """Find the nearest point on a line segment to a given point.

    Args:
        point: Query position
        start: Segment start
        end: Segment end

    Returns:
        Tuple of (nearest point, parameter t in [0, 1], distance)
    """
    dx = end.x - start.x
    dy = end.y - start.y
    length_sq = dx * dx + dy * dy

    if length_sq < _EPSILON:
        return start, 0.0, distance(point, start)

    t = ((point.x - start.x) * dx + (point.y - start.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))

    nearest = Vec(start.x + t * dx, start.y + t * dy)
    return nearest, t, distance(point, nearest)


def smooth_control_points(
    prev: Vec | None,
    current: Vec,
    next_: Vec | None,
    offset: float,
) -> tuple[Vec, Vec]:
    """Synthesize symmetric control points for converting a corner to smooth.

    The tangent direction runs from the previous neighbor to the next one.
    With a single neighbor the direction points from or toward it; with none
    it is horizontal.

    Args:
        prev: Previous anchor position, if any
        current: Anchor being converted
        next_: Next anchor position, if any
        offset: Distance of each control point from the anchor

    Returns:
        Tuple of (cp1, cp2)
    """
    if prev is not None and next_ is not None:
        direction = normalize(next_ - prev)
    elif prev is not None:
        direction = normalize(current - prev)
    elif next_ is not None:
        direction = normalize(next_ - current)
    else:
        direction = FALLBACK_DIRECTION

    handle = direction * offset
    return current - handle, current + handle
