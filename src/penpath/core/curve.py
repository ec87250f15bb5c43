"""Curve algebra over individual path segments.

A segment is the curve between two consecutive anchor points. Its degree is
derived from the control points facing each other across the segment:

- Cubic when the left point has ``cp2`` and the right point has ``cp1``
- Quadratic when exactly one of those exists
- Linear when neither exists

Segment supports evaluation, tangents, closest-point projection, De
Casteljau subdivision with tangent-based handle reconstruction, tight
bounding boxes, arc length and even-step sampling. Module-level helpers
apply these to whole paths.
"""

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from penpath.core import _bezier
from penpath.core.geometry import distance, nearest_point_on_line, normalize
from penpath.domain import AnchorPoint, Bounds, SegmentKind, Vec
from penpath.exceptions import SegmentError

_KIND_BY_COUNT = {
    2: SegmentKind.LINEAR,
    3: SegmentKind.QUADRATIC,
    4: SegmentKind.CUBIC,
}


@dataclass(frozen=True, slots=True)
class Projection:
    """Closest point on a segment to a query position.

    Attributes:
        t: Curve parameter of the closest point
        point: Closest position on the curve
        distance: Distance from the query position
    """

    t: float
    point: Vec
    distance: float


@dataclass(frozen=True)
class SplitResult:
    """Outcome of splitting a segment at a parameter.

    Attributes:
        left: Sub-curve from the segment start to the split point
        right: Sub-curve from the split point to the segment end
        point: New anchor at the split position with reconstructed handles
    """

    left: "Segment"
    right: "Segment"
    point: AnchorPoint


@dataclass(frozen=True)
class Segment:
    """A linear, quadratic or cubic Bezier segment.

    Attributes:
        controls: Control points from start to end (2, 3 or 4 of them)
    """

    controls: tuple[Vec, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.controls, tuple):
            object.__setattr__(self, "controls", tuple(self.controls))
        if len(self.controls) not in _KIND_BY_COUNT:
            raise SegmentError(
                f"Segment needs 2, 3 or 4 control points, got {len(self.controls)}"
            )

    @property
    def kind(self) -> SegmentKind:
        return _KIND_BY_COUNT[len(self.controls)]

    @property
    def start(self) -> Vec:
        return self.controls[0]

    @property
    def end(self) -> Vec:
        return self.controls[-1]

    def evaluate(self, t: float) -> Vec:
        """Point on the curve at t, with t clamped to [0, 1]."""
        return _bezier.evaluate(list(self.controls), _clamp(t))

    def derivative(self, t: float) -> Vec:
        """Unnormalized tangent vector at t."""
        return _bezier.derivative(list(self.controls), _clamp(t))

    def tangent(self, t: float) -> Vec:
        """Unit tangent at t, falling back to (1, 0) on a degenerate curve."""
        return normalize(self.derivative(t))

    def length(self, order: int = 24) -> float:
        """Arc length of the segment.

        Args:
            order: Gauss-Legendre quadrature order for curved segments

        Returns:
            Length in the segment's coordinate units
        """
        return _bezier.arc_length(list(self.controls), order)

    def bbox(self) -> Bounds:
        """Tight axis-aligned bounds of the curve (not the control hull)."""
        controls = list(self.controls)
        points = [self.start, self.end]
        points.extend(_bezier.evaluate(controls, t) for t in _bezier.extrema(controls))
        return Bounds.from_points(points)

    def project(self, point: Vec, lut_steps: int = 100) -> Projection:
        """Find the closest point on the segment to a query position.

        Lines are projected analytically. Curves are sampled into a lookup
        table and the best sample's neighbourhood is narrowed repeatedly.

        Args:
            point: Query position
            lut_steps: Number of lookup table intervals for curves

        Returns:
            Projection with parameter, position and distance
        """
        if self.kind is SegmentKind.LINEAR:
            nearest, t, dist = nearest_point_on_line(point, self.start, self.end)
            return Projection(t, nearest, dist)

        controls = list(self.controls)
        best_t = 0.0
        best_dist = math.inf
        for i in range(lut_steps + 1):
            t = i / lut_steps
            d = distance(point, _bezier.evaluate(controls, t))
            if d < best_dist:
                best_t, best_dist = t, d

        step = 1.0 / lut_steps
        for _ in range(12):
            lo = max(0.0, best_t - step)
            hi = min(1.0, best_t + step)
            for i in range(11):
                t = lo + (hi - lo) * i / 10
                d = distance(point, _bezier.evaluate(controls, t))
                if d < best_dist:
                    best_t, best_dist = t, d
            step /= 5

        return Projection(best_t, _bezier.evaluate(controls, best_t), best_dist)

    def split(
        self,
        t: float,
        handle_fraction: float = 1.0 / 3.0,
        quadrature_order: int = 24,
    ) -> SplitResult:
        """Split the segment at t.

        The sub-curves are exact De Casteljau halves. The returned anchor is
        given handles along the unit tangent at t, each ``handle_fraction``
        of the whole segment's arc length long, so the new point looks
        balanced wherever the split happens. A linear segment splits into a
        corner point.

        Args:
            t: Split parameter, clamped to [0, 1]
            handle_fraction: Handle length relative to the segment length
            quadrature_order: Gauss-Legendre order for the arc length

        Returns:
            SplitResult with both sub-curves and the new anchor
        """
        t = _clamp(t)
        left, right = _bezier.subdivide(list(self.controls), t)
        at = left[-1]

        if self.kind is SegmentKind.LINEAR:
            point = AnchorPoint(at.x, at.y)
        else:
            handle = self.tangent(t) * (self.length(quadrature_order) * handle_fraction)
            point = AnchorPoint(at.x, at.y, cp1=at - handle, cp2=at + handle)

        return SplitResult(left=Segment(tuple(left)), right=Segment(tuple(right)), point=point)

    def sample(
        self,
        max_segment_length: float = 8.0,
        min_samples: int = 2,
        include_start: bool = False,
        include_end: bool = False,
    ) -> Iterator[Vec]:
        """Lazily yield points at even parameter steps.

        The number of intervals is ``max(min_samples, ceil(length /
        max_segment_length))``.

        Args:
            max_segment_length: Target distance between samples
            min_samples: Minimum number of intervals
            include_start: Yield the point at t=0
            include_end: Yield the point at t=1

        Yields:
            Positions along the curve
        """
        count = max(min_samples, math.ceil(self.length() / max_segment_length))
        first = 0 if include_start else 1
        last = count if include_end else count - 1
        controls = list(self.controls)
        for i in range(first, last + 1):
            yield _bezier.evaluate(controls, i / count)


def _clamp(t: float) -> float:
    return max(0.0, min(1.0, t))


def segment_between(p1: AnchorPoint, p2: AnchorPoint) -> Segment:
    """Build the segment joining two anchors by the degree rule.

    Args:
        p1: Left anchor (its ``cp2`` faces the segment)
        p2: Right anchor (its ``cp1`` faces the segment)

    Returns:
        Linear, quadratic or cubic Segment
    """
    controls = [p1.position]
    if p1.cp2 is not None:
        controls.append(p1.cp2)
    if p2.cp1 is not None:
        controls.append(p2.cp1)
    controls.append(p2.position)
    return Segment(tuple(controls))


def segment_count(point_count: int, is_closed: bool) -> int:
    """Number of segments of a path, including the closing segment."""
    if point_count < 2:
        return 0
    if is_closed and point_count > 2:
        return point_count
    return point_count - 1


def path_segments(points: Sequence[AnchorPoint], is_closed: bool) -> list[Segment]:
    """Build every segment of a path in order."""
    n = len(points)
    return [
        segment_between(points[i], points[(i + 1) % n])
        for i in range(segment_count(n, is_closed))
    ]


def sample_path(
    points: Sequence[AnchorPoint],
    is_closed: bool,
    max_segment_length: float = 8.0,
    min_samples: int = 2,
) -> list[Vec]:
    """Flatten a path into a polygon.

    The polygon starts at the first anchor and passes through every anchor.
    A closed path ends by repeating its first point.

    Args:
        points: Anchor points of the path
        is_closed: Whether the path has a closing segment
        max_segment_length: Target distance between samples
        min_samples: Minimum number of intervals per segment

    Returns:
        Polygon vertices
    """
    if not points:
        return []
    polygon = [points[0].position]
    for segment in path_segments(points, is_closed):
        polygon.extend(
            segment.sample(max_segment_length, min_samples, include_start=False, include_end=True)
        )
    return polygon


def path_length(points: Sequence[AnchorPoint], is_closed: bool, order: int = 24) -> float:
    """Total arc length of a path."""
    return sum(segment.length(order) for segment in path_segments(points, is_closed))
