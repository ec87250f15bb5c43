"""Zoom-aware hit testing against a path's anchors, handles and segments.

All positions passed in are shape-local. Thresholds are configured in screen
pixels and divided by the zoom level, so a hit target keeps the same size on
screen at every zoom.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from penpath.config import ThresholdConfig
from penpath.core.curve import path_segments
from penpath.core.geometry import distance
from penpath.domain import AnchorPoint, HandleKind, HandleRef, Vec


@dataclass(frozen=True, slots=True)
class SegmentHit:
    """A position on a path segment near the pointer.

    Attributes:
        segment_index: Index of the segment (closing segment is last)
        t: Curve parameter of the closest point
        point: Closest position on the segment
        distance: Distance from the pointer
    """

    segment_index: int
    t: float
    point: Vec
    distance: float


class PathHitTester:
    """Hit tests for one zoom level.

    Example:
        >>> tester = PathHitTester(ThresholdConfig(), zoom=2.0)
        >>> tester.threshold(8.0)
        4.0
    """

    def __init__(
        self,
        thresholds: ThresholdConfig | None = None,
        zoom: float = 1.0,
        lut_steps: int = 100,
    ) -> None:
        self.thresholds = thresholds or ThresholdConfig()
        self.zoom = zoom
        self.lut_steps = lut_steps

    def threshold(self, pixels: float) -> float:
        """Convert a screen-pixel radius to local units at this zoom."""
        return self.thresholds.scaled(pixels, self.zoom)

    def anchor_at(
        self,
        points: Sequence[AnchorPoint],
        local: Vec,
        pixels: float | None = None,
    ) -> int | None:
        """Find the first anchor within the hit radius.

        Args:
            points: Anchor points in local space
            local: Pointer position in local space
            pixels: Override for the anchor hit radius

        Returns:
            Index of the anchor, or None
        """
        radius = self.threshold(self.thresholds.anchor_point if pixels is None else pixels)
        for i, point in enumerate(points):
            if distance(local, point.position) < radius:
                return i
        return None

    def control_point_at(self, points: Sequence[AnchorPoint], local: Vec) -> HandleRef | None:
        """Find the first control point within the hit radius.

        Args:
            points: Anchor points in local space
            local: Pointer position in local space

        Returns:
            Reference to the control point handle, or None
        """
        radius = self.threshold(self.thresholds.control_point)
        for i, point in enumerate(points):
            if point.cp1 is not None and distance(local, point.cp1) < radius:
                return HandleRef(i, HandleKind.CP1)
            if point.cp2 is not None and distance(local, point.cp2) < radius:
                return HandleRef(i, HandleKind.CP2)
        return None

    def segment_at(
        self,
        points: Sequence[AnchorPoint],
        is_closed: bool,
        local: Vec,
    ) -> SegmentHit | None:
        """Find the first segment within the segment click radius.

        Args:
            points: Anchor points in local space
            is_closed: Whether the closing segment is tested
            local: Pointer position in local space

        Returns:
            SegmentHit for the first matching segment, or None
        """
        radius = self.threshold(self.thresholds.path_segment)
        for i, segment in enumerate(path_segments(points, is_closed)):
            projection = segment.project(local, self.lut_steps)
            if projection.distance < radius:
                return SegmentHit(i, projection.t, projection.point, projection.distance)
        return None

    def hover_segment_at(
        self,
        points: Sequence[AnchorPoint],
        is_closed: bool,
        local: Vec,
    ) -> SegmentHit | None:
        """Find the segment to preview an insertion on.

        No segment is reported while the pointer is close to an anchor;
        otherwise the closest segment within the hover radius wins.

        Args:
            points: Anchor points in local space
            is_closed: Whether the closing segment is tested
            local: Pointer position in local space

        Returns:
            SegmentHit for the closest segment, or None
        """
        if self.anchor_at(points, local, self.thresholds.segment_anchor_exclusion) is not None:
            return None

        radius = self.threshold(self.thresholds.segment_hover)
        best: SegmentHit | None = None
        for i, segment in enumerate(path_segments(points, is_closed)):
            projection = segment.project(local, self.lut_steps)
            if projection.distance < radius and (best is None or projection.distance < best.distance):
                best = SegmentHit(i, projection.t, projection.point, projection.distance)
        return best
