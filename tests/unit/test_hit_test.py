"""Unit tests for zoom-aware hit testing."""

import pytest

from penpath.config import ThresholdConfig
from penpath.core.hit_test import PathHitTester
from penpath.domain import AnchorPoint, HandleKind, HandleRef, Vec

LINE = (AnchorPoint(0, 0), AnchorPoint(100, 0))
SQUARE = (AnchorPoint(0, 0), AnchorPoint(100, 0), AnchorPoint(100, 100), AnchorPoint(0, 100))


class TestThresholds:
    """Tests for zoom scaling of hit radii."""

    @pytest.mark.parametrize(("zoom", "expected"), [(1.0, 8.0), (2.0, 4.0), (0.5, 16.0)])
    def test_threshold_scales_with_zoom(self, zoom: float, expected: float) -> None:
        """Test screen radii shrink in local units as zoom grows."""
        assert PathHitTester(zoom=zoom).threshold(8.0) == pytest.approx(expected)

    def test_non_positive_zoom(self) -> None:
        """Test an invalid zoom is treated as 1."""
        assert PathHitTester(zoom=0.0).threshold(8.0) == pytest.approx(8.0)


class TestAnchorAt:
    """Tests for anchor hit testing."""

    def test_hit(self) -> None:
        """Test a click near an anchor finds it."""
        assert PathHitTester().anchor_at(LINE, Vec(95, 3)) == 1

    def test_miss(self) -> None:
        """Test a click away from anchors finds nothing."""
        assert PathHitTester().anchor_at(LINE, Vec(50, 0)) is None

    def test_radius_is_exclusive(self) -> None:
        """Test a click exactly on the radius misses."""
        assert PathHitTester().anchor_at(LINE, Vec(8, 0)) is None

    def test_zoomed_in_shrinks_radius(self) -> None:
        """Test the same local offset misses when zoomed in."""
        local = Vec(5, 0)
        assert PathHitTester(zoom=1.0).anchor_at(LINE, local) == 0
        assert PathHitTester(zoom=2.0).anchor_at(LINE, local) is None

    def test_zoomed_out_grows_radius(self) -> None:
        """Test a distant local offset hits when zoomed out."""
        assert PathHitTester(zoom=0.5).anchor_at(LINE, Vec(12, 0)) == 0

    def test_first_match_wins(self) -> None:
        """Test overlapping anchors resolve to the lowest index."""
        points = (AnchorPoint(0, 0), AnchorPoint(2, 0))
        assert PathHitTester().anchor_at(points, Vec(1, 0)) == 0

    def test_custom_thresholds(self) -> None:
        """Test configured radii are honoured."""
        tester = PathHitTester(ThresholdConfig(anchor_point=20.0))
        assert tester.anchor_at(LINE, Vec(15, 0)) == 0


class TestControlPointAt:
    """Tests for control point hit testing."""

    def test_hit_cp2(self) -> None:
        """Test an outgoing control point is found."""
        points = (AnchorPoint(0, 0, cp2=Vec(30, 0)), AnchorPoint(100, 0))
        assert PathHitTester().control_point_at(points, Vec(31, 1)) == HandleRef(0, HandleKind.CP2)

    def test_hit_cp1(self) -> None:
        """Test an incoming control point is found."""
        points = (AnchorPoint(0, 0), AnchorPoint(100, 0, cp1=Vec(70, 20)))
        assert PathHitTester().control_point_at(points, Vec(70, 22)) == HandleRef(1, HandleKind.CP1)

    def test_corner_points_have_no_handles(self) -> None:
        """Test corner points never report a control hit."""
        assert PathHitTester().control_point_at(LINE, Vec(0, 0)) is None


class TestSegmentAt:
    """Tests for segment hit testing."""

    def test_hit_line(self) -> None:
        """Test a click near a line finds the segment and parameter."""
        hit = PathHitTester().segment_at(LINE, False, Vec(50, 5))
        assert hit is not None
        assert hit.segment_index == 0
        assert hit.t == pytest.approx(0.5)
        assert hit.distance == pytest.approx(5.0)

    def test_miss(self) -> None:
        """Test a click far from the path finds nothing."""
        assert PathHitTester().segment_at(LINE, False, Vec(50, 30)) is None

    def test_closing_segment_only_when_closed(self) -> None:
        """Test the closing segment is hit only on closed paths."""
        local = Vec(3, 50)
        assert PathHitTester().segment_at(SQUARE, False, local) is None
        hit = PathHitTester().segment_at(SQUARE, True, local)
        assert hit is not None
        assert hit.segment_index == 3

    def test_hit_curve(self) -> None:
        """Test a click near a curve apex."""
        points = (AnchorPoint(0, 0, cp2=Vec(50, 100)), AnchorPoint(100, 0))
        hit = PathHitTester().segment_at(points, False, Vec(50, 55))
        assert hit is not None
        assert hit.t == pytest.approx(0.5, abs=1e-3)


class TestHoverSegmentAt:
    """Tests for the insertion preview hover."""

    def test_hover_near_segment(self) -> None:
        """Test hovering over a segment reports it."""
        hit = PathHitTester().hover_segment_at(SQUARE, True, Vec(50, 103))
        assert hit is not None
        assert hit.segment_index == 2

    def test_no_hover_near_anchor(self) -> None:
        """Test the preview is suppressed close to an anchor."""
        assert PathHitTester().hover_segment_at(SQUARE, True, Vec(96, 3)) is None

    def test_closest_segment_wins(self) -> None:
        """Test the nearest of several candidate segments is chosen."""
        points = (AnchorPoint(0, 0), AnchorPoint(100, 0), AnchorPoint(100, 6), AnchorPoint(0, 6))
        hit = PathHitTester().hover_segment_at(points, False, Vec(50, 4))
        assert hit is not None
        assert hit.segment_index == 2
