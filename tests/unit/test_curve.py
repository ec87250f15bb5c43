"""Unit tests for curve algebra.

Tests for the Bezier helpers and the Segment class: evaluation,
projection, subdivision, bounds, arc length and sampling.
"""

import pytest

from penpath.core import _bezier
from penpath.core.curve import (
    Segment,
    path_length,
    path_segments,
    sample_path,
    segment_between,
    segment_count,
)
from penpath.domain import AnchorPoint, SegmentKind, Vec
from penpath.exceptions import SegmentError

LINE = Segment((Vec(0, 0), Vec(10, 0)))
ARCH = Segment((Vec(0, 0), Vec(50, 100), Vec(100, 0)))
HUMP = Segment((Vec(0, 0), Vec(0, 100), Vec(100, 100), Vec(100, 0)))


def vec_close(actual: Vec | None, expected: Vec, tol: float = 1e-6) -> bool:
    assert actual is not None
    return actual.to_tuple() == pytest.approx(expected.to_tuple(), abs=tol)


class TestBezierHelpers:
    """Tests for the internal polynomial helpers."""

    def test_evaluate_endpoints(self) -> None:
        """Test every degree starts and ends on its end controls."""
        for segment in (LINE, ARCH, HUMP):
            controls = list(segment.controls)
            assert vec_close(_bezier.evaluate(controls, 0.0), controls[0])
            assert vec_close(_bezier.evaluate(controls, 1.0), controls[-1])

    def test_hodograph_degree(self) -> None:
        """Test the derivative curve has one control point fewer."""
        assert len(_bezier.hodograph(list(HUMP.controls))) == 3
        assert _bezier.hodograph(list(LINE.controls)) == [Vec(10, 0)]

    def test_subdivide_shares_split_point(self) -> None:
        """Test both halves meet at the curve point."""
        left, right = _bezier.subdivide(list(HUMP.controls), 0.3)
        at = _bezier.evaluate(list(HUMP.controls), 0.3)
        assert vec_close(left[-1], at)
        assert vec_close(right[0], at)
        assert len(left) == len(right) == 4

    def test_extrema_of_arch(self) -> None:
        """Test the quadratic arch peaks at t=0.5."""
        assert _bezier.extrema(list(ARCH.controls)) == pytest.approx([0.5])

    def test_extrema_excludes_endpoints(self) -> None:
        """Test a monotonic line has no interior extrema."""
        assert _bezier.extrema(list(LINE.controls)) == []

    @pytest.mark.parametrize("order", [4, 12, 24])
    def test_gauss_legendre_weights(self, order: int) -> None:
        """Test weights integrate a constant over [-1, 1] exactly."""
        nodes, weights = _bezier.gauss_legendre(order)
        assert len(nodes) == order
        assert sum(weights) == pytest.approx(2.0)
        assert all(-1.0 < x < 1.0 for x in nodes)

    def test_gauss_legendre_integrates_polynomial(self) -> None:
        """Test x^4 integrates to 2/5 over [-1, 1]."""
        nodes, weights = _bezier.gauss_legendre(8)
        total = sum(w * x**4 for x, w in zip(nodes, weights, strict=True))
        assert total == pytest.approx(0.4)


class TestSegment:
    """Tests for Segment class."""

    def test_invalid_control_count(self) -> None:
        """Test fewer than 2 or more than 4 controls raise."""
        with pytest.raises(SegmentError):
            Segment((Vec(0, 0),))
        with pytest.raises(SegmentError):
            Segment(tuple(Vec(i, 0) for i in range(5)))

    def test_kind(self) -> None:
        """Test degree follows the control count."""
        assert LINE.kind is SegmentKind.LINEAR
        assert ARCH.kind is SegmentKind.QUADRATIC
        assert HUMP.kind is SegmentKind.CUBIC

    def test_evaluate_midpoints(self) -> None:
        """Test known midpoints of each degree."""
        assert vec_close(LINE.evaluate(0.5), Vec(5, 0))
        assert vec_close(ARCH.evaluate(0.5), Vec(50, 50))
        assert vec_close(HUMP.evaluate(0.5), Vec(50, 75))

    def test_evaluate_clamps(self) -> None:
        """Test parameters outside [0, 1] are clamped."""
        assert vec_close(HUMP.evaluate(-1.0), HUMP.start)
        assert vec_close(HUMP.evaluate(2.0), HUMP.end)

    def test_tangent_is_unit(self) -> None:
        """Test the tangent is normalized."""
        t = HUMP.tangent(0.25)
        assert t.length() == pytest.approx(1.0)
        assert vec_close(HUMP.tangent(0.5), Vec(1, 0))

    def test_tangent_of_degenerate_segment(self) -> None:
        """Test a zero-length segment falls back to the x axis."""
        assert Segment((Vec(1, 1), Vec(1, 1))).tangent(0.5) == Vec(1.0, 0.0)

    def test_length_of_line(self) -> None:
        """Test line length is exact."""
        assert LINE.length() == pytest.approx(10.0)

    def test_length_of_straight_curves(self) -> None:
        """Test curves lying on a line measure the line length."""
        quad = Segment((Vec(0, 0), Vec(5, 0), Vec(10, 0)))
        cubic = Segment((Vec(0, 0), Vec(10, 0), Vec(20, 0), Vec(30, 0)))
        assert quad.length() == pytest.approx(10.0)
        assert cubic.length() == pytest.approx(30.0)

    def test_length_exceeds_chord(self) -> None:
        """Test a curved segment is longer than its chord."""
        assert HUMP.length() > 100.0
        assert HUMP.length() < 300.0

    def test_bbox_includes_bulge(self) -> None:
        """Test bounds cover the curve, not just its endpoints."""
        arch = ARCH.bbox()
        assert (arch.min_x, arch.min_y, arch.max_x) == (0, 0, 100)
        assert arch.max_y == pytest.approx(50.0)
        box = HUMP.bbox()
        assert box.max_y == pytest.approx(75.0)
        assert box.min_x == pytest.approx(0.0)
        assert box.max_x == pytest.approx(100.0)

    def test_bbox_within_control_hull(self) -> None:
        """Test tight bounds never exceed the control polygon."""
        box = HUMP.bbox()
        assert box.max_y < 100.0

    def test_project_line(self) -> None:
        """Test analytical projection onto a line."""
        projection = LINE.project(Vec(5, 5))
        assert projection.t == pytest.approx(0.5)
        assert vec_close(projection.point, Vec(5, 0))
        assert projection.distance == pytest.approx(5.0)

    def test_project_line_clamps(self) -> None:
        """Test projection beyond the end clamps to t=1."""
        projection = LINE.project(Vec(20, 0))
        assert projection.t == pytest.approx(1.0)
        assert projection.distance == pytest.approx(10.0)

    def test_project_curve(self) -> None:
        """Test projection onto the apex of an arch."""
        projection = ARCH.project(Vec(50, 60))
        assert projection.t == pytest.approx(0.5, abs=1e-4)
        assert projection.distance == pytest.approx(10.0, rel=1e-4)

    def test_project_point_on_curve(self) -> None:
        """Test a point on the curve projects to itself."""
        target = HUMP.evaluate(0.3)
        projection = HUMP.project(target)
        assert projection.distance == pytest.approx(0.0, abs=1e-3)
        assert projection.t == pytest.approx(0.3, abs=1e-3)


class TestSegmentSplit:
    """Tests for Segment.split."""

    @pytest.mark.parametrize("t", [0.2, 0.5, 0.8])
    def test_split_halves_trace_original(self, t: float) -> None:
        """Test the sub-curves retrace the original curve."""
        result = HUMP.split(t)
        for s in (0.0, 0.25, 0.5, 0.75, 1.0):
            assert vec_close(result.left.evaluate(s), HUMP.evaluate(s * t))
            assert vec_close(result.right.evaluate(s), HUMP.evaluate(t + s * (1 - t)))

    def test_split_point_on_curve(self) -> None:
        """Test the new anchor lies on the curve."""
        result = ARCH.split(0.4)
        assert vec_close(result.point.position, ARCH.evaluate(0.4))

    def test_split_handles_follow_tangent(self) -> None:
        """Test handles lie along the tangent, a third of the length long."""
        result = HUMP.split(0.5)
        handle = HUMP.length() / 3
        assert vec_close(result.point.cp1, Vec(50 - handle, 75))
        assert vec_close(result.point.cp2, Vec(50 + handle, 75))

    def test_split_line_is_corner(self) -> None:
        """Test splitting a line yields a corner point."""
        result = LINE.split(0.5)
        assert result.point == AnchorPoint(5.0, 0.0)
        assert result.left.kind is SegmentKind.LINEAR
        assert result.right.kind is SegmentKind.LINEAR


class TestSampling:
    """Tests for segment and path sampling."""

    def test_sample_count(self) -> None:
        """Test interval count follows length and minimum."""
        samples = list(LINE.sample(max_segment_length=2.0, include_start=True, include_end=True))
        assert len(samples) == 6
        assert vec_close(samples[0], Vec(0, 0))
        assert vec_close(samples[-1], Vec(10, 0))

    def test_sample_minimum(self) -> None:
        """Test short segments still get the minimum number of intervals."""
        samples = list(LINE.sample(max_segment_length=100.0, min_samples=4, include_end=True))
        assert len(samples) == 4

    def test_sample_is_lazy(self) -> None:
        """Test sampling returns an iterator."""
        samples = LINE.sample()
        assert vec_close(next(samples), Vec(5, 0))

    def test_sample_open_path(self) -> None:
        """Test an open path polygon passes through every anchor."""
        points = [AnchorPoint(0, 0), AnchorPoint(10, 0), AnchorPoint(10, 10)]
        polygon = sample_path(points, False)
        assert polygon == [Vec(0, 0), Vec(5, 0), Vec(10, 0), Vec(10, 5), Vec(10, 10)]

    def test_sample_closed_path_returns_to_start(self) -> None:
        """Test a closed polygon ends on the first anchor."""
        points = [AnchorPoint(0, 0), AnchorPoint(10, 0), AnchorPoint(10, 10)]
        polygon = sample_path(points, True)
        assert vec_close(polygon[-1], Vec(0, 0))
        assert len(polygon) == 7

    def test_sample_empty_path(self) -> None:
        """Test an empty path has no polygon."""
        assert sample_path([], False) == []


class TestPathHelpers:
    """Tests for path-level curve helpers."""

    def test_segment_between_degree_rule(self) -> None:
        """Test facing control points pick the degree."""
        a = AnchorPoint(0, 0, cp2=Vec(5, 5))
        b = AnchorPoint(10, 0, cp1=Vec(5, -5))
        plain_a = AnchorPoint(0, 0)
        plain_b = AnchorPoint(10, 0)
        assert segment_between(a, b).kind is SegmentKind.CUBIC
        assert segment_between(a, plain_b).kind is SegmentKind.QUADRATIC
        assert segment_between(plain_a, b).kind is SegmentKind.QUADRATIC
        assert segment_between(plain_a, plain_b).kind is SegmentKind.LINEAR

    def test_segment_between_ignores_outer_controls(self) -> None:
        """Test cp1 of the left and cp2 of the right play no part."""
        a = AnchorPoint(0, 0, cp1=Vec(-5, 5))
        b = AnchorPoint(10, 0, cp2=Vec(15, 5))
        assert segment_between(a, b).kind is SegmentKind.LINEAR

    @pytest.mark.parametrize(
        ("count", "closed", "expected"),
        [(0, False, 0), (1, False, 0), (2, True, 1), (3, True, 3), (4, False, 3)],
    )
    def test_segment_count(self, count: int, closed: bool, expected: int) -> None:
        """Test closing segment only counts with three or more points."""
        assert segment_count(count, closed) == expected

    def test_path_segments_closing(self) -> None:
        """Test the closing segment runs from last to first."""
        points = [AnchorPoint(0, 0), AnchorPoint(10, 0), AnchorPoint(10, 10)]
        segments = path_segments(points, True)
        assert len(segments) == 3
        assert segments[-1].start == Vec(10, 10)
        assert segments[-1].end == Vec(0, 0)

    def test_path_length(self) -> None:
        """Test a square's perimeter."""
        points = [AnchorPoint(0, 0), AnchorPoint(10, 0), AnchorPoint(10, 10), AnchorPoint(0, 10)]
        assert path_length(points, False) == pytest.approx(30.0)
        assert path_length(points, True) == pytest.approx(40.0)
