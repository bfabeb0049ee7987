"""Tests for segment intersection and polygon containment."""

import pytest

from lasso.geometry import (
    build_polygon,
    intersect_segments,
    point_in_polygon,
    segment_intersection,
)


class TestSegmentIntersection:
    def test_crossing_segments(self) -> None:
        assert segment_intersection((0, 0), (2, 2), (0, 2), (2, 0)) == pytest.approx((1.0, 1.0))

    def test_disjoint_segments(self) -> None:
        assert segment_intersection((0, 0), (1, 0), (0, 1), (1, 1)) is None

    def test_parallel_segments_report_nothing(self) -> None:
        assert segment_intersection((0, 0), (2, 0), (1, 0), (3, 0)) is None

    def test_touching_endpoint_counts(self) -> None:
        assert segment_intersection((0, 0), (2, 0), (1, -1), (1, 0)) == pytest.approx((1.0, 0.0))


class TestIntersectSegments:
    """Test suite for the self-intersection scan."""

    def test_simple_polyline_has_no_crossing(self) -> None:
        assert intersect_segments([(0, 0), (10, 0), (10, 10), (0, 10)]) is None

    def test_too_short_polylines(self) -> None:
        assert intersect_segments([]) is None
        assert intersect_segments([(0, 0)]) is None
        assert intersect_segments([(0, 0), (1, 1)]) is None

    def test_adjacent_segments_sharing_endpoint_ignored(self) -> None:
        """A sharp turn back along the previous segment is not a crossing."""
        assert intersect_segments([(0, 0), (10, 0), (5, 0.0001)]) is None

    def test_zero_length_segments_skipped(self) -> None:
        """Repeated points neither cross nor break adjacency."""
        assert intersect_segments([(0, 0), (1, 0), (1, 0), (1, 1)]) is None

    def test_finds_crossing_with_segment_indices(self) -> None:
        crossing = intersect_segments([(-50, -50), (50, -50), (50, 50), (-50, 50), (-40, -70)])
        assert crossing is not None
        assert crossing.indices == (0, 3)
        assert crossing.point[1] == pytest.approx(-50.0)
        assert crossing.point[0] == pytest.approx(-50.0 + 10.0 * 100.0 / 120.0)

    def test_nearest_crossing_along_later_segment_wins(self) -> None:
        """When one stroke crosses two earlier segments, the first one hit is used."""
        points = [(0, 0), (10, 0), (10, 10), (0, 10), (5, 15), (5, -5)]
        crossing = intersect_segments(points)
        assert crossing.indices == (2, 4)
        assert crossing.point == pytest.approx((5.0, 10.0))

    def test_earliest_crossing_segment_decides(self) -> None:
        """Later segments are scanned in drawing order."""
        points = [(0, 0), (10, 0), (10, 10), (5, -5), (20, -5), (20, 20), (-5, 5)]
        crossing = intersect_segments(points)
        assert crossing.second_segment == 2


class TestContainment:
    square = [(0, 0), (10, 0), (10, 10), (0, 10)]

    def test_inside_and_outside(self) -> None:
        assert point_in_polygon(self.square, (5, 5))
        assert not point_in_polygon(self.square, (15, 5))

    def test_boundary_is_not_contained(self) -> None:
        assert not point_in_polygon(self.square, (10, 5))
        assert not point_in_polygon(self.square, (0, 0))

    def test_concave_polygon(self) -> None:
        u_shape = [(0, 0), (30, 0), (30, 30), (20, 30), (20, 10), (10, 10), (10, 30), (0, 30)]
        assert point_in_polygon(u_shape, (5, 20))
        assert not point_in_polygon(u_shape, (15, 20))

    def test_degenerate_rings_contain_nothing(self) -> None:
        assert build_polygon([(0, 0), (1, 1)]) is None
        assert build_polygon([(0, 0), (1, 1), (2, 2)]) is None
        assert not point_in_polygon([(0, 0), (1, 1), (2, 2)], (1, 1))
