"""Tests for Path, the closure detector and the path tracker."""

import pytest

from lasso.entities import Pen
from lasso.exceptions import StateTransitionError
from lasso.geometry import intersect_segments
from lasso.math_utils import Vector2
from lasso.path_lifecycle import PathLifecycleManager
from lasso.path_tracker import record_point
from lasso.paths import ClosureOutcome, Path, try_close
from lasso.shape_registry import ShapeRegistry

# Long lead-in, then a small loop that crosses the lead-in at (-90, 0)
LEAD_IN_STROKE = [(-300.0 + 20.0 * k, 0.0) for k in range(11)] + [
    (-80.0, 0.0),
    (-80.0, 20.0),
    (-90.0, 20.0),
    (-90.0, -10.0),
]


@pytest.fixture
def paths():
    registry = ShapeRegistry(500.0, 300.0)
    return PathLifecycleManager(registry, max_live_paths=4)


class TestPath:
    def test_append_skips_repeated_point(self) -> None:
        path = Path(path_id=1, pen_id=1, points=[(0.0, 0.0)])
        assert not path.append((0.0, 0.0))
        assert path.append((1.0, 0.0))
        assert path.points == [(0.0, 0.0), (1.0, 0.0)]

    def test_append_to_closed_path_raises(self) -> None:
        path = Path(path_id=1, pen_id=1, points=[(0.0, 0.0)])
        path.close([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)], None)
        with pytest.raises(StateTransitionError):
            path.append((2.0, 2.0))

    def test_reopen_without_remainder(self) -> None:
        path = Path(path_id=1, pen_id=1, points=[(0.0, 0.0)])
        path.close([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)], None)
        assert not path.reopen_from_remainder()
        assert path.closed


class TestTryClose:
    """Test suite for the closure detector."""

    def test_open_path_stays_open(self) -> None:
        path = Path(path_id=1, pen_id=1, points=[(0.0, 0.0), (10.0, 0.0), (10.0, 10.0)])
        assert try_close(path) is ClosureOutcome.OPEN
        assert not path.closed
        assert len(path.points) == 3

    def test_closes_without_remainder(self, square_stroke) -> None:
        path = Path(path_id=1, pen_id=1, points=list(square_stroke))
        assert try_close(path) is ClosureOutcome.CLOSED_NO_REMAINDER
        assert path.closed
        assert path.changed
        assert path.remainder is None
        assert path.points[:3] == [(50.0, -50.0), (50.0, 50.0), (-50.0, 50.0)]
        assert path.points[3] == pytest.approx((-50.0 + 10.0 * 100.0 / 120.0, -50.0))

    def test_keeps_longer_remainder(self) -> None:
        path = Path(path_id=1, pen_id=1, points=list(LEAD_IN_STROKE))
        assert try_close(path) is ClosureOutcome.CLOSED_WITH_REMAINDER
        assert path.points == [(-80.0, 0.0), (-80.0, 20.0), (-90.0, 20.0), pytest.approx((-90.0, 0.0))]
        assert path.remainder[:11] == LEAD_IN_STROKE[:11]
        assert path.remainder[-1] == (-90.0, -10.0)

    def test_crossing_on_loop_vertex_is_not_repeated(self) -> None:
        """A trail passing exactly through an earlier vertex closes on that vertex."""
        points = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (5.0, 10.0), (15.0, -10.0)]
        path = Path(path_id=1, pen_id=1, points=points)
        assert try_close(path) is ClosureOutcome.CLOSED_NO_REMAINDER
        assert path.points == [(10.0, 0.0), (10.0, 10.0), (5.0, 10.0)]
        assert len(set(path.points)) == len(path.points)

    def test_remainder_conservation(self) -> None:
        """Loop and remainder share only the crossing point."""
        path = Path(path_id=1, pen_id=1, points=list(LEAD_IN_STROKE))
        try_close(path)
        assert len(path.points) + len(path.remainder) - 1 == len(LEAD_IN_STROKE)

    @pytest.mark.parametrize(
        "points",
        [
            LEAD_IN_STROKE,
            [(-50.0, -50.0), (50.0, -50.0), (50.0, 50.0), (-50.0, 50.0), (-40.0, -70.0)],
            [(0, 0), (10, 0), (10, 10), (0, 10), (5, 15), (5, -5)],
            [(0, 0), (40, 0), (40, 5), (35, 5), (35, -5), (30, -5), (30, 10), (20, 10), (20, -10)],
        ],
    )
    def test_loop_is_simple(self, points) -> None:
        """Running the scan again on the loop's edges finds no crossing."""
        path = Path(path_id=1, pen_id=1, points=list(points))
        assert try_close(path) is not ClosureOutcome.OPEN
        assert intersect_segments(path.points) is None

    def test_try_close_on_closed_path_raises(self, square_stroke) -> None:
        path = Path(path_id=1, pen_id=1, points=list(square_stroke))
        try_close(path)
        with pytest.raises(StateTransitionError):
            try_close(path)

    def test_reopen_restores_remainder(self) -> None:
        path = Path(path_id=1, pen_id=1, points=list(LEAD_IN_STROKE))
        try_close(path)
        remainder = list(path.remainder)
        assert path.reopen_from_remainder()
        assert not path.closed
        assert path.remainder is None
        assert path.points == remainder
        assert path.append((-95.0, -20.0))


class TestRecordPoint:
    """Test suite for the path tracker."""

    def test_inactive_pen_records_nothing(self, paths) -> None:
        pen = Pen(pen_id=1, position=Vector2(1, 2))
        paths.bind_pen(pen)
        assert not record_point(pen, paths)
        assert len(paths) == 0

    def test_active_pen_starts_path(self, paths) -> None:
        pen = Pen(pen_id=1, position=Vector2(1, 2), active=True)
        paths.bind_pen(pen)
        assert record_point(pen, paths)
        path = paths.get(pen.path_id)
        assert path.points == [(1.0, 2.0)]

    def test_stationary_pen_adds_no_points(self, paths) -> None:
        pen = Pen(pen_id=1, position=Vector2(1, 2), active=True)
        paths.bind_pen(pen)
        record_point(pen, paths)
        assert not record_point(pen, paths)
        assert len(paths.get(pen.path_id).points) == 1

    def test_each_segment_becomes_obstacle(self, paths) -> None:
        pen = Pen(pen_id=1, active=True)
        paths.bind_pen(pen)
        for x in (0.0, 10.0, 20.0, 30.0):
            pen.position = Vector2(x, 0.0)
            record_point(pen, paths)
        assert paths._registry.obstacle_count(pen.path_id) == 3

    def test_one_path_per_stroke(self, paths) -> None:
        pen = Pen(pen_id=1, active=True)
        paths.bind_pen(pen)
        for x in (0.0, 10.0, 20.0):
            pen.position = Vector2(x, 0.0)
            record_point(pen, paths)
        assert len(paths) == 1

    def test_missing_path_reference_starts_new_path(self, paths) -> None:
        pen = Pen(pen_id=1, position=Vector2(3, 3), active=True, path_id=99)
        paths.bind_pen(pen)
        assert record_point(pen, paths)
        assert pen.path_id != 99
        assert paths.get(pen.path_id).points == [(3.0, 3.0)]

    def test_closed_path_reference_starts_new_path(self, paths, square_stroke) -> None:
        pen = Pen(pen_id=1, active=True)
        paths.bind_pen(pen)
        for x, y in square_stroke:
            pen.position = Vector2(x, y)
            record_point(pen, paths)
        old = paths.get(pen.path_id)
        try_close(old)
        record_point(pen, paths)
        assert pen.path_id != old.path_id
        assert len(paths) == 2
