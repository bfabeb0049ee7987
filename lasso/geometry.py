"""Planar geometry helpers for trails and loops.

Two queries are needed by the capture core:

- ``intersect_segments`` finds where an open polyline first crosses itself.
- ``point_in_polygon`` / ``build_polygon`` test loop membership; these use
  shapely so containment follows the GEOS predicates.

Boundary convention: a point lying exactly on the loop outline is *not*
contained (shapely ``contains`` semantics). Moving shapes never sit exactly
on a hand-drawn outline, so game logic does not distinguish the two cases.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import shapely
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry

__all__ = [
    "Point",
    "SegmentIntersection",
    "segment_intersection",
    "intersect_segments",
    "build_polygon",
    "point_in_polygon",
]

Point = Tuple[float, float]

# Tolerance for parallel-segment detection
_EPSILON = 1e-12


@dataclass(frozen=True)
class SegmentIntersection:
    """First self-crossing of a polyline.

    Segment ``k`` joins ``points[k]`` to ``points[k + 1]``.

    Attributes:
        point: Where the two segments cross
        first_segment: Index of the earlier segment
        second_segment: Index of the later segment (the one that crossed back)
    """

    point: Point
    first_segment: int
    second_segment: int

    @property
    def indices(self) -> Tuple[int, int]:
        return (self.first_segment, self.second_segment)


def _is_degenerate(start: Point, end: Point) -> bool:
    return start[0] == end[0] and start[1] == end[1]


def segment_intersection(a0: Point, a1: Point, b0: Point, b1: Point) -> Optional[Point]:
    """Intersection point of segments a0-a1 and b0-b1, endpoints included.

    Parallel and collinear segments report no intersection.
    """
    rx = a1[0] - a0[0]
    ry = a1[1] - a0[1]
    sx = b1[0] - b0[0]
    sy = b1[1] - b0[1]
    denom = rx * sy - ry * sx
    if abs(denom) < _EPSILON:
        return None

    qpx = b0[0] - a0[0]
    qpy = b0[1] - a0[1]
    t = (qpx * sy - qpy * sx) / denom
    u = (qpx * ry - qpy * rx) / denom
    if t < 0.0 or t > 1.0 or u < 0.0 or u > 1.0:
        return None
    return (a0[0] + t * rx, a0[1] + t * ry)


def intersect_segments(points: Sequence[Point]) -> Optional[SegmentIntersection]:
    """Find the first self-intersection of an open polyline.

    Scan order: segments are visited in drawing order. The first segment
    that crosses any earlier, non-adjacent segment decides the result; if it
    crosses several, the crossing nearest to its start wins (ties go to the
    lower earlier-segment index). That crossing closes the smallest loop, so
    the prefix it cuts off is always simple.

    Adjacent segments share an endpoint and are never tested against each
    other. Zero-length segments are skipped and do not count as neighbours.

    Args:
        points: Polyline vertices in drawing order (not implicitly closed)

    Returns:
        The crossing, or None if the polyline is simple
    """
    segments: List[Tuple[Point, Point]] = [
        (points[k], points[k + 1]) for k in range(len(points) - 1)
    ]

    for later in range(1, len(segments)):
        b0, b1 = segments[later]
        if _is_degenerate(b0, b1):
            continue

        neighbour = later - 1
        while neighbour >= 0 and _is_degenerate(*segments[neighbour]):
            neighbour -= 1

        best: Optional[SegmentIntersection] = None
        best_distance = 0.0
        for earlier in range(neighbour):
            a0, a1 = segments[earlier]
            if _is_degenerate(a0, a1):
                continue
            crossing = segment_intersection(a0, a1, b0, b1)
            if crossing is None:
                continue
            distance = (crossing[0] - b0[0]) ** 2 + (crossing[1] - b0[1]) ** 2
            if best is None or distance < best_distance:
                best = SegmentIntersection(crossing, earlier, later)
                best_distance = distance

        if best is not None:
            return best

    return None


def build_polygon(points: Sequence[Point]) -> Optional[BaseGeometry]:
    """Build a polygon ring from loop vertices (closed implicitly).

    Returns None when the points cannot enclose any area. Invalid rings are
    repaired with ``shapely.make_valid`` so predicates stay well defined.
    """
    if len(points) < 3:
        return None
    polygon = Polygon(points)
    if polygon.is_empty or polygon.area == 0.0:
        return None
    if not polygon.is_valid:
        return shapely.make_valid(polygon)
    return polygon


def point_in_polygon(polygon: Sequence[Point], point: Point) -> bool:
    """Whether ``point`` lies strictly inside the ring ``polygon``."""
    shape = build_polygon(polygon)
    if shape is None:
        return False
    return bool(shape.contains(ShapelyPoint(point)))
