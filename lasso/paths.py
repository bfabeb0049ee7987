"""Trails drawn by pens and the closure detector that turns them into loops.

A ``Path`` records a pen's trace as an ordered list of points. Points are
only ever appended at the tail while the path is open. When the trail
crosses itself, ``try_close`` replaces the point list with the enclosed loop
and marks the path closed. The part of the trail outside the loop (the two
tails stitched together) is kept as a *remainder* if it is longer than the
loop, so drawing can resume from it when the loop turns out to be empty.

Closure layout, for a crossing at ``P`` between segments ``i < j``::

    original:  p0 ... pi | p(i+1) ... pj | p(j+1) ... pn
    loop:               p(i+1) ... pj, P
    remainder: p0 ... pi, p(j+1) ... pn

so ``len(loop) + len(remainder) - 1 == len(original)``.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from lasso.exceptions import StateTransitionError
from lasso.geometry import Point, intersect_segments

logger = logging.getLogger(__name__)


class ClosureOutcome(Enum):
    """Result of running the closure detector on an open path."""

    OPEN = auto()  # No self-intersection yet
    CLOSED_NO_REMAINDER = auto()  # Closed, outer trail discarded
    CLOSED_WITH_REMAINDER = auto()  # Closed, outer trail kept for later


@dataclass
class Path:
    """A trail drawn by one pen.

    Attributes:
        path_id: Stable identity assigned by the path lifecycle manager
        pen_id: Pen that drew this path
        points: Vertices in drawing order (the loop once closed)
        closed: Whether ``points`` forms a closed loop
        remainder: Saved outer trail, restorable if the loop is empty
        changed: Whether containment must be re-evaluated
    """

    path_id: int
    pen_id: int
    points: List[Point] = field(default_factory=list)
    closed: bool = False
    remainder: Optional[List[Point]] = None
    changed: bool = False

    @property
    def last_point(self) -> Optional[Point]:
        return self.points[-1] if self.points else None

    def append(self, point: Point) -> bool:
        """Append ``point`` at the tail unless it repeats the last point.

        Returns:
            True if the point was added

        Raises:
            StateTransitionError: If the path is already closed
        """
        if self.closed:
            raise StateTransitionError(f"Cannot append to closed path #{self.path_id}")
        if self.points and self.points[-1] == point:
            return False
        self.points.append(point)
        return True

    def close(self, loop: List[Point], remainder: Optional[List[Point]]) -> None:
        """Replace the trail with ``loop`` and mark the path closed."""
        if self.closed:
            raise StateTransitionError(f"Path #{self.path_id} is already closed")
        self.points = loop
        self.remainder = remainder
        self.closed = True
        self.changed = True

    def reopen_from_remainder(self) -> bool:
        """Swap the saved remainder back in and resume open recording.

        Returns:
            False if there was no remainder to restore
        """
        if self.remainder is None:
            return False
        self.points = self.remainder
        self.remainder = None
        self.closed = False
        self.changed = False
        return True


def try_close(path: Path) -> ClosureOutcome:
    """Close ``path`` at its first self-intersection, if it has one.

    The remainder is retained only when it has strictly more points than
    the loop; a shorter remainder is a negligible stub and is discarded.
    The crossing point ends the loop unless it coincides with one of the
    loop's own vertices.

    Args:
        path: An open path

    Returns:
        Whether the path closed and whether a remainder was kept
    """
    if path.closed:
        raise StateTransitionError(f"try_close() called on closed path #{path.path_id}")

    crossing = intersect_segments(path.points)
    if crossing is None:
        return ClosureOutcome.OPEN

    first, second = crossing.indices
    loop = path.points[first + 1 : second + 1]
    # A crossing exactly on a loop vertex would only add a zero-length edge
    if crossing.point != loop[0] and crossing.point != loop[-1]:
        loop.append(crossing.point)
    remainder = path.points[: first + 1] + path.points[second + 1 :]

    kept = remainder if len(remainder) > len(loop) else None
    path.close(loop, kept)
    logger.debug(
        "Path #%d closed at %s: loop=%d points, remainder=%s",
        path.path_id,
        crossing.point,
        len(loop),
        len(remainder) if kept is not None else "discarded",
    )
    if kept is not None:
        return ClosureOutcome.CLOSED_WITH_REMAINDER
    return ClosureOutcome.CLOSED_NO_REMAINDER
