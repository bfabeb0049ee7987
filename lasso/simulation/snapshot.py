"""Immutable view of the field handed to renderers."""

from dataclasses import dataclass
from typing import Tuple

from lasso.geometry import Point


@dataclass(frozen=True)
class PathView:
    """One path as a renderer sees it.

    Attributes:
        path_id: Path identity
        points: Vertices in drawing order
        closed: Whether the points form a loop (draw the closing edge)
        active: Whether a pen is currently drawing this path
        age_rank: 0 for the newest path, increasing with age
        opacity: Fade factor in [0, 1]
    """

    path_id: int
    points: Tuple[Point, ...]
    closed: bool
    active: bool
    age_rank: int
    opacity: float


@dataclass(frozen=True)
class ShapeView:
    shape_id: int
    kind: str
    position: Point
    radius: float
    held: bool


@dataclass(frozen=True)
class PenView:
    pen_id: int
    position: Point
    active: bool


@dataclass(frozen=True)
class RenderSnapshot:
    """Everything needed to draw one frame."""

    frame: int
    paths: Tuple[PathView, ...]
    shapes: Tuple[ShapeView, ...]
    pens: Tuple[PenView, ...]

    @property
    def active_path(self):
        for path in self.paths:
            if path.active:
                return path
        return None
