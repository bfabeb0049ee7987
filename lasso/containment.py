"""Which shapes lie inside a closed loop."""

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from shapely.geometry import Point as ShapelyPoint
from shapely.prepared import prep

from lasso.entities import Shape
from lasso.geometry import Point, build_polygon
from lasso.kinds import ShapeKind
from lasso.math_utils import Vector2


@dataclass(frozen=True)
class CapturedEntity:
    """Snapshot of a shape taken when a loop's containment was evaluated."""

    shape_id: int
    kind: ShapeKind
    position: Vector2
    velocity: Vector2


def find_contained(loop_points: Sequence[Point], shapes: Iterable[Shape]) -> List[CapturedEntity]:
    """Return a snapshot of every collidable shape whose centre is inside the loop.

    Shapes held by a running capture animation are skipped. The result keeps
    the enumeration order of ``shapes``; membership does not depend on it.
    Pure query: nothing is mutated.
    """
    polygon = build_polygon(loop_points)
    if polygon is None:
        return []
    prepared = prep(polygon)

    captured: List[CapturedEntity] = []
    for shape in shapes:
        if not shape.collidable:
            continue
        if prepared.contains(ShapelyPoint(shape.position.x, shape.position.y)):
            captured.append(
                CapturedEntity(
                    shape_id=shape.shape_id,
                    kind=shape.kind,
                    position=shape.position.copy(),
                    velocity=shape.velocity.copy(),
                )
            )
    return captured
