"""In-process entity registry and kinematic physics for shapes.

This is the default implementation of the ``EntityRegistry`` protocol. It
stores shapes in insertion order, keeps trail segments as kinematic
obstacles keyed by the path that registered them, and integrates a simple
physics step: constant velocity, bouncing off the arena walls and off trail
segments. Shapes do not collide with each other.

Held shapes (``collidable`` is False) are skipped by the physics step so the
capture animation is the only thing moving them.
"""

import logging
import math
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from lasso.entities import Shape
from lasso.events import EventBus, ShapeDespawnedEvent, ShapeSpawnedEvent
from lasso.geometry import Point
from lasso.kinds import ShapeKind
from lasso.math_utils import Vector2

logger = logging.getLogger(__name__)

Segment = Tuple[Point, Point]


def _closest_point_on_segment(point: Vector2, start: Point, end: Point) -> Vector2:
    ax, ay = start
    dx = end[0] - ax
    dy = end[1] - ay
    length_sq = dx * dx + dy * dy
    if length_sq == 0.0:
        return Vector2(ax, ay)
    t = ((point.x - ax) * dx + (point.y - ay) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return Vector2(ax + t * dx, ay + t * dy)


class ShapeRegistry:
    """Owns every shape on the field and the trail obstacles.

    Attributes:
        half_width: Half the arena width (walls at +/- this x)
        half_height: Half the arena height (walls at +/- this y)
        shape_radius: Radius given to spawned shapes
        restitution: Speed fraction kept on each bounce
    """

    def __init__(
        self,
        half_width: float,
        half_height: float,
        *,
        shape_radius: float = 10.0,
        restitution: float = 0.8,
        event_bus: Optional[EventBus] = None,
        frame_source: Optional[Callable[[], int]] = None,
    ) -> None:
        self.half_width = half_width
        self.half_height = half_height
        self.shape_radius = shape_radius
        self.restitution = restitution
        self._event_bus = event_bus
        self._frame_source = frame_source or (lambda: 0)
        self._shapes: Dict[int, Shape] = {}
        self._obstacles: Dict[int, List[Segment]] = {}
        self._next_id = 1

    # ------------------------------------------------------------------
    # EntityRegistry protocol
    # ------------------------------------------------------------------

    def alive_shapes(self) -> Iterator[Shape]:
        return iter(list(self._shapes.values()))

    def get(self, shape_id: int) -> Optional[Shape]:
        return self._shapes.get(shape_id)

    def set_collidable(self, shape_id: int, collidable: bool) -> None:
        shape = self._shapes.get(shape_id)
        if shape is not None:
            shape.collidable = collidable

    def spawn(self, kind: ShapeKind, position: Vector2, velocity: Vector2) -> Shape:
        shape = Shape(
            shape_id=self._next_id,
            kind=kind,
            position=position.copy(),
            velocity=velocity.copy(),
            radius=self.shape_radius,
        )
        self._next_id += 1
        self._shapes[shape.shape_id] = shape
        logger.debug("Spawned %s shape #%d at %s", kind.value, shape.shape_id, shape.position)
        if self._event_bus is not None:
            self._event_bus.emit(
                ShapeSpawnedEvent(
                    shape_id=shape.shape_id, kind=kind.value, frame=self._frame_source()
                )
            )
        return shape

    def despawn(self, shape_id: int) -> bool:
        shape = self._shapes.pop(shape_id, None)
        if shape is None:
            return False
        logger.debug("Despawned %s shape #%d", shape.kind.value, shape_id)
        if self._event_bus is not None:
            self._event_bus.emit(
                ShapeDespawnedEvent(
                    shape_id=shape_id, kind=shape.kind.value, frame=self._frame_source()
                )
            )
        return True

    def add_obstacle(self, owner_id: int, start: Point, end: Point) -> None:
        self._obstacles.setdefault(owner_id, []).append((start, end))

    def remove_obstacles(self, owner_id: int) -> int:
        return len(self._obstacles.pop(owner_id, []))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._shapes)

    def obstacle_count(self, owner_id: Optional[int] = None) -> int:
        if owner_id is not None:
            return len(self._obstacles.get(owner_id, []))
        return sum(len(segments) for segments in self._obstacles.values())

    def clear(self) -> None:
        """Remove every shape and obstacle without emitting events."""
        self._shapes.clear()
        self._obstacles.clear()

    # ------------------------------------------------------------------
    # Physics
    # ------------------------------------------------------------------

    def step(self, dt: float) -> int:
        """Advance collidable shapes by ``dt`` seconds.

        Returns:
            Number of bounces resolved this step
        """
        bounces = 0
        for shape in self._shapes.values():
            if not shape.collidable:
                continue
            shape.position = shape.position + shape.velocity * dt
            bounces += self._bounce_off_walls(shape)
            bounces += self._bounce_off_obstacles(shape)
        return bounces

    def _bounce_off_walls(self, shape: Shape) -> int:
        bounces = 0
        limit_x = self.half_width - shape.radius
        limit_y = self.half_height - shape.radius
        if abs(shape.position.x) > limit_x:
            shape.position.x = math.copysign(limit_x, shape.position.x)
            if shape.velocity.x * shape.position.x > 0.0:
                shape.velocity.x = -shape.velocity.x * self.restitution
                bounces += 1
        if abs(shape.position.y) > limit_y:
            shape.position.y = math.copysign(limit_y, shape.position.y)
            if shape.velocity.y * shape.position.y > 0.0:
                shape.velocity.y = -shape.velocity.y * self.restitution
                bounces += 1
        return bounces

    def _bounce_off_obstacles(self, shape: Shape) -> int:
        bounces = 0
        for segments in self._obstacles.values():
            for start, end in segments:
                closest = _closest_point_on_segment(shape.position, start, end)
                offset = shape.position - closest
                distance = offset.length()
                if distance >= shape.radius or distance == 0.0:
                    continue
                normal = offset / distance
                # Push out of the segment, then reflect if moving into it
                shape.position = closest + normal * shape.radius
                approach = shape.velocity.dot(normal)
                if approach < 0.0:
                    shape.velocity = shape.velocity - normal * ((1.0 + self.restitution) * approach)
                    bounces += 1
        return bounces
