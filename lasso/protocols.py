"""Protocol for the entity registry the capture core drives.

The capture core never integrates physics or owns shape storage itself. It
talks to an entity registry through this structural protocol, which
``lasso.shape_registry.ShapeRegistry`` satisfies. Tests and alternative
front ends may supply any object with the same methods.

Capabilities:
    - live enumeration of shapes (identity, position, kind, velocity)
    - toggling a shape's collision participation
    - spawning and despawning shapes
    - registering trail segments as kinematic obstacles
"""

from typing import TYPE_CHECKING, Iterator, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from lasso.entities import Shape
    from lasso.geometry import Point
    from lasso.kinds import ShapeKind
    from lasso.math_utils import Vector2


@runtime_checkable
class EntityRegistry(Protocol):
    """Everything the capture core needs from the world."""

    def alive_shapes(self) -> Iterator["Shape"]:
        """Iterate live shapes in insertion order."""
        ...

    def get(self, shape_id: int) -> Optional["Shape"]:
        """Look up a live shape; None if it no longer exists."""
        ...

    def set_collidable(self, shape_id: int, collidable: bool) -> None:
        ...

    def spawn(self, kind: "ShapeKind", position: "Vector2", velocity: "Vector2") -> "Shape":
        ...

    def despawn(self, shape_id: int) -> bool:
        """Remove a shape. Returns False if it was already gone."""
        ...

    def add_obstacle(self, owner_id: int, start: "Point", end: "Point") -> None:
        """Register a trail segment other shapes bounce off."""
        ...

    def remove_obstacles(self, owner_id: int) -> int:
        """Drop every segment registered by ``owner_id``; returns how many."""
        ...
