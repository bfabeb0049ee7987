"""Entities living on the field: shapes and the pens that draw trails."""

from dataclasses import dataclass, field
from typing import Optional

from lasso.kinds import ShapeKind
from lasso.math_utils import Vector2


@dataclass
class Shape:
    """A moving, capturable shape.

    Attributes:
        shape_id: Stable identity assigned by the registry
        kind: Colour category used by fusion
        position: Centre in world coordinates
        velocity: Pixels per second
        radius: Collision radius
        collidable: False while a capture animation holds the shape; held
            shapes are neither moved by physics nor captured by other loops
    """

    shape_id: int
    kind: ShapeKind
    position: Vector2
    velocity: Vector2 = field(default_factory=Vector2)
    radius: float = 10.0
    collidable: bool = True


@dataclass
class Pen:
    """An agent that draws a trail while active.

    A pen references at most one path. Deactivating clears that reference;
    the path itself is owned by the path lifecycle manager.
    """

    pen_id: int
    position: Vector2 = field(default_factory=Vector2)
    active: bool = False
    path_id: Optional[int] = None
    # Last raw input flag, used for edge-triggered activation
    input_held: bool = False

    def activate(self) -> None:
        self.active = True

    def deactivate(self) -> None:
        self.active = False
        self.path_id = None
