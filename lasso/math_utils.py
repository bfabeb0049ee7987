"""Centralized math utilities for the simulation.

This module provides pure Python mathematical utilities for the simulation,
including a Vector2 implementation for 2D vector operations.
"""

from __future__ import annotations

import math
from typing import Iterable, Tuple


class Vector2:
    """A 2D vector class for mathematical operations."""

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.x: float = float(x)
        self.y: float = float(y)

    @classmethod
    def from_tuple(cls, point: Tuple[float, float]) -> "Vector2":
        return cls(point[0], point[1])

    @classmethod
    def from_angle(cls, angle: float, length: float = 1.0) -> "Vector2":
        """Build a vector of the given length pointing at ``angle`` radians."""
        return cls(math.cos(angle) * length, math.sin(angle) * length)

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    def __truediv__(self, scalar: float) -> "Vector2":
        return Vector2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def distance_to(self, other: "Vector2") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def normalize(self) -> "Vector2":
        length = math.sqrt(self.x * self.x + self.y * self.y)
        if length == 0:
            return Vector2(0, 0)
        return Vector2(self.x / length, self.y / length)

    def dot(self, other: "Vector2") -> float:
        return self.x * other.x + self.y * other.y

    def lerp(self, target: "Vector2", fraction: float) -> "Vector2":
        """Move ``fraction`` of the way from this vector towards ``target``."""
        return Vector2(
            self.x + (target.x - self.x) * fraction,
            self.y + (target.y - self.y) * fraction,
        )

    def copy(self) -> "Vector2":
        """Return a copy of this vector."""
        return Vector2(self.x, self.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __eq__(self, other: object) -> bool:
        """Check if two vectors are equal."""
        if other.__class__ is not Vector2:
            return False
        return abs(self.x - other.x) < 1e-9 and abs(self.y - other.y) < 1e-9

    def __ne__(self, other: object) -> bool:
        """Check if two vectors are not equal."""
        return not self.__eq__(other)

    def __repr__(self) -> str:
        return f"Vector2({self.x}, {self.y})"


def mean_vector(vectors: Iterable[Vector2]) -> Vector2:
    """Arithmetic mean of a non-empty collection of vectors."""
    total_x = 0.0
    total_y = 0.0
    count = 0
    for vector in vectors:
        total_x += vector.x
        total_y += vector.y
        count += 1
    if count == 0:
        raise ValueError("mean_vector() requires at least one vector")
    return Vector2(total_x / count, total_y / count)


__all__ = ["Vector2", "mean_vector"]
