# terrain_generator/vector.py

"""A minimal immutable 2D vector used for lattice offsets and gradients."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector2:
    """A 2D float vector. Every operation returns a new instance."""

    x: float
    y: float

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def dot(self, other: "Vector2") -> float:
        return self.x * other.x + self.y * other.y

    def normalize(self) -> "Vector2":
        """Returns the unit vector pointing in the same direction."""
        length = self.length()
        if length == 0.0:
            raise ValueError("Cannot normalize a zero-length vector.")
        return Vector2(self.x / length, self.y / length)

    def as_tuple(self) -> tuple:
        return (self.x, self.y)
