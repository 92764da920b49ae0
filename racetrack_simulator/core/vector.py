from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar

VECTOR_PATTERN = re.compile(r"\([Xx]:(?P<x>\d+)\s*,\s*[Yy]:(?P<y>\d+)\)")


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


@dataclass(frozen=True, slots=True)
class Vector:
    """
    Immutable grid vector, used for positions and velocities alike.

    x grows to the right, y grows downwards (row index on the track).
    """

    x: int
    y: int

    ZERO: ClassVar[Vector]

    def add(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y)

    def subtract(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y)

    def abs(self) -> Vector:
        return Vector(abs(self.x), abs(self.y))

    def sign(self) -> Vector:
        """Each component mapped to -1, 0 or 1."""
        return Vector(_sign(self.x), _sign(self.y))

    def dot(self, other: Vector) -> int:
        return self.x * other.x + self.y * other.y

    def __add__(self, other: Vector) -> Vector:
        return self.add(other)

    def __sub__(self, other: Vector) -> Vector:
        return self.subtract(other)

    def __abs__(self) -> Vector:
        return self.abs()

    def __str__(self) -> str:
        return f"(X:{self.x}, Y:{self.y})"

    @classmethod
    def from_string(cls, text: str) -> Vector:
        """Parse the `(X:1, Y:2)` form produced by `str()`."""
        match = VECTOR_PATTERN.fullmatch(text.strip())
        if match is None:
            raise ValueError(f"String does not match vector pattern: {text!r}")
        return cls(int(match["x"]), int(match["y"]))


Vector.ZERO = Vector(0, 0)
