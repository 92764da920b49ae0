from __future__ import annotations

from enum import Enum

from racetrack_simulator.core.vector import Vector


class Direction(Enum):
    """The nine possible accelerations, also used to classify any vector."""

    UP_LEFT = Vector(-1, -1)
    UP = Vector(0, -1)
    UP_RIGHT = Vector(1, -1)
    LEFT = Vector(-1, 0)
    NONE = Vector(0, 0)
    RIGHT = Vector(1, 0)
    DOWN_LEFT = Vector(-1, 1)
    DOWN = Vector(0, 1)
    DOWN_RIGHT = Vector(1, 1)

    @property
    def vector(self) -> Vector:
        return self.value

    @classmethod
    def of_vector(cls, vector: Vector) -> Direction:
        """Direction a vector of any length points to (quadrant, axis or NONE)."""
        return cls(vector.sign())


class SpaceKind(Enum):
    """Classification of one grid cell, keyed by its track character."""

    OBSTACLE = "#"
    OPEN = " "
    FINISH_LEFT = "<"
    FINISH_RIGHT = ">"
    FINISH_UP = "^"
    FINISH_DOWN = "v"

    @property
    def char(self) -> str:
        return self.value

    @property
    def required_direction(self) -> Direction | None:
        match self:
            case SpaceKind.FINISH_LEFT:
                return Direction.LEFT
            case SpaceKind.FINISH_RIGHT:
                return Direction.RIGHT
            case SpaceKind.FINISH_UP:
                return Direction.UP
            case SpaceKind.FINISH_DOWN:
                return Direction.DOWN
            case _:
                return None

    @property
    def is_finish(self) -> bool:
        return self.required_direction is not None

    def crossed_by(self, velocity: Vector) -> bool:
        """True if a car moving with `velocity` crosses this finish the right way."""
        required = self.required_direction
        if required is None:
            return False
        return required.vector.dot(velocity.sign()) == 1

    @classmethod
    def from_char(cls, char: str) -> SpaceKind | None:
        try:
            return cls(char)
        except ValueError:
            return None
