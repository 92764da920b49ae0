from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from racetrack_simulator.core.vector import Vector


@runtime_checkable
class MoveSource(Protocol):
    """Anything that can supply a car with its acceleration for the next turn."""

    def next_move(self) -> Vector | None:
        """
        Acceleration for the next turn.
        None means the source has no further move; the car retires.
        """
        ...
