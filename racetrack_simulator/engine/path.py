from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from racetrack_simulator.core.direction import SpaceKind
from racetrack_simulator.core.vector import Vector

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from racetrack_simulator.engine.track import Grid

PathVerdict = Literal["clear", "crashed", "won"]


def calculate_path(start: Vector, end: Vector) -> list[Vector]:
    """
    All grid cells between two positions, both included (Bresenham line).

    The axis with the larger distance is the fast axis and advances on every
    step; on a tie x is the fast axis. The slow axis advances whenever the
    error accumulator drops below zero.
    """
    diff = end - start
    distance = diff.abs()
    direction = diff.sign()

    if distance.x >= distance.y:
        fast, slow = distance.x, distance.y
        parallel_step = Vector(direction.x, 0)
    else:
        fast, slow = distance.y, distance.x
        parallel_step = Vector(0, direction.y)
    diagonal_step = direction

    position = start
    path = [position]

    error = fast // 2
    for _ in range(fast):
        error -= slow
        if error < 0:
            error += fast
            position = position + diagonal_step
        else:
            position = position + parallel_step
        path.append(position)

    return path


@dataclass(frozen=True, slots=True)
class PathTrace:
    verdict: PathVerdict
    # Cell where the walk stopped; the last cell for a clear path
    stop_at: Vector


def trace_path(
    grid: Grid,
    path: Sequence[Vector],
    velocity: Vector,
    is_occupied: Callable[[Vector], bool],
) -> PathTrace:
    """
    Walk a rasterized path and report the first crash or winning crossing.
    `path` must not be empty.

    Finish cells crossed in the wrong direction are passable. Car collisions
    only count on open track.
    """
    for cell in path:
        kind = grid.classify(cell)
        if kind is SpaceKind.OBSTACLE:
            return PathTrace("crashed", cell)
        if kind is SpaceKind.OPEN:
            if is_occupied(cell):
                return PathTrace("crashed", cell)
            continue
        if kind.crossed_by(velocity):
            return PathTrace("won", cell)
    return PathTrace("clear", path[-1])
