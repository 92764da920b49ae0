from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from typing_extensions import override

from racetrack_simulator.core.strategy_base import MoveStrategy
from racetrack_simulator.core.vector import Vector
from racetrack_simulator.engine.path import calculate_path

if TYPE_CHECKING:
    from collections.abc import Iterable

    from racetrack_simulator.core.state import CarState
    from racetrack_simulator.core.types import StrategyName
    from racetrack_simulator.engine.race_engine import RaceEngine
    from racetrack_simulator.simulation.config import StrategyConfig


def parse_waypoints(lines: Iterable[str]) -> list[Vector]:
    """One `(X:1, Y:2)` vector per line; blank lines are ignored."""
    return [Vector.from_string(line) for line in lines if line.strip()]


def _axis_acceleration(position: int, velocity: int, target: int) -> int:
    """
    Acceleration along one axis that gets to `target` without overshooting.

    Braking from speed v covers v*(v-1)/2 more cells after this turn.
    """
    remaining = target - position
    if remaining == 0:
        return -_sign(velocity)

    toward = _sign(remaining)
    if _sign(velocity) != toward:
        return toward

    distance = abs(remaining)
    speed = abs(velocity)
    if distance >= (speed + 1) * (speed + 2) // 2:
        return toward
    if distance >= speed * (speed + 1) // 2:
        return 0
    return -toward


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


@dataclass
class PathFollowerStrategy(MoveStrategy):
    """Steers a car through a list of waypoints, one after the other."""

    name: ClassVar[StrategyName] = "path_follower"

    car: CarState
    waypoints: deque[Vector]
    _last_position: Vector | None = field(default=None, repr=False)

    def _drop_reached_waypoints(self) -> None:
        if self._last_position is None:
            travelled = {self.car.position}
        else:
            travelled = set(calculate_path(self._last_position, self.car.position))
        while self.waypoints and self.waypoints[0] in travelled:
            _ = self.waypoints.popleft()

    @override
    def next_move(self) -> Vector | None:
        self._drop_reached_waypoints()
        self._last_position = self.car.position
        if not self.waypoints:
            return None

        target = self.waypoints[0]
        position, velocity = self.car.position, self.car.velocity
        return Vector(
            _axis_acceleration(position.x, velocity.x, target.x),
            _axis_acceleration(position.y, velocity.y, target.y),
        )

    @classmethod
    def from_file(cls, car: CarState, path: str | Path) -> PathFollowerStrategy:
        with Path(path).open(encoding="utf-8") as f:
            return cls(car, deque(parse_waypoints(f)))

    @classmethod
    @override
    def from_config(
        cls,
        config: StrategyConfig,
        engine: RaceEngine,
        car_idx: int,
    ) -> PathFollowerStrategy:
        car = engine.get_car(car_idx)
        waypoints = [Vector(x, y) for x, y in config.waypoints]
        if config.waypoints_file is not None:
            with Path(config.waypoints_file).open(encoding="utf-8") as f:
                waypoints += parse_waypoints(f)
        return cls(car, deque(waypoints))
