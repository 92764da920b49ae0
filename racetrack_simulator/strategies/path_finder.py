from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from typing_extensions import override

from racetrack_simulator.core.direction import Direction
from racetrack_simulator.core.strategy_base import MoveStrategy
from racetrack_simulator.core.vector import Vector
from racetrack_simulator.engine.path import calculate_path, trace_path

if TYPE_CHECKING:
    from racetrack_simulator.core.types import StrategyName
    from racetrack_simulator.engine.race_engine import RaceEngine
    from racetrack_simulator.simulation.config import StrategyConfig

# (position, velocity)
SearchState = tuple[Vector, Vector]


@dataclass
class PathFinderStrategy(MoveStrategy):
    """
    Plans the fewest-turns route to a winning finish crossing.

    Breadth-first search over (position, velocity) using the same path and
    collision rules as the engine. Other cars are treated as fixed obstacles
    at their positions when the plan is made; the plan is not revised.
    """

    name: ClassVar[StrategyName] = "path_finder"

    engine: RaceEngine
    car_idx: int
    max_speed: int = 4
    _plan: deque[Vector] | None = field(default=None, repr=False)

    @override
    def next_move(self) -> Vector | None:
        if self._plan is None:
            self._plan = deque(self.find_route())
        if not self._plan:
            return None
        return self._plan.popleft()

    def find_route(self) -> list[Vector]:
        car = self.engine.get_car(self.car_idx)
        track = self.engine.state.track
        blocked = frozenset(
            other.position
            for other in self.engine.state.cars
            if other.idx != self.car_idx and not other.crashed
        )

        start: SearchState = (car.position, car.velocity)
        parents: dict[SearchState, tuple[SearchState, Vector] | None] = {start: None}
        queue: deque[SearchState] = deque([start])

        while queue:
            current = queue.popleft()
            position, velocity = current
            for direction in Direction:
                new_velocity = velocity + direction.vector
                speed = new_velocity.abs()
                if max(speed.x, speed.y) > self.max_speed:
                    continue

                end = position + new_velocity
                trace = trace_path(
                    track,
                    calculate_path(position, end),
                    new_velocity,
                    blocked.__contains__,
                )
                if trace.verdict == "crashed":
                    continue
                if trace.verdict == "won":
                    route = self._unwind(parents, current)
                    route.append(direction.vector)
                    self.engine.log_debug(
                        f"Path finder: car {car.repr} plans {len(route)} moves",
                    )
                    return route

                nxt: SearchState = (end, new_velocity)
                if nxt in parents:
                    continue
                parents[nxt] = (current, direction.vector)
                queue.append(nxt)

        self.engine.log_info(f"Path finder: no route to the finish for {car.repr}")
        return []

    @staticmethod
    def _unwind(
        parents: dict[SearchState, tuple[SearchState, Vector] | None],
        state: SearchState,
    ) -> list[Vector]:
        moves: list[Vector] = []
        link = parents[state]
        while link is not None:
            state, move = link
            moves.append(move)
            link = parents[state]
        moves.reverse()
        return moves

    @classmethod
    @override
    def from_config(
        cls,
        config: StrategyConfig,
        engine: RaceEngine,
        car_idx: int,
    ) -> PathFinderStrategy:
        return cls(engine, car_idx, max_speed=config.max_speed)
