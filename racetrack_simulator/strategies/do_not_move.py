from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from typing_extensions import override

from racetrack_simulator.core.direction import Direction
from racetrack_simulator.core.strategy_base import MoveStrategy

if TYPE_CHECKING:
    from racetrack_simulator.core.types import StrategyName
    from racetrack_simulator.core.vector import Vector
    from racetrack_simulator.engine.race_engine import RaceEngine
    from racetrack_simulator.simulation.config import StrategyConfig


@dataclass
class DoNotMoveStrategy(MoveStrategy):
    """Never accelerates."""

    name: ClassVar[StrategyName] = "do_not_move"

    @override
    def next_move(self) -> Vector:
        return Direction.NONE.vector

    @classmethod
    @override
    def from_config(
        cls,
        config: StrategyConfig,
        engine: RaceEngine,
        car_idx: int,
    ) -> DoNotMoveStrategy:
        _ = config, engine, car_idx
        return cls()
