from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Self

if TYPE_CHECKING:
    from racetrack_simulator.core.types import StrategyName
    from racetrack_simulator.core.vector import Vector
    from racetrack_simulator.engine.race_engine import RaceEngine
    from racetrack_simulator.simulation.config import StrategyConfig


class MoveStrategy(ABC):
    """Base class for all move strategies with auto-registration by name."""

    name: ClassVar[StrategyName]

    @abstractmethod
    def next_move(self) -> Vector | None:
        pass

    @classmethod
    @abstractmethod
    def from_config(
        cls,
        config: StrategyConfig,
        engine: RaceEngine,
        car_idx: int,
    ) -> Self:
        """Build the strategy for one car of a configured race."""
