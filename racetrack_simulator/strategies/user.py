from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from typing_extensions import override

from rich.prompt import Prompt

from racetrack_simulator.core.direction import Direction
from racetrack_simulator.core.strategy_base import MoveStrategy

if TYPE_CHECKING:
    from racetrack_simulator.core.types import StrategyName
    from racetrack_simulator.core.vector import Vector
    from racetrack_simulator.engine.race_engine import RaceEngine
    from racetrack_simulator.simulation.config import StrategyConfig

# Numeric keypad layout: 7 8 9 / 4 5 6 / 1 2 3
KEYPAD: dict[str, Direction] = {
    "7": Direction.UP_LEFT,
    "8": Direction.UP,
    "9": Direction.UP_RIGHT,
    "4": Direction.LEFT,
    "5": Direction.NONE,
    "6": Direction.RIGHT,
    "1": Direction.DOWN_LEFT,
    "2": Direction.DOWN,
    "3": Direction.DOWN_RIGHT,
}
QUIT_KEY = "q"

AskFn = Callable[..., str]


@dataclass
class UserStrategy(MoveStrategy):
    """Asks a human for each acceleration on the keypad."""

    name: ClassVar[StrategyName] = "user"

    car_id: str
    ask: AskFn = field(default=Prompt.ask, repr=False)

    @override
    def next_move(self) -> Vector | None:
        answer = self.ask(
            f"Car {self.car_id} acceleration (keypad 1-9, {QUIT_KEY} to stop)",
            choices=[*KEYPAD, QUIT_KEY],
            default="5",
        )
        if answer == QUIT_KEY:
            return None
        return KEYPAD[answer].vector

    @classmethod
    @override
    def from_config(
        cls,
        config: StrategyConfig,
        engine: RaceEngine,
        car_idx: int,
    ) -> UserStrategy:
        _ = config
        return cls(engine.get_car(car_idx).car_id)
