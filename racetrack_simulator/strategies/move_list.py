from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from typing_extensions import override

from racetrack_simulator.core.direction import Direction
from racetrack_simulator.core.strategy_base import MoveStrategy

if TYPE_CHECKING:
    from collections.abc import Iterable

    from racetrack_simulator.core.types import StrategyName
    from racetrack_simulator.core.vector import Vector
    from racetrack_simulator.engine.race_engine import RaceEngine
    from racetrack_simulator.simulation.config import StrategyConfig


def parse_directions(lines: Iterable[str]) -> list[Direction]:
    """One direction name per line; blank lines and `#` comments are ignored."""
    directions: list[Direction] = []
    for line_no, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        try:
            directions.append(Direction[line.upper()])
        except KeyError:
            raise ValueError(f"Unknown direction {line!r} on line {line_no}") from None
    return directions


@dataclass
class MoveListStrategy(MoveStrategy):
    """Plays back a scripted list of accelerations, then stops."""

    name: ClassVar[StrategyName] = "move_list"

    moves: list[Direction]
    _cursor: int = field(default=0, repr=False)

    @property
    def remaining(self) -> int:
        return len(self.moves) - self._cursor

    @override
    def next_move(self) -> Vector | None:
        if self._cursor >= len(self.moves):
            return None
        move = self.moves[self._cursor]
        self._cursor += 1
        return move.vector

    @classmethod
    def from_file(cls, path: str | Path) -> MoveListStrategy:
        with Path(path).open(encoding="utf-8") as f:
            return cls(parse_directions(f))

    @classmethod
    @override
    def from_config(
        cls,
        config: StrategyConfig,
        engine: RaceEngine,
        car_idx: int,
    ) -> MoveListStrategy:
        _ = engine, car_idx
        moves = [Direction[name] for name in config.moves]
        if config.moves_file is not None:
            moves += cls.from_file(config.moves_file).moves
        return cls(moves)
