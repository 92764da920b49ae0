from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from racetrack_simulator.core.types import TurnOutcome
    from racetrack_simulator.core.vector import Vector
    from racetrack_simulator.engine.race_engine import RaceEngine


@dataclass(frozen=True, slots=True)
class TurnRecord:
    """Lightweight record of a single turn's key outcome."""

    turn_index: int
    car_idx: int
    acceleration: Vector | None
    start: Vector
    end: Vector
    velocity: Vector
    outcome: TurnOutcome

    @property
    def cells_travelled(self) -> int:
        distance = (self.end - self.start).abs()
        return max(distance.x, distance.y)


@dataclass(slots=True)
class CarMetrics:
    car_idx: int
    car_id: str
    turns_taken: int = 0
    cells_travelled: int = 0
    top_speed: int = 0
    crashed: bool = False
    retired: bool = False
    won: bool = False


@dataclass(slots=True)
class MetricsAggregator:
    """
    Accumulates per-car stats from turn records.
    """

    results: dict[int, CarMetrics] = field(default_factory=dict)
    turn_history: list[TurnRecord] = field(default_factory=list)

    def initialize_cars(self, engine: RaceEngine) -> None:
        """
        Pre-populate results for all cars in the engine.
        MUST be called before processing turns.
        """
        for car in engine.state.cars:
            self.results[car.idx] = CarMetrics(car_idx=car.idx, car_id=car.car_id)

    def on_turn_end(self, engine: RaceEngine, record: TurnRecord) -> None:
        _ = engine
        self.turn_history.append(record)
        if record.outcome == "skipped":
            return

        # KeyError here means initialize_cars was not called
        stats = self.results[record.car_idx]
        stats.turns_taken += 1
        stats.cells_travelled += record.cells_travelled
        speed = record.velocity.abs()
        stats.top_speed = max(stats.top_speed, speed.x, speed.y)

    def finalize_metrics(self, engine: RaceEngine) -> list[CarMetrics]:
        """Copy end-of-race status flags and return metrics in roster order."""
        output: list[CarMetrics] = []
        for car in engine.state.cars:
            stats = self.results[car.idx]
            stats.crashed = car.crashed
            stats.retired = car.retired
            stats.won = engine.winner == car.idx
            output.append(stats)
        return output
