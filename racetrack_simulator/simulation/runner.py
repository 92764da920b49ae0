"""Build and run a single configured race."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from racetrack_simulator.core.state import LogContext, RaceState
from racetrack_simulator.engine import ENGINE_ID_COUNTER
from racetrack_simulator.engine.race_engine import RaceEngine
from racetrack_simulator.simulation.telemetry import CarMetrics, MetricsAggregator
from racetrack_simulator.strategies import create_strategy

if TYPE_CHECKING:
    from racetrack_simulator.engine.track import Track
    from racetrack_simulator.simulation.config import RaceConfig


@dataclass(slots=True)
class RaceResult:
    winner: int | None
    winner_id: str | None
    aborted: bool
    turn_count: int
    execution_time_ms: float
    metrics: list[CarMetrics]


def build_engine(config: RaceConfig, track: Track | None = None) -> RaceEngine:
    """Engine for the configured track with every car bound to its strategy."""
    if track is None:
        track = config.load_track()

    engine = RaceEngine(
        RaceState.from_track(track),
        log_context=LogContext(engine_id=next(ENGINE_ID_COUNTER)),
    )
    for car in engine.state.cars:
        strategy = create_strategy(config.strategy_for(car.car_id), engine, car.idx)
        engine.set_car_move_strategy(car.idx, strategy)
    return engine


def run_single_race(config: RaceConfig, track: Track | None = None) -> RaceResult:
    engine = build_engine(config, track)
    aggregator = MetricsAggregator()
    aggregator.initialize_cars(engine)

    start = time.perf_counter()
    winner = engine.run_race(
        max_turns=config.max_turns_per_race,
        on_turn_end=aggregator.on_turn_end,
    )
    elapsed_ms = (time.perf_counter() - start) * 1000

    return RaceResult(
        winner=winner,
        winner_id=engine.get_car(winner).car_id if winner is not None else None,
        aborted=engine.aborted,
        turn_count=len(engine.turn_history),
        execution_time_ms=elapsed_ms,
        metrics=aggregator.finalize_metrics(engine),
    )
