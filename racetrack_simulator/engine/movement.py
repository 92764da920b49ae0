from __future__ import annotations

from typing import TYPE_CHECKING

from racetrack_simulator.engine.path import calculate_path, trace_path

if TYPE_CHECKING:
    from racetrack_simulator.core.types import TurnOutcome
    from racetrack_simulator.core.vector import Vector
    from racetrack_simulator.engine.race_engine import RaceEngine


def is_occupied_by_other(engine: RaceEngine, position: Vector, car_idx: int) -> bool:
    """Any non-crashed car other than `car_idx` standing on `position`."""
    return any(
        other.idx != car_idx and not other.crashed and other.position == position
        for other in engine.state.cars
    )


def resolve_car_turn(
    engine: RaceEngine,
    car_idx: int,
    acceleration: Vector,
) -> TurnOutcome:
    """
    Resolve one turn of one car.

    Accelerate, trace the straight path to the projected position and apply
    the first crash or winning finish crossing found on it. The car moves to
    its projected position unless it crashes.
    """
    state = engine.state
    car = engine.get_car(car_idx)
    if state.has_winner or not car.active:
        return "skipped"

    car.accelerate(acceleration)

    start = car.position
    end = car.project_next_position()
    path = calculate_path(start, end)

    trace = trace_path(
        state.track,
        path,
        car.velocity,
        lambda cell: is_occupied_by_other(engine, cell, car_idx),
    )

    match trace.verdict:
        case "crashed":
            car.mark_crashed(trace.stop_at)
            engine.log_info(f"Crash: {car.repr} crashed at {trace.stop_at}")
            _check_attrition_winner(engine)
            return "crashed"
        case "won":
            car.apply_move()
            state.winner = car_idx
            engine.log_info(
                f"Finish: {car.repr} crossed the finish line at {trace.stop_at}",
            )
            engine.log_info(f"Winner: {car.repr}")
            return "won"
        case "clear":
            car.apply_move()
            engine.log_info(
                f"Move: {car.repr} {start}->{car.position} velocity {car.velocity}",
            )
            return "moved"


def _check_attrition_winner(engine: RaceEngine) -> None:
    survivors = engine.state.non_crashed_indices()
    if len(survivors) != 1:
        return
    winner = engine.get_car(survivors[0])
    engine.state.winner = winner.idx
    engine.log_info(f"Winner: {winner.repr} is the last car not crashed")
