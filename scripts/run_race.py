from __future__ import annotations  # noqa: INP001

from racetrack_simulator.core.state import LogContext, RaceState
from racetrack_simulator.engine import ENGINE_ID_COUNTER
from racetrack_simulator.engine.logging import configure_logging
from racetrack_simulator.engine.race_engine import RaceEngine
from racetrack_simulator.engine.track import TRACK_DEFINITIONS
from racetrack_simulator.strategies.do_not_move import DoNotMoveStrategy
from racetrack_simulator.strategies.path_finder import PathFinderStrategy

if __name__ == "__main__":
    configure_logging()
    engine_id = next(ENGINE_ID_COUNTER)
    eng = RaceEngine(
        RaceState.from_track(TRACK_DEFINITIONS["oval"]()),
        log_context=LogContext(engine_id=engine_id),
    )
    eng.set_car_move_strategy(0, PathFinderStrategy(eng, 0, max_speed=3))
    eng.set_car_move_strategy(1, DoNotMoveStrategy())

    eng.run_race(max_turns=200)
