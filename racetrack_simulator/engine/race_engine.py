from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from racetrack_simulator.core.errors import MoveSourceNotSetError
from racetrack_simulator.core.state import CarState, LogContext, RaceState
from racetrack_simulator.engine import ENGINE_ID_COUNTER
from racetrack_simulator.engine.logging import ContextAdapter, get_engine_logger
from racetrack_simulator.engine.movement import resolve_car_turn
from racetrack_simulator.engine.path import calculate_path
from racetrack_simulator.simulation.telemetry import TurnRecord

if TYPE_CHECKING:
    from racetrack_simulator.core.agent import MoveSource
    from racetrack_simulator.core.types import TurnOutcome
    from racetrack_simulator.core.vector import Vector

TurnCallback = Callable[["RaceEngine", TurnRecord], None]


def _new_log_context() -> LogContext:
    return LogContext(engine_id=next(ENGINE_ID_COUNTER))


@dataclass
class RaceEngine:
    """
    Race controller: roster, turn order, winner and move source bindings.

    Movement rules live in `engine.movement`; the engine only decides whose
    turn it is and when the race is over.
    """

    state: RaceState
    log_context: LogContext = field(default_factory=_new_log_context)
    move_sources: dict[int, MoveSource] = field(default_factory=dict)
    turn_history: list[TurnRecord] = field(default_factory=list)
    aborted: bool = False
    _logger: ContextAdapter = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = get_engine_logger(self.log_context)

    # ---------- Logging ----------

    def log_debug(self, msg: str) -> None:
        self._logger.debug(msg)

    def log_info(self, msg: str) -> None:
        self._logger.info(msg)

    def log_warning(self, msg: str) -> None:
        self._logger.warning(msg)

    # ---------- Roster ----------

    @property
    def car_count(self) -> int:
        return len(self.state.cars)

    def get_car(self, idx: int) -> CarState:
        if not 0 <= idx < self.car_count:
            raise IndexError(f"Invalid car index: {idx}")
        return self.state.cars[idx]

    @property
    def current_car(self) -> CarState:
        return self.get_car(self.state.current_car_idx)

    @property
    def winner(self) -> int | None:
        return self.state.winner

    @property
    def race_over(self) -> bool:
        return self.state.has_winner or not self.state.active_indices()

    # ---------- Move sources ----------

    def set_car_move_strategy(self, car_idx: int, source: MoveSource) -> None:
        _ = self.get_car(car_idx)
        self.move_sources[car_idx] = source

    def next_car_move(self, car_idx: int) -> Vector | None:
        source = self.move_sources.get(car_idx)
        if source is None:
            raise MoveSourceNotSetError(car_idx)
        return source.next_move()

    # ---------- Turns ----------

    def calculate_path(self, start: Vector, end: Vector) -> list[Vector]:
        return calculate_path(start, end)

    def do_car_turn(self, acceleration: Vector) -> TurnOutcome:
        """Resolve the current car's turn with the given acceleration."""
        return resolve_car_turn(self, self.state.current_car_idx, acceleration)

    def switch_to_next_active_car(self) -> None:
        """Advance turn order, skipping crashed and retired cars."""
        n = self.car_count
        for _ in range(n):
            self.state.current_car_idx = (self.state.current_car_idx + 1) % n
            if self.current_car.active:
                break

    def run_turn(self) -> TurnRecord:
        car = self.current_car
        self.log_context.start_turn(car.repr)
        start = car.position
        acceleration: Vector | None = None

        if self.race_over or not car.active:
            outcome: TurnOutcome = "skipped"
        else:
            acceleration = self.next_car_move(car.idx)
            if acceleration is None:
                car.retired = True
                self.log_info(f"Retire: {car.repr} has no further moves")
                outcome = "retired"
            else:
                outcome = resolve_car_turn(self, car.idx, acceleration)

        record = TurnRecord(
            turn_index=self.log_context.total_turn,
            car_idx=car.idx,
            acceleration=acceleration,
            start=start,
            end=car.position,
            velocity=car.velocity,
            outcome=outcome,
        )
        self.turn_history.append(record)
        return record

    def run_race(
        self,
        max_turns: int | None = None,
        on_turn_end: TurnCallback | None = None,
    ) -> int | None:
        """Run turns until someone wins, nobody can move, or the turn limit hits."""
        turns = 0
        while not self.race_over:
            if max_turns is not None and turns >= max_turns:
                self.aborted = True
                self.log_warning(f"Race aborted after {turns} turns without a winner")
                break

            record = self.run_turn()
            turns += 1
            if on_turn_end is not None:
                on_turn_end(self, record)
            self.switch_to_next_active_car()

        if self.state.winner is not None:
            self.log_info(f"Race over. Winner: {self.get_car(self.state.winner).repr}")
        elif not self.aborted:
            self.log_info("Race over without a winner")
        return self.state.winner
