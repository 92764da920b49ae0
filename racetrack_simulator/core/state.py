from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from racetrack_simulator.core.vector import Vector

if TYPE_CHECKING:
    from racetrack_simulator.engine.track import Grid, Track


@dataclass(slots=True)
class CarState:
    idx: int
    car_id: str
    position: Vector
    velocity: Vector = Vector.ZERO
    crashed: bool = False
    retired: bool = False

    def __post_init__(self) -> None:
        if len(self.car_id) != 1:
            raise ValueError(
                f"Car id must be a single character, got {self.car_id!r}.",
            )

    @property
    def repr(self) -> str:
        return f"{self.idx}:{self.car_id}"

    @property
    def active(self) -> bool:
        """Car can still take turns."""
        return not self.crashed and not self.retired

    def accelerate(self, delta: Vector) -> None:
        # No speed limit: bounding is up to the move source.
        self.velocity = self.velocity + delta

    def project_next_position(self) -> Vector:
        return self.position + self.velocity

    def apply_move(self) -> None:
        self.position = self.project_next_position()

    def mark_crashed(self, at: Vector) -> None:
        self.crashed = True
        self.position = at


@dataclass(slots=True)
class RaceState:
    cars: list[CarState]
    track: Grid
    current_car_idx: int = 0
    winner: int | None = None

    @classmethod
    def from_track(cls, track: Track) -> RaceState:
        """Create the roster from the track's car markers, in reading order."""
        cars = [
            CarState(idx, car_id, position)
            for idx, (car_id, position) in enumerate(track.car_starts)
        ]
        return cls(cars=cars, track=track)

    @property
    def has_winner(self) -> bool:
        return self.winner is not None

    def non_crashed_indices(self) -> list[int]:
        return [car.idx for car in self.cars if not car.crashed]

    def active_indices(self) -> list[int]:
        return [car.idx for car in self.cars if car.active]

    def get_state_hash(self) -> int:
        """Hash of everything a turn can change."""
        car_data = tuple(
            (c.idx, c.position, c.velocity, c.crashed, c.retired) for c in self.cars
        )
        return hash((car_data, self.current_car_idx, self.winner))


@dataclass(slots=True)
class LogContext:
    """Runtime context injected into every log record of one engine."""

    engine_id: int
    total_turn: int = 0
    turn_log_count: int = 0
    current_car_repr: str = "_"

    def start_turn(self, car_repr: str) -> None:
        self.total_turn += 1
        self.turn_log_count = 0
        self.current_car_repr = car_repr

    def inc_log_count(self) -> None:
        self.turn_log_count += 1
