"""Configuration schema for races using msgspec."""

from __future__ import annotations

from pathlib import Path
from typing import get_args

import msgspec

from racetrack_simulator.core.types import (
    DirectionName,
    StrategyName,
    TrackName,
)
from racetrack_simulator.engine.track import TRACK_DEFINITIONS, Track


class StrategyConfig(msgspec.Struct, forbid_unknown_fields=True):
    """
    How one car picks its moves.
    Only the fields relevant to `kind` are used.
    """

    kind: StrategyName = "do_not_move"

    # move_list
    moves: list[DirectionName] = msgspec.field(default_factory=list)
    moves_file: str | None = None

    # path_follower
    waypoints: list[tuple[int, int]] = msgspec.field(default_factory=list)
    waypoints_file: str | None = None

    # path_finder
    max_speed: int = 4


class RaceConfig(msgspec.Struct, forbid_unknown_fields=True):
    """
    TOML-backed configuration for a single race.
    """

    # Built-in track name or path to a track file
    track: str = "sprint"

    default_strategy: StrategyName = "do_not_move"
    # Keyed by car id (the track marker character)
    strategies: dict[str, StrategyConfig] = msgspec.field(default_factory=dict)

    max_turns_per_race: int = 500

    @classmethod
    def from_toml(cls, path: str | Path) -> RaceConfig:
        """Load configuration from a TOML file path."""
        with Path(path).open("rb") as f:
            return msgspec.toml.decode(f.read(), type=cls)

    def load_track(self) -> Track:
        if self.track in get_args(TrackName):
            return TRACK_DEFINITIONS[self.track]()  # pyright: ignore[reportArgumentType]
        return Track.from_file(self.track)

    def strategy_for(self, car_id: str) -> StrategyConfig:
        config = self.strategies.get(car_id)
        if config is None:
            return StrategyConfig(kind=self.default_strategy)
        return config
