"""Command-line interface for running a race."""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import cappa
import msgspec
from rich.console import Console
from rich.table import Table

from racetrack_simulator.core.errors import InvalidTrackFormatError
from racetrack_simulator.engine.logging import configure_logging
from racetrack_simulator.simulation.config import RaceConfig
from racetrack_simulator.simulation.runner import RaceResult, run_single_race


def _print_result(console: Console, result: RaceResult) -> None:
    table = Table(title="Race result")
    table.add_column("Car")
    table.add_column("Turns", justify="right")
    table.add_column("Cells", justify="right")
    table.add_column("Top speed", justify="right")
    table.add_column("Status")

    for m in result.metrics:
        if m.won:
            status = "[bold green]winner[/]"
        elif m.crashed:
            status = "[red]crashed[/]"
        elif m.retired:
            status = "retired"
        else:
            status = "racing"
        table.add_row(
            m.car_id,
            str(m.turns_taken),
            str(m.cells_travelled),
            str(m.top_speed),
            status,
        )
    console.print(table)

    if result.aborted:
        console.print(f"Race aborted after {result.turn_count} turns.")
    elif result.winner_id is None:
        console.print("Race over without a winner.")
    else:
        console.print(
            f"Winner: car {result.winner_id} "
            f"({result.turn_count} turns, {result.execution_time_ms:.2f}ms)",
        )


@dataclass
class Args:
    """Run a Racetrack race."""

    config: Annotated[Path | None, cappa.Arg(short="-c", long=True)] = None
    """Path to TOML race configuration (defaults: sprint track, idle cars)"""

    track: Annotated[str | None, cappa.Arg(long=True)] = None
    """Override: built-in track name or path to a track file"""

    max_turns: Annotated[int | None, cappa.Arg(long=True)] = None
    """Override: abort the race after this many turns"""

    verbose: Annotated[bool, cappa.Arg(short="-v", long=True)] = False
    """Log every turn"""

    def __call__(self) -> int:
        configure_logging(logging.INFO if self.verbose else logging.WARNING)
        console = Console()

        if self.config is not None and not self.config.exists():
            print(f"Error: Config file not found: {self.config}", file=sys.stderr)
            return 1

        try:
            config = RaceConfig.from_toml(self.config) if self.config else RaceConfig()
        except msgspec.DecodeError as e:
            print(f"Error: Invalid config {self.config}: {e}", file=sys.stderr)
            return 1

        # CLI overrides
        if self.track is not None:
            config = msgspec.structs.replace(config, track=self.track)
        if self.max_turns is not None:
            config = msgspec.structs.replace(config, max_turns_per_race=self.max_turns)

        try:
            track = config.load_track()
        except (OSError, InvalidTrackFormatError) as e:
            print(f"Error: Cannot load track {config.track!r}: {e}", file=sys.stderr)
            return 1

        try:
            result = run_single_race(config, track)
        except (OSError, ValueError) as e:
            # Strategy files (move lists, waypoints) are read while building the race
            print(f"Error: {e}", file=sys.stderr)
            return 1

        _print_result(console, result)
        return 0


def main():
    """Entry point for CLI."""
    return cappa.invoke(Args)


if __name__ == "__main__":
    sys.exit(main())
