from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Protocol, runtime_checkable

from racetrack_simulator.core.direction import SpaceKind
from racetrack_simulator.core.errors import InvalidTrackFormatError
from racetrack_simulator.core.vector import Vector

if TYPE_CHECKING:
    from collections.abc import Iterable

    from racetrack_simulator.core.types import TrackName

MAX_CARS: int = 9


@runtime_checkable
class Grid(Protocol):
    def classify(self, position: Vector) -> SpaceKind: ...


def _strip_track_lines(lines: Iterable[str]) -> list[str]:
    """
    Skip leading blank lines, then collect lines up to the first blank one.
    """
    result: list[str] = []
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line.strip():
            if result:
                break
            continue
        result.append(line)
    return result


@dataclass(slots=True)
class Track:
    """
    Rectangular racetrack grid.

    The origin is the top-left cell, x points right and y points down.
    Anything outside the grid counts as an obstacle.
    """

    rows: list[list[SpaceKind]]
    car_starts: list[tuple[str, Vector]] = field(default_factory=list)

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def in_bounds(self, position: Vector) -> bool:
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def classify(self, position: Vector) -> SpaceKind:
        if not self.in_bounds(position):
            return SpaceKind.OBSTACLE
        return self.rows[position.y][position.x]

    def finish_cells(self) -> list[Vector]:
        return [
            Vector(x, y)
            for y, row in enumerate(self.rows)
            for x, kind in enumerate(row)
            if kind.is_finish
        ]

    # ---------- Loading ----------

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> Track:
        track_lines = _strip_track_lines(lines)
        if not track_lines:
            raise InvalidTrackFormatError("Track contains no lines.")

        width = len(track_lines[0])
        if any(len(line) != width for line in track_lines):
            raise InvalidTrackFormatError("Track lines differ in length.")

        rows: list[list[SpaceKind]] = []
        car_starts: list[tuple[str, Vector]] = []
        seen_ids: set[str] = set()

        for y, line in enumerate(track_lines):
            row: list[SpaceKind] = []
            for x, char in enumerate(line):
                kind = SpaceKind.from_char(char)
                if kind is None:
                    # Any other character is a car marker sitting on open track
                    if char in seen_ids:
                        raise InvalidTrackFormatError(f"Duplicate car id {char!r}.")
                    seen_ids.add(char)
                    car_starts.append((char, Vector(x, y)))
                    kind = SpaceKind.OPEN
                row.append(kind)
            rows.append(row)

        if not car_starts:
            raise InvalidTrackFormatError("Track contains no cars.")
        if len(car_starts) > MAX_CARS:
            raise InvalidTrackFormatError(
                f"Track contains {len(car_starts)} cars, at most {MAX_CARS} allowed.",
            )

        return cls(rows=rows, car_starts=car_starts)

    @classmethod
    def from_text(cls, text: str) -> Track:
        return cls.from_lines(text.splitlines())

    @classmethod
    def from_file(cls, path: str | Path) -> Track:
        with Path(path).open(encoding="utf-8") as f:
            return cls.from_lines(f)


SPRINT_TRACK = """\
############
#a        >#
#b        >#
############
"""

OVAL_TRACK = """\
##################
#    >ab         #
#    >           #
#  ###########   #
#  ###########   #
#                #
#                #
##################
"""

TRACK_DEFINITIONS: dict[TrackName, Callable[[], Track]] = {
    "sprint": lambda: Track.from_text(SPRINT_TRACK),
    "oval": lambda: Track.from_text(OVAL_TRACK),
}
