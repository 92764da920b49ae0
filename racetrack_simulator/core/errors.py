class RacetrackError(Exception):
    """Base class for all racetrack errors."""


class MoveSourceNotSetError(RacetrackError):
    """A turn was requested for a car that has no move source bound to it."""

    def __init__(self, car_idx: int) -> None:
        super().__init__(f"Move source for car {car_idx} is not set.")
        self.car_idx: int = car_idx


class InvalidTrackFormatError(RacetrackError, ValueError):
    """Track data could not be turned into a valid grid with cars."""
