"""Turn-based simulator for the Racetrack grid racing game."""

__version__ = "0.1.0"
