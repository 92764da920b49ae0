from typing import Callable

import pytest

from racetrack_simulator.core.direction import Direction
from tests.test_utils import RaceScenario


@pytest.fixture
def scenario() -> Callable[..., RaceScenario]:
    """Factory fixture to create scenarios."""

    def _builder(
        track_lines: list[str],
        moves: dict[str, list[Direction]] | None = None,
    ) -> RaceScenario:
        return RaceScenario(track_lines, moves)

    return _builder
