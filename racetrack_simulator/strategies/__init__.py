import importlib
import pkgutil
from pathlib import Path
from typing import TYPE_CHECKING

from racetrack_simulator.core.strategy_base import MoveStrategy
from racetrack_simulator.core.types import StrategyName

if TYPE_CHECKING:
    from racetrack_simulator.engine.race_engine import RaceEngine
    from racetrack_simulator.simulation.config import StrategyConfig

# Dynamically import all modules in this package
for _, module_name, _ in pkgutil.iter_modules([str(Path(__file__).parent)]):
    _ = importlib.import_module(f"{__name__}.{module_name}")

STRATEGY_CLASSES: dict[StrategyName, type[MoveStrategy]] = {
    cls.name: cls for cls in MoveStrategy.__subclasses__()
}


def create_strategy(
    config: "StrategyConfig",
    engine: "RaceEngine",
    car_idx: int,
) -> MoveStrategy:
    """Instantiate the strategy class registered for `config.kind`."""
    return STRATEGY_CLASSES[config.kind].from_config(config, engine, car_idx)
