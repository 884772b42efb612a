from .sim_config import SIM_CONFIG, SimulationSettings
from .runtime_config import RuntimeSettings
from .world_config import (
    Owner,
    Outcome,
    SizeClass,
    StarSystem,
    Sector,
    Fleet,
    GameEvent,
    GalaxyState,
    CommandResult,
)

__all__ = [
    "SIM_CONFIG",
    "SimulationSettings",
    "RuntimeSettings",
    "Owner",
    "Outcome",
    "SizeClass",
    "StarSystem",
    "Sector",
    "Fleet",
    "GameEvent",
    "GalaxyState",
    "CommandResult",
]
