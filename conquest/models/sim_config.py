import json
from pathlib import Path
from pydantic import BaseModel, PositiveInt, PositiveFloat, NonNegativeFloat
from pydantic import Field  # type: ignore
from typing import Annotated, List, Tuple

# # NOTE: Loaded once per process at import time; callers that need another
# # tuning file use SimulationSettings.load_json and pass values explicitly.

Probability = Annotated[float, Field(ge=0, le=1)]


class GenerationModifiers(BaseModel):
    sector_count: Tuple[PositiveInt, PositiveInt]
    systems_per_sector: Tuple[PositiveInt, PositiveInt]
    sector_margin_x: PositiveFloat
    sector_margin_y: PositiveFloat
    system_margin: PositiveFloat
    system_radius: Tuple[NonNegativeFloat, NonNegativeFloat]
    jitter_x: NonNegativeFloat
    jitter_y: NonNegativeFloat
    production: Tuple[NonNegativeFloat, NonNegativeFloat]
    defense: Tuple[Annotated[int, Field(ge=0)], Annotated[int, Field(ge=0)]]
    lanes_per_system: PositiveInt
    player_home_bonus: NonNegativeFloat
    ai_home_bonus: NonNegativeFloat
    claim_radius: PositiveFloat
    claim_chance: Probability
    neutral_bonus_chance: Probability
    neutral_bonus_defense: Tuple[
        Annotated[int, Field(ge=0)], Annotated[int, Field(ge=0)]
    ]
    starting_fleet_size: Tuple[PositiveInt, PositiveInt]
    fleet_speed: Tuple[PositiveFloat, PositiveFloat]


class EconomyModifiers(BaseModel):
    starting_credits: NonNegativeFloat
    small_fleet_cost: PositiveFloat
    small_fleet_strength: PositiveInt
    large_fleet_cost: PositiveFloat
    large_fleet_strength: PositiveInt


class BattleModifiers(BaseModel):
    survivor_loss_factor: NonNegativeFloat
    defense_depletion_factor: NonNegativeFloat
    defender_fleet_loss_factor: NonNegativeFloat


class AiModifiers(BaseModel):
    turn_interval: PositiveFloat
    build_chance: Probability
    build_strength: Tuple[PositiveInt, PositiveInt]
    reinforcement_strength: PositiveInt


class VictoryModifiers(BaseModel):
    control_ratio: Annotated[float, Field(gt=0, le=1)]


class SessionModifiers(BaseModel):
    speed_multipliers: Annotated[List[PositiveInt], Field(min_length=1)]
    event_log_limit: PositiveInt


class SimulationSettings(BaseModel):
    generation_modifiers: GenerationModifiers
    economy_modifiers: EconomyModifiers
    battle_modifiers: BattleModifiers
    ai_modifiers: AiModifiers
    victory_modifiers: VictoryModifiers
    session_modifiers: SessionModifiers

    @classmethod
    def load_json(cls, path: str | Path) -> "SimulationSettings":
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.model_validate(data)


_BASE_DIR = Path(__file__).resolve().parents[1]
_CONFIG_PATH = _BASE_DIR / "config" / "sim_config.json"

SIM_CONFIG = SimulationSettings.model_validate_json(
    _CONFIG_PATH.read_text(encoding="utf-8")
)
