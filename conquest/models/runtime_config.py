from pydantic import Field  # type: ignore
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Annotated, Optional


class RuntimeSettings(BaseSettings):
    """Process-level knobs for hosting a session (read from CONQUEST_* env vars)."""

    model_config = SettingsConfigDict(env_prefix="CONQUEST_")

    seed: Optional[str] = None
    width: Annotated[float, Field(gt=0)] = 1200.0
    height: Annotated[float, Field(gt=0)] = 800.0
    log_level: str = "INFO"
    tick_interval: Annotated[float, Field(gt=0)] = 1.0 / 30.0
    host: str = "0.0.0.0"
    port: Annotated[int, Field(gt=0, lt=65536)] = 8000
