import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class EngineSettings(BaseModel):
    """Tunable constants for the scoring engine."""
    default_slope: float = Field(113.0, ge=55, le=155)
    settlement_epsilon: float = Field(0.01, gt=0)
    press_threshold: int = Field(2, ge=1)
    max_presses: int = Field(3, ge=0)
    blind_wolf_multiplier: float = Field(2.0, gt=0)


_ENV_KEYS = {
    "default_slope": "GOLF_DEFAULT_SLOPE",
    "settlement_epsilon": "GOLF_SETTLEMENT_EPSILON",
    "press_threshold": "GOLF_PRESS_THRESHOLD",
    "max_presses": "GOLF_MAX_PRESSES",
    "blind_wolf_multiplier": "GOLF_BLIND_WOLF_MULTIPLIER",
}


@lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    """Engine settings with GOLF_* environment overrides (.env is honored)."""
    load_dotenv()
    overrides = {
        field: os.environ[env_key]
        for field, env_key in _ENV_KEYS.items()
        if os.environ.get(env_key)
    }
    return EngineSettings(**overrides)


def reset_settings() -> None:
    """Drop the cached settings so the environment is read again."""
    get_settings.cache_clear()
