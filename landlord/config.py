"""Configuration management"""
import os
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from landlord.models.user import UserRank

load_dotenv()

# Storage
# - 'memory' (default): in-process store, lost on restart
# - 'json': one JSON document per user under DATA_PATH
STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "memory")
DATA_PATH: Path = Path(os.getenv("DATA_PATH", "./data"))

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Calendar used for streak day boundaries
ENGINE_TIMEZONE: str = os.getenv("ENGINE_TIMEZONE", "UTC")

# API
API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "8080"))
RATE_LIMIT: str = os.getenv("RATE_LIMIT", "60/minute")


class EngineConfig(BaseModel):
    """Tunable rules of the progression engine.

    Passed explicitly into every engine function so tests can run the rules
    with different numbers.
    """

    model_config = ConfigDict(frozen=True)

    # Level progression
    xp_per_level: int = Field(100, gt=0)
    max_level: int = Field(50, ge=1)

    # Ranks as (name, minimum XP), ascending
    rank_thresholds: tuple[tuple[str, int], ...] = (
        ("Squire", 0),
        ("Knight", 300),
        ("Baron", 1000),
        ("Duke", 3000),
        ("Royalty", 10000),
    )
    title_prefixes: tuple[str, ...] = (
        "Novice",
        "Apprentice",
        "Skilled",
        "Veteran",
        "Master",
        "Grand",
        "Royal",
        "Legendary",
        "Mythical",
        "Divine",
    )

    # Rewards
    base_gold_reward: int = Field(20, ge=0)
    base_xp_reward: int = Field(10, ge=0)
    special_quest_multiplier: float = Field(2.0, ge=0)
    gold_per_streak_day: int = Field(5, ge=0)
    xp_per_streak_day: int = Field(2, ge=0)
    max_streak_days: int = Field(50, ge=0)
    award_badge_gold: bool = True

    # Shields and hearts
    max_shields: int = Field(3, ge=0)
    max_hearts: int = Field(5, ge=0)
    shield_regeneration_hours: int = Field(4, gt=0)
    heart_regeneration_hours: int = Field(2, gt=0)

    timezone: str = "UTC"

    @field_validator('rank_thresholds')
    @classmethod
    def validate_rank_thresholds(cls, v: tuple) -> tuple:
        """Ranks are the built-in UserRank names; thresholds start at 0 and rise strictly"""
        known = {rank.value for rank in UserRank}
        unknown = [name for name, _ in v if name not in known]
        if unknown:
            raise ValueError(f"Unknown rank names: {unknown}")
        thresholds = [required_xp for _, required_xp in v]
        if not thresholds or thresholds[0] != 0:
            raise ValueError("The first rank must start at 0 XP")
        if any(later <= earlier for earlier, later in zip(thresholds, thresholds[1:])):
            raise ValueError("Rank thresholds must be strictly increasing")
        return v

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


DEFAULT_ENGINE_CONFIG = EngineConfig()


def get_engine_config(timezone: Optional[str] = None) -> EngineConfig:
    """Build the engine config for this process from the environment"""
    return EngineConfig(timezone=timezone or ENGINE_TIMEZONE)


def get_api_keys() -> list[str]:
    """Load API keys from environment variable"""
    api_keys_str = os.getenv("API_KEYS", "")
    return [key.strip() for key in api_keys_str.split(",") if key.strip()]


# Validation
def validate_config() -> None:
    """Validate required configuration"""
    from landlord.exceptions import ConfigurationError

    if STORAGE_BACKEND not in ("memory", "json"):
        raise ConfigurationError(
            f"Unknown STORAGE_BACKEND '{STORAGE_BACKEND}'",
            config_key="STORAGE_BACKEND",
        )
    try:
        ZoneInfo(ENGINE_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(
            f"Unknown ENGINE_TIMEZONE '{ENGINE_TIMEZONE}'",
            config_key="ENGINE_TIMEZONE",
            cause=e,
        )
    # API keys are optional for local runs; requests are rejected without them
