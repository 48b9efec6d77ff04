"""Events emitted by the progression engine alongside each new snapshot"""
from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel

from landlord.models.achievement import Achievement


class RewardGranted(BaseModel):
    kind: Literal["reward_granted"] = "reward_granted"
    source: str
    gold: int
    xp: int
    at: datetime


class LevelUp(BaseModel):
    kind: Literal["level_up"] = "level_up"
    old_level: int
    new_level: int
    at: datetime


class RankUp(BaseModel):
    kind: Literal["rank_up"] = "rank_up"
    old_rank: str
    new_rank: str
    at: datetime


class AchievementUnlocked(BaseModel):
    kind: Literal["achievement_unlocked"] = "achievement_unlocked"
    achievement: Achievement
    badge_name: str
    badge_gold: int
    at: datetime


class StreakUpdated(BaseModel):
    kind: Literal["streak_updated"] = "streak_updated"
    streak_days: int
    streak_continued: bool
    previous_streak_days: int
    at: datetime


class ResourceRegenerated(BaseModel):
    kind: Literal["resource_regenerated"] = "resource_regenerated"
    resource: Literal["shield", "heart"]
    new_count: int
    next_regeneration_at: Optional[datetime] = None
    at: datetime


EngineEvent = Union[
    RewardGranted,
    LevelUp,
    RankUp,
    AchievementUnlocked,
    StreakUpdated,
    ResourceRegenerated,
]
