"""Achievement models for gamification"""
from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, timezone
from uuid import uuid4


class AchievementCategory(str, Enum):
    """Achievement categories"""
    ONBOARDING = "onboarding"
    QUESTS = "quests"
    LISTINGS = "listings"
    TRANSACTIONS = "transactions"
    GOLD = "gold"
    STREAKS = "streaks"
    LEVELS = "levels"


class BadgeRarity(str, Enum):
    """Badge rarity, used for display and reward scaling only"""
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class MetricType(str, Enum):
    """Statistic an achievement rule compares against its threshold"""
    QUESTS_COMPLETED = "quests_completed"
    SPECIAL_QUESTS_COMPLETED = "special_quests_completed"
    TOTAL_GOLD_EARNED = "total_gold_earned"
    GOLD_BALANCE = "gold_balance"
    STREAK_DAYS = "streak_days"
    BEST_STREAK_DAYS = "best_streak_days"
    PROPERTIES_LISTED = "properties_listed"
    HIGHEST_LISTING_PRICE = "highest_listing_price"
    PROPERTIES_SOLD = "properties_sold"
    SALES_VOLUME = "sales_volume"
    CLIENT_MEETINGS = "client_meetings"
    LOGINS = "logins"
    PROFILE_COMPLETED = "profile_completed"
    EXPERIENCE_POINTS = "experience_points"
    LEVEL = "level"


class Badge(BaseModel):
    """Display metadata for an achievement"""
    id: str
    name: str
    description: str
    image_name: str = "badge_default"
    rarity: BadgeRarity = BadgeRarity.COMMON
    gold_reward: int = Field(50, ge=0)


class AchievementRule(BaseModel):
    """Catalog entry: unlocks when metric >= required_value"""
    id: str
    required_value: float = Field(..., ge=0)
    metric: MetricType
    category: AchievementCategory
    badge: Badge


class Achievement(BaseModel):
    """User's earned achievement"""
    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: Optional[str] = None
    type: str
    earned_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: dict[str, str] = Field(default_factory=dict)
    is_new: bool = True

    @property
    def progress_value(self) -> Optional[int]:
        return _parse_int(self.metadata.get("progress"))

    @property
    def target_value(self) -> Optional[int]:
        return _parse_int(self.metadata.get("target"))


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(float(value))
    except ValueError:
        return None
