"""User progression models"""
from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class UserRank(str, Enum):
    """Medieval ranks, ascending"""
    SQUIRE = "Squire"
    KNIGHT = "Knight"
    BARON = "Baron"
    DUKE = "Duke"
    ROYALTY = "Royalty"


class ActivityStats(BaseModel):
    """Running counters read by achievement rules"""
    quests_completed: int = Field(0, ge=0)
    special_quests_completed: int = Field(0, ge=0)
    total_gold_earned: int = Field(0, ge=0)
    properties_listed: int = Field(0, ge=0)
    highest_listing_price: int = Field(0, ge=0)
    properties_sold: int = Field(0, ge=0)
    sales_volume: int = Field(0, ge=0)
    client_meetings: int = Field(0, ge=0)
    logins: int = Field(0, ge=0)
    profile_completed: int = Field(0, ge=0, le=1)


class UserProgress(BaseModel):
    """
    Snapshot of one user's progression.

    Level, rank, title and level progress are derived from
    experience_points and never stored.
    """
    experience_points: int = Field(0, ge=0)
    gold_balance: int = Field(0, ge=0)

    shield_count: int = Field(3, ge=0)
    last_shield_lost_at: Optional[datetime] = None
    heart_count: int = Field(5, ge=0)
    last_heart_lost_at: Optional[datetime] = None

    current_streak_days: int = Field(0, ge=0)
    best_streak_days: int = Field(0, ge=0)
    last_active_date: Optional[date] = None

    unlocked_achievement_ids: set[str] = Field(default_factory=set)
    # Completed is terminal per quest id, whatever status the caller sends
    completed_quest_ids: set[str] = Field(default_factory=set)
    stats: ActivityStats = Field(default_factory=ActivityStats)


class Session(BaseModel):
    """Per-request session state for the application layer"""
    user_id: str
    is_authenticated: bool = False
    onboarding_complete: bool = False
