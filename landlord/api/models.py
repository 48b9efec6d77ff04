"""API request/response models"""
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from landlord.models.goal import AnnualGoal, GoalProgress
from landlord.models.quest import Quest
from landlord.models.team import TeamMember


class CreateUserRequest(BaseModel):
    """Request to create a progression record"""
    user_id: str = Field(..., min_length=1, max_length=128, description="User identifier")


class CompleteQuestRequest(BaseModel):
    """Request to complete a quest"""
    quest: Quest
    completed_at: Optional[datetime] = Field(None, description="Completion time, defaults to now")


class DailyActivityRequest(BaseModel):
    """Request to record an active day"""
    activity_date: Optional[date] = Field(None, description="Day of activity, defaults to today")


class RegenerationRequest(BaseModel):
    """Request to check shield/heart regeneration"""
    now: Optional[datetime] = Field(None, description="Evaluation time, defaults to now")


class PropertyActivityRequest(BaseModel):
    """A listing or sale"""
    price: int = Field(..., ge=0, description="Property price")


class GoalProgressRequest(BaseModel):
    """Targets and what has been achieved against them"""
    goal: AnnualGoal
    progress: GoalProgress
    clamp_targets: bool = Field(False, description="Pull targets into the onboarding ranges first")


class TeamStandingRequest(BaseModel):
    members: List[TeamMember]


class CompleteQuestResponse(BaseModel):
    """Result of completing a quest"""
    new_gold: int
    new_xp: int
    new_level: int
    leveled_up: bool
    gold_awarded: int
    xp_awarded: int
    rank: str
    title: str
    streak_days: int
    unlocked_achievements: List[Dict[str, Any]]
    quest: Dict[str, Any]


class DailyActivityResponse(BaseModel):
    """Result of recording an active day"""
    streak_continued: bool
    streak_days: int
    bonus_gold: int
    bonus_xp: int
    message: str
    unlocked_achievements: List[Dict[str, Any]]


class ResourceResponse(BaseModel):
    """Shield/heart counters"""
    shield_count: int
    heart_count: int
    next_shield_at: Optional[datetime] = None
    next_heart_at: Optional[datetime] = None


class RegenerationResponse(ResourceResponse):
    """Result of a regeneration check"""
    shields_regenerated: int
    hearts_regenerated: int


class PropertyActivityResponse(BaseModel):
    """Stats after a listing or sale"""
    stats: Dict[str, Any]
    gold_balance: int
    unlocked_achievements: List[Dict[str, Any]]


class ProgressResponse(ResourceResponse):
    """User progression summary"""
    user_id: str
    experience_points: int
    level: int
    rank: str
    next_rank: Optional[str] = None
    title: str
    xp_for_next_level: int
    xp_for_next_rank: Optional[int] = None
    level_progress: float
    is_max_level: bool
    gold_balance: int
    current_streak_days: int
    best_streak_days: int
    streak_message: str
    last_active_date: Optional[date] = None
    unlocked_achievement_ids: List[str]
    stats: Dict[str, Any]


class AchievementResponse(BaseModel):
    """Response with achievement info"""
    user_id: str
    unlocked: List[Dict[str, Any]]
    locked: List[Dict[str, Any]] = Field(default_factory=list)
    total_unlocked: int
    total_achievements: int


class GoalProgressResponse(BaseModel):
    """Progress percentages (0-100) and derived goal values"""
    gci_progress: float
    volume_progress: float
    transaction_progress: float
    overall_progress: float
    description: str
    average_transaction_value: float
    average_commission: float
    effective_commission_rate: float
    monthly_targets: Dict[str, float]


class TeamStandingResponse(BaseModel):
    member_count: int
    average_performance: float
    team_level: int
    team_title: str
    top_performer: Optional[str] = None
    members: List[Dict[str, Any]]


class HealthCheckResponse(BaseModel):
    """Health check response"""
    status: str = Field(..., description="Service status")
    storage: str = Field(..., description="Storage backend")
    timestamp: datetime = Field(..., description="Check timestamp")

