"""Domain models for the LandLord progression engine"""

from landlord.models.quest import ActivityType, ACTIVITY_PROFILES, Quest, QuestStatus
from landlord.models.user import ActivityStats, Session, UserProgress, UserRank
from landlord.models.achievement import (
    Achievement,
    AchievementCategory,
    AchievementRule,
    Badge,
    BadgeRarity,
    MetricType,
)
from landlord.models.goal import AnnualGoal, GoalProgress, GoalType, MonthlyGoal
from landlord.models.team import TeamMember, TeamPerformance

__all__ = [
    "ActivityType",
    "ACTIVITY_PROFILES",
    "Quest",
    "QuestStatus",
    "ActivityStats",
    "Session",
    "UserProgress",
    "UserRank",
    "Achievement",
    "AchievementCategory",
    "AchievementRule",
    "Badge",
    "BadgeRarity",
    "MetricType",
    "AnnualGoal",
    "GoalProgress",
    "GoalType",
    "MonthlyGoal",
    "TeamMember",
    "TeamPerformance",
]
