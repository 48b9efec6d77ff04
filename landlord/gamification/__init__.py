"""
Progression engine for LandLord

This package implements the rules that turn agent activity into rewards:
- Quest rewards (gold/XP by activity difficulty, special quest bonus)
- Leveling, ranks and titles
- Daily streaks and shield/heart regeneration
- Achievement catalog evaluation
- Sales goal progress and team standings

All functions are pure over an explicit UserProgress snapshot.
"""

from landlord.gamification.reward_system import compute_reward, streak_bonus, streak_xp_bonus
from landlord.gamification.xp_system import (
    calculate_level,
    xp_for_next_level,
    level_progress,
    rank_for_xp,
    next_rank_for_xp,
    title_for_xp,
)
from landlord.gamification.streak_system import (
    is_streak_active,
    should_regenerate,
    next_regeneration_time,
    update_streak,
)
from landlord.gamification.achievement_system import evaluate, achievement_progress
from landlord.gamification.engine import EngineResult, ProgressionEngine
from landlord.gamification.goal_system import goal_summary, overall_progress_percentage
from landlord.gamification.team_system import team_standing

__all__ = [
    "compute_reward",
    "streak_bonus",
    "streak_xp_bonus",
    "calculate_level",
    "xp_for_next_level",
    "level_progress",
    "rank_for_xp",
    "next_rank_for_xp",
    "title_for_xp",
    "is_streak_active",
    "should_regenerate",
    "next_regeneration_time",
    "update_streak",
    "evaluate",
    "achievement_progress",
    "EngineResult",
    "ProgressionEngine",
    "goal_summary",
    "overall_progress_percentage",
    "team_standing",
]
