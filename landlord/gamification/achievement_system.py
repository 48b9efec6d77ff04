"""
Achievement System

Evaluates the achievement catalog against a user's running statistics.

Features:
- Metric selectors per rule (quests, gold, streaks, listings, sales, levels)
- Idempotent evaluation: already unlocked rules are skipped
- Progress tracking for locked achievements
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence
import logging

from landlord.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from landlord.gamification.xp_system import calculate_level
from landlord.models.achievement import Achievement, AchievementRule, MetricType
from landlord.models.user import UserProgress

logger = logging.getLogger(__name__)


MetricSelector = Callable[[UserProgress, EngineConfig], float]

METRIC_SELECTORS: Dict[MetricType, MetricSelector] = {
    MetricType.QUESTS_COMPLETED: lambda p, c: p.stats.quests_completed,
    MetricType.SPECIAL_QUESTS_COMPLETED: lambda p, c: p.stats.special_quests_completed,
    MetricType.TOTAL_GOLD_EARNED: lambda p, c: p.stats.total_gold_earned,
    MetricType.GOLD_BALANCE: lambda p, c: p.gold_balance,
    MetricType.STREAK_DAYS: lambda p, c: p.current_streak_days,
    MetricType.BEST_STREAK_DAYS: lambda p, c: p.best_streak_days,
    MetricType.PROPERTIES_LISTED: lambda p, c: p.stats.properties_listed,
    MetricType.HIGHEST_LISTING_PRICE: lambda p, c: p.stats.highest_listing_price,
    MetricType.PROPERTIES_SOLD: lambda p, c: p.stats.properties_sold,
    MetricType.SALES_VOLUME: lambda p, c: p.stats.sales_volume,
    MetricType.CLIENT_MEETINGS: lambda p, c: p.stats.client_meetings,
    MetricType.LOGINS: lambda p, c: p.stats.logins,
    MetricType.PROFILE_COMPLETED: lambda p, c: p.stats.profile_completed,
    MetricType.EXPERIENCE_POINTS: lambda p, c: p.experience_points,
    MetricType.LEVEL: lambda p, c: calculate_level(p.experience_points, c),
}


def metric_value(
    progress: UserProgress,
    metric: MetricType,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG
) -> float:
    """Current value of a statistic for a user"""
    return METRIC_SELECTORS[metric](progress, config)


def achievement_progress(current: float, target: float) -> float:
    """Percentage of completion (0-100); 0 when the target is not positive"""
    if target <= 0:
        return 0.0
    return min(100.0, current / target * 100.0)


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def evaluate(
    progress: UserProgress,
    unlocked_ids: Iterable[str],
    catalog: Sequence[AchievementRule],
    now: Optional[datetime] = None,
    user_id: Optional[str] = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG
) -> List[Achievement]:
    """
    Check the catalog for newly satisfied achievements

    Args:
        progress: User's current snapshot (statistics source)
        unlocked_ids: Rule ids the user already holds
        catalog: Achievement rules, evaluated in order
        now: Earned date for new achievements
        user_id: Owner recorded on new achievements
        config: Engine rules

    Returns:
        Newly unlocked achievements, in catalog order
    """
    unlocked = set(unlocked_ids)
    earned_at = now or datetime.now(timezone.utc)
    newly_unlocked = []

    for rule in catalog:
        if rule.id in unlocked:
            continue

        current = metric_value(progress, rule.metric, config)
        if current < rule.required_value:
            continue

        achievement = Achievement(
            user_id=user_id,
            type=rule.id,
            earned_date=earned_at,
            metadata={
                "progress": _format_number(current),
                "target": _format_number(rule.required_value),
            },
            is_new=True,
        )
        newly_unlocked.append(achievement)
        # Guard against duplicate ids within one catalog
        unlocked.add(rule.id)

        logger.info(
            f"User {user_id} unlocked achievement: {rule.id} "
            f"({rule.badge.name}) +{rule.badge.gold_reward} gold"
        )

    return newly_unlocked


def locked_achievements_with_progress(
    progress: UserProgress,
    catalog: Sequence[AchievementRule],
    config: EngineConfig = DEFAULT_ENGINE_CONFIG
) -> List[Dict[str, Any]]:
    """
    Locked achievements with progress, closest to completion first

    Returns:
        [
            {
                'id': str,
                'name': str,
                'description': str,
                'category': str,
                'rarity': str,
                'gold_reward': int,
                'current': float,
                'target': float,
                'percentage': float
            }
        ]
    """
    locked = []
    for rule in catalog:
        if rule.id in progress.unlocked_achievement_ids:
            continue
        current = metric_value(progress, rule.metric, config)
        locked.append({
            "id": rule.id,
            "name": rule.badge.name,
            "description": rule.badge.description,
            "category": rule.category.value,
            "rarity": rule.badge.rarity.value,
            "gold_reward": rule.badge.gold_reward,
            "current": current,
            "target": rule.required_value,
            "percentage": achievement_progress(current, rule.required_value),
        })

    locked.sort(key=lambda x: x["percentage"], reverse=True)
    return locked


def achievement_description(percentage: float) -> str:
    """Medieval-themed description of achievement progress"""
    if percentage <= 0:
        return "Thy quest awaits."
    if percentage <= 25:
        return "The journey has just begun."
    if percentage <= 50:
        return "Halfway to glory!"
    if percentage <= 75:
        return "Victory is within sight!"
    if percentage < 100:
        return "The final battle approaches!"
    return "The kingdom is yours!"
