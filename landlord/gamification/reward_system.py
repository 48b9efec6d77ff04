"""
Reward System

Computes the gold and XP a completed quest is worth.

Reward Rules:
- Base gold: 20 x activity difficulty (1-4)
- Base XP: 10 x activity difficulty
- Special quests: both doubled, floored to an integer
- Streak bonus: 5 gold and 2 XP per streak day, capped at 50 days
"""

import math
import logging
from typing import NamedTuple

from landlord.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from landlord.exceptions import ValidationError
from landlord.models.quest import ACTIVITY_PROFILES, Quest

logger = logging.getLogger(__name__)


class Reward(NamedTuple):
    gold: int
    xp: int


def difficulty_for(quest: Quest) -> int:
    """Difficulty level of the quest's activity type"""
    profile = ACTIVITY_PROFILES.get(quest.type)
    if profile is None:
        raise ValidationError(
            f"Unknown quest type: {quest.type!r}",
            field="type",
            value=str(quest.type),
        )
    return profile.difficulty_level


def compute_reward(quest: Quest, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> Reward:
    """
    Calculate gold and XP for completing a quest

    Args:
        quest: The quest being completed
        config: Engine rules

    Returns:
        Reward(gold, xp)

    Raises:
        ValidationError: quest type has no difficulty entry
    """
    difficulty = difficulty_for(quest)
    gold = config.base_gold_reward * difficulty
    xp = config.base_xp_reward * difficulty

    if quest.is_special_quest:
        gold = math.floor(gold * config.special_quest_multiplier)
        xp = math.floor(xp * config.special_quest_multiplier)

    return Reward(gold=gold, xp=xp)


def _capped_streak_days(days: int, config: EngineConfig) -> int:
    return max(0, min(days, config.max_streak_days))


def streak_bonus(days: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int:
    """Bonus gold for a streak of consecutive days"""
    return _capped_streak_days(days, config) * config.gold_per_streak_day


def streak_xp_bonus(days: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int:
    """Bonus XP for a streak of consecutive days"""
    return _capped_streak_days(days, config) * config.xp_per_streak_day


def total_reward_value(reward: Reward) -> int:
    return reward.gold + reward.xp
