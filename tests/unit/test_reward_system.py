"""Unit tests for quest rewards (landlord/gamification/reward_system.py)"""
import pytest

from landlord.config import EngineConfig
from landlord.gamification.reward_system import (
    Reward,
    compute_reward,
    difficulty_for,
    streak_bonus,
    streak_xp_bonus,
    total_reward_value,
)
from landlord.models.quest import ACTIVITY_PROFILES, ActivityType


# ============================================================================
# Quest Reward Tests
# ============================================================================

@pytest.mark.parametrize("activity_type,gold,xp", [
    (ActivityType.SHOWING, 20, 10),
    (ActivityType.TRAINING, 20, 10),
    (ActivityType.OFFER, 40, 20),
    (ActivityType.PROSPECTING, 40, 20),
    (ActivityType.MARKETING, 40, 20),
    (ActivityType.LISTING, 60, 30),
    (ActivityType.CLOSING, 80, 40),
])
def test_compute_reward_by_difficulty(quest_factory, activity_type, gold, xp):
    """Base reward is 20 gold and 10 XP per difficulty level"""
    reward = compute_reward(quest_factory(activity_type))

    assert reward == Reward(gold=gold, xp=xp)


def test_compute_reward_special_quest_doubles(quest_factory):
    """Special quests pay double"""
    reward = compute_reward(quest_factory(ActivityType.CLOSING, is_special_quest=True))

    assert reward.gold == 160
    assert reward.xp == 80


def test_compute_reward_special_multiplier_floors(quest_factory):
    """Fractional multipliers are floored to whole gold and XP"""
    config = EngineConfig(special_quest_multiplier=1.5)
    reward = compute_reward(quest_factory(ActivityType.SHOWING, is_special_quest=True), config)

    assert reward.gold == 30
    assert reward.xp == 15

    # 20 * 1.25 = 25.0, 10 * 1.25 = 12.5
    config = EngineConfig(special_quest_multiplier=1.25)
    reward = compute_reward(quest_factory(ActivityType.SHOWING, is_special_quest=True), config)

    assert reward.gold == 25
    assert reward.xp == 12


def test_compute_reward_ignores_stored_quest_reward(quest_factory):
    """The quest's own gold/xp fields do not affect the computed reward"""
    quest = quest_factory(ActivityType.SHOWING, gold_reward=999, xp_reward=999)

    assert compute_reward(quest) == Reward(gold=20, xp=10)


def test_compute_reward_custom_base(quest_factory):
    config = EngineConfig(base_gold_reward=7, base_xp_reward=3)

    assert compute_reward(quest_factory(ActivityType.LISTING), config) == Reward(gold=21, xp=9)


def test_difficulty_in_range():
    """Every activity has a difficulty between 1 and 4"""
    for activity_type in ActivityType:
        assert 1 <= ACTIVITY_PROFILES[activity_type].difficulty_level <= 4


def test_difficulty_for(quest_factory):
    assert difficulty_for(quest_factory(ActivityType.CLOSING)) == 4
    assert difficulty_for(quest_factory(ActivityType.SHOWING)) == 1


# ============================================================================
# Streak Bonus Tests
# ============================================================================

def test_streak_bonus_linear():
    """5 gold and 2 XP per streak day"""
    assert streak_bonus(1) == 5
    assert streak_bonus(10) == 50
    assert streak_xp_bonus(1) == 2
    assert streak_xp_bonus(10) == 20


def test_streak_bonus_capped_at_50_days():
    assert streak_bonus(50) == 250
    assert streak_bonus(51) == 250
    assert streak_bonus(365) == 250
    assert streak_xp_bonus(365) == 100


def test_streak_bonus_non_positive_days():
    """Zero or negative streaks are clamped to no bonus"""
    assert streak_bonus(0) == 0
    assert streak_bonus(-3) == 0
    assert streak_xp_bonus(-3) == 0


def test_total_reward_value():
    assert total_reward_value(Reward(gold=60, xp=30)) == 90


def test_special_listing_quest(quest_factory):
    reward = compute_reward(quest_factory(ActivityType.LISTING, is_special_quest=True))

    assert reward == Reward(gold=120, xp=60)
