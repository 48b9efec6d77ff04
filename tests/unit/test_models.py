"""Unit tests for quest, progress and achievement models"""
import pytest
from datetime import datetime, timezone
from pydantic import ValidationError as PydanticValidationError

from landlord.exceptions import InvalidQuestTransitionError
from landlord.models.achievement import Achievement
from landlord.models.quest import ACTIVITY_PROFILES, ActivityType, Quest, QuestStatus
from landlord.models.user import ActivityStats, UserProgress


class TestQuest:
    """Quest status machine"""

    def test_defaults(self):
        quest = Quest(type=ActivityType.OFFER)

        assert quest.status == QuestStatus.NOT_STARTED
        assert quest.gold_reward == 50
        assert quest.xp_reward == 25
        assert quest.is_special_quest is False
        assert quest.completed_at is None
        assert quest.created_at.tzinfo is not None
        assert quest.difficulty_level == 2

    def test_unique_ids(self):
        assert Quest(type=ActivityType.OFFER).id != Quest(type=ActivityType.OFFER).id

    def test_start(self):
        quest = Quest(type=ActivityType.SHOWING)

        started = quest.start()

        assert started.status == QuestStatus.IN_PROGRESS
        assert quest.status == QuestStatus.NOT_STARTED

    def test_start_twice_raises(self):
        with pytest.raises(InvalidQuestTransitionError):
            Quest(type=ActivityType.SHOWING).start().start()

    def test_complete_from_not_started(self):
        when = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)

        completed = Quest(type=ActivityType.CLOSING).complete(when)

        assert completed.is_completed
        assert completed.completed_at == when

    def test_completed_is_terminal(self):
        completed = Quest(type=ActivityType.CLOSING).complete()

        with pytest.raises(InvalidQuestTransitionError) as exc_info:
            completed.complete()
        assert exc_info.value.quest_id == completed.id

        with pytest.raises(InvalidQuestTransitionError):
            completed.start()

    def test_negative_rewards_rejected(self):
        with pytest.raises(PydanticValidationError):
            Quest(type=ActivityType.LISTING, gold_reward=-1)

    def test_frozen(self):
        quest = Quest(type=ActivityType.LISTING)

        with pytest.raises(PydanticValidationError):
            quest.status = QuestStatus.COMPLETED

    def test_status_display_names(self):
        assert QuestStatus.NOT_STARTED.display_name == "Quest Awaits"
        assert QuestStatus.COMPLETED.display_name == "Victory"

    def test_every_activity_has_profile(self):
        assert set(ACTIVITY_PROFILES) == set(ActivityType)
        assert ACTIVITY_PROFILES[ActivityType.CLOSING].medieval_name == "Kingdom Acquisition"


class TestUserProgress:
    """Snapshot defaults and constraints"""

    def test_defaults(self):
        progress = UserProgress()

        assert progress.experience_points == 0
        assert progress.gold_balance == 0
        assert progress.shield_count == 3
        assert progress.heart_count == 5
        assert progress.current_streak_days == 0
        assert progress.last_active_date is None
        assert progress.unlocked_achievement_ids == set()
        assert progress.stats == ActivityStats()

    def test_negative_counters_rejected(self):
        with pytest.raises(PydanticValidationError):
            UserProgress(gold_balance=-5)
        with pytest.raises(PydanticValidationError):
            UserProgress(shield_count=-1)

    def test_profile_completed_is_a_flag(self):
        with pytest.raises(PydanticValidationError):
            ActivityStats(profile_completed=2)


class TestAchievement:
    """Earned achievement metadata"""

    def test_progress_values(self):
        achievement = Achievement(type="quest_master", metadata={"progress": "52", "target": "50"})

        assert achievement.progress_value == 52
        assert achievement.target_value == 50

    def test_missing_or_bad_metadata(self):
        assert Achievement(type="x").progress_value is None
        assert Achievement(type="x", metadata={"target": "lots"}).target_value is None
