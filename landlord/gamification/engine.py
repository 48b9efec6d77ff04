"""
Progression Engine

Composes the reward, leveling, streak and achievement systems into
snapshot-in / snapshot-out operations. Every method returns a whole new
UserProgress plus the events it produced; the input snapshot is never
mutated.

Flow for each activity:
    rewards -> level/rank -> streak -> achievements (-> badge gold)
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import List, Optional, Sequence, Union
import logging

from landlord.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from landlord.exceptions import InvalidQuestTransitionError, ValidationError
from landlord.gamification import achievement_system, streak_system
from landlord.gamification.catalog import DEFAULT_CATALOG
from landlord.gamification.reward_system import Reward, compute_reward
from landlord.gamification.streak_system import StreakUpdate
from landlord.gamification.xp_system import calculate_level, rank_for_xp
from landlord.models.achievement import Achievement, AchievementRule
from landlord.models.events import (
    AchievementUnlocked,
    EngineEvent,
    LevelUp,
    RankUp,
    ResourceRegenerated,
    RewardGranted,
    StreakUpdated,
)
from landlord.models.quest import ActivityType, Quest
from landlord.models.user import UserProgress

logger = logging.getLogger(__name__)


@dataclass
class EngineResult:
    """New snapshot plus everything that happened producing it"""
    progress: UserProgress
    events: List[EngineEvent] = field(default_factory=list)
    quest: Optional[Quest] = None
    reward: Optional[Reward] = None
    streak: Optional[StreakUpdate] = None
    unlocked_achievements: List[Achievement] = field(default_factory=list)
    shields_regenerated: int = 0
    hearts_regenerated: int = 0
    old_level: int = 1
    new_level: int = 1

    @property
    def leveled_up(self) -> bool:
        return self.new_level > self.old_level


class ProgressionEngine:
    """
    Pure progression rules bound to one config and achievement catalog.

    Holds no per-user state; safe to share across users.
    """

    def __init__(
        self,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
        catalog: Optional[Sequence[AchievementRule]] = None
    ):
        self.config = config
        self.catalog = list(catalog) if catalog is not None else list(DEFAULT_CATALOG)

    # ============================================
    # Public operations
    # ============================================

    def apply_quest_completion(
        self,
        progress: UserProgress,
        quest: Quest,
        now: Optional[datetime] = None,
        user_id: Optional[str] = None
    ) -> EngineResult:
        """
        Complete a quest: grant its reward, count it, record the day as
        active, then check achievements.

        Raises:
            InvalidQuestTransitionError: quest already completed
            ValidationError: unknown quest type
        """
        now = now or datetime.now(timezone.utc)
        if quest.id in progress.completed_quest_ids:
            raise InvalidQuestTransitionError(
                f"Quest {quest.id} is already completed",
                quest_id=quest.id,
                user_id=user_id,
            )
        reward = compute_reward(quest, self.config)
        completed = quest.complete(now)

        result = self._start(progress)
        result.quest = completed
        result.reward = reward

        stats = progress.stats.model_copy(update={
            "quests_completed": progress.stats.quests_completed + 1,
            "special_quests_completed": (
                progress.stats.special_quests_completed + (1 if quest.is_special_quest else 0)
            ),
            # A showing is a meeting with a client
            "client_meetings": (
                progress.stats.client_meetings + (1 if quest.type is ActivityType.SHOWING else 0)
            ),
        })
        updated = progress.model_copy(update={
            "stats": stats,
            "completed_quest_ids": progress.completed_quest_ids | {quest.id},
        })
        updated = self._grant(updated, reward.gold, reward.xp, f"quest:{quest.type.value}", now, result.events)
        updated = self._record_activity(updated, now, now, result)

        return self._finish(updated, now, user_id, result)

    def apply_daily_activity(
        self,
        progress: UserProgress,
        activity_date: Union[date, datetime],
        now: Optional[datetime] = None,
        user_id: Optional[str] = None
    ) -> EngineResult:
        """Record an active day and grant the streak bonus for a new day"""
        now = now or datetime.now(timezone.utc)
        result = self._start(progress)
        updated = self._record_activity(progress, activity_date, now, result)
        return self._finish(updated, now, user_id, result)

    def apply_login(
        self,
        progress: UserProgress,
        now: Optional[datetime] = None,
        user_id: Optional[str] = None
    ) -> EngineResult:
        """App opened: count the login and record the day as active"""
        now = now or datetime.now(timezone.utc)
        result = self._start(progress)
        stats = progress.stats.model_copy(update={"logins": progress.stats.logins + 1})
        updated = progress.model_copy(update={"stats": stats})
        updated = self._record_activity(updated, now, now, result)
        return self._finish(updated, now, user_id, result)

    def apply_profile_completed(
        self,
        progress: UserProgress,
        now: Optional[datetime] = None,
        user_id: Optional[str] = None
    ) -> EngineResult:
        now = now or datetime.now(timezone.utc)
        result = self._start(progress)
        stats = progress.stats.model_copy(update={"profile_completed": 1})
        updated = progress.model_copy(update={"stats": stats})
        return self._finish(updated, now, user_id, result)

    def apply_listing(
        self,
        progress: UserProgress,
        price: int,
        now: Optional[datetime] = None,
        user_id: Optional[str] = None
    ) -> EngineResult:
        """A property was listed at `price`"""
        if price < 0:
            raise ValidationError("Listing price cannot be negative", field="price", value=price, user_id=user_id)
        now = now or datetime.now(timezone.utc)
        result = self._start(progress)
        stats = progress.stats.model_copy(update={
            "properties_listed": progress.stats.properties_listed + 1,
            "highest_listing_price": max(progress.stats.highest_listing_price, price),
        })
        updated = progress.model_copy(update={"stats": stats})
        return self._finish(updated, now, user_id, result)

    def apply_sale(
        self,
        progress: UserProgress,
        price: int,
        now: Optional[datetime] = None,
        user_id: Optional[str] = None
    ) -> EngineResult:
        """A property sold for `price`"""
        if price < 0:
            raise ValidationError("Sale price cannot be negative", field="price", value=price, user_id=user_id)
        now = now or datetime.now(timezone.utc)
        result = self._start(progress)
        stats = progress.stats.model_copy(update={
            "properties_sold": progress.stats.properties_sold + 1,
            "sales_volume": progress.stats.sales_volume + price,
        })
        updated = progress.model_copy(update={"stats": stats})
        return self._finish(updated, now, user_id, result)

    def apply_regeneration(
        self,
        progress: UserProgress,
        now: Optional[datetime] = None
    ) -> EngineResult:
        """Regenerate at most one shield and one heart"""
        now = now or datetime.now(timezone.utc)
        result = self._start(progress)

        updated, shield = streak_system.regenerate_shield(progress, now, self.config)
        if shield:
            result.shields_regenerated = 1
            result.events.append(ResourceRegenerated(
                resource="shield",
                new_count=updated.shield_count,
                next_regeneration_at=streak_system.next_shield_regeneration_time(updated, self.config),
                at=now,
            ))

        updated, heart = streak_system.regenerate_heart(updated, now, self.config)
        if heart:
            result.hearts_regenerated = 1
            result.events.append(ResourceRegenerated(
                resource="heart",
                new_count=updated.heart_count,
                next_regeneration_at=streak_system.next_heart_regeneration_time(updated, self.config),
                at=now,
            ))

        result.progress = updated
        return result

    def spend_shield(self, progress: UserProgress, now: Optional[datetime] = None) -> EngineResult:
        result = self._start(progress)
        result.progress = streak_system.lose_shield(progress, now or datetime.now(timezone.utc))
        return result

    def spend_heart(self, progress: UserProgress, now: Optional[datetime] = None) -> EngineResult:
        result = self._start(progress)
        result.progress = streak_system.lose_heart(progress, now or datetime.now(timezone.utc))
        return result

    # ============================================
    # Steps
    # ============================================

    def _start(self, progress: UserProgress) -> EngineResult:
        level = calculate_level(progress.experience_points, self.config)
        return EngineResult(progress=progress, old_level=level, new_level=level)

    def _grant(
        self,
        progress: UserProgress,
        gold: int,
        xp: int,
        source: str,
        now: datetime,
        events: List[EngineEvent]
    ) -> UserProgress:
        """Add gold and XP, emitting reward, level-up and rank-up events"""
        if gold == 0 and xp == 0:
            return progress

        old_xp = progress.experience_points
        new_xp = old_xp + xp
        updated = progress.model_copy(update={
            "experience_points": new_xp,
            "gold_balance": progress.gold_balance + gold,
            "stats": progress.stats.model_copy(update={
                "total_gold_earned": progress.stats.total_gold_earned + gold,
            }),
        })
        events.append(RewardGranted(source=source, gold=gold, xp=xp, at=now))

        old_level = calculate_level(old_xp, self.config)
        new_level = calculate_level(new_xp, self.config)
        if new_level > old_level:
            events.append(LevelUp(old_level=old_level, new_level=new_level, at=now))
            logger.info(f"Level up from {old_level} to {new_level}")

        old_rank = rank_for_xp(old_xp, self.config)
        new_rank = rank_for_xp(new_xp, self.config)
        if new_rank != old_rank:
            events.append(RankUp(old_rank=old_rank.value, new_rank=new_rank.value, at=now))
            logger.info(f"Rank up from {old_rank.value} to {new_rank.value}")

        return updated

    def _record_activity(
        self,
        progress: UserProgress,
        activity_date: Union[date, datetime],
        now: datetime,
        result: EngineResult
    ) -> UserProgress:
        updated, streak = streak_system.update_streak(progress, activity_date, self.config)
        result.streak = streak
        if not streak.is_new_day:
            return updated

        result.events.append(StreakUpdated(
            streak_days=streak.streak_days,
            streak_continued=streak.streak_continued,
            previous_streak_days=streak.previous_streak_days,
            at=now,
        ))
        return self._grant(updated, streak.bonus_gold, streak.bonus_xp, "streak", now, result.events)

    def _finish(
        self,
        progress: UserProgress,
        now: datetime,
        user_id: Optional[str],
        result: EngineResult
    ) -> EngineResult:
        """Evaluate achievements once, then pay out badge gold"""
        unlocked = achievement_system.evaluate(
            progress,
            progress.unlocked_achievement_ids,
            self.catalog,
            now=now,
            user_id=user_id,
            config=self.config,
        )

        if unlocked:
            rules = {rule.id: rule for rule in self.catalog}
            progress = progress.model_copy(update={
                "unlocked_achievement_ids": progress.unlocked_achievement_ids | {a.type for a in unlocked},
            })
            for achievement in unlocked:
                badge = rules[achievement.type].badge
                badge_gold = badge.gold_reward if self.config.award_badge_gold else 0
                result.events.append(AchievementUnlocked(
                    achievement=achievement,
                    badge_name=badge.name,
                    badge_gold=badge_gold,
                    at=now,
                ))
                if badge_gold:
                    # Badge gold does not re-trigger evaluation in this pass
                    progress = self._grant(
                        progress, badge_gold, 0, f"achievement:{achievement.type}", now, result.events
                    )

        result.unlocked_achievements = unlocked
        result.progress = progress
        result.new_level = calculate_level(progress.experience_points, self.config)
        return result
