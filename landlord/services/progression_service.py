"""
ProgressionService - Progression Business Logic

Loads a user's snapshot from the store, runs it through the pure
ProgressionEngine, and writes the new snapshot back. Each user's
read-modify-write is serialised with a per-user lock.
"""

import asyncio
import logging
from collections import defaultdict
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Union

from landlord.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from landlord.db.store import ProgressStore
from landlord.exceptions import PersistenceError, RecordNotFoundError, ValidationError
from landlord.gamification import streak_system, xp_system
from landlord.gamification.achievement_system import locked_achievements_with_progress
from landlord.gamification.engine import EngineResult, ProgressionEngine
from landlord.models.achievement import Achievement, AchievementRule
from landlord.models.quest import Quest
from landlord.models.user import UserProgress
from landlord.observability import metrics

logger = logging.getLogger(__name__)


class ProgressionService:
    """
    Service for progression features.

    Responsibilities:
    - Quest completion rewards
    - Daily streak tracking
    - Shield/heart regeneration
    - Achievement unlocking and listing
    """

    def __init__(self, store: ProgressStore, config: EngineConfig = DEFAULT_ENGINE_CONFIG):
        """
        Initialize ProgressionService.

        Args:
            store: Persistence collaborator
            config: Engine rules
        """
        self.store = store
        self.config = config
        self._engine: Optional[ProgressionEngine] = None
        self._catalog: Optional[List[AchievementRule]] = None
        self._locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        logger.debug("ProgressionService initialized")

    async def get_engine(self) -> ProgressionEngine:
        """Engine bound to the catalog, loaded once per service"""
        if self._engine is None:
            self._catalog = await self.store.load_achievement_catalog()
            self._engine = ProgressionEngine(self.config, self._catalog)
            logger.info(f"Loaded achievement catalog with {len(self._catalog)} rules")
        return self._engine

    # ============================================
    # Exposed operations
    # ============================================

    async def create_user(self, user_id: str) -> Dict[str, Any]:
        progress = await self.store.create_user_progress(user_id)
        return self._summary(user_id, progress, datetime.now(timezone.utc))

    async def delete_user(self, user_id: str) -> None:
        async with self._locks[user_id]:
            await self.store.delete_user_progress(user_id)
        self._locks.pop(user_id, None)

    async def get_progress_summary(self, user_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
        progress = await self.store.load_user_progress(user_id)
        return self._summary(user_id, progress, now or datetime.now(timezone.utc))

    async def complete_quest(
        self,
        user_id: str,
        quest: Quest,
        now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        Complete a quest for a user.

        Returns:
            {
                'new_gold': int,
                'new_xp': int,
                'new_level': int,
                'leveled_up': bool,
                'gold_awarded': int,
                'xp_awarded': int,
                'rank': str,
                'title': str,
                'streak_days': int,
                'unlocked_achievements': list,
                'quest': dict
            }
        """
        if quest.user_id is not None and quest.user_id != user_id:
            raise ValidationError(
                f"Quest {quest.id} belongs to another user",
                field="user_id",
                value=quest.user_id,
                user_id=user_id,
                operation="complete_quest",
            )

        now = now or datetime.now(timezone.utc)
        engine = await self.get_engine()
        result = await self._apply(
            user_id,
            "complete_quest",
            lambda progress: engine.apply_quest_completion(progress, quest, now, user_id),
        )

        metrics.quests_completed_total.labels(
            activity_type=quest.type.value,
            special=str(quest.is_special_quest).lower(),
        ).inc()

        progress = result.progress
        logger.info(
            f"Quest completed: user={user_id}, quest={quest.id}, "
            f"gold=+{result.reward.gold}, xp=+{result.reward.xp}, "
            f"level={result.new_level}, achievements={len(result.unlocked_achievements)}"
        )

        return {
            "new_gold": progress.gold_balance,
            "new_xp": progress.experience_points,
            "new_level": result.new_level,
            "leveled_up": result.leveled_up,
            "gold_awarded": result.reward.gold,
            "xp_awarded": result.reward.xp,
            "rank": xp_system.rank_for_xp(progress.experience_points, self.config).value,
            "title": xp_system.title_for_xp(progress.experience_points, self.config),
            "streak_days": progress.current_streak_days,
            "unlocked_achievements": self._achievement_dicts(result.unlocked_achievements),
            "quest": result.quest.model_dump(mode="json"),
        }

    async def record_daily_activity(
        self,
        user_id: str,
        activity_date: Union[date, datetime, None] = None,
        now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        Record that the user was active on a day.

        Returns:
            {
                'streak_continued': bool,
                'streak_days': int,
                'bonus_gold': int,
                'bonus_xp': int,
                'message': str,
                'unlocked_achievements': list
            }
        """
        now = now or datetime.now(timezone.utc)
        engine = await self.get_engine()
        result = await self._apply(
            user_id,
            "record_daily_activity",
            lambda progress: engine.apply_daily_activity(progress, activity_date or now, now, user_id),
        )
        return self._streak_dict(result)

    async def record_login(self, user_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
        now = now or datetime.now(timezone.utc)
        engine = await self.get_engine()
        result = await self._apply(
            user_id,
            "record_login",
            lambda progress: engine.apply_login(progress, now, user_id),
        )
        return self._streak_dict(result)

    async def check_regeneration(self, user_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Regenerate at most one shield and one heart.

        Returns:
            {
                'shields_regenerated': int,
                'hearts_regenerated': int,
                'shield_count': int,
                'heart_count': int,
                'next_shield_at': datetime | None,
                'next_heart_at': datetime | None
            }
        """
        now = now or datetime.now(timezone.utc)
        engine = await self.get_engine()
        result = await self._apply(
            user_id,
            "check_regeneration",
            lambda progress: engine.apply_regeneration(progress, now),
        )
        return {
            "shields_regenerated": result.shields_regenerated,
            "hearts_regenerated": result.hearts_regenerated,
            **self._resources(result.progress),
        }

    async def lose_shield(self, user_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
        engine = await self.get_engine()
        result = await self._apply(user_id, "lose_shield", lambda p: engine.spend_shield(p, now))
        return self._resources(result.progress)

    async def lose_heart(self, user_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
        engine = await self.get_engine()
        result = await self._apply(user_id, "lose_heart", lambda p: engine.spend_heart(p, now))
        return self._resources(result.progress)

    async def record_listing(self, user_id: str, price: int, now: Optional[datetime] = None) -> Dict[str, Any]:
        engine = await self.get_engine()
        result = await self._apply(
            user_id,
            "record_listing",
            lambda progress: engine.apply_listing(progress, price, now, user_id),
        )
        return self._stats_dict(result)

    async def record_sale(self, user_id: str, price: int, now: Optional[datetime] = None) -> Dict[str, Any]:
        engine = await self.get_engine()
        result = await self._apply(
            user_id,
            "record_sale",
            lambda progress: engine.apply_sale(progress, price, now, user_id),
        )
        return self._stats_dict(result)

    async def complete_profile(self, user_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
        engine = await self.get_engine()
        result = await self._apply(
            user_id,
            "complete_profile",
            lambda progress: engine.apply_profile_completed(progress, now, user_id),
        )
        return self._stats_dict(result)

    async def get_achievements(self, user_id: str, include_locked: bool = True) -> Dict[str, Any]:
        """
        Get user's achievements with progress

        Returns:
            {
                'unlocked': [earned achievements with badge data, newest first],
                'locked': [locked achievements with progress] (if include_locked),
                'total_unlocked': int,
                'total_achievements': int
            }
        """
        engine = await self.get_engine()
        progress = await self.store.load_user_progress(user_id)
        earned = await self.store.list_achievements(user_id)
        earned.sort(key=lambda a: a.earned_date, reverse=True)

        result = {
            "unlocked": self._achievement_dicts(earned),
            "total_unlocked": len(progress.unlocked_achievement_ids),
            "total_achievements": len(engine.catalog),
        }
        if include_locked:
            result["locked"] = locked_achievements_with_progress(progress, engine.catalog, self.config)
        return result

    # ============================================
    # Helpers
    # ============================================

    async def _apply(
        self,
        user_id: str,
        operation: str,
        step: Callable[[UserProgress], EngineResult]
    ) -> EngineResult:
        """Load, run one engine step, save. Nothing is written if the step raises."""
        lock = self._locks[user_id]
        try:
            async with lock:
                progress = await self.store.load_user_progress(user_id)
                result = step(progress)
                try:
                    await self.store.save_user_progress(
                        user_id, result.progress, result.unlocked_achievements
                    )
                except PersistenceError as e:
                    metrics.storage_errors_total.labels(operation=operation, reason=e.reason).inc()
                    raise
        except RecordNotFoundError:
            # Unknown users keep no lock
            if not lock.locked():
                self._locks.pop(user_id, None)
            raise

        metrics.record_engine_events(result.events)
        return result

    def _achievement_dicts(self, achievements: List[Achievement]) -> List[Dict[str, Any]]:
        rules = {rule.id: rule for rule in self._catalog or []}
        formatted = []
        for achievement in achievements:
            data = achievement.model_dump(mode="json")
            rule = rules.get(achievement.type)
            if rule:
                data.update({
                    "name": rule.badge.name,
                    "description": rule.badge.description,
                    "category": rule.category.value,
                    "rarity": rule.badge.rarity.value,
                    "gold_reward": rule.badge.gold_reward,
                    "image_name": rule.badge.image_name,
                })
            formatted.append(data)
        return formatted

    def _streak_dict(self, result: EngineResult) -> Dict[str, Any]:
        streak = result.streak
        return {
            "streak_continued": streak.streak_continued,
            "streak_days": streak.streak_days,
            "bonus_gold": streak.bonus_gold,
            "bonus_xp": streak.bonus_xp,
            "message": streak_system.streak_description(streak.streak_days),
            "unlocked_achievements": self._achievement_dicts(result.unlocked_achievements),
        }

    def _stats_dict(self, result: EngineResult) -> Dict[str, Any]:
        return {
            "stats": result.progress.stats.model_dump(),
            "gold_balance": result.progress.gold_balance,
            "unlocked_achievements": self._achievement_dicts(result.unlocked_achievements),
        }

    def _resources(self, progress: UserProgress) -> Dict[str, Any]:
        return {
            "shield_count": progress.shield_count,
            "heart_count": progress.heart_count,
            "next_shield_at": streak_system.next_shield_regeneration_time(progress, self.config),
            "next_heart_at": streak_system.next_heart_regeneration_time(progress, self.config),
        }

    def _summary(self, user_id: str, progress: UserProgress, now: datetime) -> Dict[str, Any]:
        streak_days = streak_system.current_streak(progress, now, self.config)
        return {
            "user_id": user_id,
            **xp_system.level_info(progress.experience_points, self.config),
            "gold_balance": progress.gold_balance,
            "current_streak_days": streak_days,
            "best_streak_days": progress.best_streak_days,
            "streak_message": streak_system.streak_description(streak_days),
            "last_active_date": progress.last_active_date,
            "unlocked_achievement_ids": sorted(progress.unlocked_achievement_ids),
            "stats": progress.stats.model_dump(),
            **self._resources(progress),
        }
