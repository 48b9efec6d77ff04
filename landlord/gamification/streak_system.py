"""
Streak and Resource Regeneration System

Streaks:
- Counted in calendar days in the configured timezone
- Activity yesterday keeps the streak alive; a full skipped day breaks it
- The streak bonus is granted once per new active day

Shields and hearts:
- Capped counters (3 shields, 5 hearts) gating quest attempts
- One unit regenerates per elapsed window since the last loss
  (shields 4h, hearts 2h); callers re-invoke to chain further units
"""

from datetime import date, datetime, timedelta, timezone
from typing import NamedTuple, Optional, Tuple, Union
import logging

from landlord.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from landlord.exceptions import InsufficientResourceError
from landlord.gamification.reward_system import streak_bonus, streak_xp_bonus
from landlord.models.user import UserProgress

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]


class StreakUpdate(NamedTuple):
    streak_continued: bool
    streak_days: int
    previous_streak_days: int
    bonus_gold: int
    bonus_xp: int
    is_new_day: bool


# ============================================
# Calendar helpers
# ============================================

def _as_aware(moment: datetime) -> datetime:
    """Naive datetimes are taken to be UTC"""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def to_local_date(value: DateLike, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> date:
    """Calendar day of a date or timestamp in the engine's timezone"""
    if isinstance(value, datetime):
        return _as_aware(value).astimezone(config.tz).date()
    return value


def days_between(start: DateLike, end: DateLike, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int:
    """Calendar days from start to end (negative when end is earlier)"""
    return (to_local_date(end, config) - to_local_date(start, config)).days


def is_streak_active(
    last_active: DateLike,
    now: DateLike,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG
) -> bool:
    """True if the user was active today or yesterday"""
    return days_between(last_active, now, config) <= 1


# ============================================
# Streak updates
# ============================================

def update_streak(
    progress: UserProgress,
    activity_date: DateLike,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG
) -> Tuple[UserProgress, StreakUpdate]:
    """
    Record activity on a day and return the new snapshot

    Logic:
    - First activity ever: streak starts at 1
    - Same day as last activity: no change, no bonus
    - Next day: streak + 1
    - Gap of two or more days: streak resets to 1
    - Activity dated before the last active day is ignored

    The streak bonus (gold and XP) is reported for the caller to grant;
    this function only moves the streak fields.
    """
    day = to_local_date(activity_date, config)
    last_day = progress.last_active_date
    previous = progress.current_streak_days

    if last_day is not None and day <= last_day:
        if day < last_day:
            logger.warning(
                f"Ignoring activity on {day}, before last active day {last_day}"
            )
        return progress, StreakUpdate(
            streak_continued=previous > 0,
            streak_days=previous,
            previous_streak_days=previous,
            bonus_gold=0,
            bonus_xp=0,
            is_new_day=False,
        )

    if last_day is not None and previous > 0 and is_streak_active(last_day, day, config):
        streak_days = previous + 1
        continued = True
    else:
        streak_days = 1
        continued = False
        if previous > 0:
            logger.info(f"Streak broken after {previous} days (last active {last_day})")

    new_progress = progress.model_copy(update={
        "current_streak_days": streak_days,
        "best_streak_days": max(progress.best_streak_days, streak_days),
        "last_active_date": day,
    })

    return new_progress, StreakUpdate(
        streak_continued=continued,
        streak_days=streak_days,
        previous_streak_days=previous,
        bonus_gold=streak_bonus(streak_days, config),
        bonus_xp=streak_xp_bonus(streak_days, config),
        is_new_day=True,
    )


def current_streak(
    progress: UserProgress,
    now: DateLike,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG
) -> int:
    """Streak as displayed at `now`: 0 once it has lapsed"""
    if progress.last_active_date is None:
        return 0
    if not is_streak_active(progress.last_active_date, now, config):
        return 0
    return progress.current_streak_days


def streak_description(streak_days: int) -> str:
    """Medieval-themed description of a streak"""
    if streak_days <= 0:
        return "Thy quest has not yet begun."
    if streak_days == 1:
        return "Thy first day of conquest."
    if streak_days <= 6:
        return f"A noble effort of {streak_days} days."
    if streak_days <= 13:
        return f"A week's campaign of {streak_days} days."
    if streak_days <= 29:
        return f"A fortnight's crusade of {streak_days} days."
    if streak_days <= 99:
        return f"A month's siege of {streak_days} days."
    return f"A legendary conquest of {streak_days} days!"


# ============================================
# Shield / heart regeneration
# ============================================

def should_regenerate(
    current: int,
    maximum: int,
    last_lost_at: Optional[datetime],
    now: datetime,
    regen_hours: int
) -> bool:
    """True if one unit is due: below max and a full window has elapsed"""
    if current >= maximum or last_lost_at is None:
        return False
    elapsed = _as_aware(now) - _as_aware(last_lost_at)
    return elapsed >= timedelta(hours=regen_hours)


def next_regeneration_time(
    current: int,
    maximum: int,
    last_lost_at: Optional[datetime],
    regen_hours: int
) -> Optional[datetime]:
    """When the next unit regenerates, None if already full"""
    if current >= maximum or last_lost_at is None:
        return None
    return _as_aware(last_lost_at) + timedelta(hours=regen_hours)


def _regenerate(
    current: int,
    maximum: int,
    last_lost_at: Optional[datetime],
    now: datetime,
    regen_hours: int
) -> Tuple[int, Optional[datetime], bool]:
    if not should_regenerate(current, maximum, last_lost_at, now, regen_hours):
        return min(current, maximum), last_lost_at, False

    new_count = current + 1
    if new_count >= maximum:
        return maximum, None, True
    # The next window starts where this one ended
    return new_count, _as_aware(last_lost_at) + timedelta(hours=regen_hours), True


def regenerate_shield(
    progress: UserProgress,
    now: datetime,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG
) -> Tuple[UserProgress, bool]:
    """Regenerate at most one shield"""
    count, lost_at, regenerated = _regenerate(
        progress.shield_count,
        config.max_shields,
        progress.last_shield_lost_at,
        now,
        config.shield_regeneration_hours,
    )
    if not regenerated:
        return progress, False
    return progress.model_copy(update={
        "shield_count": count,
        "last_shield_lost_at": lost_at,
    }), True


def regenerate_heart(
    progress: UserProgress,
    now: datetime,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG
) -> Tuple[UserProgress, bool]:
    """Regenerate at most one heart"""
    count, lost_at, regenerated = _regenerate(
        progress.heart_count,
        config.max_hearts,
        progress.last_heart_lost_at,
        now,
        config.heart_regeneration_hours,
    )
    if not regenerated:
        return progress, False
    return progress.model_copy(update={
        "heart_count": count,
        "last_heart_lost_at": lost_at,
    }), True


def next_shield_regeneration_time(
    progress: UserProgress,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG
) -> Optional[datetime]:
    return next_regeneration_time(
        progress.shield_count,
        config.max_shields,
        progress.last_shield_lost_at,
        config.shield_regeneration_hours,
    )


def next_heart_regeneration_time(
    progress: UserProgress,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG
) -> Optional[datetime]:
    return next_regeneration_time(
        progress.heart_count,
        config.max_hearts,
        progress.last_heart_lost_at,
        config.heart_regeneration_hours,
    )


def lose_shield(progress: UserProgress, now: datetime) -> UserProgress:
    """Spend one shield and restart the shield regeneration timer"""
    if progress.shield_count <= 0:
        raise InsufficientResourceError("No shields remaining", resource="shields")
    return progress.model_copy(update={
        "shield_count": progress.shield_count - 1,
        "last_shield_lost_at": _as_aware(now),
    })


def lose_heart(progress: UserProgress, now: datetime) -> UserProgress:
    """Spend one heart and restart the heart regeneration timer"""
    if progress.heart_count <= 0:
        raise InsufficientResourceError("No hearts remaining", resource="hearts")
    return progress.model_copy(update={
        "heart_count": progress.heart_count - 1,
        "last_heart_lost_at": _as_aware(now),
    })
