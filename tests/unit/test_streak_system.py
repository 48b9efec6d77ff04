"""Unit tests for streaks and shield/heart regeneration (landlord/gamification/streak_system.py)"""
import pytest
from datetime import date, datetime, timedelta, timezone

from landlord.config import EngineConfig
from landlord.exceptions import InsufficientResourceError
from landlord.gamification.streak_system import (
    current_streak,
    days_between,
    is_streak_active,
    lose_heart,
    lose_shield,
    next_heart_regeneration_time,
    next_regeneration_time,
    next_shield_regeneration_time,
    regenerate_heart,
    regenerate_shield,
    should_regenerate,
    streak_description,
    to_local_date,
    update_streak,
)
from landlord.models.user import UserProgress


def _progress_active_on(day, streak_days, best=None):
    return UserProgress(
        current_streak_days=streak_days,
        best_streak_days=best if best is not None else streak_days,
        last_active_date=day,
    )


# ============================================================================
# Calendar Tests
# ============================================================================

def test_to_local_date_uses_config_timezone():
    """03:00 UTC on the 16th is still the 15th in New York"""
    moment = datetime(2024, 1, 16, 3, 0, tzinfo=timezone.utc)

    assert to_local_date(moment) == date(2024, 1, 16)
    assert to_local_date(moment, EngineConfig(timezone="America/New_York")) == date(2024, 1, 15)


def test_to_local_date_naive_is_utc():
    assert to_local_date(datetime(2024, 1, 16, 3, 0)) == date(2024, 1, 16)


def test_days_between():
    assert days_between(date(2024, 1, 14), date(2024, 1, 15)) == 1
    assert days_between(date(2024, 1, 15), date(2024, 1, 15)) == 0
    assert days_between(date(2024, 1, 15), date(2024, 1, 13)) == -2


def test_is_streak_active():
    today = date(2024, 1, 15)

    assert is_streak_active(today, today)
    assert is_streak_active(today - timedelta(days=1), today)
    assert not is_streak_active(today - timedelta(days=2), today)


def test_is_streak_active_across_midnight():
    """23:59 one day and 00:01 the next are consecutive calendar days"""
    last = datetime(2024, 1, 14, 23, 59, tzinfo=timezone.utc)
    now = datetime(2024, 1, 15, 0, 1, tzinfo=timezone.utc)

    assert days_between(last, now) == 1
    assert is_streak_active(last, now)


# ============================================================================
# Streak Update Tests
# ============================================================================

def test_update_streak_first_activity(fresh_progress):
    progress, update = update_streak(fresh_progress, date(2024, 1, 15))

    assert progress.current_streak_days == 1
    assert progress.best_streak_days == 1
    assert progress.last_active_date == date(2024, 1, 15)
    assert update.streak_continued is False
    assert update.is_new_day is True
    assert update.bonus_gold == 5
    assert update.bonus_xp == 2


def test_update_streak_next_day_continues():
    progress = _progress_active_on(date(2024, 1, 14), 3)

    new_progress, update = update_streak(progress, date(2024, 1, 15))

    assert new_progress.current_streak_days == 4
    assert new_progress.best_streak_days == 4
    assert update.streak_continued is True
    assert update.previous_streak_days == 3
    assert update.bonus_gold == 20
    assert update.bonus_xp == 8


def test_update_streak_same_day_no_change():
    progress = _progress_active_on(date(2024, 1, 15), 3)

    new_progress, update = update_streak(progress, datetime(2024, 1, 15, 22, 0, tzinfo=timezone.utc))

    assert new_progress == progress
    assert update.is_new_day is False
    assert update.streak_continued is True
    assert update.streak_days == 3
    assert update.bonus_gold == 0
    assert update.bonus_xp == 0


def test_update_streak_gap_resets():
    progress = _progress_active_on(date(2024, 1, 12), 8, best=8)

    new_progress, update = update_streak(progress, date(2024, 1, 15))

    assert new_progress.current_streak_days == 1
    assert new_progress.best_streak_days == 8
    assert update.streak_continued is False
    assert update.previous_streak_days == 8
    assert update.bonus_gold == 5


def test_update_streak_earlier_day_ignored():
    progress = _progress_active_on(date(2024, 1, 15), 2)

    new_progress, update = update_streak(progress, date(2024, 1, 10))

    assert new_progress == progress
    assert update.is_new_day is False
    assert update.bonus_gold == 0


def test_update_streak_does_not_mutate_input():
    progress = _progress_active_on(date(2024, 1, 14), 3)

    update_streak(progress, date(2024, 1, 15))

    assert progress.current_streak_days == 3
    assert progress.last_active_date == date(2024, 1, 14)


def test_update_streak_bonus_capped():
    progress = _progress_active_on(date(2024, 1, 14), 80)

    _, update = update_streak(progress, date(2024, 1, 15))

    assert update.streak_days == 81
    assert update.bonus_gold == 250
    assert update.bonus_xp == 100


def test_update_streak_timezone_boundary():
    """Activity late on the 15th in New York continues a streak from the 14th"""
    config = EngineConfig(timezone="America/New_York")
    progress = _progress_active_on(date(2024, 1, 14), 1)

    new_progress, update = update_streak(
        progress, datetime(2024, 1, 16, 3, 0, tzinfo=timezone.utc), config
    )

    assert new_progress.last_active_date == date(2024, 1, 15)
    assert update.streak_continued is True
    assert new_progress.current_streak_days == 2


def test_current_streak():
    progress = _progress_active_on(date(2024, 1, 14), 5)

    assert current_streak(progress, date(2024, 1, 15)) == 5
    assert current_streak(progress, date(2024, 1, 16)) == 0
    assert current_streak(UserProgress(), date(2024, 1, 16)) == 0


def test_streak_description():
    assert streak_description(0) == "Thy quest has not yet begun."
    assert streak_description(1) == "Thy first day of conquest."
    assert "7 days" in streak_description(7)
    assert streak_description(150).startswith("A legendary conquest")


# ============================================================================
# Regeneration Tests
# ============================================================================

def test_should_regenerate(now):
    lost_at = now - timedelta(hours=4)

    assert should_regenerate(1, 3, lost_at, now, 4)
    assert not should_regenerate(1, 3, now - timedelta(hours=3, minutes=59), now, 4)
    assert not should_regenerate(3, 3, lost_at, now, 4)


def test_should_regenerate_without_loss_time(now):
    """Below max but no loss recorded: nothing is due"""
    assert not should_regenerate(1, 3, None, now, 4)


def test_next_regeneration_time(now):
    assert next_regeneration_time(1, 3, now, 4) == now + timedelta(hours=4)
    assert next_regeneration_time(3, 3, now, 4) is None
    assert next_regeneration_time(1, 3, None, 4) is None


def test_regenerate_shield_one_per_call(now):
    progress = UserProgress(shield_count=1, last_shield_lost_at=now)

    # Not yet due
    same, regenerated = regenerate_shield(progress, now + timedelta(hours=3))
    assert not regenerated
    assert same is progress

    # Eight hours elapsed still yields one shield per call
    progress, regenerated = regenerate_shield(progress, now + timedelta(hours=8))
    assert regenerated
    assert progress.shield_count == 2
    assert progress.last_shield_lost_at == now + timedelta(hours=4)

    # Second window already elapsed: the next call fills up and clears the timer
    progress, regenerated = regenerate_shield(progress, now + timedelta(hours=8))
    assert regenerated
    assert progress.shield_count == 3
    assert progress.last_shield_lost_at is None

    _, regenerated = regenerate_shield(progress, now + timedelta(hours=100))
    assert not regenerated


def test_regenerate_heart(now):
    progress = UserProgress(heart_count=4, last_heart_lost_at=now)

    _, regenerated = regenerate_heart(progress, now + timedelta(hours=1, minutes=59))
    assert not regenerated

    progress, regenerated = regenerate_heart(progress, now + timedelta(hours=2))
    assert regenerated
    assert progress.heart_count == 5
    assert progress.last_heart_lost_at is None


def test_regeneration_never_exceeds_max(now):
    progress = UserProgress(shield_count=2, last_shield_lost_at=now - timedelta(days=30))

    for _ in range(10):
        progress, _ = regenerate_shield(progress, now)

    assert progress.shield_count == 3


def test_next_resource_regeneration_times(now):
    progress = UserProgress(shield_count=2, last_shield_lost_at=now, heart_count=3, last_heart_lost_at=now)

    assert next_shield_regeneration_time(progress) == now + timedelta(hours=4)
    assert next_heart_regeneration_time(progress) == now + timedelta(hours=2)
    assert next_shield_regeneration_time(UserProgress()) is None


def test_regeneration_naive_loss_time_is_utc(now):
    progress = UserProgress(shield_count=1, last_shield_lost_at=datetime(2024, 1, 15, 6, 0))

    progress, regenerated = regenerate_shield(progress, now)

    assert regenerated
    assert progress.last_shield_lost_at == datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)


# ============================================================================
# Resource Loss Tests
# ============================================================================

def test_lose_shield_starts_timer(now, fresh_progress):
    progress = lose_shield(fresh_progress, now)

    assert progress.shield_count == 2
    assert progress.last_shield_lost_at == now
    assert fresh_progress.shield_count == 3


def test_lose_heart_starts_timer(now, fresh_progress):
    progress = lose_heart(fresh_progress, now)

    assert progress.heart_count == 4
    assert progress.last_heart_lost_at == now


def test_lose_shield_at_zero_raises(now):
    with pytest.raises(InsufficientResourceError) as exc_info:
        lose_shield(UserProgress(shield_count=0), now)

    assert exc_info.value.resource == "shields"


def test_lose_heart_at_zero_raises(now):
    with pytest.raises(InsufficientResourceError):
        lose_heart(UserProgress(heart_count=0), now)
