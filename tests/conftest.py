"""Global test fixtures and utilities for landlord tests"""
import pytest
from datetime import datetime, timezone

from landlord.config import EngineConfig
from landlord.db.store import InMemoryProgressStore
from landlord.gamification.engine import ProgressionEngine
from landlord.models.quest import ActivityType, Quest
from landlord.models.user import UserProgress
from landlord.services.progression_service import ProgressionService


# ============================================================================
# User & Time Fixtures
# ============================================================================

@pytest.fixture
def test_user_id():
    """Standard test user ID"""
    return "agent_123"


@pytest.fixture
def now():
    """Fixed reference time: 2024-01-15 10:00 UTC"""
    return datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def fresh_progress():
    """Progress of a user who has done nothing yet"""
    return UserProgress()


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def engine_config():
    """Default engine rules"""
    return EngineConfig()


@pytest.fixture
def engine(engine_config):
    """Progression engine with the default catalog"""
    return ProgressionEngine(engine_config)


@pytest.fixture
def quest_factory(test_user_id):
    """Factory for creating quests"""
    def _create(activity_type=ActivityType.LISTING, is_special_quest=False, **kwargs):
        kwargs.setdefault("user_id", test_user_id)
        return Quest(
            type=activity_type,
            is_special_quest=is_special_quest,
            title=kwargs.pop("title", f"Test {activity_type.value} quest"),
            **kwargs
        )
    return _create


# ============================================================================
# Service Fixtures
# ============================================================================

@pytest.fixture
def memory_store():
    """Empty in-memory progress store"""
    return InMemoryProgressStore()


@pytest.fixture
async def progression_service(memory_store, test_user_id):
    """Service over an in-memory store with one created user"""
    service = ProgressionService(memory_store)
    await service.create_user(test_user_id)
    return service
