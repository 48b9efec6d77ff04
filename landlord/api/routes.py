"""API route handlers"""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from landlord.api.auth import get_session, verify_api_key
from landlord.api.middleware import limiter
from landlord.api.models import (
    AchievementResponse,
    CompleteQuestRequest,
    CompleteQuestResponse,
    CreateUserRequest,
    DailyActivityRequest,
    DailyActivityResponse,
    GoalProgressRequest,
    GoalProgressResponse,
    HealthCheckResponse,
    PropertyActivityRequest,
    PropertyActivityResponse,
    ProgressResponse,
    RegenerationRequest,
    RegenerationResponse,
    ResourceResponse,
    TeamStandingRequest,
    TeamStandingResponse,
)
from landlord.config import RATE_LIMIT, STORAGE_BACKEND
from landlord.gamification import goal_system, team_system
from landlord.models.user import Session
from landlord.services.container import get_container

logger = logging.getLogger(__name__)

router = APIRouter()


def _service():
    return get_container().progression_service


@router.post("/api/v1/users", status_code=status.HTTP_201_CREATED, response_model=ProgressResponse)
@limiter.limit(RATE_LIMIT)
async def create_user_endpoint(
    request: Request,
    body: CreateUserRequest,
    api_key: str = Depends(verify_api_key)
):
    """Create a progression record for a new user"""
    service = _service()
    if await service.store.user_exists(body.user_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"User {body.user_id} already exists"
        )

    summary = await service.create_user(body.user_id)
    logger.info(f"Created user via API: {body.user_id}")
    return summary


@router.delete("/api/v1/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit(RATE_LIMIT)
async def delete_user_endpoint(
    request: Request,
    session: Session = Depends(get_session)
):
    """Delete a user's progression and achievements"""
    await _service().delete_user(session.user_id)
    logger.info(f"Deleted user via API: {session.user_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/api/v1/users/{user_id}/progress", response_model=ProgressResponse)
@limiter.limit(RATE_LIMIT)
async def get_progress(
    request: Request,
    session: Session = Depends(get_session)
):
    """Level, rank, title, streak and resources for a user"""
    return await _service().get_progress_summary(session.user_id)


@router.post("/api/v1/users/{user_id}/quests/complete", response_model=CompleteQuestResponse)
@limiter.limit(RATE_LIMIT)
async def complete_quest(
    request: Request,
    body: CompleteQuestRequest,
    session: Session = Depends(get_session)
):
    """Complete a quest and award its reward"""
    return await _service().complete_quest(session.user_id, body.quest, body.completed_at)


@router.post("/api/v1/users/{user_id}/activity", response_model=DailyActivityResponse)
@limiter.limit(RATE_LIMIT)
async def record_activity(
    request: Request,
    body: DailyActivityRequest,
    session: Session = Depends(get_session)
):
    """Record an active day for streak tracking"""
    return await _service().record_daily_activity(session.user_id, body.activity_date)


@router.post("/api/v1/users/{user_id}/login", response_model=DailyActivityResponse)
@limiter.limit(RATE_LIMIT)
async def record_login(
    request: Request,
    session: Session = Depends(get_session)
):
    """Record a login, which also counts as an active day"""
    return await _service().record_login(session.user_id)


@router.post("/api/v1/users/{user_id}/profile/complete", response_model=PropertyActivityResponse)
@limiter.limit(RATE_LIMIT)
async def complete_profile(
    request: Request,
    session: Session = Depends(get_session)
):
    """Mark the user's profile as complete"""
    return await _service().complete_profile(session.user_id)


@router.post("/api/v1/users/{user_id}/regeneration", response_model=RegenerationResponse)
@limiter.limit(RATE_LIMIT)
async def check_regeneration(
    request: Request,
    body: RegenerationRequest,
    session: Session = Depends(get_session)
):
    """Regenerate at most one shield and one heart"""
    return await _service().check_regeneration(session.user_id, body.now)


@router.post("/api/v1/users/{user_id}/shields/lose", response_model=ResourceResponse)
@limiter.limit(RATE_LIMIT)
async def lose_shield(
    request: Request,
    session: Session = Depends(get_session)
):
    """Spend one shield"""
    return await _service().lose_shield(session.user_id)


@router.post("/api/v1/users/{user_id}/hearts/lose", response_model=ResourceResponse)
@limiter.limit(RATE_LIMIT)
async def lose_heart(
    request: Request,
    session: Session = Depends(get_session)
):
    """Spend one heart"""
    return await _service().lose_heart(session.user_id)


@router.post("/api/v1/users/{user_id}/listings", response_model=PropertyActivityResponse)
@limiter.limit(RATE_LIMIT)
async def record_listing(
    request: Request,
    body: PropertyActivityRequest,
    session: Session = Depends(get_session)
):
    """Record a property listing"""
    return await _service().record_listing(session.user_id, body.price)


@router.post("/api/v1/users/{user_id}/sales", response_model=PropertyActivityResponse)
@limiter.limit(RATE_LIMIT)
async def record_sale(
    request: Request,
    body: PropertyActivityRequest,
    session: Session = Depends(get_session)
):
    """Record a closed sale"""
    return await _service().record_sale(session.user_id, body.price)


@router.get("/api/v1/users/{user_id}/achievements", response_model=AchievementResponse)
@limiter.limit(RATE_LIMIT)
async def get_achievements(
    request: Request,
    include_locked: bool = True,
    session: Session = Depends(get_session)
):
    """Unlocked achievements and progress toward locked ones"""
    achievements = await _service().get_achievements(session.user_id, include_locked)
    return {"user_id": session.user_id, **achievements}


@router.post("/api/v1/goals/progress", response_model=GoalProgressResponse)
@limiter.limit(RATE_LIMIT)
async def goal_progress(
    request: Request,
    body: GoalProgressRequest,
    api_key: str = Depends(verify_api_key)
):
    """Progress toward annual sales goals"""
    goal = goal_system.clamp_goal_targets(body.goal) if body.clamp_targets else body.goal
    return {
        **goal_system.goal_summary(body.progress, goal),
        "monthly_targets": goal_system.monthly_targets(goal)._asdict(),
    }


@router.post("/api/v1/teams/standing", response_model=TeamStandingResponse)
@limiter.limit(RATE_LIMIT)
async def team_standing(
    request: Request,
    body: TeamStandingRequest,
    api_key: str = Depends(verify_api_key)
):
    """Team level, title and top performer"""
    return team_system.team_standing(body.members)


@router.get("/api/health", response_model=HealthCheckResponse)
async def health_check():
    """Health check endpoint"""
    return HealthCheckResponse(
        status="healthy",
        storage=STORAGE_BACKEND,
        timestamp=datetime.now(timezone.utc)
    )


@router.get("/metrics")
async def metrics_endpoint():
    """Prometheus metrics"""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
