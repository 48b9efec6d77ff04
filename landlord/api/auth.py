"""API authentication using API keys"""
import logging
from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from landlord.config import get_api_keys
from landlord.models.user import Session
from landlord.services.container import get_container

logger = logging.getLogger(__name__)

security = HTTPBearer()


async def verify_api_key(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """
    Verify API key from Authorization header

    Args:
        credentials: HTTP authorization credentials

    Returns:
        The verified API key

    Raises:
        HTTPException: If API key is invalid
    """
    api_key = credentials.credentials
    valid_keys = get_api_keys()

    if not valid_keys:
        logger.error("No API keys configured - rejecting all requests")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="API authentication not configured"
        )

    if api_key not in valid_keys:
        logger.warning(f"Invalid API key attempt: {api_key[:10]}...")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key"
        )

    logger.debug(f"API key validated: {api_key[:10]}...")
    return api_key


async def get_session(user_id: str, api_key: str = Depends(verify_api_key)) -> Session:
    """Session for the user named in the path, after API key verification"""
    store = get_container().store
    onboarding_complete = False
    if await store.user_exists(user_id):
        progress = await store.load_user_progress(user_id)
        onboarding_complete = bool(progress.stats.profile_completed)

    return Session(
        user_id=user_id,
        is_authenticated=True,
        onboarding_complete=onboarding_complete,
    )
