from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from redis.exceptions import RedisError
import logging
import uuid

from app.core.database import get_db, get_session_factory
from app.api.deps import get_current_user, get_recommendation_service
from app.models.user import User
from app.schemas.recommendation import (
    RecommendationsResponse,
    SuccessResponse,
    TeaserResponse,
    TrackInteractionRequest,
)
from app.services.recommendation_service import RecommendationService
from app.utils.pagination import MAX_PAGE_SIZE

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/for-you", response_model=RecommendationsResponse)
async def get_for_you(
    limit: int = Query(RecommendationService.DEFAULT_LIMIT, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    service: RecommendationService = Depends(get_recommendation_service),
):
    """Personalized companion feed, paginated over a cached ranking"""
    try:
        return await service.get_for_you(db, current_user.id, limit, offset)
    except (SQLAlchemyError, RedisError) as e:
        logger.error(f"Error building recommendations for user {current_user.id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load recommendations")


@router.get("/for-you/teaser", response_model=TeaserResponse)
async def get_teaser(
    limit: int = Query(RecommendationService.TEASER_LIMIT, ge=1, le=20),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    service: RecommendationService = Depends(get_recommendation_service),
):
    """Small first-page slice for the home dashboard"""
    try:
        companions = await service.get_teaser(db, current_user.id, limit)
    except (SQLAlchemyError, RedisError) as e:
        logger.error(f"Error building teaser for user {current_user.id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load recommendations")
    return TeaserResponse(companions=companions)


@router.post("/interactions", response_model=SuccessResponse)
async def track_interaction(
    request: TrackInteractionRequest,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_user),
    session_factory: async_sessionmaker = Depends(get_session_factory),
    service: RecommendationService = Depends(get_recommendation_service),
):
    """Record a client interaction without making the client wait for it"""
    background_tasks.add_task(
        _track_interaction_in_background, service, session_factory, current_user.id, request
    )
    return SuccessResponse()


@router.post("/refresh", response_model=SuccessResponse)
async def refresh(
    current_user: User = Depends(get_current_user),
    service: RecommendationService = Depends(get_recommendation_service),
):
    """Discard the cached ranking so the next feed request recomputes it"""
    try:
        await service.refresh(current_user.id)
    except RedisError as e:
        logger.error(f"Error refreshing recommendations for user {current_user.id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to refresh recommendations")
    return SuccessResponse()


async def _track_interaction_in_background(
    service: RecommendationService,
    session_factory: async_sessionmaker,
    user_id: uuid.UUID,
    request: TrackInteractionRequest,
) -> None:
    """Best-effort tracking: failures are logged, never surfaced to the client"""
    try:
        async with session_factory() as db:
            await service.track_interaction(db, user_id, request)
    except Exception:
        logger.warning(
            f"Failed to track interaction: user_id={user_id}, companion_id={request.companion_id}",
            exc_info=True,
        )
