"""
Recommendation service: the "For You" feed.

Coordinates candidate selection, the cold-start / hybrid strategy decision,
scoring, and the per-user ranked-list cache, and records the interactions
that feed back into scoring.
"""

from __future__ import annotations
from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.core.config import settings
from app.repositories.booking_repository import BookingRepository
from app.repositories.companion_repository import CompanionRepository
from app.repositories.favorite_repository import FavoriteRepository
from app.repositories.interaction_repository import InteractionRepository
from app.schemas.recommendation import (
    CandidateCompanion,
    RecommendationsResponse,
    RecommendationStrategy,
    ScoredCompanion,
    TrackInteractionRequest,
    UserSignals,
)
from app.services.candidate_selector import CandidateSelector
from app.services.recommendation_cache import RecommendationCache
from app.services.scoring_service import ScoringService, scoring_service as default_scoring_service
from app.utils.pagination import paginate_slice

logger = logging.getLogger(__name__)


class RecommendationService:
    """
    Service for personalized companion recommendations.

    The first page of a feed computes and caches the complete ranked list;
    later pages are slices of that cached list. Only high-signal
    interactions (and explicit refreshes) invalidate it before its TTL.
    """

    DEFAULT_LIMIT = 20
    TEASER_LIMIT = 5

    def __init__(
        self,
        scoring: Optional[ScoringService] = None,
        candidate_selector: Optional[CandidateSelector] = None,
        cache: Optional[RecommendationCache] = None,
        companion_repo: Optional[CompanionRepository] = None,
        interaction_repo: Optional[InteractionRepository] = None,
        favorite_repo: Optional[FavoriteRepository] = None,
        booking_repo: Optional[BookingRepository] = None,
        cold_start_threshold: Optional[int] = None,
        booking_history_limit: Optional[int] = None,
    ):
        """
        Initialize service with its collaborators.

        Args:
            scoring: ScoringService (shared default instance if None)
            candidate_selector: CandidateSelector (creates new if None)
            cache: RecommendationCache (creates new if None)
            companion_repo: CompanionRepository (creates new if None)
            interaction_repo: InteractionRepository (creates new if None)
            favorite_repo: FavoriteRepository (creates new if None)
            booking_repo: BookingRepository (creates new if None)
            cold_start_threshold: Interactions required for hybrid scoring
            booking_history_limit: Completed bookings read for preferences
        """
        self.scoring = scoring or default_scoring_service
        self.companion_repo = companion_repo or CompanionRepository()
        self.candidate_selector = candidate_selector or CandidateSelector(companion_repo=self.companion_repo)
        self.cache = cache or RecommendationCache()
        self.interaction_repo = interaction_repo or InteractionRepository()
        self.favorite_repo = favorite_repo or FavoriteRepository()
        self.booking_repo = booking_repo or BookingRepository()
        self.cold_start_threshold = (
            settings.recommendation_cold_start_threshold if cold_start_threshold is None else cold_start_threshold
        )
        self.booking_history_limit = (
            settings.recommendation_booking_history_limit if booking_history_limit is None else booking_history_limit
        )

    async def choose_strategy(self, db: AsyncSession, user_id: UUID) -> RecommendationStrategy:
        """
        Cold start until the user has ``cold_start_threshold`` lifetime
        interactions, hybrid from then on.
        """
        interaction_count = await self.interaction_repo.count_for_user(db, user_id)
        if interaction_count < self.cold_start_threshold:
            return RecommendationStrategy.COLD_START
        return RecommendationStrategy.HYBRID

    async def get_for_you(
        self,
        db: AsyncSession,
        user_id: UUID,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0
    ) -> RecommendationsResponse:
        """
        Get one page of personalized recommendations.

        Args:
            db: Active database session
            user_id: UUID of the requesting user
            limit: Page size
            offset: Number of ranked items to skip

        Returns:
            RecommendationsResponse with the page, has_more, total and strategy

        Note:
            Cache hits always report the hybrid strategy, whichever path
            produced the cached list. A page past the first with no cached
            list is returned empty; callers must request offset 0 first.
        """
        cached = await self.cache.get(user_id)
        if cached:
            companions, has_more, total = paginate_slice(cached, offset, limit)
            logger.debug(f"Recommendation cache hit for user {user_id} (offset={offset}, total={total})")
            return RecommendationsResponse(
                companions=companions,
                has_more=has_more,
                total=total,
                strategy=RecommendationStrategy.HYBRID,
            )

        if offset > 0:
            logger.info(f"No cached recommendations for user {user_id} at offset {offset}; returning empty page")
            return RecommendationsResponse(
                companions=[],
                has_more=False,
                total=0,
                strategy=RecommendationStrategy.COLD_START,
            )

        strategy = await self.choose_strategy(db, user_id)
        candidate_ids = await self.candidate_selector.select_candidates(db, user_id)

        if strategy == RecommendationStrategy.COLD_START:
            candidates = await self.companion_repo.get_cold_start_candidates(db, candidate_ids)
            ranked = self.scoring.score_cold_start(candidates)
        else:
            ranked = await self._score_hybrid(db, user_id, candidate_ids)

        if ranked:
            await self.cache.set(user_id, ranked)

        logger.info(
            f"Computed {len(ranked)} recommendations for user {user_id} "
            f"(strategy={strategy.value}, candidates={len(candidate_ids)})"
        )

        companions, has_more, total = paginate_slice(ranked, offset, limit)
        return RecommendationsResponse(
            companions=companions,
            has_more=has_more,
            total=total,
            strategy=strategy,
        )

    async def get_teaser(
        self,
        db: AsyncSession,
        user_id: UUID,
        limit: int = TEASER_LIMIT
    ) -> List[ScoredCompanion]:
        """First-page recommendations for the home dashboard."""
        result = await self.get_for_you(db, user_id, limit, 0)
        return result.companions

    async def track_interaction(
        self,
        db: AsyncSession,
        user_id: UUID,
        request: TrackInteractionRequest
    ) -> None:
        """
        Record a client interaction with a companion.

        The companion may be referenced by profile id or owner user id; the
        row is stored against the owner user id. Unknown references are
        logged and ignored. High-signal events invalidate the user's cache.

        Args:
            db: Active database session (committed here before invalidation)
            user_id: UUID of the acting user
            request: The interaction to record
        """
        owner_id = await self.companion_repo.resolve_owner_id(db, request.companion_id)
        if owner_id is None:
            logger.warning(f"Companion not found for interaction: {request.companion_id}")
            return

        event_value = self.scoring.get_event_weight(request.event_type)

        await self.interaction_repo.create(db, {
            "user_id": user_id,
            "companion_id": owner_id,
            "event_type": request.event_type,
            "event_value": event_value,
            "dwell_time_ms": request.dwell_time_ms,
            "session_id": request.session_id,
        })
        await db.commit()

        if self.scoring.is_high_signal(request.event_type):
            await self.cache.invalidate(user_id)
            logger.info(
                f"Invalidated recommendations for user {user_id} after {request.event_type.value}"
            )

    async def refresh(self, user_id: UUID) -> None:
        """Drop the cached list; the next first-page request recomputes it."""
        await self.cache.invalidate(user_id)

    async def _score_hybrid(
        self,
        db: AsyncSession,
        user_id: UUID,
        candidate_ids: List[UUID]
    ) -> List[ScoredCompanion]:
        candidates = await self.companion_repo.get_candidates(db, candidate_ids)
        if not candidates:
            return []

        signals = await self._load_user_signals(db, user_id, candidates)
        return self.scoring.score_candidates(signals, candidates)

    async def _load_user_signals(
        self,
        db: AsyncSession,
        user_id: UUID,
        candidates: List[CandidateCompanion]
    ) -> UserSignals:
        """Fetch everything hybrid scoring needs about the user in one place."""
        owner_ids = [c.owner_user_id for c in candidates]

        interaction_rows = await self.interaction_repo.group_by_companion_and_type(db, user_id, owner_ids)
        favorite_ids = await self.favorite_repo.get_favorite_companion_ids(db, user_id)
        bookings = await self.booking_repo.get_recent_completed(db, user_id, limit=self.booking_history_limit)

        return UserSignals(
            preferred_occasions=self.scoring.extract_preferred_occasions(o for _, o in bookings),
            favorite_owner_ids=frozenset(favorite_ids),
            interaction_scores=self.scoring.aggregate_interaction_scores(interaction_rows),
        )
