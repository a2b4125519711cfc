from __future__ import annotations
from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.core.config import settings
from app.repositories.companion_repository import CompanionRepository
from app.repositories.user_block_repository import UserBlockRepository
from app.schemas.recommendation import ProfileId

logger = logging.getLogger(__name__)


class CandidateSelector:
    """
    Picks the companion profiles a user may be recommended.

    Excludes the user's own profile, anyone on either side of a block, and
    profiles that are inactive, hidden or not verified. Ranking is left to
    the scoring step.
    """

    def __init__(
        self,
        companion_repo: Optional[CompanionRepository] = None,
        block_repo: Optional[UserBlockRepository] = None,
        limit: Optional[int] = None,
    ):
        self.companion_repo = companion_repo or CompanionRepository()
        self.block_repo = block_repo or UserBlockRepository()
        self.limit = settings.recommendation_candidate_limit if limit is None else limit

    async def select_candidates(self, db: AsyncSession, user_id: UUID) -> List[ProfileId]:
        """
        Args:
            db: Active database session
            user_id: UUID of the user receiving recommendations

        Returns:
            Up to ``limit`` eligible profile ids
        """
        excluded = await self.block_repo.get_blocked_user_ids(db, user_id)
        excluded.add(user_id)

        candidates = await self.companion_repo.find_candidate_ids(db, excluded, limit=self.limit)
        logger.debug(
            f"Selected {len(candidates)} candidates for user {user_id} "
            f"({len(excluded) - 1} blocked users excluded)"
        )
        return candidates
