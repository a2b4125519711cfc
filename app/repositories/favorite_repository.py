from __future__ import annotations
from typing import Set
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.models.favorite import FavoriteCompanion
from .base import BaseRepository

logger = logging.getLogger(__name__)


class FavoriteRepository(BaseRepository[FavoriteCompanion]):

    def __init__(self):
        super().__init__(FavoriteCompanion)

    async def get_favorite_companion_ids(
        self,
        db: AsyncSession,
        hirer_id: UUID
    ) -> Set[UUID]:
        """Owner user ids of every companion the hirer has favorited."""
        try:
            stmt = select(FavoriteCompanion.companion_id).where(FavoriteCompanion.hirer_id == hirer_id)
            result = await db.execute(stmt)
            return set(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error fetching favorites for user {hirer_id}: {e}")
            raise
