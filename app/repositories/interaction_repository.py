"""
Interaction repository.

Interactions are append-only; this repository only counts, aggregates and
inserts them.
"""

from __future__ import annotations
from typing import Iterable, List
from uuid import UUID
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.models.interaction import UserInteraction
from app.schemas.recommendation import InteractionCount, OwnerUserId
from .base import BaseRepository

logger = logging.getLogger(__name__)


class InteractionRepository(BaseRepository[UserInteraction]):

    def __init__(self):
        super().__init__(UserInteraction)

    async def count_for_user(
        self,
        db: AsyncSession,
        user_id: UUID
    ) -> int:
        """
        Count every interaction the user has ever recorded.

        Args:
            db: Active database session
            user_id: UUID of the user

        Returns:
            Lifetime interaction count (no decay)
        """
        try:
            stmt = select(func.count()).select_from(UserInteraction).where(UserInteraction.user_id == user_id)
            result = await db.execute(stmt)
            return result.scalar_one()
        except SQLAlchemyError as e:
            logger.error(f"Error counting interactions for user {user_id}: {e}")
            raise

    async def group_by_companion_and_type(
        self,
        db: AsyncSession,
        user_id: UUID,
        companion_ids: Iterable[OwnerUserId]
    ) -> List[InteractionCount]:
        """
        Aggregate the user's interactions per companion and event type.

        Args:
            db: Active database session
            user_id: UUID of the acting user
            companion_ids: Owner user ids of the companions of interest

        Returns:
            One InteractionCount per (companion, event type) pair with at least one row
        """
        companion_ids = list(companion_ids)
        if not companion_ids:
            return []

        try:
            stmt = (
                select(
                    UserInteraction.companion_id,
                    UserInteraction.event_type,
                    func.count().label("count"),
                )
                .where(
                    UserInteraction.user_id == user_id,
                    UserInteraction.companion_id.in_(companion_ids)
                )
                .group_by(UserInteraction.companion_id, UserInteraction.event_type)
            )
            result = await db.execute(stmt)
            return [
                InteractionCount(companion_id=companion_id, event_type=event_type, count=count)
                for companion_id, event_type, count in result.all()
            ]
        except SQLAlchemyError as e:
            logger.error(f"Error aggregating interactions for user {user_id}: {e}")
            raise
