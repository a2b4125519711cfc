"""
User block repository.

Blocks are honored in both directions: a user never sees companions they
blocked, nor companions who blocked them.
"""

from __future__ import annotations
from typing import Set
from uuid import UUID
from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.models.user_block import UserBlock
from .base import BaseRepository

logger = logging.getLogger(__name__)


class UserBlockRepository(BaseRepository[UserBlock]):

    def __init__(self):
        super().__init__(UserBlock)

    async def get_blocked_user_ids(
        self,
        db: AsyncSession,
        user_id: UUID
    ) -> Set[UUID]:
        """
        Get every user on the other side of a block involving ``user_id``.

        Args:
            db: Active database session
            user_id: UUID of the user

        Returns:
            Set of user ids that blocked or were blocked by the user,
            never containing ``user_id`` itself
        """
        try:
            stmt = select(UserBlock.blocker_id, UserBlock.blocked_id).where(
                or_(UserBlock.blocker_id == user_id, UserBlock.blocked_id == user_id)
            )
            result = await db.execute(stmt)

            blocked: Set[UUID] = set()
            for blocker_id, blocked_id in result.all():
                blocked.add(blocker_id)
                blocked.add(blocked_id)
            blocked.discard(user_id)
            return blocked

        except SQLAlchemyError as e:
            logger.error(f"Error fetching blocks for user {user_id}: {e}")
            raise
