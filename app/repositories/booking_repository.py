from __future__ import annotations
from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.models.booking import Booking, BookingStatus
from .base import BaseRepository

logger = logging.getLogger(__name__)


class BookingRepository(BaseRepository[Booking]):

    def __init__(self):
        super().__init__(Booking)

    async def get_recent_completed(
        self,
        db: AsyncSession,
        hirer_id: UUID,
        limit: int = 20
    ) -> List[Tuple[UUID, Optional[str]]]:
        """
        Get the hirer's most recent completed bookings.

        Args:
            db: Active database session
            hirer_id: UUID of the hiring user
            limit: Maximum number of bookings (newest first)

        Returns:
            List of (companion owner user id, occasion type) pairs
        """
        try:
            stmt = (
                select(Booking.companion_id, Booking.occasion_type)
                .where(
                    Booking.hirer_id == hirer_id,
                    Booking.status == BookingStatus.COMPLETED
                )
                .order_by(desc(Booking.created_at))
                .limit(limit)
            )
            result = await db.execute(stmt)
            return [(companion_id, occasion_type) for companion_id, occasion_type in result.all()]
        except SQLAlchemyError as e:
            logger.error(f"Error fetching completed bookings for user {hirer_id}: {e}")
            raise
