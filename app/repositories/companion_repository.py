"""
Companion profile repository.

Provides candidate selection queries, scoring snapshots and resolution
between the two companion identifiers (profile id and owner user id).
"""

from __future__ import annotations
from typing import Collection, List, Optional
from uuid import UUID
from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.models.companion import CompanionProfile, VerificationStatus
from app.schemas.recommendation import (
    CandidateCompanion,
    CompanionPhotoSnapshot,
    CompanionSnapshot,
    OwnerUserId,
    ProfileId,
)
from app.utils.dates import calculate_age
from .base import BaseRepository

logger = logging.getLogger(__name__)


class CompanionRepository(BaseRepository[CompanionProfile]):
    """
    Repository for CompanionProfile with recommendation-specific queries.

    Provides methods for:
    - Listing eligible candidate profile ids
    - Loading scoring snapshots (hybrid and cold-start orderings)
    - Resolving a companion reference to its owner user id
    """

    def __init__(self):
        super().__init__(CompanionProfile)

    async def find_candidate_ids(
        self,
        db: AsyncSession,
        exclude_user_ids: Collection[UUID],
        limit: int = 100
    ) -> List[ProfileId]:
        """
        List profile ids of companions eligible for recommendation.

        Eligible means active, not hidden, verified, and not owned by any
        of ``exclude_user_ids``. No ranking is applied here.

        Args:
            db: Active database session
            exclude_user_ids: Owner user ids to leave out (blocked users, the requester)
            limit: Maximum number of ids to return

        Returns:
            List of profile ids
        """
        try:
            stmt = select(CompanionProfile.id).where(
                CompanionProfile.is_active == True,
                CompanionProfile.is_hidden == False,
                CompanionProfile.verification_status == VerificationStatus.VERIFIED,
            )
            if exclude_user_ids:
                stmt = stmt.where(CompanionProfile.user_id.notin_(list(exclude_user_ids)))
            stmt = stmt.limit(limit)

            result = await db.execute(stmt)
            return [ProfileId(profile_id) for profile_id in result.scalars().all()]

        except SQLAlchemyError as e:
            logger.error(f"Error selecting candidate companions: {e}")
            raise

    async def get_candidates(
        self,
        db: AsyncSession,
        profile_ids: Collection[UUID]
    ) -> List[CandidateCompanion]:
        """
        Load scoring snapshots for hybrid scoring.

        Profiles that went inactive or hidden since candidate selection are
        dropped without error.

        Args:
            db: Active database session
            profile_ids: Candidate profile ids

        Returns:
            Snapshots in no particular order
        """
        if not profile_ids:
            return []

        try:
            stmt = (
                self._snapshot_query()
                .where(
                    CompanionProfile.id.in_(list(profile_ids)),
                    CompanionProfile.is_active == True,
                    CompanionProfile.is_hidden == False,
                )
            )
            result = await db.execute(stmt)
            return [self.to_candidate(profile) for profile in result.scalars().all()]

        except SQLAlchemyError as e:
            logger.error(f"Error loading companion snapshots: {e}")
            raise

    async def get_cold_start_candidates(
        self,
        db: AsyncSession,
        profile_ids: Collection[UUID]
    ) -> List[CandidateCompanion]:
        """
        Load scoring snapshots ordered by popularity.

        Args:
            db: Active database session
            profile_ids: Candidate profile ids

        Returns:
            Snapshots sorted by rating desc, then completed bookings desc
        """
        if not profile_ids:
            return []

        try:
            stmt = (
                self._snapshot_query()
                .where(CompanionProfile.id.in_(list(profile_ids)))
                .order_by(desc(CompanionProfile.rating_avg), desc(CompanionProfile.completed_bookings))
            )
            result = await db.execute(stmt)
            return [self.to_candidate(profile) for profile in result.scalars().all()]

        except SQLAlchemyError as e:
            logger.error(f"Error loading cold-start companion snapshots: {e}")
            raise

    async def resolve_owner_id(
        self,
        db: AsyncSession,
        companion_ref: UUID
    ) -> Optional[OwnerUserId]:
        """
        Map a companion reference to the owning user's id.

        The reference is tried as a profile id first, then as an owner user
        id. Resolving an already-resolved owner id returns it unchanged.

        Args:
            db: Active database session
            companion_ref: Profile id or owner user id

        Returns:
            Owner user id, or None if no companion profile matches either way
        """
        try:
            result = await db.execute(
                select(CompanionProfile.user_id).where(CompanionProfile.id == companion_ref)
            )
            owner_id = result.scalar_one_or_none()
            if owner_id is not None:
                return OwnerUserId(owner_id)

            result = await db.execute(
                select(CompanionProfile.user_id).where(CompanionProfile.user_id == companion_ref)
            )
            owner_id = result.scalar_one_or_none()
            return OwnerUserId(owner_id) if owner_id is not None else None

        except SQLAlchemyError as e:
            logger.error(f"Error resolving companion reference {companion_ref}: {e}")
            raise

    @staticmethod
    def _snapshot_query():
        return select(CompanionProfile).options(
            selectinload(CompanionProfile.user),
            selectinload(CompanionProfile.photos),
            selectinload(CompanionProfile.services),
        )

    @staticmethod
    def to_candidate(profile: CompanionProfile) -> CandidateCompanion:
        """Build a scoring snapshot from a profile with user, photos and services loaded."""
        owner = profile.user
        photos = sorted(profile.photos, key=lambda p: (not p.is_primary, p.position))
        enabled_services = [s.occasion_type for s in profile.services if s.is_enabled]
        rating_avg = float(profile.rating_avg or 0)
        hourly_rate = float(profile.hourly_rate or 0)
        languages = list(profile.languages or [])
        is_verified_owner = bool(owner.is_verified) if owner is not None else False

        display = CompanionSnapshot(
            id=profile.id,
            user_id=profile.user_id,
            display_name=profile.display_name or "Anonymous",
            age=calculate_age(owner.date_of_birth) if owner is not None else None,
            bio=profile.bio,
            avatar=photos[0].url if photos else (owner.avatar_url if owner is not None else None),
            height_cm=profile.height_cm,
            gender=owner.gender if owner is not None else None,
            languages=languages,
            hourly_rate=hourly_rate,
            rating=rating_avg,
            review_count=profile.rating_count or 0,
            is_verified=is_verified_owner,
            is_active=bool(profile.is_active),
            photos=[
                CompanionPhotoSnapshot(id=p.id, url=p.url, is_primary=bool(p.is_primary), position=p.position or 0)
                for p in photos
            ],
            services=enabled_services,
        )

        return CandidateCompanion(
            profile_id=ProfileId(profile.id),
            owner_user_id=OwnerUserId(profile.user_id),
            is_active=bool(profile.is_active),
            is_hidden=bool(profile.is_hidden),
            verification_status=profile.verification_status,
            rating_avg=rating_avg,
            rating_count=profile.rating_count or 0,
            completed_bookings=profile.completed_bookings or 0,
            total_bookings=profile.total_bookings or 0,
            bio=profile.bio,
            photo_count=len(photos),
            verified_photo_count=sum(1 for p in photos if p.is_verified),
            languages=languages,
            hourly_rate=hourly_rate,
            enabled_service_types=enabled_services,
            is_verified_owner=is_verified_owner,
            display=display,
        )
