"""
Async factories for the ORM models the recommendation engine reads.

Usage example (inside an async test with db_session fixture):

    owner = await UserFactory.create_async(db_session, is_verified=True)
    profile = await CompanionProfileFactory.create_async(db_session, user_id=owner.id)
    await CompanionServiceFactory.create_async(db_session, companion_id=profile.id, occasion_type="dinner")

or, for a complete verified companion in one call:

    profile = await create_companion(db_session, rating_avg=4.5, services=["dinner"])
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Iterable

from app.models.booking import Booking, BookingStatus
from app.models.companion import (
    CompanionPhoto,
    CompanionProfile,
    CompanionService,
    VerificationStatus,
)
from app.models.favorite import FavoriteCompanion
from app.models.interaction import InteractionEventType, UserInteraction
from app.models.user import User
from app.models.user_block import UserBlock


# ---------------------------------------------------------------------------
# Base async factory helper
# ---------------------------------------------------------------------------
class _AsyncFactory:
    """Minimal async factory helper.

    Subclasses declare ``_model`` (the ORM class) and override ``_defaults()``
    to supply default column values.  Call ``create_async(session, **kwargs)``
    to insert a row and return the flushed instance.
    """

    _model: type

    @classmethod
    def _defaults(cls) -> dict[str, Any]:
        return {}

    @classmethod
    async def create_async(cls, session, **kwargs) -> Any:
        """Create and flush an ORM instance within the given session."""
        data = {**cls._defaults(), **kwargs}
        instance = cls._model(**data)
        session.add(instance)
        await session.flush()
        return instance

    @classmethod
    def build(cls, **kwargs) -> Any:
        """Build an unsaved ORM instance (no DB interaction)."""
        data = {**cls._defaults(), **kwargs}
        return cls._model(**data)


class UserFactory(_AsyncFactory):
    _model = User

    @classmethod
    def _defaults(cls) -> dict[str, Any]:
        uid = uuid.uuid4()
        return {
            "id": uid,
            "email": f"user-{uid.hex[:8]}@example.com",
            "full_name": "Test User",
            "is_verified": False,
        }


class CompanionProfileFactory(_AsyncFactory):
    _model = CompanionProfile

    @classmethod
    def _defaults(cls) -> dict[str, Any]:
        return {
            "id": uuid.uuid4(),
            "display_name": "Companion",
            "bio": None,
            "languages": ["vi", "en"],
            "hourly_rate": Decimal("500000"),
            "rating_avg": Decimal("0"),
            "rating_count": 0,
            "completed_bookings": 0,
            "total_bookings": 0,
            "is_active": True,
            "is_hidden": False,
            "verification_status": VerificationStatus.VERIFIED,
        }


class CompanionPhotoFactory(_AsyncFactory):
    _model = CompanionPhoto

    @classmethod
    def _defaults(cls) -> dict[str, Any]:
        pid = uuid.uuid4()
        return {
            "id": pid,
            "url": f"https://cdn.example.com/photos/{pid.hex}.jpg",
            "is_primary": False,
            "position": 0,
            "is_verified": True,
        }


class CompanionServiceFactory(_AsyncFactory):
    _model = CompanionService

    @classmethod
    def _defaults(cls) -> dict[str, Any]:
        return {"id": uuid.uuid4(), "occasion_type": "dinner", "is_enabled": True}


class BookingFactory(_AsyncFactory):
    _model = Booking

    @classmethod
    def _defaults(cls) -> dict[str, Any]:
        return {
            "id": uuid.uuid4(),
            "occasion_type": "dinner",
            "status": BookingStatus.COMPLETED,
            "created_at": datetime.now(timezone.utc),
        }


class FavoriteFactory(_AsyncFactory):
    _model = FavoriteCompanion

    @classmethod
    def _defaults(cls) -> dict[str, Any]:
        return {"id": uuid.uuid4()}


class UserBlockFactory(_AsyncFactory):
    _model = UserBlock

    @classmethod
    def _defaults(cls) -> dict[str, Any]:
        return {"id": uuid.uuid4()}


class InteractionFactory(_AsyncFactory):
    _model = UserInteraction

    @classmethod
    def _defaults(cls) -> dict[str, Any]:
        return {
            "id": uuid.uuid4(),
            "event_type": InteractionEventType.VIEW,
            "event_value": 0.1,
        }


async def create_companion(
    session,
    *,
    owner_verified: bool = False,
    photos: int = 0,
    verified_photos: bool = True,
    services: Iterable[str] = (),
    **profile_fields: Any,
) -> CompanionProfile:
    """Create an owner account plus a companion profile with photos and services."""
    owner = await UserFactory.create_async(session, is_verified=owner_verified)
    profile = await CompanionProfileFactory.create_async(session, user_id=owner.id, **profile_fields)
    for position in range(photos):
        await CompanionPhotoFactory.create_async(
            session,
            companion_id=profile.id,
            position=position,
            is_primary=position == 0,
            is_verified=verified_photos,
        )
    for occasion_type in services:
        await CompanionServiceFactory.create_async(session, companion_id=profile.id, occasion_type=occasion_type)
    return profile
