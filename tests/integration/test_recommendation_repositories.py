"""
Integration tests for the repositories and candidate selection that feed
the recommendation engine, run against the SQLite test database.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.booking import BookingStatus
from app.models.companion import VerificationStatus
from app.models.interaction import InteractionEventType
from app.models.user import User
from app.repositories.booking_repository import BookingRepository
from app.repositories.companion_repository import CompanionRepository
from app.repositories.favorite_repository import FavoriteRepository
from app.repositories.interaction_repository import InteractionRepository
from app.repositories.user_block_repository import UserBlockRepository
from app.services.candidate_selector import CandidateSelector
from tests.factories import (
    BookingFactory,
    CompanionPhotoFactory,
    CompanionProfileFactory,
    CompanionServiceFactory,
    FavoriteFactory,
    InteractionFactory,
    UserBlockFactory,
    UserFactory,
    create_companion,
)


# ---------------------------------------------------------------------------
# Candidate selection
# ---------------------------------------------------------------------------
class TestCandidateSelector:
    async def test_only_eligible_profiles_are_selected(self, db_session: AsyncSession, test_user: User):
        eligible = await create_companion(db_session)
        await create_companion(db_session, is_active=False)
        await create_companion(db_session, is_hidden=True)
        await create_companion(db_session, verification_status=VerificationStatus.PENDING)
        await create_companion(db_session, verification_status=VerificationStatus.REJECTED)

        selected = await CandidateSelector().select_candidates(db_session, test_user.id)

        assert selected == [eligible.id]

    async def test_own_profile_is_excluded(self, db_session: AsyncSession, test_user: User):
        await CompanionProfileFactory.create_async(db_session, user_id=test_user.id)
        other = await create_companion(db_session)

        selected = await CandidateSelector().select_candidates(db_session, test_user.id)

        assert selected == [other.id]

    async def test_blocks_apply_in_both_directions(self, db_session: AsyncSession, test_user: User):
        blocked_by_user = await create_companion(db_session)
        blocked_user = await create_companion(db_session)
        visible = await create_companion(db_session)

        await UserBlockFactory.create_async(
            db_session, blocker_id=test_user.id, blocked_id=blocked_by_user.user_id
        )
        await UserBlockFactory.create_async(
            db_session, blocker_id=blocked_user.user_id, blocked_id=test_user.id
        )

        selected = await CandidateSelector().select_candidates(db_session, test_user.id)

        assert selected == [visible.id]

    async def test_limit_caps_candidate_count(self, db_session: AsyncSession, test_user: User):
        for _ in range(5):
            await create_companion(db_session)

        selected = await CandidateSelector(limit=3).select_candidates(db_session, test_user.id)

        assert len(selected) == 3

    async def test_zero_limit_is_not_replaced_by_default(self, db_session: AsyncSession, test_user: User):
        await create_companion(db_session)
        selector = CandidateSelector(limit=0)

        assert selector.limit == 0
        assert await selector.select_candidates(db_session, test_user.id) == []

    async def test_no_companions(self, db_session: AsyncSession, test_user: User):
        assert await CandidateSelector().select_candidates(db_session, test_user.id) == []


class TestUserBlockRepository:
    async def test_blocked_ids_never_include_self(self, db_session: AsyncSession, test_user: User):
        other = await UserFactory.create_async(db_session)
        await UserBlockFactory.create_async(db_session, blocker_id=test_user.id, blocked_id=other.id)

        blocked = await UserBlockRepository().get_blocked_user_ids(db_session, test_user.id)

        assert blocked == {other.id}


# ---------------------------------------------------------------------------
# Companion snapshots
# ---------------------------------------------------------------------------
class TestCompanionRepository:
    async def test_snapshot_fields(self, db_session: AsyncSession):
        profile = await create_companion(
            db_session,
            owner_verified=True,
            photos=3,
            services=["dinner", "event"],
            bio="x" * 60,
            rating_avg=Decimal("4.50"),
            rating_count=12,
            completed_bookings=30,
        )
        await CompanionServiceFactory.create_async(
            db_session, companion_id=profile.id, occasion_type="travel", is_enabled=False
        )

        [candidate] = await CompanionRepository().get_candidates(db_session, [profile.id])

        assert candidate.profile_id == profile.id
        assert candidate.owner_user_id == profile.user_id
        assert candidate.rating_avg == pytest.approx(4.5)
        assert candidate.completed_bookings == 30
        assert candidate.photo_count == 3
        assert candidate.verified_photo_count == 3
        assert candidate.is_verified_owner is True
        assert sorted(candidate.enabled_service_types) == ["dinner", "event"]
        assert candidate.display.review_count == 12
        assert candidate.display.display_name == "Companion"

    async def test_avatar_is_primary_photo(self, db_session: AsyncSession):
        profile = await create_companion(db_session)
        await CompanionPhotoFactory.create_async(
            db_session, companion_id=profile.id, position=0, url="https://cdn.example.com/second.jpg"
        )
        await CompanionPhotoFactory.create_async(
            db_session, companion_id=profile.id, position=1, is_primary=True,
            url="https://cdn.example.com/primary.jpg",
        )

        [candidate] = await CompanionRepository().get_candidates(db_session, [profile.id])

        assert candidate.display.avatar == "https://cdn.example.com/primary.jpg"
        assert [p.url for p in candidate.display.photos][0] == "https://cdn.example.com/primary.jpg"

    async def test_unverified_photos_are_counted_separately(self, db_session: AsyncSession):
        profile = await create_companion(db_session, photos=4, verified_photos=False)

        [candidate] = await CompanionRepository().get_candidates(db_session, [profile.id])

        assert candidate.photo_count == 4
        assert candidate.verified_photo_count == 0

    async def test_missing_display_name_is_anonymous(self, db_session: AsyncSession):
        profile = await create_companion(db_session, display_name=None)

        [candidate] = await CompanionRepository().get_candidates(db_session, [profile.id])

        assert candidate.display.display_name == "Anonymous"

    async def test_hidden_profiles_are_dropped(self, db_session: AsyncSession):
        profile = await create_companion(db_session, is_hidden=True)

        assert await CompanionRepository().get_candidates(db_session, [profile.id]) == []

    async def test_empty_ids(self, db_session: AsyncSession):
        repo = CompanionRepository()
        assert await repo.get_candidates(db_session, []) == []
        assert await repo.get_cold_start_candidates(db_session, []) == []

    async def test_cold_start_order(self, db_session: AsyncSession):
        low = await create_companion(db_session, rating_avg=Decimal("3.00"), completed_bookings=100)
        busy = await create_companion(db_session, rating_avg=Decimal("4.80"), completed_bookings=40)
        quiet = await create_companion(db_session, rating_avg=Decimal("4.80"), completed_bookings=5)

        candidates = await CompanionRepository().get_cold_start_candidates(
            db_session, [low.id, quiet.id, busy.id]
        )

        assert [c.profile_id for c in candidates] == [busy.id, quiet.id, low.id]


class TestResolveOwnerId:
    async def test_profile_id_resolves_to_owner(self, db_session: AsyncSession):
        profile = await create_companion(db_session)
        assert await CompanionRepository().resolve_owner_id(db_session, profile.id) == profile.user_id

    async def test_owner_id_resolves_to_itself(self, db_session: AsyncSession):
        profile = await create_companion(db_session)
        repo = CompanionRepository()

        owner_id = await repo.resolve_owner_id(db_session, profile.id)

        assert await repo.resolve_owner_id(db_session, owner_id) == owner_id

    async def test_unknown_reference(self, db_session: AsyncSession):
        assert await CompanionRepository().resolve_owner_id(db_session, uuid.uuid4()) is None

    async def test_user_without_profile_is_unknown(self, db_session: AsyncSession):
        user = await UserFactory.create_async(db_session)
        assert await CompanionRepository().resolve_owner_id(db_session, user.id) is None


# ---------------------------------------------------------------------------
# Signals
# ---------------------------------------------------------------------------
class TestInteractionRepository:
    async def test_count_for_user(self, db_session: AsyncSession, test_user: User):
        profile = await create_companion(db_session)
        for _ in range(3):
            await InteractionFactory.create_async(
                db_session, user_id=test_user.id, companion_id=profile.user_id
            )

        assert await InteractionRepository().count_for_user(db_session, test_user.id) == 3

    async def test_group_by_companion_and_type(self, db_session: AsyncSession, test_user: User):
        first = await create_companion(db_session)
        second = await create_companion(db_session)
        ignored = await create_companion(db_session)

        for _ in range(2):
            await InteractionFactory.create_async(
                db_session, user_id=test_user.id, companion_id=first.user_id,
                event_type=InteractionEventType.VIEW,
            )
        await InteractionFactory.create_async(
            db_session, user_id=test_user.id, companion_id=first.user_id,
            event_type=InteractionEventType.BOOKMARK,
        )
        await InteractionFactory.create_async(
            db_session, user_id=test_user.id, companion_id=second.user_id,
            event_type=InteractionEventType.MESSAGE_SENT,
        )
        await InteractionFactory.create_async(
            db_session, user_id=test_user.id, companion_id=ignored.user_id,
        )

        rows = await InteractionRepository().group_by_companion_and_type(
            db_session, test_user.id, [first.user_id, second.user_id]
        )

        counts = {(r.companion_id, r.event_type): r.count for r in rows}
        assert counts == {
            (first.user_id, InteractionEventType.VIEW): 2,
            (first.user_id, InteractionEventType.BOOKMARK): 1,
            (second.user_id, InteractionEventType.MESSAGE_SENT): 1,
        }

    async def test_group_ignores_other_users(self, db_session: AsyncSession, test_user: User):
        profile = await create_companion(db_session)
        other = await UserFactory.create_async(db_session)
        await InteractionFactory.create_async(db_session, user_id=other.id, companion_id=profile.user_id)

        rows = await InteractionRepository().group_by_companion_and_type(
            db_session, test_user.id, [profile.user_id]
        )

        assert rows == []


class TestFavoriteRepository:
    async def test_favorites_are_owner_ids(self, db_session: AsyncSession, test_user: User):
        profile = await create_companion(db_session)
        await FavoriteFactory.create_async(db_session, hirer_id=test_user.id, companion_id=profile.user_id)

        favorites = await FavoriteRepository().get_favorite_companion_ids(db_session, test_user.id)

        assert favorites == {profile.user_id}


class TestBookingRepository:
    async def test_only_completed_newest_first(self, db_session: AsyncSession, test_user: User):
        profile = await create_companion(db_session)
        now = datetime.now(timezone.utc)
        await BookingFactory.create_async(
            db_session, hirer_id=test_user.id, companion_id=profile.user_id,
            occasion_type="dinner", created_at=now - timedelta(days=2),
        )
        await BookingFactory.create_async(
            db_session, hirer_id=test_user.id, companion_id=profile.user_id,
            occasion_type="event", created_at=now - timedelta(days=1),
        )
        await BookingFactory.create_async(
            db_session, hirer_id=test_user.id, companion_id=profile.user_id,
            occasion_type="travel", status=BookingStatus.CANCELLED,
        )

        bookings = await BookingRepository().get_recent_completed(db_session, test_user.id)

        assert bookings == [(profile.user_id, "event"), (profile.user_id, "dinner")]

    async def test_limit(self, db_session: AsyncSession, test_user: User):
        profile = await create_companion(db_session)
        now = datetime.now(timezone.utc)
        for days_ago in range(25):
            await BookingFactory.create_async(
                db_session, hirer_id=test_user.id, companion_id=profile.user_id,
                created_at=now - timedelta(days=days_ago),
            )

        bookings = await BookingRepository().get_recent_completed(db_session, test_user.id, limit=20)

        assert len(bookings) == 20
