"""
Pydantic schemas for the recommendation engine.

Wire models serialize with camelCase keys (the mobile client's convention)
while accepting snake_case field names from Python callers.
"""

from enum import Enum
from typing import Dict, FrozenSet, List, NewType, Optional
import uuid

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from app.models.companion import VerificationStatus
from app.models.interaction import InteractionEventType

# A companion is addressable by two distinct ids: the profile id (what the
# client renders and what results are keyed by) and the owning user's id
# (what interactions, favorites and bookings reference).
ProfileId = NewType("ProfileId", uuid.UUID)
OwnerUserId = NewType("OwnerUserId", uuid.UUID)


class RecommendationStrategy(str, Enum):
    COLD_START = "cold_start"
    HYBRID = "hybrid"


class CamelModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


# ── Display snapshot ──────────────────────────────────────────────────────────

class CompanionPhotoSnapshot(CamelModel):
    id: uuid.UUID
    url: str
    is_primary: bool = False
    position: int = 0


class CompanionSnapshot(CamelModel):
    """Public card data embedded in every recommendation."""
    id: uuid.UUID
    user_id: uuid.UUID
    display_name: str
    age: Optional[int] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None
    height_cm: Optional[int] = None
    gender: Optional[str] = None
    languages: List[str] = Field(default_factory=list)
    hourly_rate: float = 0.0
    rating: float = 0.0
    review_count: int = 0
    is_verified: bool = False
    is_active: bool = True
    photos: List[CompanionPhotoSnapshot] = Field(default_factory=list)
    services: List[str] = Field(default_factory=list)


# ── Scoring inputs ────────────────────────────────────────────────────────────

class CandidateCompanion(BaseModel):
    """Snapshot of a companion profile taken for one scoring pass."""
    profile_id: ProfileId
    owner_user_id: OwnerUserId
    is_active: bool
    is_hidden: bool = False
    verification_status: VerificationStatus = VerificationStatus.VERIFIED
    rating_avg: float = 0.0
    rating_count: int = 0
    completed_bookings: int = 0
    total_bookings: int = 0
    bio: Optional[str] = None
    photo_count: int = 0
    verified_photo_count: int = 0
    languages: List[str] = Field(default_factory=list)
    hourly_rate: float = 0.0
    enabled_service_types: List[str] = Field(default_factory=list)
    is_verified_owner: bool = False
    display: CompanionSnapshot

    model_config = {"frozen": True}


class InteractionCount(BaseModel):
    """One row of the per-companion, per-event-type interaction aggregate."""
    companion_id: OwnerUserId
    event_type: InteractionEventType
    count: int

    model_config = {"frozen": True}


class UserSignals(BaseModel):
    """Everything known about the user that hybrid scoring depends on."""
    preferred_occasions: FrozenSet[str] = frozenset()
    favorite_owner_ids: FrozenSet[uuid.UUID] = frozenset()
    interaction_scores: Dict[uuid.UUID, float] = Field(default_factory=dict)

    model_config = {"frozen": True}


# ── Scoring output ────────────────────────────────────────────────────────────

class ScoreBreakdown(CamelModel):
    preference_match: float
    profile_quality: float
    availability: float
    popularity: float
    behavioral_affinity: float


class ScoredCompanion(CamelModel):
    companion_id: uuid.UUID  # profile id
    score: float
    reason: str
    breakdown: ScoreBreakdown
    companion: CompanionSnapshot


# ── API ───────────────────────────────────────────────────────────────────────

class RecommendationsResponse(CamelModel):
    companions: List[ScoredCompanion]
    has_more: bool
    total: int
    strategy: RecommendationStrategy


class TeaserResponse(CamelModel):
    companions: List[ScoredCompanion]


class TrackInteractionRequest(CamelModel):
    """Client action on a companion; ``companion_id`` may be a profile id or the owner's user id."""
    companion_id: uuid.UUID
    event_type: InteractionEventType
    dwell_time_ms: Optional[int] = Field(None, ge=0)
    session_id: Optional[str] = Field(None, max_length=100)

    model_config = {
        "json_schema_extra": {
            "example": {
                "companionId": "550e8400-e29b-41d4-a716-446655440000",
                "eventType": "PROFILE_OPEN",
                "dwellTimeMs": 4200,
                "sessionId": "feed-2025-11-08-abc123",
            }
        }
    }


class SuccessResponse(BaseModel):
    success: bool = True

