from .recommendation import (
    ProfileId,
    OwnerUserId,
    RecommendationStrategy,
    CompanionSnapshot,
    CandidateCompanion,
    InteractionCount,
    UserSignals,
    ScoreBreakdown,
    ScoredCompanion,
    RecommendationsResponse,
    TeaserResponse,
    TrackInteractionRequest,
    SuccessResponse,
)

__all__ = [
    "ProfileId", "OwnerUserId", "RecommendationStrategy",
    "CompanionSnapshot", "CandidateCompanion", "InteractionCount", "UserSignals",
    "ScoreBreakdown", "ScoredCompanion",
    "RecommendationsResponse", "TeaserResponse", "TrackInteractionRequest", "SuccessResponse",
]
