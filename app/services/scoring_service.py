from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel

from app.models.interaction import InteractionEventType
from app.schemas.recommendation import (
    CandidateCompanion,
    InteractionCount,
    ScoreBreakdown,
    ScoredCompanion,
    UserSignals,
)

# Signed weight of each client action toward a companion
DEFAULT_EVENT_WEIGHTS: Mapping[InteractionEventType, float] = MappingProxyType({
    InteractionEventType.VIEW: 0.1,                # Profile appeared in feed
    InteractionEventType.PROFILE_OPEN: 0.3,        # Tapped through to details
    InteractionEventType.BOOKMARK: 0.7,            # Saved for later
    InteractionEventType.UNBOOKMARK: -0.3,         # Removed from saved
    InteractionEventType.MESSAGE_SENT: 0.8,        # Initiated contact
    InteractionEventType.BOOKING_STARTED: 0.9,     # Entered booking flow
    InteractionEventType.BOOKING_COMPLETED: 1.0,   # Strongest positive signal
    InteractionEventType.BOOKING_CANCELLED: -0.5,  # Negative signal
})

# Events that make a cached ranking stale immediately
HIGH_SIGNAL_EVENTS: FrozenSet[InteractionEventType] = frozenset({
    InteractionEventType.BOOKMARK,
    InteractionEventType.UNBOOKMARK,
    InteractionEventType.BOOKING_COMPLETED,
    InteractionEventType.BOOKING_CANCELLED,
})

REASON_PREFERENCE = "Matches your preferences"
REASON_QUALITY = "Highly rated profile"
REASON_POPULAR = "Popular choice"
REASON_BEHAVIORAL = "Based on your activity"
REASON_COLD_START = "Popular in your area"


class ScoringWeights(BaseModel):
    """Weights of the five hybrid factors. They sum to 1.0 by default."""
    preference_match: float = 0.35
    profile_quality: float = 0.20
    availability: float = 0.15
    popularity: float = 0.15
    behavioral_affinity: float = 0.15

    model_config = {"frozen": True}


class ScoringService:
    """Multi-factor companion scoring as a pure function of pre-fetched signals.

    Hybrid score = 0.35 * preference_match + 0.20 * profile_quality +
                   0.15 * availability + 0.15 * popularity +
                   0.15 * behavioral_affinity

    The weight tables are injected so alternate configurations can be
    scored side by side; nothing here touches the database.
    """

    def __init__(
        self,
        weights: Optional[ScoringWeights] = None,
        event_weights: Optional[Mapping[InteractionEventType, float]] = None,
    ):
        self.weights = weights or ScoringWeights()
        self.event_weights = MappingProxyType(dict(DEFAULT_EVENT_WEIGHTS if event_weights is None else event_weights))

    def get_event_weight(self, event_type: Union[InteractionEventType, str]) -> float:
        """Signed weight of an event type; 0 for anything unknown."""
        try:
            return self.event_weights.get(InteractionEventType(event_type), 0.0)
        except ValueError:
            return 0.0

    @staticmethod
    def is_high_signal(event_type: Union[InteractionEventType, str]) -> bool:
        """Whether recording this event should invalidate cached recommendations."""
        try:
            return InteractionEventType(event_type) in HIGH_SIGNAL_EVENTS
        except ValueError:
            return False

    def aggregate_interaction_scores(self, rows: Iterable[InteractionCount]) -> Dict:
        """Sum count * weight per companion owner over grouped interaction rows."""
        scores: Dict = {}
        for row in rows:
            scores[row.companion_id] = scores.get(row.companion_id, 0.0) + row.count * self.get_event_weight(row.event_type)
        return scores

    @staticmethod
    def extract_preferred_occasions(occasion_types: Iterable[Optional[str]]) -> FrozenSet[str]:
        """Distinct non-empty occasion types from booking history."""
        return frozenset(o for o in occasion_types if o)

    @staticmethod
    def calculate_preference_match(preferred_occasions: FrozenSet[str], offered_occasions: Iterable[str]) -> float:
        """Fraction of the user's preferred occasions the companion offers (0-1)"""
        if not preferred_occasions:
            return 0.5  # Neutral for users without completed bookings

        offered = set(offered_occasions)
        return len(preferred_occasions & offered) / len(preferred_occasions)

    @staticmethod
    def calculate_profile_quality(verified_photo_count: int, owner_verified: bool, bio: Optional[str]) -> float:
        """Profile completeness score (0-1)"""
        return (
            (0.4 if verified_photo_count >= 3 else 0.0) +
            (0.4 if owner_verified else 0.0) +
            (0.2 if bio and len(bio) > 50 else 0.0)
        )

    @staticmethod
    def calculate_availability(is_active: bool) -> float:
        return 1.0 if is_active else 0.3

    @staticmethod
    def calculate_popularity(rating_avg: float, completed_bookings: int) -> float:
        """Normalized rating blended with booking volume (0-1)"""
        rating_score = rating_avg / 5
        booking_score = min(completed_bookings / 50, 1.0)
        return rating_score * 0.7 + booking_score * 0.3

    @staticmethod
    def calculate_behavioral_affinity(interaction_score: float, is_favorite: bool) -> float:
        """Past engagement with this companion, capped at 1.0"""
        return min((interaction_score / 5) * 0.6 + (0.4 if is_favorite else 0.0), 1.0)

    @staticmethod
    def select_reason(breakdown: ScoreBreakdown) -> str:
        """Label of the strongest factor; earlier entries win ties."""
        reasons = [
            (REASON_PREFERENCE, breakdown.preference_match),
            (REASON_QUALITY, breakdown.profile_quality),
            (REASON_POPULAR, breakdown.popularity),
            (REASON_BEHAVIORAL, breakdown.behavioral_affinity),
        ]
        return max(reasons, key=lambda r: r[1])[0]

    def score_candidate(
        self,
        signals: UserSignals,
        candidate: CandidateCompanion,
    ) -> ScoredCompanion:
        """Hybrid score for a single candidate."""
        breakdown = ScoreBreakdown(
            preference_match=self.calculate_preference_match(
                signals.preferred_occasions, candidate.enabled_service_types
            ),
            profile_quality=self.calculate_profile_quality(
                candidate.verified_photo_count, candidate.is_verified_owner, candidate.bio
            ),
            availability=self.calculate_availability(candidate.is_active),
            popularity=self.calculate_popularity(candidate.rating_avg, candidate.completed_bookings),
            behavioral_affinity=self.calculate_behavioral_affinity(
                signals.interaction_scores.get(candidate.owner_user_id, 0.0),
                candidate.owner_user_id in signals.favorite_owner_ids,
            ),
        )

        w = self.weights
        score = (
            w.preference_match * breakdown.preference_match +
            w.profile_quality * breakdown.profile_quality +
            w.availability * breakdown.availability +
            w.popularity * breakdown.popularity +
            w.behavioral_affinity * breakdown.behavioral_affinity
        )

        return ScoredCompanion(
            companion_id=candidate.profile_id,
            score=score,
            reason=self.select_reason(breakdown),
            breakdown=breakdown,
            companion=candidate.display,
        )

    def score_candidates(
        self,
        signals: UserSignals,
        candidates: Sequence[CandidateCompanion],
    ) -> List[ScoredCompanion]:
        """
        Hybrid-score every candidate and rank them.

        Args:
            signals: Preferences, favorites and interaction scores of the user
            candidates: Snapshots of the companions to score

        Returns:
            Scored companions sorted by score, highest first
        """
        scored = [
            self.score_candidate(signals, candidate)
            for candidate in candidates
        ]
        return sorted(scored, key=lambda s: s.score, reverse=True)

    def score_cold_start(self, candidates: Sequence[CandidateCompanion]) -> List[ScoredCompanion]:
        """
        Popularity and profile-quality scoring for users without history.

        Output keeps the input order (the popularity sort of the query);
        the reported score is informational and may disagree with it.
        """
        scored = []
        for candidate in candidates:
            rating_score = candidate.rating_avg / 5
            quality = (
                (0.3 if candidate.photo_count >= 3 else 0.0) +
                (0.3 if candidate.is_verified_owner else 0.0) +
                (0.2 if candidate.bio and len(candidate.bio) > 50 else 0.0) +
                rating_score * 0.2
            )
            scored.append(ScoredCompanion(
                companion_id=candidate.profile_id,
                score=quality,
                reason=REASON_COLD_START,
                breakdown=ScoreBreakdown(
                    preference_match=0.5,
                    profile_quality=quality,
                    availability=self.calculate_availability(candidate.is_active),
                    popularity=rating_score,
                    behavioral_affinity=0.0,
                ),
                companion=candidate.display,
            ))
        return scored


# Global instance
scoring_service = ScoringService()
