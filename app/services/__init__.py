from .scoring_service import ScoringService, ScoringWeights
from .candidate_selector import CandidateSelector
from .recommendation_cache import RecommendationCache
from .recommendation_service import RecommendationService

__all__ = [
    "ScoringService",
    "ScoringWeights",
    "CandidateSelector",
    "RecommendationCache",
    "RecommendationService",
]
