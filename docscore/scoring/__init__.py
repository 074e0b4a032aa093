from .aggregator import Criterion, CriterionOutcome, WeightedScorer, build_criteria
from .recommendations import RecommendationSet, recommendation_priority

__all__ = [
    "Criterion",
    "CriterionOutcome",
    "WeightedScorer",
    "build_criteria",
    "RecommendationSet",
    "recommendation_priority",
]
