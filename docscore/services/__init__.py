from .ats_scoring import build_ats_recommendations, coerce_profile, score_ats
from .seo_scoring import build_seo_recommendations, collect_seo_metrics, score_seo

__all__ = [
    "build_ats_recommendations",
    "coerce_profile",
    "score_ats",
    "build_seo_recommendations",
    "collect_seo_metrics",
    "score_seo",
]
