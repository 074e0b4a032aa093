"""Rule-based quality scoring for web content (SEO) and CV records (ATS)."""

from docscore.core.config.scoring import DEFAULT_SCORING_CONFIG, ScoringConfig, load_scoring_config
from docscore.core.errors import InvalidInputError
from docscore.schemas.cv import CVRecord
from docscore.schemas.report import ATSScoreReport, CriterionResult, Recommendation, ScoreReport, SEOScoreReport
from docscore.services import score_ats, score_seo

__all__ = [
    "ATSScoreReport",
    "CVRecord",
    "CriterionResult",
    "DEFAULT_SCORING_CONFIG",
    "InvalidInputError",
    "Recommendation",
    "ScoreReport",
    "SEOScoreReport",
    "ScoringConfig",
    "load_scoring_config",
    "score_ats",
    "score_seo",
]
