from __future__ import annotations

from typing import Literal

from pydantic import Field

from docscore.features.cv_signals import CVSignals
from docscore.features.keywords import KeywordSignal
from docscore.features.readability import ReadabilityMetrics
from docscore.features.structure import ContentStructure, SectionReport
from docscore.schemas.base import CamelModel

RecommendationCategory = Literal["critical", "warning", "suggestion", "success"]
Impact = Literal["high", "medium", "low"]


class CriterionResult(CamelModel):
    name: str
    weight: int = Field(ge=0, le=100)
    score: int = Field(ge=0, le=100)
    passed: bool
    details: list[str] = Field(default_factory=list)


class Recommendation(CamelModel):
    category: RecommendationCategory
    title: str
    message: str
    impact: Impact
    priority: int = 0


class ScoreReport(CamelModel):
    overall: int = Field(ge=0, le=100)
    grade: str
    criteria: dict[str, CriterionResult] = Field(default_factory=dict)
    recommendations: list[Recommendation] = Field(default_factory=list)

    def top_recommendations(self, limit: int) -> list[Recommendation]:
        return self.recommendations[: max(0, limit)]


class SEOScoreReport(ScoreReport):
    keyword_signals: list[KeywordSignal] = Field(default_factory=list)
    readability: ReadabilityMetrics
    structure: ContentStructure


class ATSScoreReport(ScoreReport):
    sections: SectionReport
    signals: CVSignals
