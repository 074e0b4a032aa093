from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence

from docscore.core.config.scoring import CriterionSettings, GradeBand
from docscore.core.numbers import clamp_score
from docscore.schemas.report import CriterionResult

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CriterionOutcome:
    score: float
    details: list[str] = field(default_factory=list)
    passed: bool | None = None


@dataclass(frozen=True, slots=True)
class Criterion:
    name: str
    weight: int
    pass_threshold: int
    evaluate: Callable[[Any], CriterionOutcome]

    def run(self, metrics: Any) -> CriterionResult:
        outcome = self.evaluate(metrics)
        score = clamp_score(outcome.score)
        passed = outcome.passed if outcome.passed is not None else score >= self.pass_threshold
        return CriterionResult(
            name=self.name,
            weight=self.weight,
            score=score,
            passed=passed,
            details=list(outcome.details),
        )


def build_criteria(
    table: Mapping[str, CriterionSettings],
    evaluators: Mapping[str, Callable[[Any], CriterionOutcome]],
) -> list[Criterion]:
    """Pair each configured criterion with its evaluator, keeping the evaluator order."""
    return [
        Criterion(
            name=name,
            weight=table[name].weight,
            pass_threshold=table[name].pass_threshold,
            evaluate=evaluate,
        )
        for name, evaluate in evaluators.items()
    ]


class WeightedScorer:
    def __init__(self, criteria: Sequence[Criterion], grades: Sequence[GradeBand], fallback_grade: str) -> None:
        total = sum(criterion.weight for criterion in criteria)
        if total != 100:
            raise ValueError(f"criterion weights must sum to 100, got {total}")
        self._criteria = tuple(criteria)
        self._grades = tuple(sorted(grades, key=lambda band: band.min_score, reverse=True))
        self._fallback_grade = fallback_grade

    @property
    def criteria(self) -> tuple[Criterion, ...]:
        return self._criteria

    def grade(self, overall: int) -> str:
        for band in self._grades:
            if overall >= band.min_score:
                return band.label
        return self._fallback_grade

    def evaluate(self, metrics: Any) -> tuple[dict[str, CriterionResult], int, str]:
        results = {criterion.name: criterion.run(metrics) for criterion in self._criteria}
        weighted_total = sum(result.score * result.weight for result in results.values())
        overall = max(0, min(100, (weighted_total + 50) // 100))
        grade = self.grade(overall)
        logger.debug(
            "weighted_score overall=%d grade=%s criteria=%s",
            overall,
            grade,
            {name: result.score for name, result in results.items()},
        )
        return results, overall, grade
