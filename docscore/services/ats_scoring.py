from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from pydantic import ValidationError

from docscore.core.config.scoring import ATSScoringConfig, DEFAULT_SCORING_CONFIG, ScoringConfig
from docscore.core.errors import InvalidInputError
from docscore.features.cv_signals import CVSignals, analyze_cv_signals, score_length
from docscore.features.structure import SectionReport, analyze_cv_sections
from docscore.schemas.cv import CVRecord
from docscore.schemas.report import ATSScoreReport, CriterionResult, Recommendation
from docscore.scoring import CriterionOutcome, RecommendationSet, WeightedScorer, build_criteria

logger = logging.getLogger(__name__)

_GOOD_QUANTIFICATION_RATE = 0.3
_EXCELLENT_QUANTIFICATION_RATE = 0.6
_GOOD_STRONG_VERBS = 5
_EXCELLENT_STRONG_VERBS = 10
_FORMATTING_WARNING_BELOW = 80
_LENGTH_WARNING_BELOW = 70
_MISSING_JOB_KEYWORDS_SHOWN = 5


@dataclass(frozen=True, slots=True)
class ATSMetrics:
    record: CVRecord
    signals: CVSignals
    sections: SectionReport


def coerce_profile(profile: Any) -> CVRecord:
    """Accept a ``CVRecord`` or a mapping in either snake_case or camelCase."""
    if isinstance(profile, CVRecord):
        return profile
    if not isinstance(profile, Mapping):
        raise InvalidInputError("profile", f"must be a CV record or a mapping, got {type(profile).__name__}")
    try:
        return CVRecord.model_validate(dict(profile))
    except ValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ())) or "profile"
        raise InvalidInputError(f"profile.{location}", first.get("msg", "is invalid")) from exc


def _keyword_details(metrics: ATSMetrics, config: ATSScoringConfig) -> list[str]:
    match = metrics.signals.keyword_match
    found = len(match.industry_keywords)
    details: list[str] = []
    if found < 5:
        details.append("Add more industry-specific keywords to improve ATS visibility")
    elif found < 10:
        details.append(f"Good keyword usage ({found} found), consider adding more specific technologies")
    else:
        details.append(f"Excellent keyword coverage ({found} industry terms found)")

    if match.job_description_supplied:
        if match.missing_job_keywords:
            shown = ", ".join(match.missing_job_keywords[:_MISSING_JOB_KEYWORDS_SHOWN])
            details.append(f"Missing from job description: {shown}")
        else:
            details.append("Excellent match with job description keywords")
    else:
        details.append("Supply a job description for keyword matching analysis")

    if match.skill_count < config.min_skills:
        details.append("Add more skills (aim for 10-15 skills)")
    return details


def _quantification_details(metrics: ATSMetrics) -> list[str]:
    signal = metrics.signals.quantification
    percent = round(signal.rate * 100)
    details: list[str] = []
    if signal.quantified_bullets == 0:
        details.append("No quantified achievements found; add numbers, percentages, or metrics")
    elif signal.rate < _GOOD_QUANTIFICATION_RATE:
        details.append(f"Only {percent}% of achievements are quantified")
        details.append('Example: "Increased sales by 30%" instead of "Improved sales"')
    elif signal.rate < _EXCELLENT_QUANTIFICATION_RATE:
        details.append(f"{percent}% quantified; try to add metrics to more achievements")
    else:
        details.append(f"Excellent: {percent}% of achievements include metrics")
    details.append(
        f"Found {signal.quantified_bullets} quantified achievements out of {signal.total_bullets} total"
    )
    return details


def _action_verb_details(metrics: ATSMetrics, config: ATSScoringConfig) -> list[str]:
    signal = metrics.signals.action_verbs
    if not signal.has_text:
        return ["No experience descriptions to analyze"]

    details: list[str] = []
    if signal.weak_phrases:
        shown = '", "'.join(signal.weak_phrases[:2])
        more = "..." if len(signal.weak_phrases) > 2 else ""
        details.append(f'Found {len(signal.weak_phrases)} weak phrases: "{shown}"{more}')
        details.append("Replace with strong action verbs like: Led, Achieved, Optimized")

    strong = len(signal.strong_verbs)
    if strong < _GOOD_STRONG_VERBS:
        details.append("Use more strong action verbs to start your bullet points")
    elif strong < _EXCELLENT_STRONG_VERBS:
        details.append(f"Good use of action verbs ({strong} found)")
    else:
        details.append(f"Excellent action verb usage ({strong} strong verbs)")

    if signal.passive_count > config.passive_max_occurrences:
        details.append("Reduce passive voice; use active voice for stronger impact")
    return details


def _length_details(word_count: int, config: ATSScoringConfig) -> list[str]:
    target = f"{config.length_min_words}-{config.length_max_words}"
    if word_count < config.length_short_words:
        return [
            f"CV is too short ({word_count} words). Aim for {target} words",
            "Add more detailed descriptions of your achievements",
        ]
    if word_count < config.length_min_words:
        return [f"CV is somewhat short ({word_count} words). Add more details"]
    if word_count <= config.length_max_words:
        return [f"Excellent length ({word_count} words), optimal for ATS systems"]
    if word_count <= config.length_long_words:
        return [f"Good length ({word_count} words) but slightly long. Consider condensing"]
    return [
        f"CV is too long ({word_count} words). Aim for {target} words",
        "Focus on most recent and relevant experiences",
    ]


def _criterion_evaluators(config: ATSScoringConfig) -> dict[str, Callable[[ATSMetrics], CriterionOutcome]]:
    def keywords(metrics: ATSMetrics) -> CriterionOutcome:
        return CriterionOutcome(
            score=metrics.signals.keyword_match.score,
            details=_keyword_details(metrics, config),
        )

    def formatting(metrics: ATSMetrics) -> CriterionOutcome:
        signal = metrics.signals.formatting
        details = list(signal.issues) or ["Excellent formatting: all fields properly structured"]
        return CriterionOutcome(score=signal.score, details=details)

    def quantification(metrics: ATSMetrics) -> CriterionOutcome:
        return CriterionOutcome(
            score=metrics.signals.quantification.score,
            details=_quantification_details(metrics),
        )

    def action_verbs(metrics: ATSMetrics) -> CriterionOutcome:
        return CriterionOutcome(
            score=metrics.signals.action_verbs.score,
            details=_action_verb_details(metrics, config),
        )

    def length(metrics: ATSMetrics) -> CriterionOutcome:
        word_count = metrics.signals.word_count
        return CriterionOutcome(
            score=score_length(word_count, config),
            details=_length_details(word_count, config),
        )

    def structure(metrics: ATSMetrics) -> CriterionOutcome:
        return CriterionOutcome(score=metrics.sections.score, details=metrics.sections.details)

    return {
        "keywords": keywords,
        "formatting": formatting,
        "quantification": quantification,
        "action_verbs": action_verbs,
        "length": length,
        "structure": structure,
    }


def build_ats_recommendations(
    metrics: ATSMetrics,
    criteria: Mapping[str, CriterionResult],
) -> list[Recommendation]:
    findings = RecommendationSet()

    for finding in metrics.sections.findings:
        if finding.status == "missing":
            findings.add("critical", f"Missing Section: {finding.label}", finding.detail, "high")
        else:
            findings.add("warning", f"Strengthen Section: {finding.label}", finding.detail, "medium")

    match = metrics.signals.keyword_match
    if not criteria["keywords"].passed:
        findings.add(
            "critical",
            "Add Industry Keywords",
            "Add more industry-specific keywords and skills to improve ATS matching.",
            "high",
        )
    for term in match.missing_job_keywords:
        findings.add(
            "suggestion",
            f'Job Keyword Missing: "{term}"',
            f'The job description mentions "{term}". Include it where it reflects your experience.',
            "medium",
        )

    if not criteria["quantification"].passed:
        findings.add(
            "critical",
            "Quantify Achievements",
            "Quantify your achievements with numbers, percentages, and metrics.",
            "high",
        )

    if not criteria["action_verbs"].passed:
        findings.add(
            "critical",
            "Use Strong Action Verbs",
            "Start bullet points with strong action verbs such as Led, Achieved, Optimized.",
            "high",
        )
    for phrase in metrics.signals.action_verbs.weak_phrases:
        findings.add(
            "suggestion",
            f'Replace Weak Phrase: "{phrase}"',
            f'Rewrite "{phrase}" as a concrete action and outcome.',
            "medium",
        )

    if criteria["formatting"].score < _FORMATTING_WARNING_BELOW:
        findings.add(
            "warning",
            "Fix Formatting Issues",
            "Fix formatting issues with contact info, dates, or descriptions.",
            "medium",
        )
    if criteria["length"].score < _LENGTH_WARNING_BELOW:
        findings.add(
            "warning",
            "Adjust CV Length",
            "Adjust CV length to the optimal range (400-800 words).",
            "medium",
        )

    if not len(findings):
        findings.add(
            "success",
            "Well Optimized",
            "Your CV is well-optimized for ATS systems. Tailor keywords for each application.",
            "low",
        )
    return findings.ranked()


def score_ats(
    profile: CVRecord | Mapping[str, Any],
    job_description: str | None = None,
    *,
    config: ScoringConfig | None = None,
) -> ATSScoreReport:
    """Score a structured CV record for applicant-tracking-system friendliness.

    ``job_description`` is optional; when given, repeated terms and industry
    keywords from it are matched against the record.
    """
    record = coerce_profile(profile)
    if job_description is not None and not isinstance(job_description, str):
        raise InvalidInputError(
            "job_description", f"must be a string, got {type(job_description).__name__}"
        )

    ats_config = (config or DEFAULT_SCORING_CONFIG).ats
    metrics = ATSMetrics(
        record=record,
        signals=analyze_cv_signals(record, job_description, ats_config),
        sections=analyze_cv_sections(record, ats_config),
    )

    scorer = WeightedScorer(
        build_criteria(ats_config.criteria, _criterion_evaluators(ats_config)),
        ats_config.grades,
        ats_config.fallback_grade,
    )
    criteria, overall, grade = scorer.evaluate(metrics)
    recommendations = build_ats_recommendations(metrics, criteria)

    logger.debug(
        "ats_score overall=%d grade=%s words=%d job_keywords=%d recommendations=%d",
        overall,
        grade,
        metrics.signals.word_count,
        len(metrics.signals.keyword_match.job_keywords),
        len(recommendations),
    )
    return ATSScoreReport(
        overall=overall,
        grade=grade,
        criteria=criteria,
        recommendations=recommendations,
        sections=metrics.sections,
        signals=metrics.signals,
    )
