from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from docscore.core.config.scoring import DEFAULT_SCORING_CONFIG, ScoringConfig, SEOScoringConfig
from docscore.core.errors import InvalidInputError
from docscore.core.numbers import clamp_score
from docscore.features.keywords import KeywordSignal, analyze_keywords
from docscore.features.readability import ReadabilityMetrics, analyze_readability
from docscore.features.structure import ContentStructure, analyze_markup_structure, score_markup_structure
from docscore.parsing import DocumentOutline, parse_markup
from docscore.schemas.report import Recommendation, SEOScoreReport
from docscore.scoring import CriterionOutcome, RecommendationSet, WeightedScorer, build_criteria

logger = logging.getLogger(__name__)

_TITLE_POINTS_OPTIMAL = 50
_TITLE_POINTS_PRESENT = 25
_TECHNICAL_BASE = 70
_TECHNICAL_STEP = 15


@dataclass(frozen=True, slots=True)
class SEOMetrics:
    outline: DocumentOutline
    readability: ReadabilityMetrics
    structure: ContentStructure
    keyword_signals: list[KeywordSignal]
    title: str
    meta_description: str


def _require_text(field: str, value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidInputError(field, f"must be a string, got {type(value).__name__}")
    return value


def _require_keywords(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise InvalidInputError("keywords", "must be a list of strings")
    keywords = list(value)
    for item in keywords:
        if not isinstance(item, str):
            raise InvalidInputError("keywords", f"must only contain strings, got {type(item).__name__}")
    return keywords


def _length_points(length: int, low: int, high: int) -> int:
    if low <= length <= high:
        return _TITLE_POINTS_OPTIMAL
    if length > 0:
        return _TITLE_POINTS_PRESENT
    return 0


def _criterion_evaluators(config: SEOScoringConfig) -> dict[str, Callable[[SEOMetrics], CriterionOutcome]]:
    keywords_threshold = config.criteria["keywords"].pass_threshold

    def keywords(metrics: SEOMetrics) -> CriterionOutcome:
        signals = metrics.keyword_signals
        if not signals:
            return CriterionOutcome(score=0, details=["No target keywords supplied"], passed=False)
        total = len(signals)
        good = sum(1 for item in signals if item.distribution_tier == "good")
        in_title = sum(1 for item in signals if item.in_title)
        in_opening = sum(1 for item in signals if item.in_opening_paragraph)
        in_headings = sum(1 for item in signals if item.heading_occurrence_count > 0)
        score = (good / total) * 40 + (in_title / total) * 30 + (in_opening / total) * 20 + (in_headings / total) * 10
        return CriterionOutcome(
            score=score,
            details=[
                f"{good} of {total} keyword(s) within "
                f"{config.density_low_percent:g}-{config.density_high_percent:g}% density",
                f"{in_title} of {total} keyword(s) in the title",
                f"{in_opening} of {total} keyword(s) in the opening paragraph",
                f"{in_headings} of {total} keyword(s) in headings",
            ],
            passed=good == total and clamp_score(score) >= keywords_threshold,
        )

    def readability(metrics: SEOMetrics) -> CriterionOutcome:
        stats = metrics.readability
        if stats.word_count == 0:
            return CriterionOutcome(score=0, details=["No readable text"])
        sentence_score = max(
            0.0, 100 - (stats.average_words_per_sentence - config.target_words_per_sentence) * 3
        )
        return CriterionOutcome(
            score=stats.flesch_score * 0.7 + sentence_score * 0.3,
            details=[
                f"Flesch reading ease {stats.flesch_score:.1f} ({stats.flesch_level})",
                f"{stats.average_words_per_sentence:.1f} words per sentence on average",
                f"{stats.average_syllables_per_word:.2f} syllables per word on average",
            ],
        )

    def structure(metrics: SEOMetrics) -> CriterionOutcome:
        score, details = score_markup_structure(metrics.structure, config)
        return CriterionOutcome(score=score, details=details)

    def meta(metrics: SEOMetrics) -> CriterionOutcome:
        title_length = len(metrics.title)
        meta_length = len(metrics.meta_description)
        score = _length_points(title_length, config.title_min_chars, config.title_max_chars)
        score += _length_points(meta_length, config.meta_description_min_chars, config.meta_description_max_chars)
        return CriterionOutcome(
            score=score,
            details=[
                f"Title: {title_length} characters "
                f"(recommended {config.title_min_chars}-{config.title_max_chars})",
                f"Meta description: {meta_length} characters "
                f"(recommended {config.meta_description_min_chars}-{config.meta_description_max_chars})",
            ],
        )

    def technical(metrics: SEOMetrics) -> CriterionOutcome:
        words = metrics.readability.word_count
        links = metrics.structure
        details = [
            f"{words} words",
            f"{links.internal_links} internal and {links.external_links} external link(s)",
        ]
        if words == 0:
            return CriterionOutcome(score=0, details=details)
        score = _TECHNICAL_BASE
        if words >= config.short_content_words:
            score += _TECHNICAL_STEP
        if words >= config.comprehensive_content_words:
            score += _TECHNICAL_STEP
        return CriterionOutcome(score=score, details=details)

    return {
        "keywords": keywords,
        "readability": readability,
        "structure": structure,
        "meta": meta,
        "technical": technical,
    }


def _meta_recommendations(metrics: SEOMetrics, config: SEOScoringConfig, findings: RecommendationSet) -> None:
    title_length = len(metrics.title)
    if title_length == 0:
        findings.add(
            "critical",
            "Missing Title",
            f"Add a compelling title with your target keywords "
            f"({config.title_min_chars}-{config.title_max_chars} characters recommended).",
            "high",
        )
    elif title_length > config.title_max_chars:
        findings.add(
            "warning",
            "Title Too Long",
            f"Your title is {title_length} characters. "
            f"Keep it under {config.title_max_chars} for better search visibility.",
            "medium",
        )
    elif title_length < config.title_min_chars:
        findings.add(
            "suggestion",
            "Title Could Be Longer",
            f"Your title is {title_length} characters. "
            f"Consider {config.title_min_chars}-{config.title_max_chars} for optimal SEO.",
            "low",
        )

    meta_length = len(metrics.meta_description)
    meta_range = f"{config.meta_description_min_chars}-{config.meta_description_max_chars}"
    if meta_length == 0:
        findings.add(
            "warning",
            "Missing Meta Description",
            f"Add a meta description ({meta_range} characters) to improve click-through rates.",
            "high",
        )
    elif meta_length < config.meta_description_min_chars:
        findings.add(
            "suggestion",
            "Meta Description Too Short",
            f"Your meta description is {meta_length} characters. Aim for {meta_range}.",
            "medium",
        )
    elif meta_length > config.meta_description_max_chars:
        findings.add(
            "warning",
            "Meta Description Too Long",
            f"Your meta description is {meta_length} characters. "
            f"Keep it under {config.meta_description_max_chars}.",
            "medium",
        )


def _keyword_recommendations(metrics: SEOMetrics, config: SEOScoringConfig, findings: RecommendationSet) -> None:
    target = f"{config.density_low_percent:g}-{config.density_high_percent:g}%"
    for signal in metrics.keyword_signals:
        term = signal.term
        usage = f'"{term}" appears {signal.occurrence_count} times ({signal.density_percent:.2f}%).'
        if signal.distribution_tier == "low":
            findings.add("warning", f'Low Keyword Density: "{term}"', f"{usage} Aim for {target}.", "high")
        elif signal.distribution_tier == "high":
            findings.add(
                "warning",
                f'High Keyword Density: "{term}"',
                f"{usage} This may be keyword stuffing.",
                "high",
            )
        if not signal.in_title:
            findings.add(
                "suggestion",
                f'Keyword Not in Title: "{term}"',
                f'Consider adding "{term}" to your title for better SEO.',
                "medium",
            )
        if not signal.in_opening_paragraph:
            findings.add(
                "suggestion",
                f'Keyword Not in Opening: "{term}"',
                f'Include "{term}" in your first paragraph for better relevance signals.',
                "medium",
            )
        if signal.heading_occurrence_count == 0:
            findings.add(
                "suggestion",
                f'Keyword Not in Headings: "{term}"',
                f'Use "{term}" in at least one heading (H2 or H3).',
                "low",
            )


def _structure_recommendations(metrics: SEOMetrics, config: SEOScoringConfig, findings: RecommendationSet) -> None:
    structure = metrics.structure
    word_count = metrics.readability.word_count

    if structure.h1_count == 0:
        findings.add("critical", "Missing H1 Heading", "Add exactly one H1 heading as your main title.", "high")
    elif structure.h1_count > 1:
        findings.add(
            "warning",
            "Multiple H1 Headings",
            f"You have {structure.h1_count} H1 tags. Use only one H1 per page.",
            "high",
        )

    if structure.h2_count == 0 and word_count > config.subheading_min_words:
        findings.add(
            "warning",
            "No H2 Subheadings",
            "Break your content into sections with H2 headings for better readability.",
            "medium",
        )

    if structure.paragraph_count > 0 and structure.average_paragraph_length > config.long_paragraph_words:
        findings.add(
            "suggestion",
            "Long Paragraphs",
            f"Average paragraph length is {round(structure.average_paragraph_length)} words. Aim for 50-100 words.",
            "low",
        )

    if structure.image_count > 0 and structure.images_with_alt < structure.image_count:
        missing = structure.image_count - structure.images_with_alt
        findings.add(
            "warning",
            "Missing Image Alt Text",
            f"{missing} of {structure.image_count} images lack alt text. "
            "Add descriptive alt text for accessibility and SEO.",
            "high",
        )

    if word_count > config.list_min_words and structure.list_count == 0:
        findings.add(
            "suggestion",
            "Consider Adding Lists",
            "Use bullet points or numbered lists to improve scannability.",
            "low",
        )

    if word_count >= config.short_content_words and structure.link_count == 0:
        findings.add(
            "suggestion",
            "Add Links",
            "Link to related pages and trustworthy sources to strengthen relevance signals.",
            "low",
        )


def _readability_recommendations(metrics: SEOMetrics, config: SEOScoringConfig, findings: RecommendationSet) -> None:
    stats = metrics.readability
    flesch = stats.flesch_score
    if flesch < config.difficult_flesch:
        findings.add(
            "warning",
            "Difficult Readability",
            f"Flesch score: {round(flesch)} ({stats.flesch_level}). Simplify sentences for broader audience.",
            "medium",
        )
    elif config.good_flesch_min <= flesch <= config.good_flesch_max:
        findings.add(
            "success",
            "Good Readability",
            f"Flesch score: {round(flesch)} ({stats.flesch_level}). Your content is easy to read.",
            "low",
        )

    if stats.average_words_per_sentence > config.long_sentence_words:
        findings.add(
            "warning",
            "Long Sentences",
            f"Average {round(stats.average_words_per_sentence)} words per sentence. "
            "Aim for 15-20 for better readability.",
            "medium",
        )

    if stats.word_count < config.short_content_words:
        findings.add(
            "warning",
            "Short Content",
            f"Your content is {stats.word_count} words. "
            f"Aim for {config.short_content_words}+ for better SEO "
            f"(ideally {config.comprehensive_content_words}+).",
            "high",
        )
    elif stats.word_count >= config.comprehensive_content_words:
        findings.add(
            "success",
            "Comprehensive Content",
            f"{stats.word_count} words is excellent for SEO. Search engines favor in-depth content.",
            "low",
        )


def build_seo_recommendations(metrics: SEOMetrics, config: SEOScoringConfig) -> list[Recommendation]:
    findings = RecommendationSet()
    _meta_recommendations(metrics, config, findings)
    _keyword_recommendations(metrics, config, findings)
    _structure_recommendations(metrics, config, findings)
    _readability_recommendations(metrics, config, findings)
    return findings.ranked()


def collect_seo_metrics(
    content: str,
    keywords: list[str],
    title: str,
    meta_description: str,
    config: SEOScoringConfig,
) -> SEOMetrics:
    outline = parse_markup(content)
    return SEOMetrics(
        outline=outline,
        readability=analyze_readability(outline.text),
        structure=analyze_markup_structure(outline),
        keyword_signals=analyze_keywords(outline, keywords, title, config),
        title=title,
        meta_description=meta_description,
    )


def score_seo(
    content: str,
    keywords: Iterable[str] | None = None,
    *,
    title: str | None = None,
    meta_description: str | None = None,
    config: ScoringConfig | None = None,
) -> SEOScoreReport:
    """Score markup (or plain text) for search-engine quality."""
    if not isinstance(content, str):
        raise InvalidInputError("content", f"must be a string, got {type(content).__name__}")
    keyword_list = _require_keywords(keywords)
    title_text = _require_text("title", title)
    meta_text = _require_text("meta_description", meta_description)

    seo_config = (config or DEFAULT_SCORING_CONFIG).seo
    metrics = collect_seo_metrics(content, keyword_list, title_text, meta_text, seo_config)

    scorer = WeightedScorer(
        build_criteria(seo_config.criteria, _criterion_evaluators(seo_config)),
        seo_config.grades,
        seo_config.fallback_grade,
    )
    criteria, overall, grade = scorer.evaluate(metrics)
    recommendations = build_seo_recommendations(metrics, seo_config)

    logger.debug(
        "seo_score overall=%d grade=%s words=%d keywords=%d recommendations=%d",
        overall,
        grade,
        metrics.readability.word_count,
        len(metrics.keyword_signals),
        len(recommendations),
    )
    return SEOScoreReport(
        overall=overall,
        grade=grade,
        criteria=criteria,
        recommendations=recommendations,
        keyword_signals=metrics.keyword_signals,
        readability=metrics.readability,
        structure=metrics.structure,
    )
