from __future__ import annotations

import re
from typing import Iterable, Literal

from docscore.core.config.scoring import SEOScoringConfig
from docscore.parsing import DocumentOutline, count_words
from docscore.schemas.base import CamelModel

DistributionTier = Literal["low", "good", "high"]


class KeywordSignal(CamelModel):
    term: str
    occurrence_count: int = 0
    density_percent: float = 0.0
    distribution_tier: DistributionTier = "low"
    in_title: bool = False
    in_opening_paragraph: bool = False
    heading_occurrence_count: int = 0


def term_pattern(term: str) -> re.Pattern[str]:
    """Whole-term, case-insensitive matcher; symbols such as ``c++`` or ``node.js`` are escaped."""
    return re.compile(r"(?<!\w)" + re.escape(term.strip()) + r"(?!\w)", re.IGNORECASE)


def count_term_occurrences(text: str, term: str) -> int:
    if not text or not term.strip():
        return 0
    return len(term_pattern(term).findall(text))


def contains_term(text: str, term: str) -> bool:
    if not text or not term.strip():
        return False
    return term_pattern(term).search(text) is not None


def normalize_keywords(keywords: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    output: list[str] = []
    for keyword in keywords:
        cleaned = re.sub(r"\s+", " ", keyword).strip()
        key = cleaned.lower()
        if not cleaned or key in seen:
            continue
        seen.add(key)
        output.append(cleaned)
    return output


def distribution_tier(density_percent: float, config: SEOScoringConfig) -> DistributionTier:
    if density_percent < config.density_low_percent:
        return "low"
    if density_percent > config.density_high_percent:
        return "high"
    return "good"


def analyze_keywords(
    outline: DocumentOutline,
    keywords: Iterable[str],
    title: str,
    config: SEOScoringConfig,
) -> list[KeywordSignal]:
    word_count = count_words(outline.text)
    headings = outline.heading_texts
    signals: list[KeywordSignal] = []
    for keyword in normalize_keywords(keywords):
        count = count_term_occurrences(outline.text, keyword)
        density = count / word_count * 100 if word_count else 0.0
        signals.append(
            KeywordSignal(
                term=keyword,
                occurrence_count=count,
                density_percent=density,
                distribution_tier=distribution_tier(density, config),
                in_title=contains_term(title, keyword),
                in_opening_paragraph=contains_term(outline.first_paragraph, keyword),
                heading_occurrence_count=sum(1 for heading in headings if contains_term(heading, keyword)),
            )
        )
    return signals
