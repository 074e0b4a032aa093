from __future__ import annotations

import logging
import re
from collections import Counter

from pydantic import Field

from docscore.core.config.scoring import ATSScoringConfig
from docscore.core.numbers import clamp_score
from docscore.parsing import count_words, strip_markup
from docscore.schemas.base import CamelModel
from docscore.schemas.cv import CVExperience, CVRecord

from .keywords import contains_term, count_term_occurrences

logger = logging.getLogger(__name__)

_BULLET_SPLIT_RE = re.compile(r"<li\b[^>]*>|</li>|</p>|<br\s*/?>|\n|•", re.IGNORECASE)
_NON_WORD_RE = re.compile(r"[^\w\s]")
_DATE_FORMATS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("YYYY", re.compile(r"^\d{4}$")),
    ("MM/YYYY", re.compile(r"^\d{2}/\d{4}$")),
    ("Month YYYY", re.compile(r"^[A-Za-z]+\s+\d{4}$")),
)


class QuantificationSignal(CamelModel):
    total_bullets: int = 0
    quantified_bullets: int = 0
    score: int = Field(default=0, ge=0, le=100)

    @property
    def rate(self) -> float:
        return self.quantified_bullets / self.total_bullets if self.total_bullets else 0.0


class ActionVerbSignal(CamelModel):
    has_text: bool = False
    strong_verbs: list[str] = Field(default_factory=list)
    weak_phrases: list[str] = Field(default_factory=list)
    passive_count: int = 0
    score: int = Field(default=0, ge=0, le=100)


class KeywordMatchSignal(CamelModel):
    industry_keywords: list[str] = Field(default_factory=list)
    job_description_supplied: bool = False
    job_keywords: list[str] = Field(default_factory=list)
    matched_job_keywords: list[str] = Field(default_factory=list)
    missing_job_keywords: list[str] = Field(default_factory=list)
    skill_count: int = 0
    score: int = Field(default=0, ge=0, le=100)


class FormattingSignal(CamelModel):
    issues: list[str] = Field(default_factory=list)
    score: int = Field(default=100, ge=0, le=100)


class CVSignals(CamelModel):
    word_count: int = 0
    keyword_match: KeywordMatchSignal = Field(default_factory=KeywordMatchSignal)
    quantification: QuantificationSignal = Field(default_factory=QuantificationSignal)
    action_verbs: ActionVerbSignal = Field(default_factory=ActionVerbSignal)
    formatting: FormattingSignal = Field(default_factory=FormattingSignal)


def split_bullets(description: str, min_chars: int = 10) -> list[str]:
    bullets: list[str] = []
    for fragment in _BULLET_SPLIT_RE.split(description or ""):
        text = strip_markup(fragment)
        if len(text) > min_chars:
            bullets.append(text)
    return bullets


def _experience_text(experience: tuple[CVExperience, ...]) -> str:
    return " ".join(strip_markup(item.description) for item in experience if item.description).strip()


def is_quantified(bullet: str, config: ATSScoringConfig) -> bool:
    return any(re.search(pattern, bullet, re.IGNORECASE) for pattern in config.quantification_patterns)


def detect_quantification(record: CVRecord, config: ATSScoringConfig) -> QuantificationSignal:
    total = 0
    quantified = 0
    for item in record.experience:
        for bullet in split_bullets(item.description, config.bullet_min_chars):
            total += 1
            if is_quantified(bullet, config):
                quantified += 1
    score = clamp_score(quantified / total * 100) if total else 0
    return QuantificationSignal(total_bullets=total, quantified_bullets=quantified, score=score)


def analyze_action_verbs(record: CVRecord, config: ATSScoringConfig) -> ActionVerbSignal:
    text = _experience_text(record.experience).lower()
    if not text:
        return ActionVerbSignal()

    strong = [verb for verb in config.strong_action_verbs if contains_term(text, verb)]
    weak = [phrase for phrase in config.weak_phrases if contains_term(text, phrase)]
    passive = sum(count_term_occurrences(text, word) for word in config.passive_indicators)

    score = config.base_action_verb_score
    score += min(len(strong) * config.strong_verb_points, config.max_strong_verb_bonus)
    score -= len(weak) * config.weak_phrase_penalty
    if passive > config.passive_max_occurrences:
        score -= config.passive_penalty
    return ActionVerbSignal(
        has_text=True,
        strong_verbs=strong,
        weak_phrases=weak,
        passive_count=passive,
        score=clamp_score(score),
    )


def extract_job_keywords(job_description: str, config: ATSScoringConfig) -> list[str]:
    """Industry terms named in the posting, then longer words it repeats, capped at the configured limit."""
    text = (job_description or "").lower()
    keywords = [term for term in config.industry_keywords if contains_term(text, term)]

    words = [
        word
        for word in _NON_WORD_RE.sub(" ", text).split()
        if len(word) >= config.job_keyword_min_length
    ]
    stopwords = set(config.job_description_stopwords)
    for word, count in Counter(words).items():
        if count < config.job_keyword_min_repeats or word in stopwords or word in keywords:
            continue
        keywords.append(word)
    return keywords[: config.job_keyword_limit]


def analyze_keyword_match(
    record: CVRecord,
    job_description: str | None,
    config: ATSScoringConfig,
) -> KeywordMatchSignal:
    text = strip_markup(record.all_text())
    skill_count = sum(1 for skill in record.skills if skill.strip())
    supplied = bool(job_description and job_description.strip())
    if not text:
        return KeywordMatchSignal(job_description_supplied=supplied, skill_count=skill_count)

    found = [term for term in config.industry_keywords if contains_term(text, term)]
    coverage = len(found) / len(config.industry_keywords) if config.industry_keywords else 0.0
    score = config.base_keyword_score + min(coverage * 100, config.max_industry_bonus)

    job_keywords: list[str] = []
    matched: list[str] = []
    missing: list[str] = []
    if supplied:
        job_keywords = extract_job_keywords(job_description or "", config)
        for term in job_keywords:
            (matched if contains_term(text, term) else missing).append(term)
        match_rate = len(matched) / len(job_keywords) if job_keywords else 0.0
        score += min(match_rate * config.max_job_match_bonus, config.max_job_match_bonus)

    if skill_count < config.min_skills:
        score -= config.few_skills_penalty

    logger.debug(
        "cv_keyword_match industry=%d job_keywords=%d matched=%d",
        len(found),
        len(job_keywords),
        len(matched),
    )
    return KeywordMatchSignal(
        industry_keywords=found,
        job_description_supplied=supplied,
        job_keywords=job_keywords,
        matched_job_keywords=matched,
        missing_job_keywords=missing,
        skill_count=skill_count,
        score=clamp_score(score),
    )


def detect_date_format(value: str) -> str:
    stripped = (value or "").strip()
    for label, pattern in _DATE_FORMATS:
        if pattern.match(stripped):
            return label
    return "OTHER"


def check_formatting(record: CVRecord, config: ATSScoringConfig) -> FormattingSignal:
    personal = record.personal
    issues: list[str] = []
    score = 100

    if "@" not in personal.email:
        issues.append("Missing or invalid email address")
        score -= 15
    if len(personal.phone.strip()) < config.phone_min_chars:
        issues.append("Missing or incomplete phone number")
        score -= 10
    if len(personal.full_name.split()) < 2:
        issues.append("Full name should include first and last name")
        score -= 10

    if len({detect_date_format(item.start_date) for item in record.experience}) > 1:
        issues.append("Date format inconsistencies: inconsistent date formats across experiences")
        score -= 10

    thin = [
        item
        for item in record.experience
        if len(strip_markup(item.description)) < config.description_min_chars
    ]
    if thin:
        issues.append(f"{len(thin)} experience(s) missing detailed descriptions")
        score -= 10 * len(thin)

    if personal.linkedin.strip() and "linkedin.com" not in personal.linkedin.lower():
        issues.append("LinkedIn URL format appears incorrect")
        score -= 5
    if personal.website.strip() and not personal.website.strip().lower().startswith("http"):
        issues.append("Website URL should include http:// or https://")
        score -= 5

    return FormattingSignal(issues=issues, score=clamp_score(score))


def score_length(word_count: int, config: ATSScoringConfig) -> int:
    if word_count < config.length_short_words:
        return clamp_score(word_count / config.length_short_words * 50) if config.length_short_words else 0
    if word_count < config.length_min_words:
        return 70
    if word_count <= config.length_max_words:
        return 100
    if word_count <= config.length_long_words:
        return 85
    return 60


def analyze_cv_signals(
    record: CVRecord,
    job_description: str | None,
    config: ATSScoringConfig,
) -> CVSignals:
    return CVSignals(
        word_count=count_words(strip_markup(record.all_text())),
        keyword_match=analyze_keyword_match(record, job_description, config),
        quantification=detect_quantification(record, config),
        action_verbs=analyze_action_verbs(record, config),
        formatting=check_formatting(record, config),
    )
