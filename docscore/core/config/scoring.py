from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

SEO_CRITERIA = ("keywords", "readability", "structure", "meta", "technical")
ATS_CRITERIA = ("keywords", "formatting", "quantification", "action_verbs", "length", "structure")

DEFAULT_SCORING_CONFIG_PATH = Path(__file__).resolve().parents[3] / "config" / "scoring.yaml"


class ScoringConfigError(RuntimeError):
    pass


class CriterionSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    weight: int = Field(ge=0, le=100)
    pass_threshold: int = Field(ge=0, le=100)


class GradeBand(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_score: int = Field(ge=0, le=100)
    label: str = Field(min_length=1)


def _check_criteria_table(
    criteria: dict[str, CriterionSettings],
    required: tuple[str, ...],
    grades: tuple[GradeBand, ...],
) -> None:
    missing = [name for name in required if name not in criteria]
    if missing:
        raise ValueError(f"missing criteria: {', '.join(missing)}")
    unknown = [name for name in criteria if name not in required]
    if unknown:
        raise ValueError(f"unknown criteria: {', '.join(unknown)}")
    total = sum(item.weight for item in criteria.values())
    if total != 100:
        raise ValueError(f"criterion weights must sum to 100, got {total}")
    floors = [band.min_score for band in grades]
    if any(later >= earlier for earlier, later in zip(floors, floors[1:])):
        raise ValueError("grade bands must be ordered by strictly descending min_score")


class SEOScoringConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    criteria: dict[str, CriterionSettings] = Field(
        default_factory=lambda: {
            "keywords": CriterionSettings(weight=25, pass_threshold=40),
            "readability": CriterionSettings(weight=20, pass_threshold=60),
            "structure": CriterionSettings(weight=20, pass_threshold=60),
            "meta": CriterionSettings(weight=20, pass_threshold=75),
            "technical": CriterionSettings(weight=15, pass_threshold=85),
        }
    )
    grades: tuple[GradeBand, ...] = (
        GradeBand(min_score=80, label="Excellent"),
        GradeBand(min_score=60, label="Good"),
        GradeBand(min_score=40, label="Needs Work"),
    )
    fallback_grade: str = "Poor"

    density_low_percent: float = 0.5
    density_high_percent: float = 2.5
    title_min_chars: int = 30
    title_max_chars: int = 60
    meta_description_min_chars: int = 120
    meta_description_max_chars: int = 160

    target_words_per_sentence: float = 15.0
    long_sentence_words: float = 25.0
    difficult_flesch: float = 50.0
    good_flesch_min: float = 60.0
    good_flesch_max: float = 70.0

    short_content_words: int = 300
    comprehensive_content_words: int = 1000
    subheading_min_words: int = 300
    list_min_words: int = 500
    long_paragraph_words: float = 150.0
    paragraph_target: int = 3

    @model_validator(mode="after")
    def _validate_table(self) -> "SEOScoringConfig":
        _check_criteria_table(self.criteria, SEO_CRITERIA, self.grades)
        if self.density_low_percent > self.density_high_percent:
            raise ValueError("density_low_percent must not exceed density_high_percent")
        return self


class ATSScoringConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    criteria: dict[str, CriterionSettings] = Field(
        default_factory=lambda: {
            "keywords": CriterionSettings(weight=25, pass_threshold=60),
            "formatting": CriterionSettings(weight=20, pass_threshold=70),
            "quantification": CriterionSettings(weight=15, pass_threshold=50),
            "action_verbs": CriterionSettings(weight=15, pass_threshold=50),
            "length": CriterionSettings(weight=10, pass_threshold=70),
            "structure": CriterionSettings(weight=15, pass_threshold=70),
        }
    )
    grades: tuple[GradeBand, ...] = (
        GradeBand(min_score=85, label="Excellent"),
        GradeBand(min_score=70, label="Good"),
        GradeBand(min_score=50, label="Fair"),
    )
    fallback_grade: str = "Poor"

    strong_action_verbs: tuple[str, ...] = (
        "led", "managed", "directed", "supervised", "coordinated", "orchestrated", "spearheaded",
        "achieved", "accomplished", "delivered", "exceeded", "surpassed", "outperformed",
        "increased", "improved", "enhanced", "optimized", "maximized", "boosted", "elevated",
        "created", "developed", "designed", "built", "launched", "established", "founded",
        "streamlined", "automated", "simplified", "reduced", "eliminated", "consolidated",
        "analyzed", "evaluated", "assessed", "researched", "investigated", "identified",
        "strategized", "planned", "implemented", "executed", "initiated", "pioneered",
        "collaborated", "partnered", "facilitated", "mentored", "trained", "coached",
        "engineered", "programmed", "architected", "deployed", "configured", "integrated",
    )
    weak_phrases: tuple[str, ...] = (
        "responsible for",
        "worked on",
        "helped with",
        "assisted with",
        "participated in",
        "involved in",
        "tasked with",
        "duties included",
        "was responsible",
        "in charge of",
    )
    quantification_patterns: tuple[str, ...] = (
        r"\d+%",
        r"[$€£¥]\s?\d[\d,.]*\s?[kmb]?",
        r"\d+\+?\s*(?:users?|customers?|clients?|people|employees?|members?)",
        r"\d+\+?\s*(?:projects?|products?|features?|applications?)",
        r"\d+\+?\s*(?:years?|months?|weeks?)",
        r"\d+x",
        r"increased?.*?by\s+\d+",
        r"reduced?.*?by\s+\d+",
        r"grew.*?from\s+\d+.*?to\s+\d+",
        r"\d+\+?\s*(?:million|thousand|billion)",
        r"\b\d[\d,.]*\+?\s+[a-z]+",
    )
    industry_keywords: tuple[str, ...] = (
        "javascript", "typescript", "python", "java", "c++", "c#", "ruby", "php", "go", "rust", "swift", "kotlin",
        "react", "angular", "vue", "node", "express", "django", "flask", "spring", "laravel", "rails",
        "aws", "azure", "gcp", "docker", "kubernetes", "ci/cd", "jenkins", "terraform", "ansible",
        "sql", "mysql", "postgresql", "mongodb", "redis", "elasticsearch", "oracle",
        "agile", "scrum", "kanban", "devops", "tdd", "api", "rest", "graphql",
        "leadership", "communication", "collaboration", "problem-solving", "analytical", "strategic",
    )
    job_description_stopwords: tuple[str, ...] = (
        "about", "after", "before", "being", "could", "during", "every", "other", "should",
        "their", "there", "these", "those", "through", "under", "where", "which", "while", "would",
    )
    passive_indicators: tuple[str, ...] = ("was", "were", "been", "being")

    base_keyword_score: int = 50
    max_industry_bonus: int = 30
    max_job_match_bonus: int = 20
    job_keyword_limit: int = 20
    job_keyword_min_length: int = 5
    job_keyword_min_repeats: int = 2
    min_skills: int = 5
    few_skills_penalty: int = 10
    recommended_skills: int = 8
    summary_min_words: int = 10

    base_action_verb_score: int = 50
    strong_verb_points: int = 3
    max_strong_verb_bonus: int = 40
    weak_phrase_penalty: int = 10
    passive_max_occurrences: int = 5
    passive_penalty: int = 10

    bullet_min_chars: int = 10
    description_min_chars: int = 20
    phone_min_chars: int = 10

    length_short_words: int = 300
    length_min_words: int = 400
    length_max_words: int = 800
    length_long_words: int = 1000

    @field_validator("quantification_patterns")
    @classmethod
    def _validate_patterns(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for pattern in value:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ValueError(f"invalid quantification pattern {pattern!r}: {exc}") from exc
        return value

    @field_validator("strong_action_verbs", "weak_phrases", "industry_keywords", "job_description_stopwords", "passive_indicators")
    @classmethod
    def _normalize_lexicon(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        cleaned: list[str] = []
        for item in value:
            term = item.strip().lower()
            if term and term not in cleaned:
                cleaned.append(term)
        return tuple(cleaned)

    @model_validator(mode="after")
    def _validate_table(self) -> "ATSScoringConfig":
        _check_criteria_table(self.criteria, ATS_CRITERIA, self.grades)
        if not (self.length_short_words <= self.length_min_words <= self.length_max_words <= self.length_long_words):
            raise ValueError("length bands must be ordered short <= min <= max <= long")
        return self


class ScoringConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    seo: SEOScoringConfig = Field(default_factory=SEOScoringConfig)
    ats: ATSScoringConfig = Field(default_factory=ATSScoringConfig)


DEFAULT_SCORING_CONFIG = ScoringConfig()


def load_scoring_config(path: str | Path | None = None) -> ScoringConfig:
    """Load a scoring config from YAML; sections left out keep their code defaults."""
    config_path = Path(path) if path is not None else DEFAULT_SCORING_CONFIG_PATH

    if not config_path.exists():
        raise ScoringConfigError(f"Scoring config not found at '{config_path}'.")

    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ScoringConfigError(f"Failed to read scoring config '{config_path}': {exc}") from exc

    try:
        parsed: Any = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ScoringConfigError(f"Invalid YAML in scoring config '{config_path}': {exc}") from exc

    if parsed is None:
        parsed = {}
    if not isinstance(parsed, dict):
        raise ScoringConfigError(
            f"Invalid scoring config '{config_path}': expected a top-level mapping."
        )

    try:
        return ScoringConfig.model_validate(parsed)
    except ValidationError as exc:
        raise ScoringConfigError(f"Invalid scoring config '{config_path}': {exc}") from exc
