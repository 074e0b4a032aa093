from __future__ import annotations

import re

from docscore.schemas.base import CamelModel

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_NON_ALPHA_RE = re.compile(r"[^a-z]")
_VOWEL_GROUP_RE = re.compile(r"[aeiouy]+")

_FLESCH_LEVELS: tuple[tuple[float, str], ...] = (
    (90.0, "Very Easy"),
    (80.0, "Easy"),
    (70.0, "Fairly Easy"),
    (60.0, "Standard"),
    (50.0, "Fairly Difficult"),
    (30.0, "Difficult"),
)


class ReadabilityMetrics(CamelModel):
    sentence_count: int = 0
    word_count: int = 0
    syllable_count: int = 0
    flesch_score: float = 0.0
    flesch_level: str = "Very Difficult"
    average_words_per_sentence: float = 0.0
    average_syllables_per_word: float = 0.0


def count_syllables(word: str) -> int:
    cleaned = _NON_ALPHA_RE.sub("", (word or "").lower())
    if len(cleaned) <= 3:
        return 1
    count = len(_VOWEL_GROUP_RE.findall(cleaned))
    if cleaned.endswith("e"):
        count -= 1
    return max(1, count)


def flesch_reading_ease(word_count: int, sentence_count: int, syllable_count: int) -> float:
    """206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words), clamped to 0..100."""
    if word_count == 0 or sentence_count == 0:
        return 0.0
    score = 206.835 - 1.015 * (word_count / sentence_count) - 84.6 * (syllable_count / word_count)
    return max(0.0, min(100.0, score))


def flesch_level(score: float) -> str:
    for floor, label in _FLESCH_LEVELS:
        if score >= floor:
            return label
    return "Very Difficult"


def split_sentences(text: str) -> list[str]:
    return [fragment for fragment in _SENTENCE_SPLIT_RE.split(text or "") if fragment.strip()]


def analyze_readability(text: str) -> ReadabilityMetrics:
    sentence_count = len(split_sentences(text))
    words = (text or "").split()
    word_count = len(words)
    syllable_count = sum(count_syllables(word) for word in words)

    score = flesch_reading_ease(word_count, sentence_count, syllable_count)
    return ReadabilityMetrics(
        sentence_count=sentence_count,
        word_count=word_count,
        syllable_count=syllable_count,
        flesch_score=score,
        flesch_level=flesch_level(score),
        average_words_per_sentence=word_count / sentence_count if sentence_count else 0.0,
        average_syllables_per_word=syllable_count / word_count if word_count else 0.0,
    )
