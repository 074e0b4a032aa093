from .cv_signals import (
    ActionVerbSignal,
    CVSignals,
    FormattingSignal,
    KeywordMatchSignal,
    QuantificationSignal,
    analyze_action_verbs,
    analyze_cv_signals,
    analyze_keyword_match,
    check_formatting,
    detect_quantification,
    extract_job_keywords,
    score_length,
)
from .keywords import KeywordSignal, analyze_keywords, count_term_occurrences
from .readability import ReadabilityMetrics, analyze_readability, count_syllables
from .structure import (
    ContentStructure,
    SectionFinding,
    SectionReport,
    analyze_cv_sections,
    analyze_markup_structure,
    score_markup_structure,
)

__all__ = [
    "ActionVerbSignal",
    "CVSignals",
    "FormattingSignal",
    "KeywordMatchSignal",
    "QuantificationSignal",
    "analyze_action_verbs",
    "analyze_cv_signals",
    "analyze_keyword_match",
    "check_formatting",
    "detect_quantification",
    "extract_job_keywords",
    "score_length",
    "KeywordSignal",
    "analyze_keywords",
    "count_term_occurrences",
    "ReadabilityMetrics",
    "analyze_readability",
    "count_syllables",
    "ContentStructure",
    "SectionFinding",
    "SectionReport",
    "analyze_cv_sections",
    "analyze_markup_structure",
    "score_markup_structure",
]
