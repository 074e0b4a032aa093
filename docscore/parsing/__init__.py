from .markup import collapse_whitespace, count_words, parse_markup, strip_markup
from .models import DocumentOutline, OutlineHeading, OutlineImage, OutlineLink

__all__ = [
    "DocumentOutline",
    "OutlineHeading",
    "OutlineImage",
    "OutlineLink",
    "collapse_whitespace",
    "count_words",
    "parse_markup",
    "strip_markup",
]
