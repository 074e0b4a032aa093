from __future__ import annotations

import html
import logging
import re
import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning, ParserRejectedMarkup
from bs4.element import CData, NavigableString, PreformattedString, Tag

from .models import DocumentOutline, OutlineHeading, OutlineImage, OutlineLink

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")
_TAG_RE = re.compile(r"<[^>]*>")
_HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
_INVISIBLE_TAGS = ["script", "style", "noscript"]
_BLOCK_BOUNDARY_TAGS = frozenset(["p", "ul", "ol", *_HEADING_TAGS])


def collapse_whitespace(value: str) -> str:
    return _WHITESPACE_RE.sub(" ", value or "").strip()


def _own_text(tag: Tag) -> str:
    """Text of ``tag`` without the text of nested block tags.

    ``html.parser`` does not close an open ``<p>`` when the next one starts, so
    ``<p>a<p>b`` nests; each block keeps only its own strings.
    """
    parts: list[str] = []
    stack = list(reversed(tag.contents))
    while stack:
        node = stack.pop()
        if isinstance(node, Tag):
            if node.name not in _BLOCK_BOUNDARY_TAGS:
                stack.extend(reversed(node.contents))
        elif isinstance(node, NavigableString):
            if isinstance(node, PreformattedString) and not isinstance(node, CData):
                continue
            parts.append(str(node))
    return collapse_whitespace(" ".join(parts))


def count_words(text: str) -> int:
    return len((text or "").split())


def _strip_tags_fallback(markup: str) -> str:
    return collapse_whitespace(html.unescape(_TAG_RE.sub(" ", markup)))


def _make_soup(markup: str) -> BeautifulSoup | None:
    try:
        with warnings.catch_warnings():
            # Short plain-text fragments can look like file names or URLs to bs4.
            warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
            soup = BeautifulSoup(markup, "html.parser")
    except ParserRejectedMarkup as exc:
        logger.debug("markup_parser_rejected error=%s", exc)
        return None
    for tag in soup.find_all(_INVISIBLE_TAGS):
        tag.decompose()
    return soup


def strip_markup(markup: str) -> str:
    """Return the visible text of ``markup`` with whitespace collapsed to single spaces."""
    if not markup:
        return ""
    soup = _make_soup(markup)
    if soup is None:
        return _strip_tags_fallback(markup)
    return collapse_whitespace(soup.get_text(" "))


def parse_markup(markup: str) -> DocumentOutline:
    """Build a document outline (text, headings, paragraphs, lists, images, links).

    Unclosed or stray tags are tolerated by the parser; when it rejects the
    input outright only the tag-stripped text is returned.
    """
    if not markup:
        return DocumentOutline()

    soup = _make_soup(markup)
    if soup is None:
        return DocumentOutline(text=_strip_tags_fallback(markup))

    headings = [
        OutlineHeading(level=int(tag.name[1]), text=_own_text(tag))
        for tag in soup.find_all(_HEADING_TAGS)
    ]

    paragraphs: list[str] = []
    paragraph_word_counts: list[int] = []
    for tag in soup.find_all("p"):
        text = _own_text(tag)
        paragraph_word_counts.append(count_words(text))
        if text:
            paragraphs.append(text)

    images = [
        OutlineImage(src=str(tag.get("src") or ""), alt=str(tag.get("alt") or ""))
        for tag in soup.find_all("img")
    ]

    links: list[OutlineLink] = []
    for tag in soup.find_all("a", href=True):
        href = str(tag.get("href") or "").strip()
        if href:
            links.append(OutlineLink(href=href, text=collapse_whitespace(tag.get_text(" "))))

    return DocumentOutline(
        text=collapse_whitespace(soup.get_text(" ")),
        headings=headings,
        paragraphs=paragraphs,
        paragraph_word_counts=paragraph_word_counts,
        first_paragraph=paragraphs[0] if paragraphs else "",
        list_count=len(soup.find_all(["ul", "ol"])),
        images=images,
        links=links,
    )
