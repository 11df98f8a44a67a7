"""Heuristic main-content extraction from raw HTML.

Parses the document into a tree, removes non-content elements, then picks
the article-like container with the best balance of text volume and
text-to-markup density. Falls back to ``<body>`` when no candidate has
enough text.
"""

import re

from bs4 import BeautifulSoup, Tag

DEFAULT_MAX_CHARS = 10_000
TRUNCATION_MARKER = "... [truncated]"

NON_CONTENT_TAGS = (
    "script",
    "style",
    "noscript",
    "template",
    "svg",
    "iframe",
    "nav",
    "header",
    "footer",
    "aside",
    "form",
)
ARTICLE_CLASS_PATTERNS = (
    "article",
    "content",
    "post",
    "story",
    "entry",
    "body-text",
    "main-text",
)
BOILERPLATE_TERMS = (
    "cookie",
    "cookies",
    "privacy policy",
    "subscribe",
    "newsletter",
    "advertisement",
    "sponsored",
    "ad blocker",
)

# Candidates shorter than this are ignored.
MIN_CANDIDATE_CHARS = 200
# Characters of text per element at which density stops penalizing a candidate.
DENSITY_TARGET = 40.0

_WHITESPACE = re.compile(r"\s+")
_SENTENCE_END = re.compile(r"(?<=[.!?])\s+")
_BOILERPLATE = re.compile(
    r"\b(" + "|".join(re.escape(t) for t in BOILERPLATE_TERMS) + r")\b", re.IGNORECASE
)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def _is_article_like(tag: Tag) -> bool:
    if tag.name in ("article", "main"):
        return True
    names = list(tag.get("class") or [])
    element_id = tag.get("id")
    if isinstance(element_id, str):
        names.append(element_id)
    lowered = " ".join(names).lower()
    return any(pattern in lowered for pattern in ARTICLE_CLASS_PATTERNS)


def _candidate_score(tag: Tag) -> tuple[float, str]:
    text = collapse_whitespace(tag.get_text(" "))
    if len(text) < MIN_CANDIDATE_CHARS:
        return 0.0, text
    element_count = len(tag.find_all(True)) + 1
    density = len(text) / element_count
    return len(text) * min(1.0, density / DENSITY_TARGET), text


def strip_boilerplate(text: str) -> str:
    """Drop sentences mentioning cookie, subscription or advertising terms."""
    sentences = _SENTENCE_END.split(text)
    return " ".join(s for s in sentences if not _BOILERPLATE.search(s)).strip()


def truncate(text: str, max_chars: int = DEFAULT_MAX_CHARS) -> str:
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + TRUNCATION_MARKER


def extract_article_text(html: str, *, max_chars: int = DEFAULT_MAX_CHARS) -> str:
    """Extract readable article text from an HTML document.

    Args:
        html: Raw HTML.
        max_chars: Cap on the returned text; longer text gets a truncation marker.

    Returns:
        Cleaned text, or an empty string if the document has no text.
    """
    soup = BeautifulSoup(html, "html.parser")
    for element in soup.find_all(list(NON_CONTENT_TAGS)):
        element.decompose()

    best_score = 0.0
    best_text = ""
    for candidate in soup.find_all(_is_article_like):
        score, text = _candidate_score(candidate)
        if score > best_score:
            best_score, best_text = score, text

    if not best_text:
        root = soup.body or soup
        best_text = collapse_whitespace(root.get_text(" "))

    return truncate(strip_boilerplate(best_text), max_chars)
