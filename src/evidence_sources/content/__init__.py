from evidence_sources.content.attempts import Attempt, ContentStrategy, first_satisfying, min_length
from evidence_sources.content.extract import extract_article_text
from evidence_sources.content.fetcher import (
    MIN_CONTENT_LENGTH,
    ContentFetcher,
    DirectHttpStrategy,
    FirecrawlStrategy,
)

__all__ = [
    "MIN_CONTENT_LENGTH",
    "Attempt",
    "ContentFetcher",
    "ContentStrategy",
    "DirectHttpStrategy",
    "FirecrawlStrategy",
    "extract_article_text",
    "first_satisfying",
    "min_length",
]
