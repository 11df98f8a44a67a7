"""Content backfill shared by all searchers."""

import dataclasses
import logging

from evidence_sources.content.fetcher import MIN_CONTENT_LENGTH, ContentFetcher
from evidence_sources.data import Article
from evidence_sources.run_logger import RunLogger

logger = logging.getLogger(__name__)

# Fetched text replaces the seed only if longer than this fraction of it.
REPLACE_RATIO = 0.5


def dedupe_by_url(articles: list[Article]) -> list[Article]:
    """Keep the first article seen for each URL, preserving order."""
    seen_urls: set[str] = set()
    unique: list[Article] = []
    for article in articles:
        if article.url not in seen_urls:
            seen_urls.add(article.url)
            unique.append(article)
    return unique


def choose_content(seed: str, fetched: str) -> str:
    """Prefer fetched full text unless it is much shorter than the seed."""
    if fetched and len(fetched) > len(seed) * REPLACE_RATIO:
        return fetched
    return seed


async def backfill_content(
    articles: list[Article],
    fetcher: ContentFetcher,
    *,
    drop_unscraped: bool,
    min_chars: int = MIN_CONTENT_LENGTH,
    component: str = "",
    run_logger: RunLogger | None = None,
) -> list[Article]:
    """Replace each article's seed content with fetched full text.

    Args:
        articles: URL-unique articles whose ``content`` holds the provider seed.
        fetcher: Content fetcher to use.
        drop_unscraped: If True, discard articles whose fetched text is
            shorter than ``min_chars``; otherwise keep the seed for them.
        min_chars: Minimum fetched length when ``drop_unscraped`` is set.
        component: Name used in diagnostics.
        run_logger: Optional per-run diagnostics sink.

    Returns:
        Articles with content filled in, in input order.
    """
    if not articles:
        return []

    fetched = await fetcher.fetch_many([a.url for a in articles])

    filled: list[Article] = []
    for article, (content, attempts) in zip(articles, fetched, strict=True):
        if run_logger:
            run_logger.log_event(
                "content_fetch",
                component,
                url=article.url,
                attempts=attempts,
                chars=len(content),
            )

        if drop_unscraped:
            if len(content) < min_chars:
                logger.info("Dropping %s: fetched %d chars", article.url, len(content))
                if run_logger:
                    run_logger.log_event("hit_discarded", component, url=article.url)
                continue
            new_content = content
        else:
            new_content = choose_content(article.content, content)

        filled.append(dataclasses.replace(article, content=new_content))
    return filled
