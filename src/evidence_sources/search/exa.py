"""Exa search using the official exa-py SDK."""

import logging
import os
import time
from typing import Any

from exa_py import AsyncExa

from evidence_sources.content.fetcher import MIN_CONTENT_LENGTH, ContentFetcher
from evidence_sources.data import Article, SearchQuery, Usage
from evidence_sources.errors import require_key
from evidence_sources.run_logger import RunLogger
from evidence_sources.search.backfill import backfill_content, dedupe_by_url
from evidence_sources.url import (
    LOW_VALUE_DOMAINS,
    extract_domain,
    is_low_value_domain,
    is_valid_url,
    to_year,
)

logger = logging.getLogger(__name__)


class ExaSearcher:
    """Single-query, metadata-rich search using the Exa API.

    Exa results carry author and published date directly. The domain
    denylist is passed to Exa as ``exclude_domains`` and also enforced
    locally; if the filtered call fails it is retried once without it.

    Args:
        api_key: Exa API key (defaults to EXA_API_KEY env var).
        fetcher: Content fetcher for full text.
        denylist: Domains whose hits are discarded.
        drop_unscraped: Discard hits whose fetched text is below ``min_chars``.
        min_chars: Minimum fetched text length.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        fetcher: ContentFetcher | None = None,
        denylist: frozenset[str] = LOW_VALUE_DOMAINS,
        drop_unscraped: bool = True,
        min_chars: int = MIN_CONTENT_LENGTH,
    ) -> None:
        self._api_key = require_key(api_key or os.environ.get("EXA_API_KEY"), "EXA_API_KEY", "Exa")
        self._client = AsyncExa(api_key=self._api_key)
        self._fetcher = fetcher or ContentFetcher()
        self._denylist = denylist
        self._drop_unscraped = drop_unscraped
        self._min_chars = min_chars

    async def search(
        self,
        queries: list[SearchQuery],
        *,
        max_results_per_query: int = 10,
        run_logger: RunLogger | None = None,
    ) -> tuple[list[Article], Usage]:
        if not queries:
            return ([], Usage())
        query = queries[0]

        t0 = time.monotonic()
        requests = 0
        results: list[Any] | None = None
        for exclude in (sorted(self._denylist), None):
            requests += 1
            try:
                response = await self._client.search(
                    query.text,
                    num_results=max_results_per_query,
                    exclude_domains=exclude,
                )
                results = list(response.results)
                break
            except Exception as e:
                logger.warning("Error processing Exa query. Error: %s", e)
                if run_logger:
                    run_logger.log_event(
                        "provider_error", "ExaSearcher", query=query.text, error=str(e)
                    )
        if results is None:
            return ([], Usage(exa_requests=requests))

        candidates: list[Article] = []
        for result in results:
            url = result.url or ""
            if not is_valid_url(url) or is_low_value_domain(url, self._denylist):
                continue
            candidates.append(
                Article(
                    url=url,
                    title=result.title or "",
                    content="",
                    author=getattr(result, "author", None) or None,
                    publish_date=to_year(getattr(result, "published_date", None)),
                    source=extract_domain(url),
                    query=query,
                )
            )

        articles = await backfill_content(
            dedupe_by_url(candidates),
            self._fetcher,
            drop_unscraped=self._drop_unscraped,
            min_chars=self._min_chars,
            component="ExaSearcher",
            run_logger=run_logger,
        )

        usage = Usage(exa_requests=requests)
        if run_logger:
            run_logger.log_stage(
                stage="provider_search",
                component="ExaSearcher",
                input_data=query,
                output_data={"hits": len(results), "kept": len(articles)},
                usage=usage,
                duration_seconds=time.monotonic() - t0,
            )
        return (articles, usage)
