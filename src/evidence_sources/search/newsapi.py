"""Keyword news search using the NewsAPI ``everything`` endpoint."""

import asyncio
import logging
import os
import time

import httpx

from evidence_sources.content.fetcher import MIN_CONTENT_LENGTH, ContentFetcher
from evidence_sources.data import Article, SearchQuery, Usage
from evidence_sources.errors import ProviderError, require_key
from evidence_sources.run_logger import RunLogger
from evidence_sources.search.backfill import backfill_content, dedupe_by_url
from evidence_sources.url import extract_domain, is_valid_url, to_year

NEWSAPI_URL = "https://newsapi.org/v2/everything"
REMOVED_MARKER = "[Removed]"

logger = logging.getLogger(__name__)


class NewsApiSearcher:
    """Multi-query keyword search over NewsAPI.

    Issues one call per query, seeds each hit's content with the provider
    description, then backfills full text through the content fetcher.
    Failed calls (HTTP errors, rate limits, error payloads) contribute no
    hits and never abort the search.

    Args:
        api_key: NewsAPI key (defaults to NEWS_API_KEY env var).
        fetcher: Content fetcher for backfill.
        language: Language code for results.
        drop_unscraped: Discard hits whose full text could not be fetched
            instead of keeping the provider snippet.
        min_chars: Minimum fetched length when dropping unscraped hits.
        timeout_seconds: Timeout for each NewsAPI call.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        fetcher: ContentFetcher | None = None,
        language: str = "en",
        drop_unscraped: bool = False,
        min_chars: int = MIN_CONTENT_LENGTH,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._api_key = require_key(
            api_key or os.environ.get("NEWS_API_KEY"), "NEWS_API_KEY", "NewsAPI"
        )
        self._fetcher = fetcher or ContentFetcher()
        self._language = language
        self._drop_unscraped = drop_unscraped
        self._min_chars = min_chars
        self._timeout = timeout_seconds

    async def search(
        self,
        queries: list[SearchQuery],
        *,
        max_results_per_query: int = 5,
        run_logger: RunLogger | None = None,
    ) -> tuple[list[Article], Usage]:
        t0 = time.monotonic()
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            tasks = [
                self._search_single(client, query, max_results=max_results_per_query)
                for query in queries
            ]
            results = await asyncio.gather(*tasks, return_exceptions=True)

        # Query order, not completion order, decides which duplicate survives.
        hits: list[Article] = []
        successful_requests = 0
        for query, result in zip(queries, results, strict=True):
            if isinstance(result, BaseException):
                logger.warning("NewsAPI query %r failed. Error: %s", query.text, result)
                if run_logger:
                    run_logger.log_event(
                        "provider_error", "NewsApiSearcher", query=query.text, error=str(result)
                    )
                continue
            successful_requests += 1
            hits.extend(result)

        unique = dedupe_by_url(hits)
        articles = await backfill_content(
            unique,
            self._fetcher,
            drop_unscraped=self._drop_unscraped,
            min_chars=self._min_chars,
            component="NewsApiSearcher",
            run_logger=run_logger,
        )

        usage = Usage(newsapi_requests=successful_requests)
        if run_logger:
            run_logger.log_stage(
                stage="provider_search",
                component="NewsApiSearcher",
                input_data=queries,
                output_data={"hits": len(hits), "unique": len(unique), "kept": len(articles)},
                usage=usage,
                duration_seconds=time.monotonic() - t0,
            )
        return (articles, usage)

    async def _search_single(
        self,
        client: httpx.AsyncClient,
        query: SearchQuery,
        *,
        max_results: int,
    ) -> list[Article]:
        """Execute a single NewsAPI query."""
        params: dict[str, str | int] = {
            "q": query.text,
            "language": self._language,
            "sortBy": "relevancy",
            "pageSize": max_results,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}
        response = await client.get(NEWSAPI_URL, params=params, headers=headers)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ProviderError(f"Unexpected NewsAPI response body: {type(data).__name__}")

        if data.get("status") != "ok":
            raise ProviderError(f"NewsAPI error: {data.get('message', 'unknown error')}")

        logger.info("Query %r found %s articles", query.text, data.get("totalResults", 0))

        articles: list[Article] = []
        for item in data.get("articles") or []:
            if not isinstance(item, dict):
                continue
            url = item.get("url") or ""
            title = item.get("title") or ""
            if not is_valid_url(url) or title == REMOVED_MARKER:
                continue
            source_info = item.get("source")
            source = (
                source_info.get("name") if isinstance(source_info, dict) else None
            ) or extract_domain(url)
            articles.append(
                Article(
                    url=url,
                    title=title,
                    content=item.get("description") or item.get("content") or "",
                    author=item.get("author") or None,
                    publish_date=to_year(item.get("publishedAt")),
                    source=source,
                    query=query,
                )
            )
        return articles
