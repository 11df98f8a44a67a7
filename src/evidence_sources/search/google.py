"""Web search using the Google Custom Search JSON API."""

import logging
import os
import time

import httpx

from evidence_sources.content.fetcher import MIN_CONTENT_LENGTH, ContentFetcher
from evidence_sources.data import Article, SearchHit, SearchQuery, Usage
from evidence_sources.errors import require_key
from evidence_sources.run_logger import RunLogger
from evidence_sources.search.backfill import backfill_content, dedupe_by_url
from evidence_sources.search.metadata import extract_pagemap_metadata
from evidence_sources.url import (
    LOW_VALUE_DOMAINS,
    extract_domain,
    is_low_value_domain,
    is_valid_url,
    to_year,
)

GOOGLE_SEARCH_URL = "https://www.googleapis.com/customsearch/v1"
DEFAULT_EXCLUSIONS = ("-filetype:pdf",)

logger = logging.getLogger(__name__)


class GoogleSearcher:
    """Single-query, metadata-rich web search.

    Searches the first (broad) query with exclusion filters appended. On an
    HTTP failure the call is retried once without the filters. Hits on
    low-value domains are dropped, the rest get full text through the
    content fetcher, and author/date come from the hit's ``pagemap``.

    Args:
        api_key: Google API key (defaults to GOOGLE_API_KEY env var).
        engine_id: Programmable Search Engine ID (defaults to
            GOOGLE_SEARCH_ENGINE_ID env var).
        fetcher: Content fetcher for full text.
        exclusions: Filter terms appended to the query.
        denylist: Domains whose hits are discarded.
        drop_unscraped: Discard hits whose fetched text is below ``min_chars``.
        min_chars: Minimum fetched text length.
        timeout_seconds: Timeout for each search call.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        engine_id: str | None = None,
        fetcher: ContentFetcher | None = None,
        exclusions: tuple[str, ...] = DEFAULT_EXCLUSIONS,
        denylist: frozenset[str] = LOW_VALUE_DOMAINS,
        drop_unscraped: bool = True,
        min_chars: int = MIN_CONTENT_LENGTH,
        timeout_seconds: float = 15.0,
    ) -> None:
        self._api_key = require_key(
            api_key or os.environ.get("GOOGLE_API_KEY"), "GOOGLE_API_KEY", "Google Search"
        )
        self._engine_id = require_key(
            engine_id or os.environ.get("GOOGLE_SEARCH_ENGINE_ID"),
            "GOOGLE_SEARCH_ENGINE_ID",
            "Google Search engine",
        )
        self._fetcher = fetcher or ContentFetcher()
        self._exclusions = exclusions
        self._denylist = denylist
        self._drop_unscraped = drop_unscraped
        self._min_chars = min_chars
        self._timeout = timeout_seconds

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
        hits: list[SearchHit] = []
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            filtered = " ".join([query.text, *self._exclusions])
            for text in dict.fromkeys([filtered, query.text]):
                requests += 1
                try:
                    hits = await self._request(client, text, max_results_per_query)
                    break
                except (httpx.HTTPError, ValueError) as e:
                    logger.warning("Google search failed for %r: %s", text, e)
                    if run_logger:
                        run_logger.log_event(
                            "provider_error", "GoogleSearcher", query=text, error=str(e)
                        )
            else:
                return ([], Usage(google_requests=requests))

        candidates: list[Article] = []
        for hit in hits:
            article = self._to_article(hit, query)
            if article is None:
                continue
            if is_low_value_domain(article.url, self._denylist):
                if run_logger:
                    run_logger.log_event("hit_denylisted", "GoogleSearcher", url=article.url)
                continue
            candidates.append(article)

        articles = await backfill_content(
            dedupe_by_url(candidates),
            self._fetcher,
            drop_unscraped=self._drop_unscraped,
            min_chars=self._min_chars,
            component="GoogleSearcher",
            run_logger=run_logger,
        )

        usage = Usage(google_requests=requests)
        if run_logger:
            run_logger.log_stage(
                stage="provider_search",
                component="GoogleSearcher",
                input_data=query,
                output_data={"hits": len(hits), "kept": len(articles)},
                usage=usage,
                duration_seconds=time.monotonic() - t0,
            )
        return (articles, usage)

    async def _request(self, client: httpx.AsyncClient, text: str, num: int) -> list[SearchHit]:
        params: dict[str, str | int] = {
            "key": self._api_key,
            "cx": self._engine_id,
            "q": text,
            "num": max(1, min(num, 10)),  # API maximum is 10
        }
        response = await client.get(GOOGLE_SEARCH_URL, params=params)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected Google response body: {type(data).__name__}")
        items = data.get("items") or []
        return [
            SearchHit(
                title=item.get("title") or "",
                url=item.get("link") or "",
                snippet=item.get("snippet") or "",
                metadata={"pagemap": item.get("pagemap")},
            )
            for item in items
            if isinstance(item, dict)
        ]

    @staticmethod
    def _to_article(hit: SearchHit, query: SearchQuery) -> Article | None:
        if not is_valid_url(hit.url):
            return None
        author, raw_date, site = extract_pagemap_metadata(hit.metadata.get("pagemap"))
        return Article(
            url=hit.url,
            title=hit.title,
            content=hit.snippet,
            author=author,
            publish_date=to_year(raw_date),
            source=site or extract_domain(hit.url),
            query=query,
        )
