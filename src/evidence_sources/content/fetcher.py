"""Article text fetching with a scraping service and a direct-HTTP fallback."""

import asyncio
import logging
import os

import httpx

from evidence_sources.content.attempts import Attempt, ContentStrategy, first_satisfying, min_length
from evidence_sources.content.extract import DEFAULT_MAX_CHARS, extract_article_text
from evidence_sources.url import is_valid_url

FIRECRAWL_API_URL = "https://api.firecrawl.dev/v1/scrape"
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)
MIN_CONTENT_LENGTH = 100

logger = logging.getLogger(__name__)


class FirecrawlStrategy:
    """Structured main-content extraction through the Firecrawl scrape API.

    Treats a non-2xx status, ``success: false`` or text shorter than
    ``min_chars`` as failure. Without an API key every attempt fails
    immediately, so the chain falls through to the next strategy.

    Args:
        api_key: Firecrawl API key (defaults to FIRECRAWL_API_KEY env var).
        wait_for_ms: Render wait before extraction.
        timeout_seconds: Total timeout for the scrape call.
        min_chars: Minimum extracted length to count as success.
    """

    name = "firecrawl"

    def __init__(
        self,
        *,
        api_key: str | None = None,
        wait_for_ms: int = 3000,
        timeout_seconds: float = 30.0,
        min_chars: int = MIN_CONTENT_LENGTH,
    ) -> None:
        self._api_key = api_key or os.environ.get("FIRECRAWL_API_KEY")
        self._wait_for_ms = wait_for_ms
        self._timeout = timeout_seconds
        self._accepts = min_length(min_chars)

    def accepts(self, attempt: Attempt) -> bool:
        return self._accepts(attempt)

    async def attempt(self, client: httpx.AsyncClient, url: str) -> Attempt:
        if not self._api_key:
            return Attempt.failure(self.name, "not configured")
        if not is_valid_url(url):
            return Attempt.failure(self.name, "invalid url")

        payload = {
            "url": url,
            "formats": ["markdown"],
            "onlyMainContent": True,
            "waitFor": self._wait_for_ms,
            "timeout": int(self._timeout * 1000),
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}
        try:
            response = await client.post(
                FIRECRAWL_API_URL,
                json=payload,
                headers=headers,
                # Leave headroom over the server-side timeout.
                timeout=self._timeout + 5.0,
            )
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Firecrawl failed for %s: %s", url, e)
            return Attempt.failure(self.name, str(e))

        if not isinstance(body, dict) or not body.get("success"):
            error = body.get("error") if isinstance(body, dict) else None
            return Attempt.failure(self.name, str(error or "unsuccessful response"))

        data = body.get("data")
        if not isinstance(data, dict):
            return Attempt.failure(self.name, "missing data")
        text = data.get("markdown") or data.get("text") or data.get("content") or ""
        if not isinstance(text, str):
            return Attempt.failure(self.name, "non-text content")
        return Attempt.success(self.name, text.strip())


class DirectHttpStrategy:
    """Plain GET with a browser user agent plus heuristic HTML extraction.

    Args:
        timeout_seconds: Request timeout.
        max_chars: Cap on extracted text length.
    """

    name = "direct"

    def __init__(
        self,
        *,
        timeout_seconds: float = 15.0,
        max_chars: int = DEFAULT_MAX_CHARS,
    ) -> None:
        self._timeout = timeout_seconds
        self._max_chars = max_chars

    def accepts(self, attempt: Attempt) -> bool:
        return attempt.ok and bool(attempt.content)

    async def attempt(self, client: httpx.AsyncClient, url: str) -> Attempt:
        if not is_valid_url(url):
            return Attempt.failure(self.name, "invalid url")
        try:
            response = await client.get(
                url,
                headers={"User-Agent": BROWSER_USER_AGENT},
                follow_redirects=True,
                timeout=self._timeout,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Direct fetch failed for %s: %s", url, e)
            return Attempt.failure(self.name, str(e))

        content_type = response.headers.get("content-type", "")
        if content_type and "html" not in content_type and "text" not in content_type:
            return Attempt.failure(self.name, f"unsupported content type {content_type}")

        try:
            text = extract_article_text(response.text, max_chars=self._max_chars)
        except Exception as e:
            logger.warning("HTML extraction failed for %s: %s", url, e)
            return Attempt.failure(self.name, str(e))
        return Attempt.success(self.name, text)


class ContentFetcher:
    """Obtain article body text for URLs through an ordered strategy chain.

    ``fetch`` never raises; an empty string means every strategy failed and
    the caller should fall back to provider-supplied text.

    Args:
        strategies: Strategies tried in order. Defaults to Firecrawl then
            direct HTTP.
        max_concurrency: Upper bound on URLs fetched at once.
    """

    def __init__(
        self,
        strategies: list[ContentStrategy] | None = None,
        *,
        max_concurrency: int = 5,
    ) -> None:
        self._strategies: list[ContentStrategy] = (
            strategies if strategies is not None else [FirecrawlStrategy(), DirectHttpStrategy()]
        )
        self._max_concurrency = max_concurrency

    async def fetch(self, url: str) -> str:
        """Fetch article text for a single URL."""
        async with httpx.AsyncClient(timeout=30.0) as client:
            content, _ = await self.fetch_with_client(client, url)
        return content

    async def fetch_many(self, urls: list[str]) -> list[tuple[str, list[Attempt]]]:
        """Fetch several URLs concurrently, preserving input order.

        Returns:
            One ``(content, attempts)`` pair per input URL.
        """
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def bounded(client: httpx.AsyncClient, url: str) -> tuple[str, list[Attempt]]:
            async with semaphore:
                return await self.fetch_with_client(client, url)

        async with httpx.AsyncClient(timeout=30.0) as client:
            return list(await asyncio.gather(*(bounded(client, url) for url in urls)))

    async def fetch_with_client(
        self, client: httpx.AsyncClient, url: str
    ) -> tuple[str, list[Attempt]]:
        try:
            winner, attempts = await first_satisfying(self._strategies, client, url)
        except Exception as e:
            logger.warning("Content fetch failed for %s: %s", url, e)
            return ("", [])
        return (winner.content if winner else "", attempts)
