"""Tests for GoogleSearcher and pagemap metadata extraction."""

from unittest.mock import MagicMock

import httpx
import pytest

from evidence_sources.data import SearchQuery
from evidence_sources.errors import ConfigurationError
from evidence_sources.search.google import GOOGLE_SEARCH_URL, GoogleSearcher
from evidence_sources.search.metadata import extract_pagemap_metadata

FULL_TEXT = "Long scraped article body with plenty of words. " * 5


def _ok(items: list[dict]) -> MagicMock:
    response = MagicMock()
    response.json.return_value = {"items": items}
    response.raise_for_status = MagicMock()
    return response


def _failed() -> MagicMock:
    response = MagicMock()
    response.raise_for_status = MagicMock(
        side_effect=httpx.HTTPStatusError(
            "400 Bad Request", request=MagicMock(), response=MagicMock()
        )
    )
    return response


def _item(link: str, **extra) -> dict:
    return {
        "title": "Coastal flooding study",
        "link": link,
        "snippet": "Snippet text",
        "displayLink": "www.example.com",
        "pagemap": {
            "newsarticle": [{"author": "Jane Platt", "datepublished": "2023-06-01"}],
            "metatags": [{"og:site_name": "Example Times"}],
        },
        **extra,
    }


@pytest.fixture
def queries() -> list[SearchQuery]:
    return [
        SearchQuery(text="Sea level rise threatens cities", intent="broad"),
        SearchQuery(text='"sea" "level"', intent="exact phrase"),
    ]


class TestGoogleSearcher:
    """Tests for GoogleSearcher."""

    def test_init_requires_api_key(self) -> None:
        with pytest.raises(ConfigurationError, match="GOOGLE_API_KEY"):
            GoogleSearcher(engine_id="cx")

    def test_init_requires_engine_id(self) -> None:
        with pytest.raises(ConfigurationError, match="GOOGLE_SEARCH_ENGINE_ID"):
            GoogleSearcher(api_key="k")

    async def test_searches_first_query_with_exclusions(
        self, fake_fetcher, queries, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls: list[dict] = []

        async def mock_get(*args, **kwargs):
            assert args[1] == GOOGLE_SEARCH_URL
            calls.append(kwargs["params"])
            return _ok([_item("https://www.example.com/flood")])

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        fetcher = fake_fetcher({"https://www.example.com/flood": FULL_TEXT})
        searcher = GoogleSearcher(api_key="k", engine_id="cx", fetcher=fetcher)
        articles, usage = await searcher.search(queries, max_results_per_query=25)

        assert len(calls) == 1
        assert calls[0]["q"] == "Sea level rise threatens cities -filetype:pdf"
        assert calls[0]["cx"] == "cx"
        assert calls[0]["num"] == 10
        assert usage.google_requests == 1

        assert len(articles) == 1
        article = articles[0]
        assert article.content == FULL_TEXT
        assert article.author == "Jane Platt"
        assert article.publish_date == "2023"
        assert article.source == "Example Times"
        assert article.query == queries[0]

    async def test_retries_without_exclusions(
        self, fake_fetcher, queries, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        seen: list[str] = []

        async def mock_get(*args, **kwargs):
            seen.append(kwargs["params"]["q"])
            if "-filetype:pdf" in kwargs["params"]["q"]:
                return _failed()
            return _ok([_item("https://www.example.com/flood")])

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        fetcher = fake_fetcher({"https://www.example.com/flood": FULL_TEXT})
        searcher = GoogleSearcher(api_key="k", engine_id="cx", fetcher=fetcher)
        articles, usage = await searcher.search(queries)

        assert seen == [
            "Sea level rise threatens cities -filetype:pdf",
            "Sea level rise threatens cities",
        ]
        assert len(articles) == 1
        assert usage.google_requests == 2

    async def test_non_object_body_triggers_retry(
        self, fake_fetcher, queries, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_get(*args, **kwargs):
            if "-filetype:pdf" in kwargs["params"]["q"]:
                response = MagicMock()
                response.json.return_value = ["unexpected", "list"]
                response.raise_for_status = MagicMock()
                return response
            return _ok([_item("https://www.example.com/flood")])

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        fetcher = fake_fetcher({"https://www.example.com/flood": FULL_TEXT})
        searcher = GoogleSearcher(api_key="k", engine_id="cx", fetcher=fetcher)
        articles, usage = await searcher.search(queries)

        assert [a.url for a in articles] == ["https://www.example.com/flood"]
        assert usage.google_requests == 2

    async def test_both_attempts_fail(
        self, fake_fetcher, queries, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_get(*args, **kwargs):
            return _failed()

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        fetcher = fake_fetcher({})
        searcher = GoogleSearcher(api_key="k", engine_id="cx", fetcher=fetcher)
        articles, usage = await searcher.search(queries)

        assert articles == []
        assert usage.google_requests == 2
        fetcher.fetch_many.assert_not_called()

    async def test_denylisted_and_unscraped_hits_dropped(
        self, fake_fetcher, queries, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_get(*args, **kwargs):
            return _ok(
                [
                    _item("https://en.wikipedia.org/wiki/Sea_level_rise"),
                    _item("https://www.example.com/flood"),
                    _item("https://paywalled.com/story"),
                ]
            )

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        fetcher = fake_fetcher(
            {"https://www.example.com/flood": FULL_TEXT, "https://paywalled.com/story": "Sub"}
        )
        searcher = GoogleSearcher(api_key="k", engine_id="cx", fetcher=fetcher)
        articles, _ = await searcher.search(queries)

        assert [a.url for a in articles] == ["https://www.example.com/flood"]
        fetched_urls = fetcher.fetch_many.call_args.args[0]
        assert "https://en.wikipedia.org/wiki/Sea_level_rise" not in fetched_urls

    async def test_keep_snippet_when_not_dropping(
        self, fake_fetcher, queries, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_get(*args, **kwargs):
            return _ok([_item("https://paywalled.com/story")])

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        searcher = GoogleSearcher(
            api_key="k", engine_id="cx", fetcher=fake_fetcher({}), drop_unscraped=False
        )
        articles, _ = await searcher.search(queries)
        assert articles[0].content == "Snippet text"

    async def test_empty_queries(self, fake_fetcher) -> None:
        searcher = GoogleSearcher(api_key="k", engine_id="cx", fetcher=fake_fetcher({}))
        articles, usage = await searcher.search([])
        assert articles == []
        assert usage.google_requests == 0


class TestExtractPagemapMetadata:
    """Tests for extract_pagemap_metadata."""

    def test_none(self) -> None:
        assert extract_pagemap_metadata(None) == (None, None, None)

    def test_item_blocks_take_precedence(self) -> None:
        pagemap = {
            "article": [{"author": "Item Author", "datepublished": "2022-01-01"}],
            "metatags": [{"author": "Meta Author", "article:published_time": "2020-01-01"}],
        }
        author, date, _ = extract_pagemap_metadata(pagemap)
        assert author == "Item Author"
        assert date == "2022-01-01"

    def test_metatags_fallback(self) -> None:
        pagemap = {
            "metatags": [
                {
                    "article:author": "https://example.com/authors/jane",
                    "author": "By Jane Platt",
                    "article:published_time": "2021-05-05T00:00:00Z",
                    "og:site_name": "Example",
                }
            ]
        }
        assert extract_pagemap_metadata(pagemap) == (
            "Jane Platt",
            "2021-05-05T00:00:00Z",
            "Example",
        )

    def test_ignores_malformed_blocks(self) -> None:
        pagemap = {"metatags": "not a list", "newsarticle": ["not a dict"]}
        assert extract_pagemap_metadata(pagemap) == (None, None, None)
