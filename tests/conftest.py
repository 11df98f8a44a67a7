"""Shared fixtures."""

from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from evidence_sources.content.attempts import Attempt


@pytest.fixture
def fake_fetcher() -> Callable[[dict[str, str]], MagicMock]:
    """Build a content fetcher stub returning canned text per URL."""

    def build(contents: dict[str, str]) -> MagicMock:
        def fetch_many(urls: list[str]) -> list[tuple[str, list[Attempt]]]:
            results = []
            for url in urls:
                text = contents.get(url, "")
                attempt = Attempt.success("stub", text) if text else Attempt.failure("stub", "none")
                results.append((text, [attempt]))
            return results

        fetcher = MagicMock()
        fetcher.fetch_many = AsyncMock(side_effect=fetch_many)
        return fetcher

    return build


@pytest.fixture(autouse=True)
def _clear_provider_keys(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real credentials from the environment out of tests."""
    for name in (
        "NEWS_API_KEY",
        "GOOGLE_API_KEY",
        "GOOGLE_SEARCH_ENGINE_ID",
        "EXA_API_KEY",
        "FIRECRAWL_API_KEY",
        "CLAUDE_API_KEY",
        "ANTHROPIC_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def api_response() -> Callable[[str], MagicMock]:
    """Build a mock Anthropic messages response carrying ``text``."""

    def build(text: str) -> MagicMock:
        text_block = MagicMock()
        text_block.text = text
        text_block.type = "text"

        usage = MagicMock()
        usage.input_tokens = 120
        usage.output_tokens = 8

        response = MagicMock()
        response.content = [text_block]
        response.usage = usage
        return response

    return build
