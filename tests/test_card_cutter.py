"""Tests for citation building and card cutting."""

import dataclasses
import json
from unittest.mock import AsyncMock

import anthropic
import httpx
import pytest

from evidence_sources.card import (
    ClaudeCardCutter,
    CutCardRequest,
    author_last_name,
    build_citation,
    fallback_card,
)
from evidence_sources.errors import ClientInputError, ConfigurationError, ProviderError

CONTENT = "Sea levels rose 10 centimeters. Coastal cities face flooding. " * 4


@pytest.fixture
def card_request() -> CutCardRequest:
    return CutCardRequest(
        content=CONTENT,
        title="Rising Seas",
        argument="Climate change threatens coastal cities",
        author="Jane Platt",
        publish_date="2025-03-01",
        url="https://example.com/seas",
    )


def _cutter(create: AsyncMock) -> ClaudeCardCutter:
    cutter = ClaudeCardCutter(api_key="test-key")
    object.__setattr__(cutter._client.messages, "create", create)
    return cutter


class TestCitation:
    """Tests for build_citation."""

    def test_author_last_name(self) -> None:
        assert author_last_name("Jane Q. Platt") == "Platt"
        assert author_last_name("  ") == ""
        assert author_last_name(None) == ""

    def test_full_citation(self) -> None:
        citation = build_citation(
            "Rising Seas", "Jane Platt", "2025-03-01", "https://example.com/seas"
        )
        assert citation == (
            "Platt 2025 - Jane Platt, 2025-03-01, Rising Seas, https://example.com/seas"
        )

    def test_missing_fields(self) -> None:
        assert build_citation("Rising Seas") == "- Unknown, Unknown, Rising Seas, No URL"

    def test_year_without_author(self) -> None:
        citation = build_citation("T", publish_date="2019-07-04")
        assert citation == "2019 - Unknown, 2019-07-04, T, No URL"


def test_fallback_card_highlights_first_quarter() -> None:
    request = CutCardRequest(content="abcdefgh", title="T", argument="Arg")
    card = fallback_card(request, "cite")
    assert card.cut_content == '<mark class="highlight">ab</mark><span class="cut">cdefgh</span>'
    assert card.tag == "Arg"
    assert card.citation == "cite"


class TestClaudeCardCutter:
    """Tests for ClaudeCardCutter."""

    def test_requires_api_key(self) -> None:
        with pytest.raises(ConfigurationError, match="CLAUDE_API_KEY"):
            ClaudeCardCutter()

    def test_accepts_anthropic_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ANTHROPIC_API_KEY", "env-key")
        ClaudeCardCutter()

    async def test_cut_returns_card(self, card_request, api_response) -> None:
        reply = {
            "cutContent": '<mark class="highlight">Sea levels rose</mark>',
            "tag": "Coastal cities are flooding",
            "citation": "Platt 25 - Jane Platt, 2025",
        }
        create = AsyncMock(return_value=api_response(json.dumps(reply)))
        card, usage = await _cutter(create).cut(card_request)

        assert card.cut_content == reply["cutContent"]
        assert card.tag == reply["tag"]
        assert card.citation == reply["citation"]
        assert len(usage.api_calls) == 1

        prompt = create.call_args.kwargs["messages"][0]["content"]
        assert card_request.argument in prompt
        assert "Source Author: Jane Platt" in prompt

    async def test_summary_maps_to_tag(self, card_request, api_response) -> None:
        reply = {"cutContent": "<mark>x</mark>", "summary": "Seas are rising"}
        create = AsyncMock(return_value=api_response(json.dumps(reply)))
        card, _ = await _cutter(create).cut(card_request)

        assert card.tag == "Seas are rising"
        assert card.citation == build_citation(
            card_request.title, card_request.author, card_request.publish_date, card_request.url
        )

    async def test_unparseable_reply_uses_fallback(self, card_request, api_response) -> None:
        create = AsyncMock(return_value=api_response("Here is your card: ..."))
        card, _ = await _cutter(create).cut(card_request)

        split = len(CONTENT) // 4
        assert card.cut_content.startswith(f'<mark class="highlight">{CONTENT[:split]}</mark>')
        assert card.cut_content.endswith(f'<span class="cut">{CONTENT[split:]}</span>')
        assert card.tag == card_request.argument
        assert card.citation.startswith("Platt 2025 - ")

    @pytest.mark.parametrize("field", ["content", "argument"])
    async def test_missing_input(self, card_request, field: str) -> None:
        create = AsyncMock()
        request = dataclasses.replace(card_request, **{field: ""})
        with pytest.raises(ClientInputError):
            await _cutter(create).cut(request)
        create.assert_not_called()

    async def test_api_error_raises_provider_error(self, card_request) -> None:
        error = anthropic.APIConnectionError(request=httpx.Request("POST", "https://api"))
        create = AsyncMock(side_effect=error)
        with pytest.raises(ProviderError):
            await _cutter(create).cut(card_request)
