"""Claude-based debate card cutting."""

import logging
import math
from dataclasses import dataclass

import anthropic
from pydantic import BaseModel

from evidence_sources.card.citation import build_citation
from evidence_sources.data import CutCard, Usage, usage_from_response
from evidence_sources.errors import ClientInputError, ProviderError, require_key
from evidence_sources.oracle import (
    DEFAULT_MODEL,
    create_client,
    parse_reply,
    resolve_api_key,
    response_text,
)

logger = logging.getLogger(__name__)

# Share of the content highlighted in the fallback card.
FALLBACK_HIGHLIGHT_RATIO = 0.25

SYSTEM_PROMPT = """\
You are an expert debate card cutter. Follow this two-step process: \
1) Extract a 6-14 sentence passage from the article that best supports the \
user's specific argument, 2) Cut that passage down to about 40% using ONLY \
the original words (no summarization). Be selective but err on the side of \
keeping MORE content rather than cutting too much. Always respond with valid \
JSON containing cutContent, tag, and citation fields. Format citations like \
"Platt 25" for author last name and year, followed by full citation details \
and URL.\
"""

USER_PROMPT = """\
Create a debate card from the source below that supports this argument: \
"{argument}"

Markup rules:
- Wrap kept words in <mark class="highlight">...</mark>
- Wrap removed words in <span class="cut">...</span>
- Use only words from the original passage, in order

The tag is ONE concise sentence stating what the card proves for the \
argument, e.g. "climate change leads to extinction". Do not write "this card \
proves" or "evidence for".

Source Title: {title}
Source Author: {author}
Source Date: {date}
Source URL: {url}
Source Content: {content}

Return JSON:
{{
  "cutContent": "HTML with <mark class=\\"highlight\\"> and <span class=\\"cut\\"> tags",
  "tag": "One-sentence tag",
  "citation": "AuthorLastName Year - Full citation details with URL"
}}\
"""


@dataclass(frozen=True)
class CutCardRequest:
    """Input for cutting a card."""

    content: str
    title: str
    argument: str
    author: str | None = None
    publish_date: str | None = None
    url: str | None = None


class CardReply(BaseModel):
    """Expected shape of a card-cutting reply.

    Older prompts produced ``summary`` instead of ``tag``; either is accepted.
    """

    cutContent: str  # noqa: N815
    tag: str | None = None
    summary: str | None = None
    citation: str | None = None


def fallback_card(request: CutCardRequest, citation: str) -> CutCard:
    """Highlight the first quarter of the content and cut the rest."""
    split = math.floor(len(request.content) * FALLBACK_HIGHLIGHT_RATIO)
    cut_content = (
        f'<mark class="highlight">{request.content[:split]}</mark>'
        f'<span class="cut">{request.content[split:]}</span>'
    )
    return CutCard(cut_content=cut_content, tag=request.argument, citation=citation)


class ClaudeCardCutter:
    """Cut a debate card from article content with one Claude call.

    Args:
        model: Anthropic model to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
        timeout_seconds: Timeout for the call.
    """

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        *,
        timeout_seconds: float = 60.0,
    ) -> None:
        resolved_key = require_key(resolve_api_key(api_key), "CLAUDE_API_KEY", "Claude")
        self._client = create_client(resolved_key, timeout=timeout_seconds)
        self._model = model

    async def cut(self, request: CutCardRequest) -> tuple[CutCard, Usage]:
        """Cut a card supporting ``request.argument``.

        Raises:
            ClientInputError: If content or argument is missing.
            ProviderError: If the Claude call itself fails.
        """
        if not request.content or not request.argument:
            raise ClientInputError("Content and argument are required")

        citation = build_citation(
            request.title, request.author, request.publish_date, request.url
        )
        prompt = USER_PROMPT.format(
            argument=request.argument,
            title=request.title,
            author=request.author or "Unknown",
            date=request.publish_date or "Unknown",
            url=request.url or "Unknown",
            content=request.content,
        )

        logger.info(
            "Cutting card for %r (%d chars of content)", request.title, len(request.content)
        )
        try:
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=2000,
                temperature=0.3,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            raise ProviderError("Failed to process card cutting", details={"cause": str(e)}) from e

        usage = usage_from_response(self._model, response)
        try:
            reply = parse_reply(response_text(response), CardReply)
        except ValueError as e:
            logger.warning("Failed to parse card reply, using fallback card: %s", e)
            return (fallback_card(request, citation), usage)

        card = CutCard(
            cut_content=reply.cutContent,
            tag=reply.tag or reply.summary or request.argument,
            citation=reply.citation or citation,
        )
        return (card, usage)
