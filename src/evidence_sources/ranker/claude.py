"""Claude-based relevance scoring on a 1-10 scale."""

import asyncio
import logging

from pydantic import BaseModel, Field

from evidence_sources.data import Argument, Article, Usage, usage_from_response
from evidence_sources.oracle import DEFAULT_MODEL, create_client, parse_reply, response_text

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 5.0
CONTENT_PREVIEW_CHARS = 1500

SYSTEM_PROMPT = """\
You are an expert debate researcher judging evidence. Given an argument and \
an article, rate how strongly the article supports the argument on an \
integer scale from 1 (irrelevant or contradicts it) to 10 (direct, credible, \
specific support).

Respond ONLY with a JSON object of the form {"score": <integer 1-10>}.\
"""


class RelevanceReply(BaseModel):
    """Expected shape of a scoring reply."""

    score: int = Field(ge=1, le=10)


class ClaudeRelevanceScorer:
    """Score articles with one Claude call each, run concurrently.

    Any failure (transport error, non-JSON or out-of-range reply) yields
    ``NEUTRAL_SCORE`` for that article instead of failing the ranking.

    Args:
        model: Anthropic model to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
        max_concurrency: Maximum simultaneous scoring calls.
        timeout_seconds: Timeout per call.
    """

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        *,
        max_concurrency: int = 5,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._client = create_client(api_key, timeout=timeout_seconds)
        self._model = model
        self._max_concurrency = max_concurrency

    async def score(
        self,
        articles: list[Article],
        argument: Argument,
    ) -> tuple[list[float], Usage]:
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def bounded(article: Article) -> tuple[float, Usage]:
            async with semaphore:
                return await self._score_single(article, argument)

        results = await asyncio.gather(*(bounded(a) for a in articles), return_exceptions=True)

        scores: list[float] = []
        total_usage = Usage()
        for article, result in zip(articles, results, strict=True):
            if isinstance(result, BaseException):
                logger.warning("Scoring failed for %s: %s", article.url, result)
                scores.append(NEUTRAL_SCORE)
                continue
            score, usage = result
            scores.append(score)
            total_usage += usage
        return (scores, total_usage)

    async def _score_single(self, article: Article, argument: Argument) -> tuple[float, Usage]:
        user_prompt = (
            f'Argument: "{argument.text}"\n\n'
            f"Article title: {article.title}\n"
            f"Source: {article.source or 'Unknown'}\n"
            f"Content: {article.content[:CONTENT_PREVIEW_CHARS]}"
        )
        response = await self._client.messages.create(
            model=self._model,
            max_tokens=20,
            temperature=0.0,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": user_prompt}],
        )
        usage = usage_from_response(self._model, response)
        try:
            reply = parse_reply(response_text(response), RelevanceReply)
        except ValueError as e:
            logger.warning("Invalid score reply for %s: %s", article.url, e)
            return (NEUTRAL_SCORE, usage)
        return (float(reply.score), usage)
