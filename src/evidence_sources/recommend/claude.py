"""Claude-based best-article recommendation."""

import logging

from pydantic import BaseModel, Field

from evidence_sources.data import Argument, Article, Recommendation, Usage, usage_from_response
from evidence_sources.oracle import DEFAULT_MODEL, create_client, parse_reply, response_text

logger = logging.getLogger(__name__)

PREVIEW_CHARS = 300

SYSTEM_PROMPT = """\
You are an expert debate researcher. Always respond with valid JSON \
containing recommendedIndex and reason fields.\
"""

USER_PROMPT = """\
Analyze the following articles and recommend the BEST ONE for supporting \
this argument: "{argument}"

ARTICLES TO ANALYZE:
{articles}

INSTRUCTIONS:
1. Consider relevance to the argument
2. Consider credibility of the source
3. Consider recency of the article
4. Consider quality and depth of content
5. Consider author expertise

Return your response in this exact JSON format:
{{
  "recommendedIndex": [number 1-{count}],
  "reason": "Brief explanation of why this article is the best choice for the argument"
}}

Only return the JSON, no other text.\
"""


class RecommendationReply(BaseModel):
    """Expected shape of a recommendation reply (1-based index)."""

    recommendedIndex: int  # noqa: N815
    reason: str = Field(min_length=1)


def _article_summary(article: Article, index: int) -> str:
    preview = article.content[:PREVIEW_CHARS]
    return (
        f'{index + 1}. "{article.title}" by {article.author or "Unknown"} '
        f"({article.source or 'Unknown'})\n"
        f"   Content: {preview}..."
    )


def to_recommendation(reply: RecommendationReply, count: int) -> Recommendation | None:
    """Convert a validated 1-based reply into a 0-based recommendation.

    Returns None if the index does not point at one of ``count`` articles.
    """
    index = reply.recommendedIndex - 1
    if not 0 <= index < count:
        return None
    return Recommendation(index=index, reason=reply.reason)


class ClaudeRecommender:
    """Ask Claude to single out the best article for an argument.

    Advisory only: transport errors, malformed replies and out-of-range
    indices all produce ``None``.

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
        timeout_seconds: float = 30.0,
    ) -> None:
        self._client = create_client(api_key, timeout=timeout_seconds)
        self._model = model

    async def recommend(
        self,
        articles: list[Article],
        argument: Argument,
    ) -> tuple[Recommendation | None, Usage]:
        if not articles:
            return (None, Usage())

        prompt = USER_PROMPT.format(
            argument=argument.text,
            articles="\n\n".join(_article_summary(a, i) for i, a in enumerate(articles)),
            count=len(articles),
        )
        try:
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=500,
                temperature=0.3,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as e:
            logger.warning("Recommendation request failed: %s", e)
            return (None, Usage())

        usage = usage_from_response(self._model, response)
        try:
            reply = parse_reply(response_text(response), RecommendationReply)
        except ValueError as e:
            logger.warning("Failed to parse recommendation: %s", e)
            return (None, usage)

        recommendation = to_recommendation(reply, len(articles))
        if recommendation is None:
            logger.warning(
                "Recommended index %d out of range for %d articles",
                reply.recommendedIndex,
                len(articles),
            )
        return (recommendation, usage)


class NoOpRecommender:
    """Recommender that never recommends; used when no oracle is configured."""

    async def recommend(
        self,
        articles: list[Article],
        argument: Argument,
    ) -> tuple[Recommendation | None, Usage]:
        return (None, Usage())
