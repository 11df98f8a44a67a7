"""Relevance ranking with stable ordering and top-k truncation."""

from evidence_sources.data import Argument, Article, ScoredArticle, Usage
from evidence_sources.ranker.base import RelevanceScorer

DEFAULT_TOP_K = 10


class RelevanceRanker:
    """Order articles by descending relevance and keep the top ``top_k``.

    Sorting is stable, so equally scored articles keep their input order and
    re-ranking an already ranked list is a no-op.

    Args:
        scorer: Relevance scorer to use.
        top_k: Number of articles to keep.
    """

    def __init__(self, scorer: RelevanceScorer, top_k: int = DEFAULT_TOP_K) -> None:
        self._scorer = scorer
        self._top_k = top_k

    async def rank(
        self,
        articles: list[Article],
        argument: Argument,
    ) -> tuple[list[ScoredArticle], Usage]:
        if not articles:
            return ([], Usage())
        scores, usage = await self._scorer.score(articles, argument)
        scored = [ScoredArticle(article=a, score=s) for a, s in zip(articles, scores, strict=True)]
        ranked = sorted(scored, key=lambda s: s.score, reverse=True)
        return (ranked[: self._top_k], usage)
