"""Protocol for relevance scoring."""

from typing import Protocol

from evidence_sources.data import Argument, Article, Usage


class RelevanceScorer(Protocol):
    """Interface for scoring articles against an argument."""

    async def score(
        self,
        articles: list[Article],
        argument: Argument,
    ) -> tuple[list[float], Usage]:
        """Score each article's relevance to the argument.

        Implementations never raise for oracle failures; an unscorable
        article gets a default score.

        Args:
            articles: Articles to score.
            argument: The argument to support.

        Returns:
            Tuple of (one score per article, in input order; usage).
        """
        ...
