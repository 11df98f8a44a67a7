from typing import Protocol

from evidence_sources.data import Argument, Article, Recommendation, Usage


class Recommender(Protocol):
    """Interface for picking the single best article for an argument."""

    async def recommend(
        self,
        articles: list[Article],
        argument: Argument,
    ) -> tuple[Recommendation | None, Usage]:
        """Return a recommendation whose index is valid for ``articles``, or None."""
        ...
