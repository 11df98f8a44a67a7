from typing import Protocol

from evidence_sources.data import Article, SearchQuery, Usage
from evidence_sources.run_logger import RunLogger


class SourceSearcher(Protocol):
    """Interface for searching articles that may support an argument."""

    async def search(
        self,
        queries: list[SearchQuery],
        *,
        max_results_per_query: int = 5,
        run_logger: RunLogger | None = None,
    ) -> tuple[list[Article], Usage]:
        """Search for articles matching the given queries.

        Implementations never raise for provider failures; a failed call
        contributes no articles.

        Args:
            queries: Search queries, the first being the argument verbatim.
            max_results_per_query: Maximum hits requested per provider call.
            run_logger: Optional per-run diagnostics sink.

        Returns:
            Tuple of (URL-deduplicated articles with content, usage).
        """
        ...
