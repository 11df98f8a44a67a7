"""Evidence discovery pipeline: queries, search, dedup, rank, recommend."""

import asyncio
import logging
import time

from evidence_sources.data import Argument, Article, SearchResponse, Usage
from evidence_sources.errors import ClientInputError, ConfigurationError
from evidence_sources.query.base import QueryGenerator
from evidence_sources.query.strategy import StrategyQueryGenerator
from evidence_sources.ranker.relevance import RelevanceRanker
from evidence_sources.recommend.base import Recommender
from evidence_sources.recommend.claude import NoOpRecommender
from evidence_sources.run_logger import RunLogger
from evidence_sources.search.backfill import dedupe_by_url
from evidence_sources.search.base import SourceSearcher

logger = logging.getLogger(__name__)


class EvidencePipeline:
    """Pipeline from an argument to ranked, deduplicated supporting articles.

    Flow:
    1. Validate the argument (fails fast, before any external call)
    2. Generator expands the argument into queries
    3. All searchers execute the queries in parallel
    4. Results are deduplicated by URL (searcher order, first wins)
    5. Ranker scores, sorts and truncates to top-k
    6. Recommender picks the best article (advisory)

    Args:
        searchers: Source searchers; at least one is required.
        ranker: Relevance ranker (holds the scorer and top-k).
        generator: Query generator. Defaults to the rule-based strategies.
        recommender: Best-article recommender. Defaults to no recommendation.
        max_results_per_query: Max hits requested per provider call.
        run_logger: Optional RunLogger for per-run diagnostics.
    """

    def __init__(
        self,
        searchers: list[SourceSearcher],
        ranker: RelevanceRanker,
        *,
        generator: QueryGenerator | None = None,
        recommender: Recommender | None = None,
        max_results_per_query: int = 5,
        run_logger: RunLogger | None = None,
    ) -> None:
        if not searchers:
            raise ConfigurationError("No search provider configured")
        self._searchers = searchers
        self._ranker = ranker
        self._generator = generator or StrategyQueryGenerator()
        self._recommender = recommender or NoOpRecommender()
        self._max_results = max_results_per_query
        self._run_logger = run_logger

    async def run(self, argument: Argument | str) -> tuple[SearchResponse, Usage]:
        """Execute the pipeline.

        Args:
            argument: The user's claim.

        Returns:
            Tuple of (search response, usage). Zero results is a valid response.

        Raises:
            ClientInputError: If the argument is empty or blank.
        """
        if isinstance(argument, str):
            argument = Argument(text=argument)
        if not argument.text or not argument.text.strip():
            raise ClientInputError("Query parameter is required")

        run_log = self._run_logger.start_run("evidence", argument) if self._run_logger else None

        total_usage = Usage()

        # Step 1: Build queries
        t0 = time.monotonic()
        queries = self._generator.generate(argument)
        if run_log:
            run_log.log_stage(
                stage="query_generation",
                component=type(self._generator).__name__,
                input_data=argument,
                output_data=queries,
                usage=None,
                duration_seconds=time.monotonic() - t0,
            )
        logger.info("Search queries: %s", [q.text for q in queries])

        # Step 2: Search with all searchers in parallel
        t0 = time.monotonic()
        search_tasks = [
            searcher.search(
                queries,
                max_results_per_query=self._max_results,
                run_logger=run_log,
            )
            for searcher in self._searchers
        ]
        search_results = await asyncio.gather(*search_tasks, return_exceptions=True)
        search_duration = time.monotonic() - t0

        # Step 3: Deduplicate by URL
        collected: list[Article] = []
        for i, search_result in enumerate(search_results):
            if isinstance(search_result, BaseException):
                logger.warning(
                    "Error during search with %s: %s",
                    type(self._searchers[i]).__name__,
                    search_result,
                )
                continue
            articles, search_usage = search_result
            total_usage += search_usage
            collected.extend(articles)

        unique = dedupe_by_url(collected)
        if run_log:
            run_log.log_stage(
                stage="deduplication",
                component="url_dedup",
                input_data={"article_count": len(collected)},
                output_data={"article_count": len(unique)},
                usage=None,
                duration_seconds=search_duration,
            )

        # Step 4: Rank and truncate
        t0 = time.monotonic()
        ranked, rank_usage = await self._ranker.rank(unique, argument)
        total_usage += rank_usage
        results = [s.article for s in ranked]
        if run_log:
            run_log.log_stage(
                stage="ranking",
                component=type(self._ranker).__name__,
                input_data={"article_count": len(unique)},
                output_data=[{"url": s.article.url, "score": s.score} for s in ranked],
                usage=rank_usage,
                duration_seconds=time.monotonic() - t0,
            )
        logger.info("Found %d unique relevant articles", len(results))

        # Step 5: Recommend (advisory)
        recommendation = None
        if results:
            t0 = time.monotonic()
            try:
                recommendation, rec_usage = await self._recommender.recommend(results, argument)
                total_usage += rec_usage
            except Exception as e:
                logger.warning("Recommendation failed: %s", e)
                recommendation = None
            if recommendation is not None and not 0 <= recommendation.index < len(results):
                recommendation = None
            if run_log:
                run_log.log_stage(
                    stage="recommendation",
                    component=type(self._recommender).__name__,
                    input_data={"article_count": len(results)},
                    output_data=recommendation,
                    usage=None,
                    duration_seconds=time.monotonic() - t0,
                )

        if run_log:
            run_log.finish_run(
                results,
                total_usage,
                recommended_index=recommendation.index if recommendation else None,
            )

        return (SearchResponse(results=results, recommended_article=recommendation), total_usage)
