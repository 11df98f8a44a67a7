"""Factory functions to create components from configuration."""

import logging
from pathlib import Path

from evidence_sources.card.cutter import ClaudeCardCutter
from evidence_sources.config.models import (
    CardCutterConfig,
    ClaudeRecommenderConfig,
    ClaudeScorerConfig,
    EvidenceConfig,
    ExaSearcherConfig,
    FetcherConfig,
    GoogleSearcherConfig,
    KeywordScorerConfig,
    NewsApiSearcherConfig,
    NoOpQueryGeneratorConfig,
    NoOpRecommenderConfig,
    PipelineConfig,
    QueryGeneratorConfig,
    RecommenderConfig,
    ScorerConfig,
    SearcherConfig,
    StrategyQueryGeneratorConfig,
)
from evidence_sources.content.attempts import ContentStrategy
from evidence_sources.content.fetcher import ContentFetcher, DirectHttpStrategy, FirecrawlStrategy
from evidence_sources.oracle import resolve_api_key
from evidence_sources.pipeline.evidence import EvidencePipeline
from evidence_sources.query.base import QueryGenerator
from evidence_sources.query.strategy import NoOpQueryGenerator, StrategyQueryGenerator
from evidence_sources.ranker.base import RelevanceScorer
from evidence_sources.ranker.claude import ClaudeRelevanceScorer
from evidence_sources.ranker.keyword import KeywordScorer
from evidence_sources.ranker.relevance import RelevanceRanker
from evidence_sources.recommend.base import Recommender
from evidence_sources.recommend.claude import ClaudeRecommender, NoOpRecommender
from evidence_sources.run_logger import RunLogger
from evidence_sources.search.base import SourceSearcher
from evidence_sources.search.exa import ExaSearcher
from evidence_sources.search.google import GoogleSearcher
from evidence_sources.search.newsapi import NewsApiSearcher

logger = logging.getLogger(__name__)


def create_fetcher(config: FetcherConfig) -> ContentFetcher:
    """Create the content fetcher strategy chain."""
    strategies: list[ContentStrategy] = []
    if config.firecrawl_enabled:
        strategies.append(
            FirecrawlStrategy(
                wait_for_ms=config.firecrawl_wait_ms,
                timeout_seconds=config.firecrawl_timeout_seconds,
                min_chars=config.min_content_chars,
            )
        )
    strategies.append(
        DirectHttpStrategy(
            timeout_seconds=config.direct_timeout_seconds,
            max_chars=config.max_content_chars,
        )
    )
    return ContentFetcher(strategies, max_concurrency=config.max_concurrency)


def create_searcher(
    config: SearcherConfig, fetcher: ContentFetcher, min_chars: int
) -> SourceSearcher:
    """Create a source searcher from config.

    Raises:
        ConfigurationError: If the provider's credentials are missing.
    """
    if isinstance(config, NewsApiSearcherConfig):
        return NewsApiSearcher(
            fetcher=fetcher,
            language=config.language,
            drop_unscraped=config.drop_unscraped,
            min_chars=min_chars,
        )
    if isinstance(config, GoogleSearcherConfig):
        return GoogleSearcher(
            fetcher=fetcher,
            exclusions=tuple(config.exclusions),
            drop_unscraped=config.drop_unscraped,
            min_chars=min_chars,
        )
    if isinstance(config, ExaSearcherConfig):
        return ExaSearcher(
            fetcher=fetcher,
            drop_unscraped=config.drop_unscraped,
            min_chars=min_chars,
        )
    msg = f"Unknown searcher config type: {type(config)}"
    raise ValueError(msg)


def create_generator(config: QueryGeneratorConfig) -> QueryGenerator:
    """Create a query generator from config."""
    if isinstance(config, StrategyQueryGeneratorConfig):
        return StrategyQueryGenerator()
    if isinstance(config, NoOpQueryGeneratorConfig):
        return NoOpQueryGenerator()
    msg = f"Unknown generator config type: {type(config)}"
    raise ValueError(msg)


def create_scorer(config: ScorerConfig) -> RelevanceScorer:
    """Create a relevance scorer, using keyword overlap when Claude is unavailable."""
    if isinstance(config, ClaudeScorerConfig):
        if resolve_api_key() is None:
            logger.warning("Claude API key not found, using keyword relevance scoring")
            return KeywordScorer()
        return ClaudeRelevanceScorer(model=config.model, max_concurrency=config.max_concurrency)
    if isinstance(config, KeywordScorerConfig):
        return KeywordScorer()
    msg = f"Unknown scorer config type: {type(config)}"
    raise ValueError(msg)


def create_recommender(config: RecommenderConfig) -> Recommender:
    """Create a recommender, disabling recommendations when Claude is unavailable."""
    if isinstance(config, ClaudeRecommenderConfig):
        if resolve_api_key() is None:
            logger.warning("Claude API key not found, skipping recommendation")
            return NoOpRecommender()
        return ClaudeRecommender(model=config.model)
    if isinstance(config, NoOpRecommenderConfig):
        return NoOpRecommender()
    msg = f"Unknown recommender config type: {type(config)}"
    raise ValueError(msg)


def create_pipeline(
    config: PipelineConfig,
    run_logger: RunLogger | None = None,
) -> EvidencePipeline:
    """Create the evidence pipeline from config.

    Raises:
        ConfigurationError: If a configured provider lacks credentials or no
            provider is configured.
    """
    fetcher = create_fetcher(config.fetcher)
    searchers = [
        create_searcher(s, fetcher, config.fetcher.min_content_chars) for s in config.searchers
    ]
    return EvidencePipeline(
        searchers=searchers,
        ranker=RelevanceRanker(create_scorer(config.scorer), top_k=config.top_k),
        generator=create_generator(config.generator),
        recommender=create_recommender(config.recommender),
        max_results_per_query=config.max_results_per_query,
        run_logger=run_logger,
    )


def create_card_cutter(config: CardCutterConfig) -> ClaudeCardCutter:
    """Create the card cutter.

    Raises:
        ConfigurationError: If no Claude API key is available.
    """
    return ClaudeCardCutter(model=config.model)


def create_run_logger(
    config: EvidenceConfig,
    *,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
) -> RunLogger | None:
    """Create the per-run logger, or None when logging is disabled."""
    log_enabled = log_override if log_override is not None else config.logging.enabled
    if not log_enabled:
        return None
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)
    return RunLogger(log_dir=log_dir, enabled=True)


def create_from_config(
    config: EvidenceConfig,
    *,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
) -> tuple[EvidencePipeline, RunLogger | None]:
    """Create a complete pipeline from root config.

    Args:
        config: Root configuration.
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.

    Returns:
        Tuple of (pipeline, run_logger). run_logger is None if logging is disabled.
    """
    run_logger = create_run_logger(
        config, log_override=log_override, log_dir_override=log_dir_override
    )
    pipeline = create_pipeline(config.pipeline, run_logger=run_logger)
    return (pipeline, run_logger)
