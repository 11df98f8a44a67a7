"""Evidence Sources: find, rank and excerpt articles that support a debate argument."""

from evidence_sources.card import ClaudeCardCutter, CutCardRequest, build_citation
from evidence_sources.config import EvidenceConfig, create_from_config, load_config
from evidence_sources.content import (
    Attempt,
    ContentFetcher,
    DirectHttpStrategy,
    FirecrawlStrategy,
    extract_article_text,
    first_satisfying,
)
from evidence_sources.data import (
    APICallUsage,
    Argument,
    Article,
    CutCard,
    Recommendation,
    ScoredArticle,
    SearchHit,
    SearchQuery,
    SearchResponse,
    Usage,
)
from evidence_sources.errors import (
    ClientInputError,
    ConfigurationError,
    EvidenceError,
    ProviderError,
)
from evidence_sources.pipeline import EvidencePipeline, Pipeline
from evidence_sources.query import (
    NoOpQueryGenerator,
    QueryGenerator,
    StrategyQueryGenerator,
    extract_key_terms,
)
from evidence_sources.ranker import (
    ClaudeRelevanceScorer,
    KeywordScorer,
    RelevanceRanker,
    RelevanceScorer,
)
from evidence_sources.recommend import ClaudeRecommender, NoOpRecommender, Recommender
from evidence_sources.run_logger import RunLogger
from evidence_sources.search import ExaSearcher, GoogleSearcher, NewsApiSearcher, SourceSearcher
from evidence_sources.service import SearchService

__all__ = [
    # Models
    "APICallUsage",
    "Argument",
    "Article",
    "CutCard",
    "Recommendation",
    "ScoredArticle",
    "SearchHit",
    "SearchQuery",
    "SearchResponse",
    "Usage",
    # Errors
    "ClientInputError",
    "ConfigurationError",
    "EvidenceError",
    "ProviderError",
    # Functions
    "build_citation",
    "extract_article_text",
    "extract_key_terms",
    "first_satisfying",
    # Protocols
    "Pipeline",
    "QueryGenerator",
    "Recommender",
    "RelevanceScorer",
    "SourceSearcher",
    # Query Generators
    "NoOpQueryGenerator",
    "StrategyQueryGenerator",
    # Content
    "Attempt",
    "ContentFetcher",
    "DirectHttpStrategy",
    "FirecrawlStrategy",
    # Searchers
    "ExaSearcher",
    "GoogleSearcher",
    "NewsApiSearcher",
    # Ranking
    "ClaudeRelevanceScorer",
    "KeywordScorer",
    "RelevanceRanker",
    # Recommenders
    "ClaudeRecommender",
    "NoOpRecommender",
    # Card cutting
    "ClaudeCardCutter",
    "CutCardRequest",
    # Pipelines
    "EvidencePipeline",
    # Service
    "SearchService",
    # Logging
    "RunLogger",
    # Config
    "EvidenceConfig",
    "create_from_config",
    "load_config",
]
