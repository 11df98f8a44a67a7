"""Pydantic configuration models for evidence discovery components."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from evidence_sources.oracle import DEFAULT_MODEL

# ============================================================
# Content Fetcher Config
# ============================================================


class FetcherConfig(BaseModel):
    """Configuration for the content fetcher strategy chain."""

    firecrawl_enabled: bool = True
    firecrawl_wait_ms: int = 3000
    firecrawl_timeout_seconds: float = 30.0
    direct_timeout_seconds: float = 15.0
    min_content_chars: int = 100
    max_content_chars: int = 10_000
    max_concurrency: int = 5

    model_config = {"frozen": True}


# ============================================================
# Searcher Configs
# ============================================================


class NewsApiSearcherConfig(BaseModel):
    """Configuration for NewsApiSearcher."""

    type: Literal["newsapi"] = "newsapi"
    language: str = "en"
    drop_unscraped: bool = False

    model_config = {"frozen": True}


class GoogleSearcherConfig(BaseModel):
    """Configuration for GoogleSearcher."""

    type: Literal["google"] = "google"
    exclusions: list[str] = Field(default_factory=lambda: ["-filetype:pdf"])
    drop_unscraped: bool = True

    model_config = {"frozen": True}


class ExaSearcherConfig(BaseModel):
    """Configuration for ExaSearcher."""

    type: Literal["exa"] = "exa"
    drop_unscraped: bool = True

    model_config = {"frozen": True}


SearcherConfig = Annotated[
    NewsApiSearcherConfig | GoogleSearcherConfig | ExaSearcherConfig,
    Field(discriminator="type"),
]


# ============================================================
# Query Generator Configs
# ============================================================


class StrategyQueryGeneratorConfig(BaseModel):
    """Configuration for StrategyQueryGenerator."""

    type: Literal["strategy"] = "strategy"

    model_config = {"frozen": True}


class NoOpQueryGeneratorConfig(BaseModel):
    """Pass-through generator (argument as the only query)."""

    type: Literal["noop"] = "noop"

    model_config = {"frozen": True}


QueryGeneratorConfig = Annotated[
    StrategyQueryGeneratorConfig | NoOpQueryGeneratorConfig,
    Field(discriminator="type"),
]


# ============================================================
# Scorer Configs
# ============================================================


class KeywordScorerConfig(BaseModel):
    """Keyword-overlap scorer (no external calls)."""

    type: Literal["keyword"] = "keyword"

    model_config = {"frozen": True}


class ClaudeScorerConfig(BaseModel):
    """Configuration for ClaudeRelevanceScorer."""

    type: Literal["claude"] = "claude"
    model: str = DEFAULT_MODEL
    max_concurrency: int = 5

    model_config = {"frozen": True}


ScorerConfig = Annotated[
    KeywordScorerConfig | ClaudeScorerConfig,
    Field(discriminator="type"),
]


# ============================================================
# Recommender Configs
# ============================================================


class ClaudeRecommenderConfig(BaseModel):
    """Configuration for ClaudeRecommender."""

    type: Literal["claude"] = "claude"
    model: str = DEFAULT_MODEL

    model_config = {"frozen": True}


class NoOpRecommenderConfig(BaseModel):
    """Disable recommendations."""

    type: Literal["none"] = "none"

    model_config = {"frozen": True}


RecommenderConfig = Annotated[
    ClaudeRecommenderConfig | NoOpRecommenderConfig,
    Field(discriminator="type"),
]


# ============================================================
# Pipeline Config
# ============================================================


class PipelineConfig(BaseModel):
    """Configuration for the evidence pipeline."""

    generator: QueryGeneratorConfig = Field(default_factory=StrategyQueryGeneratorConfig)
    searchers: list[SearcherConfig] = Field(default_factory=lambda: [NewsApiSearcherConfig()])
    fetcher: FetcherConfig = Field(default_factory=FetcherConfig)
    scorer: ScorerConfig = Field(default_factory=KeywordScorerConfig)
    recommender: RecommenderConfig = Field(default_factory=ClaudeRecommenderConfig)
    top_k: int = Field(default=10, ge=1, le=10)
    max_results_per_query: int = 5

    model_config = {"frozen": True}


class CardCutterConfig(BaseModel):
    """Configuration for ClaudeCardCutter."""

    model: str = DEFAULT_MODEL

    model_config = {"frozen": True}


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for per-run diagnostic logging."""

    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class EvidenceConfig(BaseModel):
    """Root configuration for evidence discovery."""

    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    card_cutter: CardCutterConfig = Field(default_factory=CardCutterConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
