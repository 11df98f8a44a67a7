"""Configuration module for evidence discovery."""

from evidence_sources.config.factory import create_card_cutter, create_from_config
from evidence_sources.config.loader import get_default_config_path, load_config
from evidence_sources.config.models import (
    CardCutterConfig,
    ClaudeRecommenderConfig,
    ClaudeScorerConfig,
    EvidenceConfig,
    ExaSearcherConfig,
    FetcherConfig,
    GoogleSearcherConfig,
    KeywordScorerConfig,
    LoggingConfig,
    NewsApiSearcherConfig,
    NoOpQueryGeneratorConfig,
    NoOpRecommenderConfig,
    PipelineConfig,
    StrategyQueryGeneratorConfig,
)

__all__ = [
    "CardCutterConfig",
    "ClaudeRecommenderConfig",
    "ClaudeScorerConfig",
    "EvidenceConfig",
    "ExaSearcherConfig",
    "FetcherConfig",
    "GoogleSearcherConfig",
    "KeywordScorerConfig",
    "LoggingConfig",
    "NewsApiSearcherConfig",
    "NoOpQueryGeneratorConfig",
    "NoOpRecommenderConfig",
    "PipelineConfig",
    "StrategyQueryGeneratorConfig",
    "create_card_cutter",
    "create_from_config",
    "get_default_config_path",
    "load_config",
]
