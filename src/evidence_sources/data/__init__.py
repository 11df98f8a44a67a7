"""Data models for evidence discovery."""

from evidence_sources.data.models import (
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
    usage_from_response,
)

__all__ = [
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
    "usage_from_response",
]
