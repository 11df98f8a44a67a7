"""Relevance ranking module."""

from evidence_sources.ranker.base import RelevanceScorer
from evidence_sources.ranker.claude import NEUTRAL_SCORE, ClaudeRelevanceScorer
from evidence_sources.ranker.keyword import KeywordScorer, keyword_score
from evidence_sources.ranker.relevance import DEFAULT_TOP_K, RelevanceRanker

__all__ = [
    "DEFAULT_TOP_K",
    "NEUTRAL_SCORE",
    "ClaudeRelevanceScorer",
    "KeywordScorer",
    "RelevanceRanker",
    "RelevanceScorer",
    "keyword_score",
]
