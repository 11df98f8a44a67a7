from evidence_sources.recommend.base import Recommender
from evidence_sources.recommend.claude import ClaudeRecommender, NoOpRecommender

__all__ = [
    "ClaudeRecommender",
    "NoOpRecommender",
    "Recommender",
]
