from evidence_sources.search.base import SourceSearcher
from evidence_sources.search.exa import ExaSearcher
from evidence_sources.search.google import GoogleSearcher
from evidence_sources.search.newsapi import NewsApiSearcher

__all__ = [
    "ExaSearcher",
    "GoogleSearcher",
    "NewsApiSearcher",
    "SourceSearcher",
]
