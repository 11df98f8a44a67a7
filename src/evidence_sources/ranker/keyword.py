"""Keyword-overlap relevance scoring."""

from evidence_sources.data import Argument, Article, Usage
from evidence_sources.query.keyterms import extract_key_terms


def keyword_score(article: Article, terms: list[str]) -> int:
    """Count key terms appearing in the article's title or content (case-insensitive)."""
    title = article.title.lower()
    content = article.content.lower()
    return sum(1 for term in terms if term in title or term in content)


class KeywordScorer:
    """Score articles by how many of the argument's key terms they mention.

    No external calls are made, so this is the fallback when no oracle is
    configured.
    """

    async def score(
        self,
        articles: list[Article],
        argument: Argument,
    ) -> tuple[list[float], Usage]:
        terms = extract_key_terms(argument.text)
        return ([float(keyword_score(a, terms)) for a in articles], Usage())
