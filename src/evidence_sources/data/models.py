"""Core data models for evidence discovery."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Argument:
    """A user's claim to be supported with evidence."""

    text: str


@dataclass(frozen=True)
class SearchQuery:
    """A search query derived from an argument."""

    text: str
    intent: str


@dataclass(frozen=True)
class SearchHit:
    """Provider-native search result, consumed immediately into an Article."""

    title: str
    url: str
    snippet: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Article:
    """A normalized search result with full-text content.

    ``url`` is the deduplication key. ``content`` is never None; an empty
    string means no text could be obtained. ``publish_date`` is a 4-digit year.
    """

    url: str
    title: str = ""
    content: str = ""
    author: str | None = None
    publish_date: str | None = None
    source: str | None = None
    query: SearchQuery | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the external JSON shape (camelCase, optional keys omitted)."""
        data: dict[str, Any] = {
            "title": self.title,
            "url": self.url,
            "content": self.content,
        }
        if self.author:
            data["author"] = self.author
        if self.publish_date:
            data["publishDate"] = self.publish_date
        if self.source:
            data["source"] = self.source
        return data


@dataclass(frozen=True)
class ScoredArticle:
    """An article paired with its relevance score during ranking."""

    article: Article
    score: float


@dataclass(frozen=True)
class Recommendation:
    """The oracle's pick of the best article (0-based index into results)."""

    index: int
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {"index": self.index, "reason": self.reason}


@dataclass(frozen=True)
class SearchResponse:
    """Final pipeline output."""

    results: list[Article]
    recommended_article: Recommendation | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "results": [a.to_dict() for a in self.results],
            "recommendedArticle": (
                self.recommended_article.to_dict() if self.recommended_article else None
            ),
        }


@dataclass(frozen=True)
class CutCard:
    """A debate card cut from an article."""

    cut_content: str
    tag: str
    citation: str

    def to_dict(self) -> dict[str, Any]:
        return {"cutContent": self.cut_content, "tag": self.tag, "citation": self.citation}


@dataclass(frozen=True)
class APICallUsage:
    """Usage from a single oracle call."""

    model: str
    input_tokens: int = 0
    output_tokens: int = 0


@dataclass
class Usage:
    """Accumulated API usage across pipeline components."""

    api_calls: list[APICallUsage] = field(default_factory=list)
    newsapi_requests: int = 0
    google_requests: int = 0
    exa_requests: int = 0

    @property
    def input_tokens(self) -> int:
        return sum(c.input_tokens for c in self.api_calls)

    @property
    def output_tokens(self) -> int:
        return sum(c.output_tokens for c in self.api_calls)

    def __add__(self, other: "Usage") -> "Usage":
        return Usage(
            api_calls=self.api_calls + other.api_calls,
            newsapi_requests=self.newsapi_requests + other.newsapi_requests,
            google_requests=self.google_requests + other.google_requests,
            exa_requests=self.exa_requests + other.exa_requests,
        )

    def __iadd__(self, other: "Usage") -> "Usage":
        self.api_calls.extend(other.api_calls)
        self.newsapi_requests += other.newsapi_requests
        self.google_requests += other.google_requests
        self.exa_requests += other.exa_requests
        return self


def usage_from_response(model: str, response: Any) -> Usage:
    """Build a Usage record from an Anthropic messages response."""
    return Usage(
        api_calls=[
            APICallUsage(
                model=model,
                input_tokens=getattr(response.usage, "input_tokens", 0) or 0,
                output_tokens=getattr(response.usage, "output_tokens", 0) or 0,
            )
        ]
    )
