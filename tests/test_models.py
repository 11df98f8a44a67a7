"""Tests for data models and serialization shapes."""

from evidence_sources.data import (
    APICallUsage,
    Article,
    CutCard,
    Recommendation,
    SearchQuery,
    SearchResponse,
    Usage,
)


class TestArticle:
    """Tests for Article."""

    def test_defaults(self) -> None:
        article = Article(url="https://example.com/a")
        assert article.title == ""
        assert article.content == ""
        assert article.author is None
        assert article.publish_date is None
        assert article.source is None
        assert article.query is None

    def test_to_dict_uses_camel_case(self) -> None:
        article = Article(
            url="https://example.com/a",
            title="Sea levels rise",
            content="Body",
            author="Jane Platt",
            publish_date="2025",
            source="Example News",
            query=SearchQuery(text="q", intent="broad"),
        )
        assert article.to_dict() == {
            "title": "Sea levels rise",
            "url": "https://example.com/a",
            "content": "Body",
            "author": "Jane Platt",
            "publishDate": "2025",
            "source": "Example News",
        }

    def test_to_dict_omits_missing_optionals(self) -> None:
        data = Article(url="https://example.com/a", title="T").to_dict()
        assert set(data) == {"title", "url", "content"}


class TestSearchResponse:
    """Tests for SearchResponse."""

    def test_to_dict_with_recommendation(self) -> None:
        response = SearchResponse(
            results=[Article(url="https://example.com/a", title="A")],
            recommended_article=Recommendation(index=0, reason="Most direct"),
        )
        data = response.to_dict()
        assert data["results"][0]["url"] == "https://example.com/a"
        assert data["recommendedArticle"] == {"index": 0, "reason": "Most direct"}

    def test_to_dict_without_recommendation(self) -> None:
        data = SearchResponse(results=[]).to_dict()
        assert data == {"results": [], "recommendedArticle": None}


def test_cut_card_to_dict() -> None:
    card = CutCard(cut_content="<mark>x</mark>", tag="Tag", citation="Cite")
    assert card.to_dict() == {"cutContent": "<mark>x</mark>", "tag": "Tag", "citation": "Cite"}


class TestUsage:
    """Tests for Usage accumulation."""

    def test_token_totals(self) -> None:
        usage = Usage(
            api_calls=[
                APICallUsage(model="m", input_tokens=100, output_tokens=10),
                APICallUsage(model="m", input_tokens=50, output_tokens=5),
            ]
        )
        assert usage.input_tokens == 150
        assert usage.output_tokens == 15

    def test_add(self) -> None:
        a = Usage(newsapi_requests=2, api_calls=[APICallUsage(model="m", input_tokens=1)])
        b = Usage(google_requests=1, exa_requests=3)
        total = a + b
        assert total.newsapi_requests == 2
        assert total.google_requests == 1
        assert total.exa_requests == 3
        assert len(total.api_calls) == 1
        assert a.google_requests == 0

    def test_iadd(self) -> None:
        total = Usage()
        total += Usage(newsapi_requests=4)
        total += Usage(api_calls=[APICallUsage(model="m", output_tokens=7)])
        assert total.newsapi_requests == 4
        assert total.output_tokens == 7
