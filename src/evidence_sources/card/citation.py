"""Deterministic citation strings for debate cards."""

from evidence_sources.url import to_year


def author_last_name(author: str | None) -> str:
    """Last whitespace-separated token of an author name, or "" if absent."""
    if not author or not author.strip():
        return ""
    return author.strip().split()[-1]


def build_citation(
    title: str,
    author: str | None = None,
    publish_date: str | None = None,
    url: str | None = None,
) -> str:
    """Build a ``"LastName Year - details"`` citation.

    Example:
        ``"Platt 2025 - Jane Platt, 2025-03-01, Rising Seas, https://..."``
    """
    head = " ".join(p for p in (author_last_name(author), to_year(publish_date) or "") if p)
    details = ", ".join(
        [author or "Unknown", publish_date or "Unknown", title, url or "No URL"]
    )
    return f"{head} - {details}" if head else f"- {details}"
