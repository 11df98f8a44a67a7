"""Author and date extraction from structured page metadata."""

from typing import Any

# Most specific structured-data blocks first.
_ITEM_BLOCKS = ("newsarticle", "article", "blogposting", "webpage")
_AUTHOR_META = ("article:author", "author", "dc.creator", "byl", "parsely-author")
_DATE_META = (
    "article:published_time",
    "og:article:published_time",
    "datepublished",
    "pubdate",
    "publishdate",
    "dc.date",
    "date",
)
_SITE_META = ("og:site_name", "application-name")


def _first_value(blocks: list[dict[str, Any]], keys: tuple[str, ...]) -> str | None:
    for block in blocks:
        for key in keys:
            value = block.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None


def _blocks(pagemap: dict[str, Any], name: str) -> list[dict[str, Any]]:
    value = pagemap.get(name)
    if not isinstance(value, list):
        return []
    return [b for b in value if isinstance(b, dict)]


def _clean_author(value: str | None) -> str | None:
    # article:author is often a profile URL rather than a name.
    if not value or value.startswith(("http://", "https://")):
        return None
    return value.removeprefix("By ").removeprefix("by ").strip() or None


def extract_pagemap_metadata(
    pagemap: dict[str, Any] | None,
) -> tuple[str | None, str | None, str | None]:
    """Pull author, raw publish date and site name from a search-hit pagemap.

    Schema.org item blocks (``newsarticle``, ``article``, ...) take precedence
    over generic ``metatags``.

    Returns:
        Tuple of (author, raw date string, site name); each may be None.
    """
    if not pagemap:
        return (None, None, None)

    item_blocks: list[dict[str, Any]] = []
    for name in _ITEM_BLOCKS:
        item_blocks.extend(_blocks(pagemap, name))
    metatags = _blocks(pagemap, "metatags")

    author = _clean_author(_first_value(item_blocks, ("author",)))
    if author is None:
        for key in _AUTHOR_META:
            author = _clean_author(_first_value(metatags, (key,)))
            if author:
                break

    date = _first_value(item_blocks, ("datepublished", "datecreated"))
    if date is None:
        date = _first_value(metatags, _DATE_META)

    site = _first_value(metatags, _SITE_META)
    return (author, date, site)
