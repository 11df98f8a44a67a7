"""URL handling utilities."""

import logging
import re
from datetime import datetime
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

# Encyclopedias, Q&A sites, code hosts and generic blogging platforms.
LOW_VALUE_DOMAINS: frozenset[str] = frozenset(
    {
        "wikipedia.org",
        "britannica.com",
        "quora.com",
        "reddit.com",
        "stackexchange.com",
        "stackoverflow.com",
        "answers.com",
        "github.com",
        "gitlab.com",
        "medium.com",
        "blogspot.com",
        "wordpress.com",
        "tumblr.com",
        "substack.com",
    }
)

_YEAR = re.compile(r"\b(1[89]\d{2}|2\d{3})\b")


def is_valid_url(url: str) -> bool:
    """Check that ``url`` is a well-formed absolute http(s) URL."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def extract_domain(url: str) -> str:
    """Extract domain name from URL.

    Args:
        url: The URL to extract the domain from.

    Returns:
        The domain name (without 'www.' prefix), or "Unknown" if extraction fails.
    """
    try:
        domain = urlparse(url).hostname or ""
    except ValueError:
        return "Unknown"
    if not domain:
        logger.warning("Could not get domain from url %s", url)
        return "Unknown"
    if domain.startswith("www."):
        domain = domain[4:]
    return domain


def is_low_value_domain(url: str, denylist: frozenset[str] = LOW_VALUE_DOMAINS) -> bool:
    """True if the URL's host is a denylisted domain or one of its subdomains."""
    domain = extract_domain(url).lower()
    return any(domain == d or domain.endswith("." + d) for d in denylist)


def to_year(value: str | None) -> str | None:
    """Reduce a date string to its 4-digit year.

    ISO timestamps are parsed first; otherwise the first plausible year in
    the string is used. Malformed values yield None.
    """
    if not value:
        return None
    text = value.strip()
    try:
        return str(datetime.fromisoformat(text.replace("Z", "+00:00")).year)
    except ValueError:
        pass
    match = _YEAR.search(text)
    return match.group(1) if match else None
