"""Key-term extraction for query construction and keyword relevance."""

import re

STOP_WORDS: frozenset[str] = frozenset(
    {
        # articles and conjunctions
        "the", "a", "an", "and", "or", "but",
        # prepositions
        "in", "on", "at", "to", "for", "of", "with", "by",
        # auxiliary and modal verbs
        "is", "are", "was", "were", "be", "been", "being",
        "have", "has", "had", "do", "does", "did",
        "will", "would", "should", "could", "may", "might", "must", "can",
        # demonstratives and pronouns
        "that", "this", "these", "those", "it", "its",
        "they", "them", "their", "we", "us", "our", "you", "your",
        "he", "him", "his", "she", "her", "hers", "i", "me", "my", "mine",
    }
)  # fmt: skip

MIN_TERM_LENGTH = 3

_SEPARATORS = re.compile(r"[^a-z0-9]+")


def extract_key_terms(text: str) -> list[str]:
    """Extract salient lowercase terms from free text.

    Non-alphanumeric characters separate tokens. Tokens shorter than three
    characters and stop words are dropped. Duplicates collapse to their first
    occurrence, so the result order is deterministic.

    Args:
        text: Raw argument or document text.

    Returns:
        Ordered list of unique key terms.
    """
    tokens = _SEPARATORS.split(text.lower())
    terms = (t for t in tokens if len(t) >= MIN_TERM_LENGTH and t not in STOP_WORDS)
    return list(dict.fromkeys(terms))
