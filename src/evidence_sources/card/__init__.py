"""Debate card cutting."""

from evidence_sources.card.citation import author_last_name, build_citation
from evidence_sources.card.cutter import ClaudeCardCutter, CutCardRequest, fallback_card

__all__ = [
    "ClaudeCardCutter",
    "CutCardRequest",
    "author_last_name",
    "build_citation",
    "fallback_card",
]
