from evidence_sources.query.base import QueryGenerator
from evidence_sources.query.keyterms import STOP_WORDS, extract_key_terms
from evidence_sources.query.strategy import NoOpQueryGenerator, StrategyQueryGenerator

__all__ = [
    "NoOpQueryGenerator",
    "QueryGenerator",
    "STOP_WORDS",
    "StrategyQueryGenerator",
    "extract_key_terms",
]
