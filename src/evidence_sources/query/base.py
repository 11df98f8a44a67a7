from typing import Protocol

from evidence_sources.data import Argument, SearchQuery


class QueryGenerator(Protocol):
    """Interface for expanding an argument into search queries."""

    def generate(self, argument: Argument) -> list[SearchQuery]: ...
