"""Rule-based query expansion that diversifies recall and precision."""

from evidence_sources.data import Argument, SearchQuery
from evidence_sources.query.keyterms import extract_key_terms

ACADEMIC_TERMS = ("study", "research")


class StrategyQueryGenerator:
    """Expand one argument into several complementary search queries.

    Queries are produced in a fixed order:

    1. The argument verbatim (broad recall).
    2. Up to ``max_quoted`` key terms, each quoted (exact-phrase precision).
    3. Up to ``max_keywords`` key terms unquoted (keyword search).
    4. Up to ``max_academic`` key terms plus academic bias terms.

    Strategies 2 and 4 need at least two key terms; strategy 3 needs three.

    Args:
        max_quoted: Maximum terms in the quoted query.
        max_keywords: Maximum terms in the keyword query.
        max_academic: Maximum terms in the academic query.
    """

    def __init__(
        self,
        *,
        max_quoted: int = 4,
        max_keywords: int = 4,
        max_academic: int = 3,
    ) -> None:
        self._max_quoted = max_quoted
        self._max_keywords = max_keywords
        self._max_academic = max_academic

    def generate(self, argument: Argument) -> list[SearchQuery]:
        terms = extract_key_terms(argument.text)
        queries = [SearchQuery(text=argument.text, intent="broad")]

        if len(terms) >= 2:
            quoted = " ".join(f'"{t}"' for t in terms[: self._max_quoted])
            queries.append(SearchQuery(text=quoted, intent="exact phrase"))

        if len(terms) >= 3:
            keywords = " ".join(terms[: self._max_keywords])
            queries.append(SearchQuery(text=keywords, intent="keywords"))

        if len(terms) >= 2:
            academic = " ".join([*terms[: self._max_academic], *ACADEMIC_TERMS])
            queries.append(SearchQuery(text=academic, intent="academic"))

        return queries


class NoOpQueryGenerator:
    """Query generator that passes the argument through as a single query.

    Used by the metadata-rich searchers, which issue exactly one provider
    call over the raw argument.
    """

    def generate(self, argument: Argument) -> list[SearchQuery]:
        return [SearchQuery(text=argument.text, intent="original argument")]
