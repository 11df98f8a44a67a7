"""Ordered fallback chains expressed as strategy attempts."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

import httpx


@dataclass(frozen=True)
class Attempt:
    """Outcome of running one content strategy.

    ``ok`` tells whether the strategy produced ``content``; on failure
    ``error`` carries a short reason.
    """

    strategy: str
    ok: bool
    content: str = ""
    error: str | None = None

    @classmethod
    def success(cls, strategy: str, content: str) -> "Attempt":
        return cls(strategy=strategy, ok=True, content=content)

    @classmethod
    def failure(cls, strategy: str, error: str) -> "Attempt":
        return cls(strategy=strategy, ok=False, error=error)


class ContentStrategy(Protocol):
    """One way of turning a URL into article text."""

    name: str

    async def attempt(self, client: httpx.AsyncClient, url: str) -> Attempt:
        """Run the strategy. Must not raise; failures become ``Attempt.failure``."""
        ...

    def accepts(self, attempt: Attempt) -> bool:
        """Success predicate for this strategy's attempts."""
        ...


def min_length(threshold: int) -> Callable[[Attempt], bool]:
    """Predicate accepting successful attempts with at least ``threshold`` chars."""

    def predicate(attempt: Attempt) -> bool:
        return attempt.ok and len(attempt.content.strip()) >= threshold

    return predicate


async def first_satisfying(
    strategies: Sequence[ContentStrategy],
    client: httpx.AsyncClient,
    url: str,
) -> tuple[Attempt | None, list[Attempt]]:
    """Run strategies in order until one's attempt satisfies its predicate.

    Later strategies only run when earlier ones fail.

    Returns:
        Tuple of (winning attempt or None, every attempt made).
    """
    attempts: list[Attempt] = []
    for strategy in strategies:
        attempt = await strategy.attempt(client, url)
        attempts.append(attempt)
        if strategy.accepts(attempt):
            return (attempt, attempts)
    return (None, attempts)
