"""Pipeline protocol for evidence discovery."""

from typing import Protocol

from evidence_sources.data import Argument, SearchResponse, Usage


class Pipeline(Protocol):
    """Interface for end-to-end evidence discovery pipelines."""

    async def run(self, argument: Argument | str) -> tuple[SearchResponse, Usage]:
        """Find, rank and recommend articles supporting an argument.

        Args:
            argument: The user's claim.

        Returns:
            Tuple of (search response, usage).

        Raises:
            ClientInputError: If the argument is empty.
        """
        ...
