"""Abstract session provider used by the statement executor."""
from typing import Any, Optional, Protocol, Sequence


class SessionProvider(Protocol):
    """Interface for running Cypher against a graph database."""

    async def run(
        self,
        query: str,
        parameters: Optional[dict[str, Any]] = None,
        *,
        write: bool = False,
    ) -> list[dict[str, Any]]:
        """Run a query in a read or write session and return plain result rows."""
        ...

    async def run_in_transaction(self, queries: Sequence[str]) -> None:
        """Run every query in order inside one write transaction, then commit."""
        ...
