"""Runs built statements through a session provider with debug tracing."""

from contextlib import suppress
from typing import Any, Optional, Protocol, Sequence

from loguru import logger as default_logger

from ..interfaces.session_provider import SessionProvider
from ..models.statement import Statement


class DebugLogger(Protocol):
    def debug(self, message: Any, *args: Any, **kwargs: Any) -> Any:
        ...


class StatementExecutor:
    """Execute statements and return result rows as plain dictionaries.

    Every call is traced at debug level: the query with its parameters before
    execution, the rows after. Tracing is best-effort; pass ``logger=None`` to
    disable it. Errors from the session provider are not caught.
    """

    def __init__(
        self,
        session_provider: SessionProvider,
        logger: Optional[DebugLogger] = default_logger,
    ) -> None:
        self.session_provider = session_provider
        self.logger = logger

    def trace(self, message: str, *args: Any) -> None:
        if self.logger is None:
            return
        # A broken log sink must never change the outcome of a query.
        with suppress(Exception):
            self.logger.debug(message, *args)

    async def run(self, statement: Statement) -> list[dict[str, Any]]:
        self.trace(
            "Running Cypher (write={}): {} | parameters={}",
            statement.write,
            statement.query,
            statement.parameters,
        )
        rows = await self.session_provider.run(
            statement.query, dict(statement.parameters), write=statement.write
        )
        results = [dict(row) for row in rows]
        self.trace("Cypher returned {} rows: {}", len(results), results)
        return results

    async def run_in_transaction(self, queries: Sequence[str]) -> list[str]:
        """Run ``queries`` in order inside a single write transaction."""
        queries = list(queries)
        self.trace("Running {} statements in one transaction: {}", len(queries), queries)
        await self.session_provider.run_in_transaction(queries)
        self.trace("Transaction committed")
        return queries
