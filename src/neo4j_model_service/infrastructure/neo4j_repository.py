"""Session provider backed by the neo4j Python driver."""
import asyncio
from typing import Any, Optional, Sequence

from loguru import logger
from neo4j import READ_ACCESS, WRITE_ACCESS, Driver, ManagedTransaction, Session
from neo4j.exceptions import Neo4jError, ServiceUnavailable

from ..config import RuntimeSettings
from .neo4j_utils import create_driver, get_neo4j_driver


class Neo4jSessionProvider:
    """SessionProvider running blocking driver calls in worker threads.

    Without an explicit driver the process-wide shared driver from
    :func:`get_neo4j_driver` is used. Sessions are opened per call and never
    held across calls.
    """

    def __init__(self, driver: Optional[Driver] = None, database: Optional[str] = None) -> None:
        self._driver = driver
        self.database = database

    @classmethod
    def from_settings(cls, settings: RuntimeSettings) -> "Neo4jSessionProvider":
        connection = settings.connection
        return cls(create_driver(connection), database=connection.database)

    @property
    def driver(self) -> Driver:
        return self._driver or get_neo4j_driver()

    def get_session(self, write: bool = False) -> Session:
        return self.driver.session(
            database=self.database,
            default_access_mode=WRITE_ACCESS if write else READ_ACCESS,
        )

    async def run(
        self,
        query: str,
        parameters: Optional[dict[str, Any]] = None,
        *,
        write: bool = False,
    ) -> list[dict[str, Any]]:
        """
        Run ``query`` in a managed read or write transaction.

        Returns:
            One plain dictionary per result record.

        Raises:
            ServiceUnavailable: If the database cannot be reached.
            Neo4jError: If the database rejects the query.
        """

        def _transaction_work(tx: ManagedTransaction) -> list[dict[str, Any]]:
            result = tx.run(query, parameters or {})
            return [record.data() for record in result]

        def _execute_sync_query() -> list[dict[str, Any]]:
            with self.get_session(write) as session:
                if write:
                    return session.execute_write(_transaction_work)
                return session.execute_read(_transaction_work)

        try:
            return await asyncio.to_thread(_execute_sync_query)
        except Neo4jError as e:
            logger.error(f"Neo4j error executing Cypher query: {e}")
            logger.error(f"Query: {query}, Parameters: {parameters}")
            raise
        except ServiceUnavailable:
            logger.error("Neo4j service became unavailable while executing a query.")
            raise

    async def run_in_transaction(self, queries: Sequence[str]) -> None:
        """Run ``queries`` in order in one explicit write transaction and commit.

        A failing query leaves the transaction uncommitted; it is rolled back
        when the transaction closes.
        """

        def _execute_sync_transaction() -> None:
            with self.get_session(write=True) as session:
                with session.begin_transaction() as tx:
                    for query in queries:
                        tx.run(query)
                    tx.commit()

        try:
            await asyncio.to_thread(_execute_sync_transaction)
        except Neo4jError as e:
            logger.error(f"Neo4j error in transaction of {len(queries)} statements: {e}")
            raise
        except ServiceUnavailable:
            logger.error("Neo4j service became unavailable during a transaction.")
            raise

    def close(self) -> None:
        if self._driver is not None:
            self._driver.close()
