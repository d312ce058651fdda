"""Generic label-scoped model service."""

from typing import Any, Generic, Mapping, Optional, Sequence, TypeVar

from loguru import logger as default_logger

from ..interfaces.constraint_source import ConstraintSource
from ..interfaces.property_mapper import PropertyMapper
from ..interfaces.session_provider import SessionProvider
from ..models.common_types import PageParams
from ..models.statement import Statement
from .cypher_builder import (
    build_create_statement,
    build_delete_statement,
    build_find_all_statement,
    build_find_by_statement,
    build_merge_statement,
)
from .exceptions import ConstraintSourceMissingError, InvalidLabelError
from .executor import DebugLogger, StatementExecutor
from .property_mapper import IdentityPropertyMapper
from .search_scorer import build_search_statement

T = TypeVar("T")


def _page_params(params: Optional[PageParams], page: Mapping[str, Any]) -> PageParams:
    if params is not None and page:
        raise TypeError(
            f"Pass paging either as PageParams or as keywords, not both (got {sorted(page)})"
        )
    return params if params is not None else PageParams(**page)


class Neo4jModelService(Generic[T]):
    """
    Create, merge, delete, list and search nodes of a single label.

    Each operation builds a :class:`Statement`, runs it through a
    :class:`StatementExecutor` and maps the returned property bags to domain
    objects with the configured :class:`PropertyMapper`.

    Args:
        label: Node label the service operates on. Interpolated into the
            Cypher text, so it must be a trusted identifier.
        session_provider: Connected provider used for every call.
        timestamp: Optional property stamped with the server time when a node
            is created (never on merge matches).
        mapper: Domain mapping; defaults to shallow-copied property bags.
        constraint_source: Supplies the statements for
            :meth:`install_constraints`.
        logger: Debug tracing target; ``None`` disables tracing.
    """

    def __init__(
        self,
        label: str,
        session_provider: SessionProvider,
        *,
        timestamp: Optional[str] = None,
        mapper: Optional[PropertyMapper[T]] = None,
        constraint_source: Optional[ConstraintSource] = None,
        logger: Optional[DebugLogger] = default_logger,
    ) -> None:
        if not isinstance(label, str) or not label:
            raise InvalidLabelError(label)
        self._label = label
        self._timestamp = timestamp or None
        self.mapper: PropertyMapper[T] = mapper or IdentityPropertyMapper()  # type: ignore[assignment]
        self.constraint_source = constraint_source
        if logger is not None and hasattr(logger, "bind"):
            logger = logger.bind(label=label)
        self.executor = StatementExecutor(session_provider, logger=logger)

    @property
    def label(self) -> str:
        return self._label

    @property
    def timestamp(self) -> Optional[str]:
        return self._timestamp

    def to_storage(self, obj: Any) -> dict[str, Any]:
        return self.mapper.to_storage(obj)

    def from_storage(self, bag: Mapping[str, Any]) -> T:
        return self.mapper.from_storage(bag)

    # --- Statements ---

    def create_query(self, props: Any) -> Statement:
        return build_create_statement(self.label, self.to_storage(props), self.timestamp)

    def merge_query(self, props: Any) -> Statement:
        return build_merge_statement(self.label, self.to_storage(props), self.timestamp)

    def delete_query(self, props: Any) -> Statement:
        return build_delete_statement(self.label, self.to_storage(props))

    def find_all_query(self, params: Optional[PageParams] = None, **page: Any) -> Statement:
        return build_find_all_statement(self.label, _page_params(params, page))

    def find_by_query(
        self, props: Any, params: Optional[PageParams] = None, **page: Any
    ) -> Statement:
        return build_find_by_statement(
            self.label, self.to_storage(props), _page_params(params, page)
        )

    def search_query(
        self,
        prop: str,
        terms: Sequence[str],
        skip: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Statement:
        return build_search_statement(self.label, prop, terms, skip, limit)

    # --- Operations ---

    async def create(self, props: Any) -> Optional[T]:
        self.executor.trace("create({})", props)
        rows = await self.executor.run(self.create_query(props))
        return self.from_storage(rows[0]["created"]) if rows else None

    async def merge(self, props: Any) -> Optional[T]:
        self.executor.trace("merge({})", props)
        rows = await self.executor.run(self.merge_query(props))
        return self.from_storage(rows[0]["merged"]) if rows else None

    async def delete(self, props: Any) -> list[T]:
        """Delete every node matching ``props`` and return them as they were."""
        self.executor.trace("delete({})", props)
        rows = await self.executor.run(self.delete_query(props))
        return [self.from_storage(row["deleted"]) for row in rows]

    async def find_all(self, params: Optional[PageParams] = None, **page: Any) -> list[T]:
        """List nodes, paged by ``params`` or by ``PageParams`` keywords (not both)."""
        self.executor.trace("find_all({})", params or page)
        rows = await self.executor.run(self.find_all_query(params, **page))
        return [self.from_storage(row["matched"]) for row in rows]

    async def find_by(
        self, props: Any, params: Optional[PageParams] = None, **page: Any
    ) -> list[T]:
        self.executor.trace("find_by({}, {})", props, params or page)
        rows = await self.executor.run(self.find_by_query(props, params, **page))
        return [self.from_storage(row["matched"]) for row in rows]

    async def search_by(
        self,
        prop: str,
        terms: Sequence[str],
        skip: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[tuple[T, int]]:
        """Return ``(object, score)`` pairs ranked by token overlap on ``prop``."""
        self.executor.trace("search_by({}, {})", prop, terms)
        rows = await self.executor.run(self.search_query(prop, terms, skip, limit))
        return [(self.from_storage(row["matched"]), int(row["score"])) for row in rows]

    async def install_constraints(self) -> list[str]:
        """Install the label's schema constraints in one transaction."""
        self.executor.trace("install_constraints()")
        if self.constraint_source is None:
            raise ConstraintSourceMissingError(self.label)
        queries = self.constraint_source.get_constraints(self.label)
        return await self.executor.run_in_transaction(queries)
