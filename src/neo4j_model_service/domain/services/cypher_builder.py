"""Cypher statement builders for label-scoped node operations.

All builders are pure. Labels and property names are interpolated into the
query text as quoted identifiers and must come from trusted code, not from
end users. Payloads of ``CREATE`` and ``MERGE`` are bound as ``$props``;
equality filters of ``MATCH`` (delete, find-by) embed their values as Cypher
literals.
"""

import json
from typing import Any, Iterable, Mapping, Optional, Union

from ..models.common_types import PageParams
from ..models.statement import Statement
from .pagination import normalize_skip_limit

PageLike = Union[PageParams, Mapping[str, Any], None]


def quote_identifier(name: str) -> str:
    """Wrap a label or property name in backticks, doubling embedded backticks."""
    return "`" + str(name).replace("`", "``") + "`"


def cypher_literal(value: Any) -> str:
    """Render a property value as a Cypher literal.

    JSON encoding is used: strings are double-quoted with backslash escapes,
    booleans become ``true``/``false``, ``None`` becomes ``null`` and lists
    become ``[...]``, all of which are valid Cypher expressions.
    """
    return json.dumps(value, ensure_ascii=False)


def property_pattern(props: Mapping[str, Any], *, bind_to: Optional[str] = None) -> str:
    """Build the ``{`key`:value,...}`` part of a node pattern.

    With ``bind_to`` each value references ``$<bind_to>.`key```; otherwise the
    values are embedded as literals.
    """
    if bind_to is not None:
        pairs = (f"{quote_identifier(k)}:${bind_to}.{quote_identifier(k)}" for k in props)
    else:
        pairs = (f"{quote_identifier(k)}:{cypher_literal(v)}" for k, v in props.items())
    return "{" + ",".join(pairs) + "}"


def _as_page(params: PageLike) -> PageParams:
    if params is None:
        return PageParams()
    if isinstance(params, PageParams):
        return params
    return PageParams.model_validate(dict(params))


def order_clause(page: PageParams) -> str:
    if not page.order_by:
        return ""
    return f" ORDER BY n.{quote_identifier(page.order_by)}" + (
        " DESC" if page.descending else ""
    )


def build_create_statement(
    label: str, props: Mapping[str, Any], timestamp: Optional[str] = None
) -> Statement:
    """``CREATE`` one node with every property in ``props``."""
    stamp = f"SET n.{quote_identifier(timestamp)} = timestamp() " if timestamp else ""
    return Statement(
        query=(
            f"CREATE (n:{quote_identifier(label)}) SET n=$props "
            f"{stamp}RETURN properties(n) AS created"
        ),
        parameters={"props": dict(props)},
        write=True,
    )


def build_merge_statement(
    label: str, props: Mapping[str, Any], timestamp: Optional[str] = None
) -> Statement:
    """``MERGE`` a node keyed by the whole property bag.

    The timestamp is set in ``ON CREATE`` only, so matching an existing node
    leaves it untouched.
    """
    stamp = f" ON CREATE SET n.{quote_identifier(timestamp)} = timestamp()" if timestamp else ""
    return Statement(
        query=(
            f"MERGE (n:{quote_identifier(label)}{property_pattern(props, bind_to='props')})"
            f"{stamp} RETURN properties(n) AS merged"
        ),
        parameters={"props": dict(props)},
        write=True,
    )


def build_delete_statement(label: str, props: Mapping[str, Any]) -> Statement:
    """Delete every matching node, returning each node's properties as they were."""
    return Statement(
        query=(
            f"MATCH (n:{quote_identifier(label)}{property_pattern(props)}) "
            "WITH n, properties(n) AS deleted DELETE n RETURN deleted"
        ),
        write=True,
    )


def build_find_all_statement(label: str, params: PageLike = None) -> Statement:
    page = _as_page(params)
    return Statement(
        query=(
            f"MATCH (n:{quote_identifier(label)}) RETURN properties(n) AS matched"
            f"{order_clause(page)} SKIP $skip LIMIT $limit"
        ),
        parameters=normalize_skip_limit(page),
    )


def build_find_by_statement(
    label: str, props: Mapping[str, Any], params: PageLike = None
) -> Statement:
    page = _as_page(params)
    return Statement(
        query=(
            f"MATCH (n:{quote_identifier(label)}{property_pattern(props)}) "
            f"RETURN properties(n) AS matched{order_clause(page)} SKIP $skip LIMIT $limit"
        ),
        parameters=normalize_skip_limit(page),
    )


def build_constraint_statements(queries: Iterable[str]) -> list[Statement]:
    return [Statement(query=query, write=True) for query in queries]


__all__ = [
    "build_constraint_statements",
    "build_create_statement",
    "build_delete_statement",
    "build_find_all_statement",
    "build_find_by_statement",
    "build_merge_statement",
    "cypher_literal",
    "order_clause",
    "property_pattern",
    "quote_identifier",
]
