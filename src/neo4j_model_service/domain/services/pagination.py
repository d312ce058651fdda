"""Skip/limit normalization for paginated queries."""

from typing import Any, Mapping, Optional, Union

from ..models.common_types import PageParams, SearchParams

DEFAULT_SKIP = 0
DEFAULT_LIMIT = 10


def normalize_skip_limit(
    params: Union[Mapping[str, Any], PageParams, SearchParams, None] = None,
) -> dict[str, int]:
    """
    Return ``{"skip": int, "limit": int}`` for a query's ``SKIP``/``LIMIT`` parameters.

    Missing or zero values fall back to ``DEFAULT_SKIP`` and ``DEFAULT_LIMIT``.
    Values are coerced to ``int`` so the driver sends them as 64-bit INTEGER
    rather than FLOAT, which Cypher rejects for SKIP and LIMIT. Negative
    values are passed through unchanged; the database decides how to treat them.
    """
    if params is None:
        skip: Optional[Any] = None
        limit: Optional[Any] = None
    elif isinstance(params, Mapping):
        skip = params.get("skip")
        limit = params.get("limit")
    else:
        skip = params.skip
        limit = params.limit

    return {
        "skip": int(skip or DEFAULT_SKIP),
        "limit": int(limit or DEFAULT_LIMIT),
    }
