"""
Common type definitions shared by the statement builders and the service facade.
"""

from typing import Any, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

Scalar = Union[str, int, float, bool]
PropertyValue = Union[Scalar, list[Scalar], None]

# Property name -> scalar or homogeneous list. No schema is enforced.
PropertyBag = dict[str, Any]

T = TypeVar("T")

ScoredResult = tuple[T, int]


class PageParams(BaseModel):
    """Pagination and ordering options for list queries."""

    skip: Optional[int] = None
    limit: Optional[int] = None
    order_by: Optional[str] = Field(default=None, alias="orderBy")
    descending: bool = False

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")


class SearchParams(BaseModel):
    """Arguments of a token-overlap search."""

    prop: str
    terms: list[str] = Field(default_factory=list)
    skip: Optional[int] = None
    limit: Optional[int] = None

    model_config = ConfigDict(frozen=True)
