"""Value types used across the model service layer."""

from .common_types import (
    PageParams,
    PropertyBag,
    PropertyValue,
    Scalar,
    ScoredResult,
    SearchParams,
)
from .statement import Statement

__all__ = [
    "PageParams",
    "PropertyBag",
    "PropertyValue",
    "Scalar",
    "ScoredResult",
    "SearchParams",
    "Statement",
]
