"""Generic label-scoped data access for Neo4j and Neptune."""

from .domain.models import PageParams, PropertyBag, ScoredResult, SearchParams, Statement
from .domain.services import (
    ConstraintSourceMissingError,
    IdentityPropertyMapper,
    InvalidLabelError,
    ModelServiceError,
    Neo4jModelService,
    PydanticPropertyMapper,
    StatementExecutor,
    normalize_skip_limit,
)
from .infrastructure import Neo4jSessionProvider, StaticConstraintSource

__version__ = "0.1.0"

__all__ = [
    "ConstraintSourceMissingError",
    "IdentityPropertyMapper",
    "InvalidLabelError",
    "ModelServiceError",
    "Neo4jModelService",
    "Neo4jSessionProvider",
    "PageParams",
    "PropertyBag",
    "PydanticPropertyMapper",
    "ScoredResult",
    "SearchParams",
    "Statement",
    "StatementExecutor",
    "StaticConstraintSource",
    "normalize_skip_limit",
]
