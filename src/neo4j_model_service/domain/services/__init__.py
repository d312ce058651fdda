"""Domain service layer."""

from .exceptions import (
    ConstraintSourceMissingError,
    InvalidLabelError,
    ModelServiceError,
)
from .executor import StatementExecutor
from .model_service import Neo4jModelService
from .pagination import DEFAULT_LIMIT, DEFAULT_SKIP, normalize_skip_limit
from .property_mapper import IdentityPropertyMapper, PydanticPropertyMapper

__all__ = [
    "ConstraintSourceMissingError",
    "DEFAULT_LIMIT",
    "DEFAULT_SKIP",
    "IdentityPropertyMapper",
    "InvalidLabelError",
    "ModelServiceError",
    "Neo4jModelService",
    "PydanticPropertyMapper",
    "StatementExecutor",
    "normalize_skip_limit",
]
