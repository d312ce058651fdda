"""Infrastructure implementations of domain interfaces."""

from .constraint_source import StaticConstraintSource
from .neo4j_repository import Neo4jSessionProvider
from .neo4j_utils import (
    close_neo4j_driver,
    create_driver,
    create_neo4j_driver,
    create_neptune_driver,
    get_neo4j_driver,
)

__all__ = [
    "Neo4jSessionProvider",
    "StaticConstraintSource",
    "close_neo4j_driver",
    "create_driver",
    "create_neo4j_driver",
    "create_neptune_driver",
    "get_neo4j_driver",
]
