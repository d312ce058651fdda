# Makes 'utils' a sub-package for domain utility functions.

from .neo4j_helpers import (
    prepare_properties_for_neo4j,
    restore_properties_from_neo4j,
)

__all__ = [
    "prepare_properties_for_neo4j",
    "restore_properties_from_neo4j",
]
