"""Default property mappers."""

from typing import Any, Generic, Mapping, TypeVar

from pydantic import BaseModel

from ..utils.neo4j_helpers import (
    prepare_properties_for_neo4j,
    restore_properties_from_neo4j,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


class IdentityPropertyMapper:
    """Stores and returns property bags as shallow copies."""

    def to_storage(self, obj: Mapping[str, Any]) -> dict[str, Any]:
        return dict(obj)

    def from_storage(self, bag: Mapping[str, Any]) -> dict[str, Any]:
        return dict(bag)


class PydanticPropertyMapper(Generic[ModelT]):
    """Maps pydantic models to flat node properties and back.

    Nested values are kept as JSON strings under ``<field>_json`` and decoded
    again before validation. Fields whose own name ends in ``_json`` are left
    alone, so any model whose fields survive
    ``prepare_properties_for_neo4j`` round-trips.
    """

    def __init__(self, model_cls: type[ModelT]) -> None:
        self.model_cls = model_cls

    def to_storage(self, obj: Any) -> dict[str, Any]:
        return prepare_properties_for_neo4j(obj)

    def from_storage(self, bag: Mapping[str, Any]) -> ModelT:
        return self.model_cls.model_validate(
            restore_properties_from_neo4j(bag, fields=self.model_cls.model_fields)
        )
