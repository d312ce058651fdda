from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class Statement(BaseModel):
    """A Cypher query with its bound parameters and a routing hint.

    ``write`` tells the session provider whether the statement needs a
    write-capable session; read statements may be routed to replicas.
    ``parameters`` is a read-only view over a copy of the mapping it was
    built from.
    """

    query: str
    parameters: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)
    write: bool = False

    model_config = ConfigDict(frozen=True)

    @field_validator("parameters", mode="after")
    @classmethod
    def freeze_parameters(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @field_serializer("parameters")
    def serialize_parameters(self, value: Mapping[str, Any]) -> dict[str, Any]:
        return dict(value)
