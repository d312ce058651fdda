"""Interface for translating domain objects to and from node properties."""
from typing import Any, Mapping, Protocol, TypeVar

T_co = TypeVar("T_co", covariant=True)


class PropertyMapper(Protocol[T_co]):
    """Bidirectional mapping between a domain type and a property bag."""

    def to_storage(self, obj: Any) -> dict[str, Any]:
        """Return the property bag stored on the node for ``obj``."""
        ...

    def from_storage(self, bag: Mapping[str, Any]) -> T_co:
        """Rebuild a domain object from a node's property bag."""
        ...
