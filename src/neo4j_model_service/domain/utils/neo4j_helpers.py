import json
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Collection, Mapping, Optional, Union

from loguru import logger
from pydantic import BaseModel

JSON_SUFFIX = "_json"

_SCALARS = (str, int, float, bool)


def _is_scalar_list(value: Any) -> bool:
    return isinstance(value, (list, tuple, set)) and all(
        isinstance(item, _SCALARS + (Enum,)) for item in value
    )


def prepare_properties_for_neo4j(
    source: Union[BaseModel, Mapping[str, Any], None],
) -> dict[str, Any]:
    """Flatten a model or mapping into values Neo4j can store on a node.

    Scalars and lists of scalars are kept, temporal values become ISO strings,
    enums their value. Anything nested is serialized to JSON under
    ``<name>_json``. ``None`` values are dropped.
    """
    if source is None:
        return {}

    data = source.model_dump() if isinstance(source, BaseModel) else dict(source)
    props: dict[str, Any] = {}

    for name, value in data.items():
        if value is None:
            continue
        if isinstance(value, Enum):
            props[name] = value.value
        elif isinstance(value, (datetime, date, time)):
            props[name] = value.isoformat()
        elif isinstance(value, _SCALARS):
            props[name] = value
        elif _is_scalar_list(value):
            props[name] = [v.value if isinstance(v, Enum) else v for v in value]
        else:
            try:
                props[f"{name}{JSON_SUFFIX}"] = json.dumps(
                    value.model_dump() if hasattr(value, "model_dump") else value,
                    default=str,
                )
            except TypeError as e:
                logger.warning(f"Could not serialize property {name} to JSON: {e}")
                props[name] = str(value)
    return props


def restore_properties_from_neo4j(
    bag: Mapping[str, Any], fields: Optional[Collection[str]] = None
) -> dict[str, Any]:
    """Inverse of :func:`prepare_properties_for_neo4j` for ``_json`` properties.

    With ``fields``, a ``<name>_json`` property is only decoded when ``<name>``
    is one of them and ``<name>_json`` is not; other properties pass through.
    """
    restored: dict[str, Any] = {}
    for name, value in bag.items():
        base = name[: -len(JSON_SUFFIX)]
        if (
            name.endswith(JSON_SUFFIX)
            and isinstance(value, str)
            and (fields is None or (base in fields and name not in fields))
        ):
            restored[base] = json.loads(value)
        else:
            restored[name] = value
    return restored


__all__ = [
    "JSON_SUFFIX",
    "prepare_properties_for_neo4j",
    "restore_properties_from_neo4j",
]
