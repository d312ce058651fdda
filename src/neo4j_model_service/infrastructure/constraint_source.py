"""Constraint statements configured per node label."""
from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

import yaml
from loguru import logger

from ..config import RuntimeSettings

LABEL_PLACEHOLDER = "{label}"
ALL_LABELS = "*"


class StaticConstraintSource:
    """Serves constraint statements from a ``label -> [statement]`` mapping.

    Statements listed under ``"*"`` apply to every label and come first.
    ``{label}`` inside a statement is replaced with the requested label.
    """

    def __init__(self, constraints: Optional[Mapping[str, Sequence[str]]] = None) -> None:
        self._constraints = {k: list(v) for k, v in (constraints or {}).items()}

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "StaticConstraintSource":
        with open(path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if "constraints" in data:
            data = data["constraints"] or {}
        if not isinstance(data, dict):
            raise ValueError(f"Constraint file {path} must contain a mapping of labels.")
        logger.debug(f"Loaded constraints for {len(data)} labels from {path}")
        return cls(data)

    @classmethod
    def from_settings(cls, settings: RuntimeSettings) -> "StaticConstraintSource":
        if settings.app.constraints_file:
            return cls.from_yaml(settings.app.constraints_file)
        return cls(settings.constraints)

    def get_constraints(self, label: str) -> list[str]:
        statements = self._constraints.get(ALL_LABELS, []) + self._constraints.get(label, [])
        return [s.replace(LABEL_PLACEHOLDER, label) for s in statements]
