"""Interface for providers of schema constraint statements."""
from typing import Protocol


class ConstraintSource(Protocol):
    """Supplies the constraint statements to install for a node label."""

    def get_constraints(self, label: str) -> list[str]:
        ...
