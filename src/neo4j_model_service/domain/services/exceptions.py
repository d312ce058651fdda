"""Exceptions raised by the model service layer itself.

Driver and database failures are not wrapped; they reach callers as the
``neo4j.exceptions`` types raised by the driver.
"""


class ModelServiceError(Exception):
    """Base exception for model service errors."""

    pass


class InvalidLabelError(ModelServiceError, ValueError):
    """Raised when a service is configured without a usable node label."""

    def __init__(self, label: object) -> None:
        self.label = label
        super().__init__(f"Invalid node label: {label!r}. Labels must be non-empty strings.")


class ConstraintSourceMissingError(ModelServiceError):
    """Raised when constraints are requested but no constraint source is configured."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"No constraint source configured for label '{label}'.")
