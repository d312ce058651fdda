"""Domain interfaces for dependency inversion."""

from .constraint_source import ConstraintSource
from .property_mapper import PropertyMapper
from .session_provider import SessionProvider

__all__ = ["ConstraintSource", "PropertyMapper", "SessionProvider"]
