# src/jjspice/parameters/__init__.py
from .exceptions import (
    ParameterError,
    ValueResolutionError,
    ValueDimensionError,
)
from .resolver import ValueResolver, resolve_component_values

__all__ = [
    # Exceptions
    "ParameterError",
    "ValueResolutionError",
    "ValueDimensionError",
    # Core Classes
    "ValueResolver",
    "resolve_component_values",
]
