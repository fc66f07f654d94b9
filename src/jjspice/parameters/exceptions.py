# src/jjspice/parameters/exceptions.py
"""
Defines the diagnosable exceptions for resolving component values against a
table of symbol definitions.
"""
from dataclasses import dataclass
from typing import List, Optional

from ..errors import DiagnosableError, format_diagnostic_report


class ParameterError(DiagnosableError):
    """
    A concrete base class for all value-resolution errors, catchable with a single
    `except ParameterError:` block.
    """
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Parameter Error",
            details=str(self),
            suggestion="Review the component values and the symbol definitions passed to the exporter.",
            context={}
        )


@dataclass(frozen=True)
class ValueResolutionError(ParameterError):
    """Raised when a component value cannot be reduced to a number."""
    user_input: str
    details: str
    component_name: Optional[str] = None
    unresolved_symbols: Optional[List[str]] = None

    def __str__(self):
        where = f" for component '{self.component_name}'" if self.component_name else ""
        return f"Could not resolve value '{self.user_input}'{where}: {self.details}"

    def get_diagnostic_report(self) -> str:
        details = self.details
        if self.unresolved_symbols:
            details += f"\n\nUndefined symbol(s): {', '.join(self.unresolved_symbols)}"
        return format_diagnostic_report(
            error_type="Unresolved Component Value",
            details=details,
            suggestion="Add a numeric definition for every symbol used by the circuit to the definitions table.",
            context={'component': self.component_name, 'user_input': self.user_input}
        )


@dataclass(frozen=True)
class ValueDimensionError(ParameterError):
    """Raised when a value given with units has the wrong dimension for its component."""
    component_name: str
    user_input: str
    expected_dimension: str
    actual_dimension: str

    def __str__(self):
        return (f"Value '{self.user_input}' of component '{self.component_name}' has dimension "
                f"{self.actual_dimension}, expected {self.expected_dimension}")

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Value Dimension Mismatch",
            details=(f"The value has dimension {self.actual_dimension}, but components of this type "
                     f"require {self.expected_dimension}."),
            suggestion="Give the value in compatible units (e.g. 'pH' for inductors, 'fF' for capacitors).",
            context={'component': self.component_name, 'user_input': self.user_input}
        )
