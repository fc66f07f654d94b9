# src/jjspice/parser/exceptions.py
"""
Defines the diagnosable exceptions for circuit parsing and circuit file loading.

`CircuitParseError` covers logical problems with the component tuples themselves
(unknown types, duplicate names, dangling mutual inductances). `ParsingError` and
`SchemaValidationError` cover the YAML circuit files read by `CircuitFileLoader`.
Each class implements `get_diagnostic_report` as required by `DiagnosableError`.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..errors import DiagnosableError, format_diagnostic_report


class BaseParsingError(DiagnosableError):
    """A local, concrete base class for all circuit parsing errors."""
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Parsing Error",
            details=str(self),
            suggestion="Please check the format and content of the circuit description.",
            context={}
        )


@dataclass(frozen=True)
class CircuitParseError(BaseParsingError):
    """
    Raised when a component tuple cannot be turned into a valid circuit entry,
    e.g. an unrecognized name prefix, a duplicate name, or a mutual inductance
    that refers to a component which is not an inductor.
    """
    details: str
    component_name: Optional[str] = None

    def __str__(self):
        if self.component_name is not None:
            return f"Circuit parse error at component '{self.component_name}': {self.details}"
        return f"Circuit parse error: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Circuit Parse Error",
            details=self.details,
            suggestion=(
                "Each component must be a (name, node1, node2, value) tuple with a unique name whose "
                "prefix is one of Lj, NL, L, C, K, R, P, I, V. Mutual inductances (K) must name two "
                "inductors defined in the same circuit."
            ),
            context={'component': self.component_name}
        )


@dataclass(frozen=True)
class ParsingError(BaseParsingError):
    """
    Raised for file-system issues or invalid YAML syntax while loading a circuit file.
    """
    details: str
    file_path: Path

    def __str__(self):
        return f"Parsing error in file '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="YAML Parsing or File Error",
            details=self.details,
            suggestion="Ensure the file exists, has the correct read permissions, and contains valid YAML syntax.",
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True)
class SchemaValidationError(BaseParsingError):
    """
    Raised when a circuit file is valid YAML but does not conform to the circuit
    file schema (missing 'components', malformed entries, duplicate names).
    """
    errors: Dict[str, Any]
    file_path: Path

    def __str__(self):
        error_lines = [
            f"  - In field '{k}': {v}"
            for k, v in sorted(self.errors.items(), key=lambda item: str(item[0]))
        ]
        return (
            f"Circuit file schema validation failed for file '{self.file_path}':\n"
            + "\n".join(error_lines)
        )

    def get_diagnostic_report(self) -> str:
        error_list_str = "\n".join(
            f"  - Field '{k}': {v}"
            for k, v in sorted(self.errors.items(), key=lambda item: str(item[0]))
        )
        details = (
            "The structure of the circuit file does not conform to the required schema.\n"
            f"See details for {len(self.errors)} issue(s) below:\n\n{error_list_str}"
        )
        return format_diagnostic_report(
            error_type="Circuit File Schema Validation Error",
            details=details,
            suggestion=(
                "Each entry of 'components' must be a list [name, node1, node2, value] with a unique "
                "name. 'definitions' maps symbol names to numbers or unit strings such as '1000 pH'."
            ),
            context={'source_file': self.file_path}
        )
