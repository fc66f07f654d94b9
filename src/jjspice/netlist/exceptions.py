# src/jjspice/netlist/exceptions.py
"""
Defines the diagnosable exceptions of the netlist engine.

All four are data-validity errors: they mean the circuit cannot be exported to the
target simulator as specified. They are raised before any netlist text is
returned and are never retried.

`NetlistExportError` is the local base class, so callers can catch every engine
failure with one clause while each subclass still carries its own context and
diagnostic report.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from ..errors import DiagnosableError, format_diagnostic_report


class NetlistExportError(DiagnosableError):
    """A concrete base class for all netlist engine errors."""
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Netlist Export Error",
            details=str(self),
            suggestion="The circuit cannot be exported to WRSPICE as specified. Review the reported component values.",
            context={}
        )


@dataclass(frozen=True)
class ShapeError(NetlistExportError, ValueError):
    """
    Raised when the component type vector and the node index table disagree in
    length, or when the node index table does not have exactly two rows.
    """
    details: str
    type_vector_length: int
    node_table_shape: Tuple[int, ...]

    def __str__(self):
        return self.details

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Input Shape Mismatch",
            details=(
                f"{self.details}\n"
                f"Type vector length: {self.type_vector_length}\n"
                f"Node index table shape: {self.node_table_shape}"
            ),
            suggestion="The node index table must have shape (2, N) where N is the number of components.",
            context={}
        )


@dataclass(frozen=True)
class UnsupportedCombinationError(NetlistExportError):
    """Raised when two parallel components of a type with no combination law meet."""
    component_type: str
    node_pair: Optional[Tuple[int, int]] = None

    def __str__(self):
        return f"Unknown component type '{self.component_type}' in combination of parallel branch values."

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Unsupported Parallel Combination",
            details=(
                f"Components of type '{self.component_type}' cannot be combined in parallel. "
                "Only capacitors, inductors, Josephson junctions and mutual inductances can share a node pair "
                "with a component of the same type."
            ),
            suggestion="Merge the parallel components into a single component before exporting.",
            context={'node_pair': self.node_pair}
        )


@dataclass(frozen=True)
class ZeroCapacitanceError(NetlistExportError):
    """Raised when a junction has no (or exactly zero) companion capacitance."""
    junction_name: str
    node_pair: Tuple[int, int]

    def __str__(self):
        return f"Cj cannot be zero in the WRSPICE JJ model (junction '{self.junction_name}')."

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Zero Junction Capacitance",
            details=(
                "The WRSPICE JJ model requires a nonzero capacitance for every junction, but the capacitors "
                "on this junction's node pair add up to zero."
            ),
            suggestion="Add a capacitor in parallel with the junction.",
            context={'component': self.junction_name, 'node_pair': self.node_pair}
        )


@dataclass(frozen=True)
class JunctionSpreadError(NetlistExportError):
    """
    Raised when the spread of junction critical currents is too large for one
    shared WRSPICE model. `reason` is "minimum too small" or "maximum too large".
    """
    reason: str
    ratio: float
    limit: float

    def __str__(self):
        if self.reason == "minimum too small":
            return "Minimum junction too much smaller than average for WRSPICE."
        return "Maximum junction too much larger than average for WRSPICE."

    def get_diagnostic_report(self) -> str:
        bound = "at least" if self.reason == "minimum too small" else "at most"
        return format_diagnostic_report(
            error_type=f"Junction Spread ({self.reason})",
            details=(
                f"{self}\n"
                f"Critical current ratio to the ensemble mean is {self.ratio:.4g}; it must be {bound} {self.limit:g}."
            ),
            suggestion="Bring the junction critical currents closer together, or split the circuit.",
            context={}
        )
