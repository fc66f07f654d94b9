# src/jjspice/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("jjspice package initialized.")

from .units import ureg, pint, Quantity
from .components import ComponentType, lj_to_ic, ic_to_lj
from .parser import parse_sort_circuit, ParsedSortedCircuit, CircuitFileLoader
from .parameters import ValueResolver, resolve_component_values
from .circuit_graph import CircuitGraph, calc_circuit_graph
from .netlist import NetlistExport, emit_netlist, export_netlist, export_netlist_file
from .errors import JJSpiceError, DiagnosableError

__all__ = [
    # Units
    "ureg", "pint", "Quantity",
    # Components
    "ComponentType", "lj_to_ic", "ic_to_lj",
    # Parser
    "parse_sort_circuit", "ParsedSortedCircuit", "CircuitFileLoader",
    # Values
    "ValueResolver", "resolve_component_values",
    # Circuit Graph
    "CircuitGraph", "calc_circuit_graph",
    # Netlist Export
    "NetlistExport", "emit_netlist", "export_netlist", "export_netlist_file",
    # Top-Level Errors (Actionable Diagnostics)
    "JJSpiceError", "DiagnosableError",
]
