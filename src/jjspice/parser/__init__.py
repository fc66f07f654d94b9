# src/jjspice/parser/__init__.py
from .raw_data import ParsedSortedCircuit, CircuitDescription, ComponentTuple
from .circuit_parser import parse_sort_circuit
from .file_loader import CircuitFileLoader
from .exceptions import CircuitParseError, ParsingError, SchemaValidationError

__all__ = [
    # Data Structures
    "ParsedSortedCircuit",
    "CircuitDescription",
    "ComponentTuple",
    # Parsing
    "parse_sort_circuit",
    "CircuitFileLoader",
    # Exceptions
    "CircuitParseError",
    "ParsingError",
    "SchemaValidationError",
]
