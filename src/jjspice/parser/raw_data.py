# src/jjspice/parser/raw_data.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from ..components.base_enums import ComponentType

# The classes in this module are the contract between the circuit parser and the
# netlist engine. They are frozen so a parsed circuit can be shared by several
# export passes without any of them changing it.

#: One raw circuit entry: (name, node1, node2, value).
ComponentTuple = Tuple[str, Any, Any, Any]


@dataclass(frozen=True)
class ParsedSortedCircuit:
    """
    A parsed circuit with its nodes sorted.

    Positions are 0-based and follow the order of the input circuit. Column `i` of
    `node_index_array` holds the indices into `unique_nodes` of the two nodes of
    component `i`; mutual inductance columns hold -1 because their "nodes" are the
    inductor names stored, two per coupling, in `mutual_inductor_vector`.
    """
    type_vector: List[ComponentType]
    name_vector: List[str]
    name_to_index: Dict[str, int]
    node_index_array: np.ndarray
    unique_nodes: List[str]
    mutual_inductor_vector: List[str]
    value_vector: List[Any]

    @property
    def num_components(self) -> int:
        return len(self.type_vector)

    @property
    def num_nodes(self) -> int:
        return len(self.unique_nodes)

    def node_names(self, index: int) -> Tuple[str, str]:
        """The names of the two nodes of component `index`, in declared order."""
        return (
            self.unique_nodes[self.node_index_array[0, index]],
            self.unique_nodes[self.node_index_array[1, index]],
        )


@dataclass(frozen=True)
class CircuitDescription:
    """A circuit and its symbol definitions as read from a circuit file."""
    circuit_name: str
    circuit: List[ComponentTuple]
    circuit_defs: Dict[str, Any]
    source_path: Optional[Path] = None
