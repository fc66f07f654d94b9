# src/jjspice/parser/circuit_parser.py
"""
Parses a list of (name, node1, node2, value) tuples into the sorted, array-based
form consumed by the netlist engine.

Component order is preserved. Only the node names are sorted, so node indices are
stable for a given set of node names regardless of the order components appear in.
"""
import logging
from typing import Any, Dict, Iterable, List, Sequence

import numpy as np

from ..components.base_enums import ComponentType
from ..constants import GROUND_NODE
from .exceptions import CircuitParseError
from .raw_data import ParsedSortedCircuit

logger = logging.getLogger(__name__)

SORTING_MODES = ("number", "name", "none")


def parse_sort_circuit(circuit: Iterable[Sequence[Any]], sorting: str = "number") -> ParsedSortedCircuit:
    """
    Parses and node-sorts a circuit.

    Args:
        circuit: An iterable of (name, node1, node2, value) tuples. For mutual
                 inductances node1 and node2 are the names of the coupled inductors.
        sorting: How to order the unique node names. "number" sorts numerically and
                 requires every node name to be an integer, "name" sorts
                 lexicographically, and "none" keeps first-appearance order. In all
                 modes the ground node "0" comes first when present.

    Returns:
        The ParsedSortedCircuit.

    Raises:
        CircuitParseError: For any malformed or inconsistent component.
    """
    if sorting not in SORTING_MODES:
        raise CircuitParseError(details=f"Unknown sorting mode '{sorting}'. Allowed modes: {list(SORTING_MODES)}.")

    type_vector: List[ComponentType] = []
    name_vector: List[str] = []
    name_to_index: Dict[str, int] = {}
    raw_nodes: List[tuple] = []
    mutual_inductor_vector: List[str] = []
    value_vector: List[Any] = []
    first_seen_nodes: List[str] = []
    seen_node_set = set()

    for entry in circuit:
        if isinstance(entry, (str, bytes)) or len(entry) != 4:
            raise CircuitParseError(details=f"Expected a (name, node1, node2, value) tuple, got {entry!r}.")
        name, node1, node2, value = entry
        if not isinstance(name, str) or not name:
            raise CircuitParseError(details=f"Component names must be non-empty strings, got {name!r}.")
        if name in name_to_index:
            raise CircuitParseError(details=f"Duplicate component name '{name}'.", component_name=name)

        component_type = ComponentType.from_name(name)
        if component_type is None:
            raise CircuitParseError(
                details=f"Unable to determine the component type of '{name}' from its name prefix.",
                component_name=name
            )

        node1, node2 = str(node1), str(node2)
        if component_type is ComponentType.MUTUAL_INDUCTANCE:
            mutual_inductor_vector.extend((node1, node2))
        else:
            if node1 == node2:
                raise CircuitParseError(
                    details=f"Both terminals are connected to node '{node1}'.", component_name=name
                )
            for node in (node1, node2):
                if node not in seen_node_set:
                    seen_node_set.add(node)
                    first_seen_nodes.append(node)

        name_to_index[name] = len(type_vector)
        type_vector.append(component_type)
        name_vector.append(name)
        raw_nodes.append((node1, node2))
        value_vector.append(value)

    _check_mutual_inductors(mutual_inductor_vector, name_to_index, type_vector, name_vector)

    unique_nodes = _sort_nodes(first_seen_nodes, sorting)
    node_lookup = {node: i for i, node in enumerate(unique_nodes)}

    node_index_array = np.full((2, len(type_vector)), -1, dtype=int)
    for i, (component_type, (node1, node2)) in enumerate(zip(type_vector, raw_nodes)):
        if component_type is ComponentType.MUTUAL_INDUCTANCE:
            continue
        node_index_array[0, i] = node_lookup[node1]
        node_index_array[1, i] = node_lookup[node2]

    logger.debug(
        "Parsed circuit with %d components and %d unique nodes (sorting=%s).",
        len(type_vector), len(unique_nodes), sorting
    )
    return ParsedSortedCircuit(
        type_vector=type_vector,
        name_vector=name_vector,
        name_to_index=name_to_index,
        node_index_array=node_index_array,
        unique_nodes=unique_nodes,
        mutual_inductor_vector=mutual_inductor_vector,
        value_vector=value_vector,
    )


def _check_mutual_inductors(
    mutual_inductor_vector: List[str],
    name_to_index: Dict[str, int],
    type_vector: List[ComponentType],
    name_vector: List[str],
):
    """Every name referenced by a mutual inductance must be an inductor in the circuit."""
    coupling_names = [name for name, t in zip(name_vector, type_vector) if t is ComponentType.MUTUAL_INDUCTANCE]
    for k, coupling_name in enumerate(coupling_names):
        for inductor_name in mutual_inductor_vector[2 * k:2 * k + 2]:
            if inductor_name not in name_to_index:
                raise CircuitParseError(
                    details=f"Mutual inductance refers to unknown inductor '{inductor_name}'.",
                    component_name=coupling_name
                )
            if not type_vector[name_to_index[inductor_name]].is_inductor:
                raise CircuitParseError(
                    details=f"Mutual inductance refers to '{inductor_name}', which is not an inductor.",
                    component_name=coupling_name
                )


def _sort_nodes(nodes: List[str], sorting: str) -> List[str]:
    if sorting == "number":
        try:
            ordered = sorted(nodes, key=int)
        except ValueError:
            bad = sorted(node for node in nodes if not node.lstrip("-").isdigit())
            raise CircuitParseError(
                details=f"Cannot sort nodes by number, non-integer node name(s): {bad}. Use sorting='name'."
            ) from None
    elif sorting == "name":
        ordered = sorted(nodes)
    else:
        ordered = list(nodes)

    if GROUND_NODE in ordered:
        ordered.remove(GROUND_NODE)
        ordered.insert(0, GROUND_NODE)
    return ordered
