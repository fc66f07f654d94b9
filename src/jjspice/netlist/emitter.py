# src/jjspice/netlist/emitter.py
"""
Writes a parsed circuit as a WRSPICE netlist.

Every parallel branch group becomes one netlist element, named after its first
member. Josephson inductors are written either as junctions ("B" elements sharing
one `jjk` model card) or, with `jj=False`, as plain inductors.

Values are stored in SI base units and scaled to the unit suffix written after
them: capacitances in femtofarads, inductances in picohenries and critical
currents in microamperes. Resistances and coupling coefficients are written
unscaled. Only the real part of a value is written.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

import numpy as np

from ..circuit_graph import calc_circuit_graph
from ..components.base_enums import ComponentType
from ..components.physics import lj_to_ic
from ..constants import FEMTO, PICO, MICRO, JJ_MODEL_NAME, NETLIST_HEADER, WRSPICE_VM
from ..parameters.resolver import resolve_component_values
from ..parser.circuit_parser import parse_sort_circuit
from ..parser.file_loader import CircuitFileLoader
from ..parser.raw_data import ParsedSortedCircuit
from .branches import build_branch_index, iter_branch_keys
from .junctions import calc_junction_statistics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NetlistExport:
    """
    The result of a netlist export.

    `port`, `port_nodes` and `port_current` are passed through for the caller's
    simulation setup; only single-port circuits are supported, so the last two
    are always 1. `num_nodes` is the number of distinct circuit nodes, ground
    included.
    """
    netlist: str
    port: int
    port_nodes: int
    port_current: int
    num_nodes: int

    @property
    def lines(self) -> List[str]:
        return self.netlist.split("\n")


def format_value(value: Any) -> str:
    """Formats the real part of a number as the shortest text that reads back to it."""
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, complex):
        value = value.real
    return str(value)


def emit_netlist(
    parsed: ParsedSortedCircuit,
    value_vector: Sequence[Any],
    jj: bool = True,
    port: int = 1,
    lj_to_ic_func: Callable[[Any], Any] = lj_to_ic,
) -> NetlistExport:
    """
    Emits the netlist of a parsed circuit with numeric component values.

    Raises:
        ShapeError: If the parsed circuit's arrays are inconsistent.
        UnsupportedCombinationError: If two parallel components of a type
            without a combination law share a node pair.
        ZeroCapacitanceError: If a junction has no capacitance on its node pair.
        JunctionSpreadError: If the junction critical currents are too far apart.
    """
    branch_index = build_branch_index(
        parsed.type_vector, parsed.node_index_array,
        parsed.name_to_index, parsed.mutual_inductor_vector,
    )
    stats = calc_junction_statistics(parsed, value_vector, branch_index, lj_to_ic_func)
    cj_over_ic = stats.cj / stats.ic_mean if stats.has_junctions else 0.0

    num_nodes = parsed.num_nodes
    names = parsed.name_vector
    session = branch_index.open_session(value_vector)
    netlist = [NETLIST_HEADER]
    num_junctions = 0

    for position, (component_type, node1, node2) in iter_branch_keys(parsed):
        # With junctions on, a capacitor sharing its node pair with a junction
        # belongs to that junction, wherever it was declared.
        if (jj and component_type is ComponentType.CAPACITOR
                and session.remaining(ComponentType.JOSEPHSON_INDUCTOR, node1, node2) > 0):
            continue

        branch = session.try_consume(component_type, node1, node2)
        if branch is None:
            continue
        value = branch.value
        name = names[position]

        if component_type is ComponentType.MUTUAL_INDUCTANCE:
            inductor1, inductor2 = names[node1], names[node2]
            netlist.append(f"{name} {inductor1} {inductor2} {format_value(value)}")
            continue

        label1, label2 = parsed.node_names(position)
        if component_type is ComponentType.JOSEPHSON_INDUCTOR and jj:
            num_junctions += 1
            ic = lj_to_ic_func(value)
            internal_node = num_nodes + num_junctions - 1
            netlist.append(
                f"B{name[len(component_type.prefix):]} {label1} {label2} {internal_node} "
                f"{JJ_MODEL_NAME} ics={format_value(ic * MICRO)}u"
            )
            ic = ic.real
            capacitor = session.try_consume(ComponentType.CAPACITOR, node1, node2)
            if capacitor is not None and capacitor.value.real > ic * cj_over_ic:
                excess = FEMTO * (capacitor.value - ic * cj_over_ic)
                netlist.append(f"{names[capacitor.index]} {label1} {label2} {format_value(excess)}f")
        elif component_type in (ComponentType.JOSEPHSON_INDUCTOR, ComponentType.INDUCTOR):
            netlist.append(f"{name} {label1} {label2} {format_value(value * PICO)}p")
        elif component_type is ComponentType.CAPACITOR:
            netlist.append(f"{name} {label1} {label2} {format_value(value * FEMTO)}f")
        elif component_type is ComponentType.RESISTOR:
            netlist.append(f"{name} {label1} {label2} {format_value(value)}")
        else:
            # Ports, sources and nonlinear inductors have no netlist element.
            logger.debug(f"No netlist element for {component_type.name} '{name}'.")

    if jj and num_junctions > 0:
        netlist.append(
            f".model {JJ_MODEL_NAME} jj(rtype=0,cct=1,icrit={format_value(MICRO * stats.ic_mean)}u,"
            f"cap={format_value(FEMTO * stats.ic_mean * cj_over_ic)}f,force=1,vm={format_value(WRSPICE_VM)})"
        )

    logger.info(
        f"Emitted netlist with {len(netlist) - 1} statements for {parsed.num_components} components "
        f"({num_junctions} junctions)."
    )
    return NetlistExport(
        netlist="\n".join(netlist),
        port=port,
        port_nodes=1,
        port_current=1,
        num_nodes=num_nodes,
    )


def export_netlist(
    circuit: Sequence[Sequence[Any]],
    circuit_defs: Optional[Mapping[Any, Any]] = None,
    port: int = 1,
    jj: bool = True,
    sorting: str = "number",
) -> NetlistExport:
    """
    Exports a circuit given as (name, node1, node2, value) tuples to a WRSPICE netlist.

    Symbolic values are resolved against `circuit_defs`. Errors from parsing,
    value resolution and emission propagate unmodified; no partial netlist is
    returned.
    """
    parsed = parse_sort_circuit(circuit, sorting=sorting)

    circuit_graph = calc_circuit_graph(parsed)
    if not circuit_graph.is_connected:
        logger.warning(
            f"Circuit has {circuit_graph.num_connected_components} disconnected parts; "
            f"floating node(s): {sorted(parsed.unique_nodes[i] for i in circuit_graph.floating_nodes())}."
        )

    value_vector = resolve_component_values(parsed, circuit_defs)
    return emit_netlist(parsed, value_vector, jj=jj, port=port)


def export_netlist_file(path: Union[str, Path], port: int = 1, jj: bool = True, sorting: str = "number") -> NetlistExport:
    """Loads a YAML circuit file and exports it with `export_netlist`."""
    description = CircuitFileLoader().load(path)
    logger.info(f"Exporting circuit '{description.circuit_name}' from '{path}'.")
    return export_netlist(description.circuit, description.circuit_defs, port=port, jj=jj, sorting=sorting)
