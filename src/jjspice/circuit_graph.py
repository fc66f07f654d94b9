# src/jjspice/circuit_graph.py
"""
The connectivity graph of a parsed circuit.

Nodes of the graph are node indices of the parsed circuit, and every two-terminal
component is one edge keyed by its name. Mutual inductances have no terminals of
their own and are kept as a separate list of coupled inductor pairs.
"""
import logging
from dataclasses import dataclass
from typing import List, Set, Tuple

import networkx as nx

from .components.base_enums import ComponentType
from .parser.raw_data import ParsedSortedCircuit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CircuitGraph:
    """
    The formal result of the circuit graph calculation.

    `graph` is a `networkx.MultiGraph`; parallel components are parallel edges.
    `coupling_pairs` holds the (inductor position, inductor position) pair of every
    mutual inductance in circuit order, and `junction_edges` the
    (node1, node2, name) triple of every Josephson inductor.
    """
    graph: nx.MultiGraph
    coupling_pairs: List[Tuple[int, int]]
    junction_edges: List[Tuple[int, int, str]]

    @property
    def num_connected_components(self) -> int:
        if self.graph.number_of_nodes() == 0:
            return 0
        return nx.number_connected_components(self.graph)

    @property
    def is_connected(self) -> bool:
        return self.num_connected_components <= 1

    def floating_nodes(self, reference: int = 0) -> Set[int]:
        """The node indices with no path to the `reference` node (ground by default)."""
        if reference not in self.graph:
            return set(self.graph.nodes)
        return set(self.graph.nodes) - nx.node_connected_component(self.graph, reference)


def calc_circuit_graph(parsed: ParsedSortedCircuit) -> CircuitGraph:
    """Builds the CircuitGraph of a parsed circuit."""
    graph = nx.MultiGraph()
    graph.add_nodes_from(range(parsed.num_nodes))
    coupling_pairs = []
    junction_edges = []

    mutual_inductor_names = iter(parsed.mutual_inductor_vector)
    for position, component_type in enumerate(parsed.type_vector):
        name = parsed.name_vector[position]
        if component_type is ComponentType.MUTUAL_INDUCTANCE:
            inductor1, inductor2 = next(mutual_inductor_names), next(mutual_inductor_names)
            coupling_pairs.append((parsed.name_to_index[inductor1], parsed.name_to_index[inductor2]))
            continue

        node1 = int(parsed.node_index_array[0, position])
        node2 = int(parsed.node_index_array[1, position])
        graph.add_edge(node1, node2, key=name, type=component_type)
        if component_type is ComponentType.JOSEPHSON_INDUCTOR:
            junction_edges.append((node1, node2, name))

    logger.debug(
        f"Circuit graph has {graph.number_of_nodes()} nodes, {graph.number_of_edges()} edges "
        f"and {len(coupling_pairs)} inductor couplings."
    )
    return CircuitGraph(graph=graph, coupling_pairs=coupling_pairs, junction_edges=junction_edges)
