# tests/test_circuit_graph.py

import networkx as nx

from jjspice.circuit_graph import calc_circuit_graph
from jjspice.components import ComponentType
from jjspice.parser import parse_sort_circuit


def test_graph_of_a_coupled_circuit(coupled_circuit):
    cg = calc_circuit_graph(parse_sort_circuit(coupled_circuit))
    assert isinstance(cg.graph, nx.MultiGraph)
    assert sorted(cg.graph.nodes) == [0, 1, 2]
    # Every component except the coupling is an edge.
    assert cg.graph.number_of_edges() == 7
    assert cg.graph.number_of_edges(0, 2) == 4
    assert cg.graph.edges[2, 0, "Lj1"]["type"] is ComponentType.JOSEPHSON_INDUCTOR
    assert cg.coupling_pairs == [(2, 5)]
    assert cg.junction_edges == [(2, 0, "Lj1")]
    assert cg.is_connected
    assert cg.floating_nodes() == set()


def test_floating_subcircuit():
    cg = calc_circuit_graph(parse_sort_circuit([
        ("R1", "1", "0", 50.0),
        ("L1", "2", "3", 1e-9),
        ("C1", "3", "2", 1e-12),
    ]))
    assert cg.num_connected_components == 2
    assert not cg.is_connected
    assert cg.floating_nodes() == {2, 3}


def test_circuit_without_ground_node():
    cg = calc_circuit_graph(parse_sort_circuit([("R1", "2", "1", 50.0)]))
    # Node index 0 is node "1" here.
    assert cg.is_connected
    assert cg.floating_nodes() == set()


def test_empty_circuit():
    cg = calc_circuit_graph(parse_sort_circuit([]))
    assert cg.num_connected_components == 0
    assert cg.is_connected
    assert cg.coupling_pairs == []
