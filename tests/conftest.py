# tests/conftest.py
import pytest

from jjspice.parser import parse_sort_circuit


# The single-junction circuit used throughout: a port and a 50 ohm resistor on
# node 1, a coupling capacitor to node 2, and a junction with its capacitance
# from node 2 to ground.
@pytest.fixture
def single_jj_circuit():
    return [
        ("P1", "1", "0", 1),
        ("R1", "1", "0", "R"),
        ("C1", "1", "2", "Cc"),
        ("Lj1", "2", "0", "Lj"),
        ("C2", "2", "0", "Cj"),
    ]


@pytest.fixture
def single_jj_defs():
    return {
        "Lj": 1000.0e-12,
        "Cc": 100.0e-15,
        "Cj": 1000.0e-15,
        "R": 50.0,
    }


@pytest.fixture
def coupled_circuit():
    """An inductor on node 1 coupled to an inductor on node 2, which also holds a junction."""
    return [
        ("P1", "1", "0", 1),
        ("R1", "1", "0", "Rleft"),
        ("L1", "1", "0", "L1"),
        ("Lj1", "2", "0", "Lj1"),
        ("K1", "L1", "L2", "K1"),
        ("L2", "2", "0", "L2"),
        ("C2", "2", "0", "C2"),
        ("C3", "2", "0", "C3"),
    ]


@pytest.fixture
def coupled_defs():
    return {
        "Rleft": 50.0,
        "L1": 1000.0e-12,
        "Lj1": 1000.0e-12,
        "K1": 0.1,
        "L2": 1000.0e-12,
        "C2": 1000.0e-15,
        "C3": 1000.0e-15,
    }


@pytest.fixture
def two_jj_parsed():
    """Two junctions to ground on nodes 2 and 3, each with its own capacitor."""
    circuit = [
        ("P1", "1", "0", 1),
        ("R1", "1", "0", 50.0),
        ("Cc1", "1", "2", 1.0e-13),
        ("Lj1", "2", "0", 1.0e-9),
        ("Cj1", "2", "0", 1.0e-12),
        ("Cc2", "2", "3", 1.0e-13),
        ("Lj2", "3", "0", 1.1e-9),
        ("Cj2", "3", "0", 1.2e-12),
    ]
    return parse_sort_circuit(circuit)
