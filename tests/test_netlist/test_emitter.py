# tests/test_netlist/test_emitter.py

import logging

import numpy as np
import pytest
import sympy

from jjspice.netlist import (
    JunctionSpreadError,
    NetlistExport,
    UnsupportedCombinationError,
    ZeroCapacitanceError,
    emit_netlist,
    export_netlist,
)
from jjspice.netlist.emitter import format_value
from jjspice.parser import parse_sort_circuit

MODEL_LINE = (
    ".model jjk jj(rtype=0,cct=1,icrit=0.32910597599999997u,"
    "cap=329.105976f,force=1,vm=9.9)"
)


class TestSingleJunctionExport:

    def test_junction_rendering(self, single_jj_circuit, single_jj_defs):
        result = export_netlist(single_jj_circuit, single_jj_defs, port=1, jj=True)
        assert result.netlist == "\n".join([
            "* SPICE Simulation",
            "R1 1 0 50.0",
            "C1 1 2 100.0f",
            "B1 2 0 3 jjk ics=0.32910597599999997u",
            "C2 2 0 670.8940240000001f",
            MODEL_LINE,
        ])

    def test_linear_rendering(self, single_jj_circuit, single_jj_defs):
        result = export_netlist(single_jj_circuit, single_jj_defs, port=1, jj=False)
        assert result.netlist == "\n".join([
            "* SPICE Simulation",
            "R1 1 0 50.0",
            "C1 1 2 100.0f",
            "Lj1 2 0 1000.0000000000001p",
            "C2 2 0 1000.0f",
        ])
        assert ".model" not in result.netlist

    def test_metadata(self, single_jj_circuit, single_jj_defs):
        result = export_netlist(single_jj_circuit, single_jj_defs, port=2)
        assert isinstance(result, NetlistExport)
        assert result.port == 2
        assert result.port_nodes == 1
        assert result.port_current == 1
        assert result.num_nodes == 3
        assert result.lines[0] == "* SPICE Simulation"

    def test_symbol_keyed_definitions(self, single_jj_circuit, single_jj_defs):
        symbolic_defs = {sympy.Symbol(name): value for name, value in single_jj_defs.items()}
        circuit = [(name, n1, n2, sympy.Symbol(v) if isinstance(v, str) else v)
                   for name, n1, n2, v in single_jj_circuit]
        assert export_netlist(circuit, symbolic_defs).netlist == export_netlist(
            single_jj_circuit, single_jj_defs).netlist

    def test_capacitor_declared_before_its_junction(self, single_jj_defs):
        circuit = [
            ("P1", "1", "0", 1),
            ("R1", "1", "0", "R"),
            ("C1", "1", "2", "Cc"),
            ("C2", "2", "0", "Cj"),
            ("Lj1", "2", "0", "Lj"),
        ]
        lines = export_netlist(circuit, single_jj_defs).lines
        assert lines[3:] == [
            "B1 2 0 3 jjk ics=0.32910597599999997u",
            "C2 2 0 670.8940240000001f",
            MODEL_LINE,
        ]

    def test_node_labels_follow_declared_order(self, single_jj_defs):
        circuit = [
            ("P1", "1", "0", 1),
            ("R1", "0", "1", "R"),
            ("C1", "2", "1", "Cc"),
            ("Lj1", "0", "2", "Lj"),
            ("C2", "2", "0", "Cj"),
        ]
        lines = export_netlist(circuit, single_jj_defs).lines
        assert lines[1] == "R1 0 1 50.0"
        assert lines[2] == "C1 2 1 100.0f"
        assert lines[3] == "B1 0 2 3 jjk ics=0.32910597599999997u"
        assert lines[4] == "C2 0 2 670.8940240000001f"


class TestCoupledExport:

    def test_junction_rendering(self, coupled_circuit, coupled_defs):
        result = export_netlist(coupled_circuit, coupled_defs, jj=True)
        assert result.netlist == "\n".join([
            "* SPICE Simulation",
            "R1 1 0 50.0",
            "L1 1 0 1000.0000000000001p",
            "B1 2 0 3 jjk ics=0.32910597599999997u",
            "C2 2 0 1670.894024f",
            "K1 L1 L2 0.1",
            "L2 2 0 1000.0000000000001p",
            MODEL_LINE,
        ])

    def test_linear_rendering(self, coupled_circuit, coupled_defs):
        result = export_netlist(coupled_circuit, coupled_defs, jj=False)
        assert result.netlist == "\n".join([
            "* SPICE Simulation",
            "R1 1 0 50.0",
            "L1 1 0 1000.0000000000001p",
            "Lj1 2 0 1000.0000000000001p",
            "K1 L1 L2 0.1",
            "L2 2 0 1000.0000000000001p",
            "C2 2 0 2000.0f",
        ])

    def test_reversed_coupling_keeps_inductor_order(self, coupled_circuit, coupled_defs):
        circuit = [entry if entry[0] != "K1" else ("K1", "L2", "L1", "K1") for entry in coupled_circuit]
        assert "K1 L2 L1 0.1" in export_netlist(circuit, coupled_defs).lines
        assert "K1 L2 L1 0.1" in export_netlist(circuit, coupled_defs, jj=False).lines

    def test_couplings_of_one_inductor_pair_are_summed(self, coupled_circuit, coupled_defs):
        circuit = list(coupled_circuit)
        circuit.insert(5, ("K2", "L1", "L2", 0.05))
        lines = export_netlist(circuit, coupled_defs).lines
        assert [line for line in lines if line.startswith("K")] == ["K1 L1 L2 " + format_value(0.1 + 0.05)]


class TestLinearCircuitExport:

    @pytest.fixture
    def circuit(self):
        return [
            ("P1", "1", "0", 1),
            ("R1", "1", "0", "R"),
            ("C1", "1", "2", "Cc"),
            ("L1", "2", "0", "L1"),
            ("L2", "2", "0", "L2"),
            ("C2", "2", "0", "Cj1"),
            ("C3", "2", "0", "Cj2"),
            ("I1", "2", "0", "I1"),
        ]

    @pytest.fixture
    def defs(self):
        return {
            "L1": 2000.0e-12,
            "L2": 2000.0e-12,
            "Cc": 100.0e-15,
            "Cj1": 500.0e-15,
            "Cj2": 500.0e-15,
            "R": 50.0,
            "I1": 0.1,
        }

    @pytest.mark.parametrize("jj", [True, False])
    def test_parallel_groups_become_one_element(self, circuit, defs, jj):
        result = export_netlist(circuit, defs, jj=jj)
        assert result.netlist == "\n".join([
            "* SPICE Simulation",
            "R1 1 0 50.0",
            "C1 1 2 100.0f",
            "L1 2 0 1000.0000000000001p",
            "C2 2 0 1000.0f",
        ])


class TestEmitNetlist:

    def test_parallel_junctions_are_one_device(self):
        parsed = parse_sort_circuit([
            ("Lj1", "1", "0", 2.0e-9),
            ("Lj2", "1", "0", 2.0e-9),
            ("C1", "1", "0", 1.0e-12),
        ])
        junction_lines = [line.split() for line in emit_netlist(parsed, parsed.value_vector).lines
                          if line.startswith("B")]
        assert len(junction_lines) == 1
        assert junction_lines[0][:5] == ["B1", "1", "0", "2", "jjk"]
        assert float(junction_lines[0][5][len("ics="):-1]) == pytest.approx(0.329105976)

    def test_internal_nodes_count_up_from_the_node_count(self):
        parsed = parse_sort_circuit([
            ("Lj1", "1", "0", 1.0e-9),
            ("C1", "1", "0", 1.0e-12),
            ("Lj2", "2", "0", 1.0e-9),
            ("C2", "2", "0", 1.0e-12),
        ])
        result = emit_netlist(parsed, parsed.value_vector)
        junction_lines = [line.split() for line in result.lines if line.startswith("B")]
        assert result.num_nodes == 3
        assert [fields[3] for fields in junction_lines] == ["3", "4"]
        assert sum(line.startswith(".model") for line in result.lines) == 1

    def test_capacitance_covered_by_the_model_is_not_repeated(self):
        # With Cj/Ic below the clamp the model holds all of the smaller junction capacitance.
        parsed = parse_sort_circuit([
            ("Lj1", "1", "0", 1.0e-12),
            ("C1", "1", "0", 1.0e-13),
        ])
        capacitor_lines = [line.split() for line in emit_netlist(parsed, parsed.value_vector).lines
                           if line.startswith("C1")]
        # At most a rounding residue is left over.
        assert all(abs(float(fields[3][:-1])) < 1e-9 for fields in capacitor_lines)

    def test_elements_without_netlist_form_are_skipped(self):
        parsed = parse_sort_circuit([
            ("P1", "1", "0", 1),
            ("V1", "1", "0", 1.0),
            ("I1", "1", "0", 1.0e-6),
            ("NL1", "1", "0", 1.0e-9),
            ("R1", "1", "0", 50),
        ])
        assert emit_netlist(parsed, parsed.value_vector).lines == ["* SPICE Simulation", "R1 1 0 50"]

    def test_complex_values_emit_their_real_part(self):
        parsed = parse_sort_circuit([("R1", "1", "0", 50.0 + 2.0j), ("C1", "1", "0", 1.0e-12 + 0j)])
        assert emit_netlist(parsed, parsed.value_vector).lines[1:] == ["R1 1 0 50.0", "C1 1 0 1000.0f"]

    def test_numpy_values(self):
        parsed = parse_sort_circuit([("R1", "1", "0", np.float64(50.0)), ("L1", "1", "0", np.float64(1.0e-9))])
        assert emit_netlist(parsed, parsed.value_vector).lines[1:] == ["R1 1 0 50.0", "L1 1 0 1000.0000000000001p"]


class TestExportErrors:

    def test_missing_companion_capacitor(self):
        circuit = [("P1", "1", "0", 1), ("R1", "1", "0", 50.0), ("Lj1", "1", "0", 1.0e-9)]
        with pytest.raises(ZeroCapacitanceError):
            export_netlist(circuit, {})

    def test_missing_capacitor_fails_in_both_rendering_modes(self):
        circuit = [("P1", "1", "0", 1), ("R1", "1", "0", 50.0), ("Lj1", "1", "0", 1.0e-9)]
        # The statistics are computed in both modes.
        with pytest.raises(ZeroCapacitanceError):
            export_netlist(circuit, {}, jj=False)

    def test_junction_spread(self):
        circuit = [
            ("Lj1", "1", "0", 1.0e-9),
            ("C1", "1", "0", 1.0e-12),
            ("Lj2", "2", "0", 100.0e-9),
            ("C2", "2", "0", 1.0e-12),
        ]
        with pytest.raises(JunctionSpreadError, match="Minimum junction"):
            export_netlist(circuit, {})

    def test_parallel_resistors(self):
        with pytest.raises(UnsupportedCombinationError):
            export_netlist([("R1", "1", "0", 50.0), ("R2", "1", "0", 50.0)], {})


def test_disconnected_circuit_logs_a_warning(caplog):
    circuit = [("R1", "1", "0", 50.0), ("C1", "2", "3", 1.0e-12)]
    with caplog.at_level(logging.WARNING, logger="jjspice.netlist.emitter"):
        result = export_netlist(circuit, {})
    assert result.lines[1:] == ["R1 1 0 50.0", "C1 2 3 1000.0f"]
    assert "disconnected" in caplog.text
    assert "'2'" in caplog.text and "'3'" in caplog.text


@pytest.mark.parametrize("value, text", [
    (50, "50"),
    (50.0, "50.0"),
    (1.5 - 3.0j, "1.5"),
    (np.float64(0.25), "0.25"),
    (np.int64(7), "7"),
])
def test_format_value(value, text):
    assert format_value(value) == text
