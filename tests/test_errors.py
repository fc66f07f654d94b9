# tests/test_errors.py

from jjspice.errors import Diagnosable, DiagnosableError, JJSpiceError, format_diagnostic_report
from jjspice.netlist import JunctionSpreadError, NetlistExportError, UnsupportedCombinationError
from jjspice.parameters import ParameterError, ValueResolutionError
from jjspice.parser import CircuitParseError, ParsingError


def test_report_layout():
    report = format_diagnostic_report(
        error_type="Junction Spread",
        details="line one\nline two",
        suggestion="Do this.",
        context={'component': "Lj1", 'node_pair': (0, 2), 'user_input': None},
    )
    assert "jjspice: Actionable Diagnostic Report" in report
    assert "Error Type:     Junction Spread" in report
    assert "Component:      Lj1" in report
    assert "Node Pair:      (0, 2)" in report
    assert "User Input" not in report
    assert "  line one\n  line two" in report
    assert "Suggestion:\n  Do this." in report


def test_all_subsystem_errors_are_diagnosable():
    errors = [
        JunctionSpreadError(reason="maximum too large", ratio=52.2, limit=50.0),
        UnsupportedCombinationError(component_type="R", node_pair=(0, 1)),
        ValueResolutionError(user_input="x", details="undefined"),
        CircuitParseError(details="bad"),
        ParsingError(details="missing", file_path="circuit.yaml"),
    ]
    for error in errors:
        assert isinstance(error, DiagnosableError)
        assert isinstance(error, JJSpiceError)
        assert isinstance(error, Diagnosable)
        assert "Actionable Diagnostic Report" in error.get_diagnostic_report()


def test_subsystem_base_classes():
    assert issubclass(JunctionSpreadError, NetlistExportError)
    assert issubclass(ValueResolutionError, ParameterError)


def test_spread_report_states_the_bound():
    error = JunctionSpreadError(reason="minimum too small", ratio=0.0198, limit=0.02)
    assert str(error) == "Minimum junction too much smaller than average for WRSPICE."
    assert "must be at least 0.02" in error.get_diagnostic_report()
