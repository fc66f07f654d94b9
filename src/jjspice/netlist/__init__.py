# src/jjspice/netlist/__init__.py
from .branches import (
    BranchIndex,
    AggregationSession,
    AggregatedBranch,
    MutualInductorCounter,
    build_branch_index,
    calc_nodes,
    combine_values,
    sum_branch_values,
)
from .junctions import JunctionStatistics, calc_junction_statistics, calc_cj_ic_mean
from .emitter import NetlistExport, emit_netlist, export_netlist, export_netlist_file
from .exceptions import (
    NetlistExportError,
    ShapeError,
    UnsupportedCombinationError,
    ZeroCapacitanceError,
    JunctionSpreadError,
)

__all__ = [
    # Branch Aggregation
    "BranchIndex",
    "AggregationSession",
    "AggregatedBranch",
    "MutualInductorCounter",
    "build_branch_index",
    "calc_nodes",
    "combine_values",
    "sum_branch_values",
    # Junction Statistics
    "JunctionStatistics",
    "calc_junction_statistics",
    "calc_cj_ic_mean",
    # Emission
    "NetlistExport",
    "emit_netlist",
    "export_netlist",
    "export_netlist_file",
    # Exceptions
    "NetlistExportError",
    "ShapeError",
    "UnsupportedCombinationError",
    "ZeroCapacitanceError",
    "JunctionSpreadError",
]
