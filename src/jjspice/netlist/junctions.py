# src/jjspice/netlist/junctions.py
"""
Junction ensemble statistics for the shared WRSPICE JJ model.

WRSPICE describes every junction in a netlist with one model card. Each junction
instance only scales that model by its critical current, so all junctions share
the model's capacitance-to-critical-current ratio, and the critical currents must
stay within a fixed range of the model's reference current. This module derives
that model from the circuit and checks the range.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Sequence, Tuple

from ..components.base_enums import ComponentType
from ..components.physics import lj_to_ic
from ..constants import WRSPICE_MAX_CJ_OVER_IC, WRSPICE_MAX_IC_RATIO, WRSPICE_MIN_IC_RATIO
from .branches import BranchIndex, iter_branch_keys
from .exceptions import JunctionSpreadError, ZeroCapacitanceError

logger = logging.getLogger(__name__)


def _real(value: Any) -> Any:
    return value.real


@dataclass(frozen=True)
class JunctionStatistics:
    """
    Critical-current statistics of all junctions in a circuit.

    `cj_over_ic` is the smallest capacitance-to-critical-current ratio of any
    junction, clamped to the largest ratio WRSPICE accepts. Every junction's own
    capacitance is at least `Ic * cj_over_ic`; the remainder is written to the
    netlist as a separate capacitor.
    """
    num_junctions: int
    ic_mean: float
    ic_min: float
    ic_max: float
    cj_over_ic: float
    clamped: bool = False

    @property
    def cj(self) -> float:
        """The model capacitance, `cj_over_ic * ic_mean`."""
        return self.cj_over_ic * self.ic_mean

    @property
    def has_junctions(self) -> bool:
        return self.num_junctions > 0


def calc_junction_statistics(
    parsed,
    value_vector: Sequence[Any],
    branch_index: BranchIndex,
    lj_to_ic_func: Callable[[Any], Any] = lj_to_ic,
) -> JunctionStatistics:
    """
    Computes the junction statistics of a circuit in one scan.

    Every junction group (parallel Josephson inductors on one node pair) is folded
    into one junction, and the capacitors on the same node pair into its
    capacitance. The pass works on its own aggregation session, so `branch_index`
    can be reused afterwards.

    Args:
        parsed: The ParsedSortedCircuit.
        value_vector: The numeric value of every component.
        branch_index: The circuit's BranchIndex.
        lj_to_ic_func: Converts a Josephson inductance to a critical current.

    Returns:
        The JunctionStatistics. A circuit without junctions gets all-zero statistics.

    Raises:
        ZeroCapacitanceError: If a junction has no capacitance on its node pair.
        JunctionSpreadError: If a critical current is below 2% or above 50 times
            the mean.
    """
    session = branch_index.open_session(value_vector)

    ic_mean = 0.0
    ic_max = 0.0
    ic_min = 0.0
    cj_over_ic = 0.0
    num_junctions = 0

    for _, (component_type, node1, node2) in iter_branch_keys(parsed):
        if component_type is not ComponentType.JOSEPHSON_INDUCTOR:
            continue
        junction = session.try_consume(component_type, node1, node2)
        if junction is None:
            continue

        num_junctions += 1
        capacitor = session.try_consume(ComponentType.CAPACITOR, node1, node2)
        capacitance = capacitor.value if capacitor is not None else 0

        ic = _real(lj_to_ic_func(junction.value))
        ic_mean = ic_mean + (ic - ic_mean) / num_junctions
        candidate = _real(capacitance / ic)
        if num_junctions == 1:
            cj_over_ic = candidate
            ic_min = ic

        ic_min = min(ic_min, ic)
        ic_max = max(ic_max, ic)

        # A separate capacitor can always be added, so the model uses the smallest ratio.
        if candidate == 0.0:
            raise ZeroCapacitanceError(
                junction_name=parsed.name_vector[junction.index], node_pair=(node1, node2)
            )
        cj_over_ic = min(cj_over_ic, candidate)
        logger.debug(
            "Junction '%s': Ic = %.6g A, Cj/Ic = %.6g F/A.",
            parsed.name_vector[junction.index], ic, candidate
        )

    if num_junctions == 0:
        logger.debug("No Josephson junctions in circuit.")
        return JunctionStatistics(
            num_junctions=0, ic_mean=0.0, ic_min=0.0, ic_max=0.0, cj_over_ic=0.0
        )

    if ic_min / ic_mean < WRSPICE_MIN_IC_RATIO:
        raise JunctionSpreadError(
            reason="minimum too small", ratio=ic_min / ic_mean, limit=WRSPICE_MIN_IC_RATIO
        )
    if ic_max / ic_mean > WRSPICE_MAX_IC_RATIO:
        raise JunctionSpreadError(
            reason="maximum too large", ratio=ic_max / ic_mean, limit=WRSPICE_MAX_IC_RATIO
        )

    clamped = False
    if cj_over_ic > WRSPICE_MAX_CJ_OVER_IC:
        logger.warning(
            "Cj/Ic ratio %.6g F/A exceeds the WRSPICE limit; using %g F/A in the JJ model.",
            cj_over_ic, WRSPICE_MAX_CJ_OVER_IC
        )
        cj_over_ic = WRSPICE_MAX_CJ_OVER_IC
        clamped = True

    logger.info(
        "Found %d junction(s): Ic mean = %.6g A, min = %.6g A, max = %.6g A.",
        num_junctions, ic_mean, ic_min, ic_max
    )
    return JunctionStatistics(
        num_junctions=num_junctions,
        ic_mean=ic_mean,
        ic_min=ic_min,
        ic_max=ic_max,
        cj_over_ic=cj_over_ic,
        clamped=clamped,
    )


def calc_cj_ic_mean(
    parsed,
    value_vector: Sequence[Any],
    branch_index: BranchIndex,
    lj_to_ic_func: Callable[[Any], Any] = lj_to_ic,
) -> Tuple[float, float]:
    """Returns (Cj, Icmean) of the shared JJ model, (0.0, 0.0) without junctions."""
    stats = calc_junction_statistics(parsed, value_vector, branch_index, lj_to_ic_func)
    return stats.cj, stats.ic_mean
