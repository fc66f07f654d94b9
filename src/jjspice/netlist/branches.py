# src/jjspice/netlist/branches.py
"""
Parallel-branch bookkeeping for the netlist engine.

Components of one type connected across the same pair of nodes form a parallel
branch group, which is written to the netlist as a single element. This module
provides the three pieces needed for that:

1.  **Node resolution** (`calc_nodes`): the canonical key of a component. For
    two-terminal elements the node indices are sorted, because the electrical
    behavior does not depend on their order. For mutual inductances the key is
    the pair of coupled inductor positions in declared order. Swapping them
    flips the sign of the coupling, so they are never sorted and couplings
    declared with different inductor orders are never summed together.

2.  **Indexing** (`build_branch_index`): one linear scan that counts the members
    of every group and records the position of each member, so a group can be
    folded without searching the circuit again.

3.  **Aggregation** (`AggregationSession`): folds a group into one value with
    the combination law of its type and marks the group consumed. Every pass
    over the circuit opens its own session on the shared, read-only index.
"""
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from ..components.base_enums import ComponentType
from .exceptions import ShapeError, UnsupportedCombinationError

logger = logging.getLogger(__name__)

#: (type, endpoint_a, endpoint_b)
BranchKey = Tuple[ComponentType, int, int]
#: (type, endpoint_a, endpoint_b, occurrence), occurrence counted from 1
SlotKey = Tuple[ComponentType, int, int, int]


# --- Combination laws ---

def _parallel_sum(value1, value2):
    return value1 + value2


def _reciprocal_sum(value1, value2):
    return 1 / (1 / value1 + 1 / value2)


# Capacitors in parallel add. Coupling coefficients between the same ordered
# inductor pair add algebraically. Inductances in parallel combine reciprocally.
_COMBINATION_LAWS: Dict[ComponentType, Callable[[Any, Any], Any]] = {
    ComponentType.CAPACITOR: _parallel_sum,
    ComponentType.MUTUAL_INDUCTANCE: _parallel_sum,
    ComponentType.INDUCTOR: _reciprocal_sum,
    ComponentType.JOSEPHSON_INDUCTOR: _reciprocal_sum,
}


def combine_values(component_type: ComponentType, value1, value2):
    """
    Combines the values of two parallel components of the same type.

    >>> combine_values(ComponentType.INDUCTOR, 1.0, 4.0)
    0.8
    >>> combine_values(ComponentType.CAPACITOR, 1.0, 4.0)
    5.0

    Raises:
        UnsupportedCombinationError: For types without a combination law
            (resistors, sources, ports, nonlinear inductors).
    """
    try:
        law = _COMBINATION_LAWS[component_type]
    except KeyError:
        raise UnsupportedCombinationError(component_type=str(component_type)) from None
    return law(value1, value2)


# --- Node resolution ---

class MutualInductorCounter:
    """
    The running, 1-based count of mutual inductances seen during a scan.

    The k-th mutual inductance owns entries 2k-1 and 2k of the circuit's
    mutual-inductor list, so the count is only meaningful when components are
    visited in ascending position order, calling `advance` once per position.
    """
    def __init__(self):
        self.index = 0

    def advance(self, component_type: ComponentType) -> int:
        if component_type is ComponentType.MUTUAL_INDUCTANCE:
            self.index += 1
        return self.index


def calc_nodes(
    position: int,
    mutual_inductor_index: int,
    type_vector: Sequence[ComponentType],
    node_index_array: np.ndarray,
    name_to_index: Mapping[str, int],
    mutual_inductor_vector: Sequence[str],
) -> Tuple[int, int]:
    """
    Returns the canonical endpoint pair of the component at `position`.

    For a mutual inductance these are the positions of the two coupled inductors,
    in declared order; `mutual_inductor_index` is the 1-based running count of
    mutual inductances up to and including this one. For every other type they are
    the two node indices, smallest first.

    Components must be visited in ascending position order so that
    `mutual_inductor_index` stays in step with `mutual_inductor_vector`. This is
    not checked; visiting out of order pairs couplings with the wrong inductors.
    """
    if type_vector[position] is ComponentType.MUTUAL_INDUCTANCE:
        inductor1_name = mutual_inductor_vector[2 * mutual_inductor_index - 2]
        inductor2_name = mutual_inductor_vector[2 * mutual_inductor_index - 1]
        return name_to_index[inductor1_name], name_to_index[inductor2_name]

    node1 = int(node_index_array[0, position])
    node2 = int(node_index_array[1, position])
    if node1 < node2:
        return node1, node2
    return node2, node1


# --- Indexing ---

@dataclass(frozen=True, eq=False)
class BranchIndex:
    """
    The read-only count/slot index of every parallel branch group in a circuit.

    `counts[(type, a, b)]` is the number of components in the group and
    `slots[(type, a, b, k)]` is the position of its k-th member, k = 1..count.
    """
    counts: Mapping[BranchKey, int]
    slots: Mapping[SlotKey, int]

    def open_session(self, value_vector: Sequence[Any]) -> "AggregationSession":
        """Starts a new aggregation pass with its own consumption state."""
        return AggregationSession(self, value_vector)


def build_branch_index(
    type_vector: Sequence[ComponentType],
    node_index_array: np.ndarray,
    name_to_index: Mapping[str, int],
    mutual_inductor_vector: Sequence[str],
) -> BranchIndex:
    """
    Builds the BranchIndex with a single scan over all components.

    Raises:
        ShapeError: If `node_index_array` is not a (2, N) table with N equal to
            the length of `type_vector`.
    """
    node_index_array = np.asarray(node_index_array)
    shape = tuple(node_index_array.shape)
    if node_index_array.ndim != 2 or len(type_vector) != shape[1]:
        raise ShapeError(
            details="Input arrays must have the same length",
            type_vector_length=len(type_vector),
            node_table_shape=shape,
        )
    if shape[0] != 2:
        raise ShapeError(
            details="The length of the first axis must be 2",
            type_vector_length=len(type_vector),
            node_table_shape=shape,
        )

    counts: Dict[BranchKey, int] = {}
    slots: Dict[SlotKey, int] = {}
    counter = MutualInductorCounter()
    for position, component_type in enumerate(type_vector):
        mutual_inductor_index = counter.advance(component_type)
        node1, node2 = calc_nodes(
            position, mutual_inductor_index, type_vector,
            node_index_array, name_to_index, mutual_inductor_vector,
        )
        key = (component_type, node1, node2)
        counts[key] = counts.get(key, 0) + 1
        slots[(component_type, node1, node2, counts[key])] = position

    logger.debug("Indexed %d components into %d branch groups.", len(type_vector), len(counts))
    return BranchIndex(counts=MappingProxyType(counts), slots=MappingProxyType(slots))


# --- Aggregation ---

@dataclass(frozen=True)
class AggregatedBranch:
    """The folded value of a branch group and the position of its first member."""
    value: Any
    index: int


class AggregationSession:
    """
    One destructive aggregation pass over a BranchIndex.

    The session copies the group counts when it is created. Consuming a group sets
    its copied count to zero, so each group is folded at most once per session
    while the index itself, and any other session on it, is left untouched.
    """
    def __init__(self, branch_index: BranchIndex, value_vector: Sequence[Any]):
        self._remaining: Dict[BranchKey, int] = dict(branch_index.counts)
        self._slots = branch_index.slots
        self._values = value_vector

    def remaining(self, component_type: ComponentType, node1: int, node2: int) -> int:
        """The number of unconsumed members of a group (0 if absent or consumed)."""
        return self._remaining.get((component_type, node1, node2), 0)

    def try_consume(self, component_type: ComponentType, node1: int, node2: int) -> Optional[AggregatedBranch]:
        """
        Folds and consumes the group `(component_type, node1, node2)`.

        Returns None if there is no such group or it was already consumed.
        Otherwise the members' values are combined in occurrence order with the
        type's combination law and the group is marked consumed.
        """
        key = (component_type, node1, node2)
        counts = self._remaining.get(key, 0)
        if counts <= 0:
            return None

        index = self._slots[(component_type, node1, node2, 1)]
        value = self._values[index]
        for occurrence in range(2, counts + 1):
            member = self._slots[(component_type, node1, node2, occurrence)]
            try:
                value = combine_values(component_type, value, self._values[member])
            except UnsupportedCombinationError:
                raise UnsupportedCombinationError(
                    component_type=str(component_type), node_pair=(node1, node2)
                ) from None
        self._remaining[key] = 0
        return AggregatedBranch(value=value, index=index)


def sum_branch_values(
    component_type: ComponentType,
    node1: int,
    node2: int,
    session: AggregationSession,
) -> Tuple[bool, Any, int]:
    """
    Flag-returning form of `AggregationSession.try_consume`.

    Returns (found, value, index); when nothing is found the value is 0 and the
    index is -1.
    """
    branch = session.try_consume(component_type, node1, node2)
    if branch is None:
        return False, 0, -1
    return True, branch.value, branch.index


def iter_branch_keys(parsed) -> List[Tuple[int, BranchKey]]:
    """
    The (position, key) pairs of a parsed circuit in ascending position order,
    with the mutual-inductor count threaded through the scan.
    """
    counter = MutualInductorCounter()
    keys = []
    for position, component_type in enumerate(parsed.type_vector):
        mutual_inductor_index = counter.advance(component_type)
        node1, node2 = calc_nodes(
            position, mutual_inductor_index, parsed.type_vector, parsed.node_index_array,
            parsed.name_to_index, parsed.mutual_inductor_vector,
        )
        keys.append((position, (component_type, node1, node2)))
    return keys
