"""Apply swips to a successor array and verify a single circuit remains."""

import logging

import numpy as np

from euler_circuit.circuit.partition import partition_cycles
from euler_circuit.circuit.spanning import schedule_swips
from euler_circuit.circuit.types import SwipPlan
from euler_circuit.errors import SpliceIncompleteError
from euler_circuit.graph.types import readonly

log = logging.getLogger(__name__)


def apply_swips(successors, plan: SwipPlan, batched: bool = True) -> np.ndarray:
    """Exchange successors[first] and successors[second] for every swip.

    The input array is never written; a new read-only array is returned.

    Args:
        successors: Successor permutation over edge indices.
        plan: Swips to apply.
        batched: Apply each disjoint batch from schedule_swips as one
            vectorised exchange instead of one swip at a time.
    """
    succ = np.array(successors, dtype=np.int64, copy=True)

    if batched:
        batches = schedule_swips(plan)
        for batch in batches:
            first = plan.first[batch]
            second = plan.second[batch]
            succ[first], succ[second] = succ[second], succ[first]
        log.debug("Applied %d swips in %d batches", len(plan), len(batches))
    else:
        for first, second in zip(plan.first.tolist(), plan.second.tolist()):
            succ[first], succ[second] = succ[second], succ[first]
        log.debug("Applied %d swips sequentially", len(plan))

    return readonly(succ)


def splice_circuit(
    successors, plan: SwipPlan, batched: bool = True, verify: bool = True
) -> np.ndarray:
    """Apply swips, then check that exactly one cycle is left.

    Raises:
        SpliceIncompleteError: If verify is set and the result still has
            more than one cycle.
    """
    spliced = apply_swips(successors, plan, batched=batched)

    if verify and spliced.size:
        max_partition = partition_cycles(spliced).max_partition
        if max_partition != 1:
            raise SpliceIncompleteError(
                f"Splice left {max_partition} cycles after {len(plan)} swips",
                max_partition=max_partition,
            )
    return spliced
