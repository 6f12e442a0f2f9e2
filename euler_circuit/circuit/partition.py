"""Decompose a successor permutation into its disjoint cycles.

Two labellers produce identical partitions:
1. partition_cycles: weak components of the functional graph e -> succ[e],
   computed over the whole edge array at once
2. partition_cycles_sequential: the classic visit-and-follow scan

Both number cycles by their smallest edge index, so partition 0 always
holds edge 0.
"""

import logging

import numpy as np
import scipy.sparse
from scipy.sparse.csgraph import connected_components

from euler_circuit.circuit.types import Partition
from euler_circuit.graph.reverse import as_permutation
from euler_circuit.graph.types import readonly

log = logging.getLogger(__name__)


def _canonical_partition(labels: np.ndarray) -> Partition:
    """Renumber component labels in order of their smallest member."""
    uniq, first_member, inverse = np.unique(
        labels, return_index=True, return_inverse=True
    )
    rank = np.empty(uniq.size, dtype=np.int64)
    rank[np.argsort(first_member, kind="stable")] = np.arange(uniq.size)
    partition = Partition(
        partition_of=readonly(rank[inverse.ravel()]),
        max_partition=int(uniq.size),
    )
    assert labels.size == 0 or partition.max_partition > 0
    return partition


def partition_cycles(successors) -> Partition:
    """Label every edge with the id of the cycle it lies on.

    Args:
        successors: Permutation over edge indices [0, E).

    Returns:
        Partition with max_partition equal to the number of cycles
        (0 when E == 0).

    Raises:
        MalformedGraphError: If successors is not a permutation.
    """
    succ = as_permutation(successors)
    n = succ.size
    if n == 0:
        return Partition(partition_of=readonly(succ), max_partition=0)

    functional = scipy.sparse.csr_matrix(
        (np.ones(n, dtype=np.int8), succ, np.arange(n + 1)), shape=(n, n)
    )
    n_components, labels = connected_components(
        functional, directed=True, connection="weak"
    )
    partition = _canonical_partition(labels)
    log.debug("Partitioned %d edges into %d cycles", n, n_components)
    return partition


def partition_cycles_sequential(successors) -> Partition:
    """Same result as partition_cycles, one cycle at a time. O(E)."""
    succ = as_permutation(successors).tolist()
    partition_of = [-1] * len(succ)
    next_id = 0
    for start in range(len(succ)):
        if partition_of[start] >= 0:
            continue
        e = start
        while partition_of[e] < 0:
            partition_of[e] = next_id
            e = succ[e]
        next_id += 1
    log.debug("Partitioned %d edges into %d cycles", len(succ), next_id)
    return Partition(partition_of=readonly(partition_of), max_partition=next_id)


PARTITIONERS = {
    "parallel": partition_cycles,
    "sequential": partition_cycles_sequential,
}
