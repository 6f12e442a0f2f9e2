"""Spanning tree of the cycle graph and the swips it implies."""

import logging

import numpy as np
from scipy.sparse.csgraph import breadth_first_order, connected_components

from euler_circuit.circuit.types import CycleGraph, SwipPlan
from euler_circuit.errors import DisconnectedCycleGraphError
from euler_circuit.graph.types import readonly

log = logging.getLogger(__name__)


def spanning_tree(
    cycle_graph: CycleGraph, root: int = 0
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Breadth-first spanning tree over the valid links.

    Args:
        cycle_graph: Contracted cycle graph.
        root: Partition the traversal starts from.

    Returns:
        (links, parents, children): for each tree edge in discovery order,
        the link row, the partition already reached and the partition it
        attaches. Empty when there are fewer than two partitions.

    Raises:
        DisconnectedCycleGraphError: If some partition is unreachable.
        ValueError: If root is not a partition id.
    """
    n = cycle_graph.num_partitions
    empty = np.empty(0, dtype=np.int64)
    if n == 0:
        return empty, empty, empty
    if not 0 <= root < n:
        raise ValueError(f"root {root} outside [0, {n})")

    adj = cycle_graph.to_csr()
    order, predecessors = breadth_first_order(
        adj, root, directed=False, return_predecessors=True
    )

    if order.size < n:
        reached = np.sort(order)
        unreached = np.setdiff1d(np.arange(n), reached)
        n_components, _ = connected_components(adj, directed=False)
        raise DisconnectedCycleGraphError(
            f"Spanning tree from partition {root} reached {reached.size} of "
            f"{n} partitions ({n_components} components); unreached: "
            f"{unreached[:10].tolist()}",
            reached=tuple(int(p) for p in reached),
            unreached=tuple(int(p) for p in unreached),
            n_components=int(n_components),
        )

    children = order[1:].astype(np.int64)
    parents = predecessors[children].astype(np.int64)
    links = cycle_graph.link_indices(parents, children)
    assert np.all(links >= 0), "tree edge without a link"
    return links, parents, children


def generate_swips(cycle_graph: CycleGraph, root: int = 0) -> SwipPlan:
    """One swip per spanning-tree edge, num_partitions - 1 in total."""
    links, parents, children = spanning_tree(cycle_graph, root)
    if links.size == 0:
        return SwipPlan.empty()

    pairs = cycle_graph.edge_pairs[links]
    plan = SwipPlan(
        first=readonly(pairs[:, 0]),
        second=readonly(pairs[:, 1]),
        at_vertex=readonly(cycle_graph.at_vertex[links]),
        parent=readonly(parents),
        child=readonly(children),
    )
    log.debug("Generated %d swips from root partition %d", len(plan), root)
    return plan


def schedule_swips(plan: SwipPlan) -> list[np.ndarray]:
    """Split swips into batches with pairwise disjoint edge indices.

    A swip goes into the batch after the last one that touched either of
    its edges, so swips sharing an edge keep their relative order.

    Returns:
        List of index arrays into plan, in execution order.
    """
    last_batch: dict[int, int] = {}
    batch_of = []
    for first, second in zip(plan.first.tolist(), plan.second.tolist()):
        b = max(last_batch.get(first, -1), last_batch.get(second, -1)) + 1
        last_batch[first] = b
        last_batch[second] = b
        batch_of.append(b)

    if not batch_of:
        return []
    batch_of = np.asarray(batch_of)
    return [np.flatnonzero(batch_of == b) for b in range(batch_of.max() + 1)]
