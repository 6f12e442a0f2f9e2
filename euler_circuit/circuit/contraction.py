"""Contract every cycle to a node and record where cycles can be merged.

At a vertex v, exchanging the successors of two incoming edges e1 and e2
merges their cycles when they lie on different cycles, and splits the
cycle when they lie on the same one. Only adjacent pairs in the incoming
order of v are examined: every cycle through v enters v, so any two
cycles meeting at v are joined by a chain of adjacent cross-cycle pairs.
"""

import logging

import numpy as np

from euler_circuit.circuit.types import CycleGraph, Partition
from euler_circuit.graph.reverse import incoming_edges
from euler_circuit.graph.types import Graph, readonly

log = logging.getLogger(__name__)


def contract_cycles(
    graph: Graph,
    partition: Partition,
    incoming: tuple[np.ndarray, np.ndarray] | None = None,
) -> CycleGraph:
    """Build the cycle graph of a partitioned edge set.

    Deduplicates to one link per unordered partition pair, keeping the
    lowest merge vertex, then the lowest first edge index.

    Args:
        graph: The graph whose edges were partitioned.
        partition: Cycle membership per edge.
        incoming: Precomputed incoming_edges(graph), if available.

    Returns:
        CycleGraph with links sorted by (source, target).
    """
    if partition.partition_of.size != graph.num_edges:
        raise ValueError(
            f"Partition covers {partition.partition_of.size} edges, "
            f"graph has {graph.num_edges}"
        )
    offsets, edges = incoming if incoming is not None else incoming_edges(graph)

    heads = np.repeat(
        np.arange(graph.num_vertices, dtype=np.int64), np.diff(offsets)
    )
    slots = np.flatnonzero(heads[1:] == heads[:-1])

    e1 = edges[slots]
    e2 = edges[slots + 1]
    at_vertex = heads[slots]
    p = partition.partition_of[e1]
    q = partition.partition_of[e2]
    lo = np.minimum(p, q)
    hi = np.maximum(p, q)

    order = np.lexsort((e1, at_vertex, hi, lo))
    lo, hi, at_vertex, e1, e2 = (a[order] for a in (lo, hi, at_vertex, e1, e2))

    keep = np.ones(lo.size, dtype=bool)
    keep[1:] = (lo[1:] != lo[:-1]) | (hi[1:] != hi[:-1])

    cycle_graph = CycleGraph(
        num_partitions=partition.max_partition,
        source=readonly(lo[keep]),
        target=readonly(hi[keep]),
        at_vertex=readonly(at_vertex[keep]),
        edge_pairs=readonly(np.column_stack((e1[keep], e2[keep]))),
        valid=readonly(lo[keep] != hi[keep], dtype=bool),
    )
    log.debug(
        "Cycle graph: %d partitions, %d candidate pairs, %d links (%d valid)",
        partition.max_partition,
        slots.size,
        cycle_graph.num_links,
        int(cycle_graph.valid.sum()),
    )
    return cycle_graph
