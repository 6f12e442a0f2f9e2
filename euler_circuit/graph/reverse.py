"""Reverse adjacency and the edge successor/predecessor permutations.

The successor permutation pairs, at every vertex v, the k-th incoming
edge of v (by ascending edge index) with the k-th outgoing edge of v.
This is only a bijection when in-degree equals out-degree everywhere.
"""

import numpy as np

from euler_circuit.errors import MalformedGraphError
from euler_circuit.graph.types import Graph, readonly


def incoming_edges(graph: Graph) -> tuple[np.ndarray, np.ndarray]:
    """Group edge indices by head vertex.

    In-degrees are counted and prefix-summed into offsets; edges are
    scattered stably, so each group is in ascending edge order.

    Args:
        graph: Input graph.

    Returns:
        (offsets, edges) where ``edges[offsets[v]:offsets[v + 1]]`` are
        the indices of the edges ending at v.
    """
    n = graph.num_vertices
    offsets = np.zeros(n + 1, dtype=np.int64)
    np.cumsum(graph.in_degrees, out=offsets[1:])
    edges = np.argsort(graph.col_indices, kind="stable")
    return readonly(offsets), readonly(edges)


def reverse_graph(graph: Graph) -> Graph:
    """Flip every edge. Out-degree of the result equals in-degree of the input."""
    offsets, edges = incoming_edges(graph)
    return Graph(offsets, graph.edge_sources[edges], graph.labels)


def edge_successors(graph: Graph) -> np.ndarray:
    """Successor permutation over edge indices.

    With balanced degrees the incoming groups line up with the outgoing
    rows, so the j-th edge in incoming order is followed by edge j.

    Raises:
        UnbalancedDegreeError: If some vertex is not balanced.
    """
    graph.check_eulerian()
    _, edges = incoming_edges(graph)
    return successors_from_incoming(edges)


def successors_from_incoming(edges: np.ndarray) -> np.ndarray:
    """Successor permutation from the edge half of incoming_edges().

    The caller is responsible for degree balance; edge_successors checks it.
    """
    successors = np.empty(edges.size, dtype=np.int64)
    successors[edges] = np.arange(edges.size, dtype=np.int64)
    return readonly(successors)


def edge_predecessors(graph: Graph) -> np.ndarray:
    """Inverse of edge_successors: predecessors[j] is the edge leading into j."""
    graph.check_eulerian()
    _, edges = incoming_edges(graph)
    return edges


def as_permutation(values) -> np.ndarray:
    """Validate that values is a permutation of [0, len(values)).

    Raises:
        MalformedGraphError: On wrong shape, dtype, range, or repeats.
    """
    perm = np.asarray(values)
    if perm.ndim != 1:
        raise MalformedGraphError(
            f"Permutation must be one-dimensional, got shape {perm.shape}"
        )
    if perm.size and not np.issubdtype(perm.dtype, np.integer):
        raise MalformedGraphError(
            f"Permutation must hold integers, got dtype {perm.dtype}"
        )
    n = perm.size
    if n and (perm.min() < 0 or perm.max() >= n):
        raise MalformedGraphError(f"Permutation values out of range [0, {n})")
    if n and np.any(np.bincount(perm, minlength=n) != 1):
        raise MalformedGraphError("Permutation maps two indices to the same target")
    return readonly(perm)


def invert_permutation(values) -> np.ndarray:
    perm = as_permutation(values)
    inverse = np.empty(perm.size, dtype=np.int64)
    inverse[perm] = np.arange(perm.size, dtype=np.int64)
    return readonly(inverse)
