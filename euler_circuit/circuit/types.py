"""Data structures shared by the cycle-merge pipeline stages.

All containers are frozen and hold read-only numpy buffers. They omit
slots=True since numpy arrays don't interact well with __slots__.
"""

from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np
import scipy.sparse

from euler_circuit.graph.types import Graph


@dataclass(frozen=True, eq=False)
class Partition:
    """Cycle membership of every edge under a successor permutation.

    Edges sharing an id lie on one cycle. ``max_partition == 1`` iff the
    permutation is already a single circuit.
    """

    partition_of: np.ndarray  # int64 per edge, ids in [0, max_partition)
    max_partition: int

    def sizes(self) -> np.ndarray:
        """Number of edges on each cycle."""
        return np.bincount(self.partition_of, minlength=self.max_partition)

    def members(self, partition: int) -> np.ndarray:
        """Edge indices on one cycle, ascending."""
        return np.flatnonzero(self.partition_of == partition)


@dataclass(frozen=True, eq=False)
class CycleGraph:
    """Contracted graph with one node per cycle.

    One row per candidate link, sorted by (source, target), at most one
    row per unordered pair of partitions. A link records the vertex where
    the two cycles meet and the two incoming edges whose successors would
    be exchanged. Same-partition rows are kept with ``valid`` False so
    callers can see them, but they never enter the spanning tree.
    """

    num_partitions: int
    source: np.ndarray  # int64 partition ids, source <= target
    target: np.ndarray  # int64 partition ids
    at_vertex: np.ndarray  # int64 graph vertex of the merge point
    edge_pairs: np.ndarray  # int64 (L, 2), incoming edges (e1, e2), e1 < e2
    valid: np.ndarray  # bool, True iff source != target

    @property
    def num_links(self) -> int:
        return self.source.size

    def valid_links(self) -> np.ndarray:
        return np.flatnonzero(self.valid)

    def to_csr(self) -> scipy.sparse.csr_matrix:
        """Symmetric adjacency over the valid links."""
        n = self.num_partitions
        rows = self.source[self.valid]
        cols = self.target[self.valid]
        data = np.ones(2 * rows.size, dtype=np.int8)
        return scipy.sparse.csr_matrix(
            (data, (np.concatenate((rows, cols)), np.concatenate((cols, rows)))),
            shape=(n, n),
        )

    def link_indices(self, p: np.ndarray, q: np.ndarray) -> np.ndarray:
        """Row index of the link joining each (p[i], q[i]), or -1 if none."""
        p = np.asarray(p, dtype=np.int64)
        q = np.asarray(q, dtype=np.int64)
        n = self.num_partitions
        keys = self.source * n + self.target
        wanted = np.minimum(p, q) * n + np.maximum(p, q)
        if keys.size == 0:
            return np.full(wanted.shape, -1, dtype=np.int64)
        pos = np.minimum(np.searchsorted(keys, wanted), keys.size - 1)
        return np.where(keys[pos] == wanted, pos, -1)

    def link_index(self, p: int, q: int) -> int:
        return int(self.link_indices(np.array([p]), np.array([q]))[0])


@dataclass(frozen=True, slots=True)
class Swip:
    """One merge instruction: exchange the successors of two edges."""

    first: int  # edge index
    second: int  # edge index
    at_vertex: int  # vertex where both edges end
    parent: int  # partition already in the tree
    child: int  # partition attached by this swip


@dataclass(frozen=True, eq=False)
class SwipPlan:
    """Ordered swips derived from a spanning tree of the cycle graph.

    Order is tree discovery order. Any order yields a single circuit,
    since every swip joins two cycles that no earlier swip has joined.
    """

    first: np.ndarray  # int64 edge indices
    second: np.ndarray  # int64 edge indices
    at_vertex: np.ndarray
    parent: np.ndarray
    child: np.ndarray

    @classmethod
    def empty(cls) -> "SwipPlan":
        e = np.empty(0, dtype=np.int64)
        e.setflags(write=False)
        return cls(e, e, e, e, e)

    @property
    def pairs(self) -> np.ndarray:
        return np.column_stack((self.first, self.second))

    def __len__(self) -> int:
        return self.first.size

    def __getitem__(self, i: int) -> Swip:
        return Swip(
            first=int(self.first[i]),
            second=int(self.second[i]),
            at_vertex=int(self.at_vertex[i]),
            parent=int(self.parent[i]),
            child=int(self.child[i]),
        )

    def __iter__(self) -> Iterator[Swip]:
        for i in range(len(self)):
            yield self[i]


@dataclass(frozen=True, eq=False)
class EulerCircuit:
    """Result of the pipeline: a single-cycle successor permutation.

    ``graph`` is the untouched input; the circuit lives in
    ``successors``, which maps every edge index to the next edge.
    """

    graph: Graph
    successors: np.ndarray  # int64 single-cycle permutation over edges
    swips: SwipPlan
    initial_partitions: int  # cycle count before merging

    @property
    def num_swips(self) -> int:
        return len(self.swips)

    def line_graph(self) -> Graph:
        """Rebuilt container: one vertex per edge, one out-edge to its successor."""
        return Graph.from_successors(self.successors)

    def edge_order(self, start: int = 0) -> np.ndarray:
        """Edge indices in circuit order, beginning at edge start."""
        n = self.successors.size
        order = np.empty(n, dtype=np.int64)
        if n == 0:
            return order
        succ = self.successors.tolist()
        e = start
        for i in range(n):
            order[i] = e
            e = succ[e]
        return order

    def vertex_walk(self, start: int = 0) -> np.ndarray:
        """Closed walk of vertex ordinals; first and last entries coincide."""
        order = self.edge_order(start)
        if order.size == 0:
            return order
        sources = self.graph.edge_sources[order]
        return np.append(sources, self.graph.col_indices[order[-1]])

    def edge_pairs(self, start: int = 0) -> np.ndarray:
        """(source, target) per edge in circuit order."""
        return self.graph.edge_pairs[self.edge_order(start)]

    def walk_labels(self, start: int = 0) -> list[str]:
        labels = self.graph.labels
        return [labels.label(int(v)) for v in self.vertex_walk(start)]
