"""Graph data structures: compact adjacency container and label map."""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

import numpy as np
import scipy.sparse
from scipy.sparse.csgraph import connected_components

from euler_circuit.errors import MalformedGraphError, UnbalancedDegreeError


def readonly(values, dtype=np.int64) -> np.ndarray:
    """Copy values into a fresh array of dtype and mark it read-only.

    Every buffer handed from one stage to the next goes through here, so
    no stage can write into an array another stage still reads.
    """
    arr = np.array(values, dtype=dtype, copy=True)
    arr.setflags(write=False)
    return arr


def _index_array(values, name: str) -> np.ndarray:
    arr = np.asarray(values)
    if arr.ndim != 1:
        raise MalformedGraphError(
            f"{name} must be one-dimensional, got shape {arr.shape}"
        )
    if arr.size and not np.issubdtype(arr.dtype, np.integer):
        raise MalformedGraphError(
            f"{name} must hold integers, got dtype {arr.dtype}"
        )
    return readonly(arr)


@dataclass(frozen=True, slots=True)
class LabelMap:
    """Immutable bidirectional mapping between vertex labels and ordinals.

    Ordinal i is the position of its label in ``labels``. The reverse
    lookup table is built once in __post_init__ and never mutated.
    """

    labels: tuple[str, ...]
    _ordinals: Mapping[str, int] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        ordinals: dict[str, int] = {}
        for i, label in enumerate(self.labels):
            if label in ordinals:
                raise MalformedGraphError(f"Duplicate vertex label {label!r}")
            ordinals[label] = i
        object.__setattr__(self, "labels", tuple(self.labels))
        object.__setattr__(self, "_ordinals", MappingProxyType(ordinals))

    @classmethod
    def from_labels(cls, labels: Iterable[str]) -> "LabelMap":
        return cls(tuple(labels))

    @classmethod
    def identity(cls, n: int) -> "LabelMap":
        """Labels "0".."n-1" mapped to their own integer value."""
        return cls(tuple(str(i) for i in range(n)))

    def ordinal(self, label: str) -> int:
        return self._ordinals[label]

    def label(self, ordinal: int) -> str:
        return self.labels[ordinal]

    def __len__(self) -> int:
        return len(self.labels)

    def __contains__(self, label: object) -> bool:
        return label in self._ordinals


@dataclass(frozen=True, eq=False)
class Graph:
    """Directed multigraph in row-offset / column-index form.

    Edges leaving vertex i are the indices ``row_offsets[i]`` up to
    ``row_offsets[i + 1]``; ``col_indices[e]`` is the head of edge e.
    Arrays are copied and made read-only on construction, so a Graph is
    an immutable value: every transformation returns a new Graph.
    Uses frozen=True but omits slots=True since numpy arrays don't
    interact well with __slots__.

    Raises:
        MalformedGraphError: If offsets are not monotonic, do not end at
            the edge count, or any column index is out of range.
    """

    row_offsets: np.ndarray  # int64, length V + 1
    col_indices: np.ndarray  # int64, length E
    labels: LabelMap | None = None  # identity labels when omitted

    def __post_init__(self) -> None:
        row_offsets = _index_array(self.row_offsets, "row_offsets")
        col_indices = _index_array(self.col_indices, "col_indices")

        if row_offsets.size == 0:
            raise MalformedGraphError("row_offsets must have at least one entry")
        if row_offsets[0] != 0:
            raise MalformedGraphError(
                f"row_offsets must start at 0, got {row_offsets[0]}"
            )
        if np.any(np.diff(row_offsets) < 0):
            raise MalformedGraphError("row_offsets must be non-decreasing")
        if row_offsets[-1] != col_indices.size:
            raise MalformedGraphError(
                f"row_offsets ends at {row_offsets[-1]} but there are "
                f"{col_indices.size} column indices"
            )

        n = row_offsets.size - 1
        if col_indices.size and (col_indices.min() < 0 or col_indices.max() >= n):
            bad = col_indices[(col_indices < 0) | (col_indices >= n)]
            raise MalformedGraphError(
                f"Column indices out of range [0, {n}): {bad[:10].tolist()}"
            )

        labels = self.labels if self.labels is not None else LabelMap.identity(n)
        if len(labels) != n:
            raise MalformedGraphError(
                f"Label map has {len(labels)} labels for {n} vertices"
            )

        object.__setattr__(self, "row_offsets", row_offsets)
        object.__setattr__(self, "col_indices", col_indices)
        object.__setattr__(self, "labels", labels)

    @classmethod
    def from_arrays(
        cls,
        row_offsets: Sequence[int] | np.ndarray,
        col_indices: Sequence[int] | np.ndarray,
        labels: LabelMap | Iterable[str] | None = None,
    ) -> "Graph":
        if labels is not None and not isinstance(labels, LabelMap):
            labels = LabelMap.from_labels(labels)
        return cls(row_offsets, col_indices, labels)

    @classmethod
    def from_successors(cls, successors: Sequence[int] | np.ndarray) -> "Graph":
        """Graph with exactly one out-edge per vertex: i -> successors[i]."""
        col_indices = np.asarray(successors)
        return cls(np.arange(col_indices.size + 1), col_indices)

    @classmethod
    def from_adjacency(cls, adjacency: Mapping[str, Sequence[str]]) -> "Graph":
        """Build from an ordered ``label -> [target labels]`` mapping.

        Labels get ordinals in order of first appearance, a source before
        its targets. Labels only ever seen as targets have no out-edges.
        """
        ordinals: dict[str, int] = {}
        for source, targets in adjacency.items():
            ordinals.setdefault(source, len(ordinals))
            for target in targets:
                ordinals.setdefault(target, len(ordinals))

        n = len(ordinals)
        rows: list[list[int]] = [[] for _ in range(n)]
        for source, targets in adjacency.items():
            rows[ordinals[source]].extend(ordinals[t] for t in targets)

        row_offsets = np.zeros(n + 1, dtype=np.int64)
        np.cumsum(
            np.array([len(r) for r in rows], dtype=np.int64),
            out=row_offsets[1:],
        )
        col_indices = np.array([t for r in rows for t in r], dtype=np.int64)
        return cls(row_offsets, col_indices, LabelMap.from_labels(ordinals))

    @property
    def num_vertices(self) -> int:
        return self.row_offsets.size - 1

    @property
    def num_edges(self) -> int:
        return self.col_indices.size

    @property
    def out_degrees(self) -> np.ndarray:
        return np.diff(self.row_offsets)

    @property
    def in_degrees(self) -> np.ndarray:
        return np.bincount(self.col_indices, minlength=self.num_vertices)

    @property
    def edge_sources(self) -> np.ndarray:
        """Tail vertex of every edge, aligned with col_indices."""
        return np.repeat(
            np.arange(self.num_vertices, dtype=np.int64), self.out_degrees
        )

    @property
    def edge_pairs(self) -> np.ndarray:
        """Array of shape (E, 2) holding (source, target) per edge."""
        return np.column_stack((self.edge_sources, self.col_indices))

    @property
    def is_balanced(self) -> bool:
        return bool(np.array_equal(self.in_degrees, self.out_degrees))

    def neighbors(self, vertex: int) -> np.ndarray:
        return self.col_indices[self.row_offsets[vertex]:self.row_offsets[vertex + 1]]

    def to_csr(self) -> scipy.sparse.csr_matrix:
        """Adjacency as a sparse matrix; parallel edges are summed."""
        n = self.num_vertices
        adj = scipy.sparse.csr_matrix(
            (np.ones(self.num_edges), self.col_indices, self.row_offsets),
            shape=(n, n),
        )
        adj.sum_duplicates()
        return adj

    def reverse(self) -> "Graph":
        """New graph with every edge flipped; see reverse_graph."""
        from euler_circuit.graph.reverse import reverse_graph

        return reverse_graph(self)

    def is_weakly_connected(self) -> bool:
        """True if all vertices that carry edges share one weak component.

        Isolated vertices are ignored: they do not prevent a circuit over
        the edges.
        """
        active = (self.out_degrees + self.in_degrees) > 0
        if not active.any():
            return True
        _, components = connected_components(
            self.to_csr(), directed=True, connection="weak"
        )
        return np.unique(components[active]).size == 1

    def check_eulerian(self) -> None:
        """Raise UnbalancedDegreeError unless in-degree == out-degree everywhere."""
        in_deg = self.in_degrees
        out_deg = self.out_degrees
        bad = np.flatnonzero(in_deg != out_deg)
        if bad.size:
            details = ", ".join(
                f"{self.labels.label(int(v))} (in={in_deg[v]}, out={out_deg[v]})"
                for v in bad[:10]
            )
            raise UnbalancedDegreeError(
                f"{bad.size} vertices have in-degree != out-degree: {details}",
                vertices=tuple(int(v) for v in bad),
            )


@dataclass(frozen=True)
class GeneratedGraph:
    """Immutable container for a randomly generated graph and its provenance."""

    graph: Graph
    generation_seed: int  # seed used for this specific generation attempt
    attempt: int  # which retry attempt produced this graph (0-indexed)
    open_path: bool  # one vertex pair deliberately unbalanced
