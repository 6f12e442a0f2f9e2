"""Random Eulerian graph generator with validation and retry.

Every vertex draws an out-degree in [1, k] and gets the same amount of
in-capacity. Vertices are then wired in order: vertex i scans forward
(i + 1, i + 2, ... modulo n) and connects to every vertex that still has
in-capacity until its out-degree is used up. The result is degree
balanced by construction; weak connectivity is checked afterwards and
the draw is retried with a new seed if it fails.
"""

import logging

import numpy as np

from euler_circuit.config.experiment import RunConfig
from euler_circuit.errors import GraphGenerationError
from euler_circuit.graph.types import GeneratedGraph, Graph

log = logging.getLogger(__name__)


def generate_euler_graph(
    n: int, k: int, rng: np.random.Generator, open_path: bool = False
) -> Graph:
    """Generate a degree-balanced directed multigraph.

    Args:
        n: Number of vertices.
        k: Maximum out-degree of a vertex.
        rng: numpy random Generator for reproducibility.
        open_path: If True, remove one out-edge slot from one random vertex
            and one in-edge slot from a different one, so the graph has an
            Eulerian path rather than a circuit.

    Returns:
        Graph with identity labels "0".."n-1".

    Raises:
        ValueError: If n or k is not positive, or open_path with n < 2.
    """
    if n < 1 or k < 1:
        raise ValueError(f"n and k must be positive, got n={n}, k={k}")
    if open_path and n < 2:
        raise ValueError("open_path needs at least two vertices")

    out_degree = rng.integers(1, k + 1, size=n)
    in_capacity = out_degree.copy()

    if open_path:
        out_less_than_in = int(rng.integers(n))
        in_less_than_out = int(rng.integers(n))
        while in_less_than_out == out_less_than_in:
            in_less_than_out = int(rng.integers(n))
        out_degree[out_less_than_in] -= 1
        in_capacity[in_less_than_out] -= 1

    row_offsets = np.zeros(n + 1, dtype=np.int64)
    np.cumsum(out_degree, out=row_offsets[1:])
    col_indices = np.empty(int(row_offsets[-1]), dtype=np.int64)

    capacity = in_capacity.tolist()
    pos = 0
    for i, need in enumerate(out_degree.tolist()):
        # Remaining capacity always equals the remaining out-degree, so each
        # pass over all n vertices fills at least one slot.
        max_steps = need * n
        step = 1
        while need > 0 and step <= max_steps:
            target = (i + step) % n
            if capacity[target] > 0:
                capacity[target] -= 1
                col_indices[pos] = target
                pos += 1
                need -= 1
            step += 1
        if need:
            raise GraphGenerationError(
                f"Vertex {i} could not place {need} out-edges"
            )

    return Graph(row_offsets, col_indices)


def validate_generated(graph: Graph, open_path: bool = False) -> list[str]:
    """Validate a generated graph.

    Checks (cheapest first):
    1. Degree balance, or exactly one +1/-1 vertex pair in open-path mode
    2. Weak connectivity over vertices that carry edges

    Returns:
        List of error strings (empty = valid graph).
    """
    errors: list[str] = []

    surplus = graph.out_degrees - graph.in_degrees
    if open_path:
        if not (
            np.count_nonzero(surplus) == 2
            and np.count_nonzero(surplus == 1) == 1
            and np.count_nonzero(surplus == -1) == 1
        ):
            errors.append(
                "Open path needs exactly one vertex with out-in=+1 and one "
                f"with out-in=-1, got surplus values {np.unique(surplus).tolist()}"
            )
    elif np.any(surplus != 0):
        errors.append(
            f"Unbalanced degrees at {np.count_nonzero(surplus)} vertices"
        )

    if not graph.is_weakly_connected():
        errors.append("Not weakly connected")

    return errors


def generate_from_config(config: RunConfig) -> GeneratedGraph:
    """Generate a valid random graph for a run configuration.

    Each attempt uses seed ``config.seed + attempt``.

    Raises:
        GraphGenerationError: If no valid graph is produced after
            config.generator.max_retries attempts.
    """
    gen = config.generator
    last_errors: list[str] = []

    for attempt in range(gen.max_retries):
        seed = config.seed + attempt
        rng = np.random.default_rng(seed)
        graph = generate_euler_graph(gen.n, gen.k, rng, open_path=gen.open_path)

        errors = validate_generated(graph, open_path=gen.open_path)
        if not errors:
            log.info(
                "Graph generated successfully on attempt %d "
                "(n=%d, k=%d, edges=%d, open_path=%s)",
                attempt,
                gen.n,
                gen.k,
                graph.num_edges,
                gen.open_path,
            )
            return GeneratedGraph(
                graph=graph,
                generation_seed=seed,
                attempt=attempt,
                open_path=gen.open_path,
            )

        last_errors = errors
        log.warning(
            "Graph generation attempt %d failed: %s",
            attempt,
            "; ".join(errors),
        )

    raise GraphGenerationError(
        f"Failed to generate valid graph after {gen.max_retries} attempts. "
        f"Last errors: {'; '.join(last_errors)}"
    )
