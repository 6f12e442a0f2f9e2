"""End-to-end Eulerian circuit construction.

Stages, each a pure function from read-only buffers to new buffers:
1. Degree check (UnbalancedDegreeError on failure)
2. Successor permutation from the incoming-edge grouping
3. Cycle partition; stop here if there is at most one cycle
4. Cycle graph contraction
5. Spanning tree and swip generation
6. Splice, then re-partition to verify a single circuit
"""

import logging
import time
from collections.abc import Generator
from contextlib import contextmanager

from euler_circuit.circuit.contraction import contract_cycles
from euler_circuit.circuit.partition import PARTITIONERS
from euler_circuit.circuit.spanning import generate_swips
from euler_circuit.circuit.splice import splice_circuit
from euler_circuit.circuit.types import EulerCircuit, SwipPlan
from euler_circuit.config.experiment import PipelineConfig
from euler_circuit.graph.reverse import incoming_edges, successors_from_incoming
from euler_circuit.graph.types import Graph

log = logging.getLogger(__name__)


@contextmanager
def _stage(name: str) -> Generator[None, None, None]:
    t0 = time.monotonic()
    yield
    log.debug("%s done in %.3fs", name, time.monotonic() - t0)


def find_euler_circuit(
    graph: Graph, config: PipelineConfig | None = None
) -> EulerCircuit:
    """Construct a single Eulerian circuit over all edges of graph.

    Args:
        graph: Degree-balanced, weakly connected directed multigraph.
        config: Pipeline settings; defaults to PipelineConfig(). The root
            partition is taken modulo the number of cycles found.

    Returns:
        EulerCircuit whose successor permutation is one cycle. The rebuilt
        Graph over the spliced successors is ``circuit.line_graph()``.

    Raises:
        UnbalancedDegreeError: If in-degree != out-degree somewhere.
        DisconnectedCycleGraphError: If the cycles cannot all be merged.
        SpliceIncompleteError: If the merged permutation is not one cycle.
    """
    config = config if config is not None else PipelineConfig()
    partitioner = PARTITIONERS[config.partition_method]

    with _stage("Degree check"):
        graph.check_eulerian()

    with _stage("Successors"):
        incoming = incoming_edges(graph)
        successors = successors_from_incoming(incoming[1])

    with _stage("Partition"):
        partition = partitioner(successors)

    if partition.max_partition <= 1:
        log.info(
            "Graph with %d edges is already a single circuit",
            graph.num_edges,
        )
        return EulerCircuit(
            graph=graph,
            successors=successors,
            swips=SwipPlan.empty(),
            initial_partitions=partition.max_partition,
        )

    with _stage("Contraction"):
        cycle_graph = contract_cycles(graph, partition, incoming)

    with _stage("Swip generation"):
        root = config.root % partition.max_partition
        swips = generate_swips(cycle_graph, root=root)

    with _stage("Splice"):
        spliced = splice_circuit(
            successors,
            swips,
            batched=config.batched_splice,
            verify=config.verify,
        )

    log.info(
        "Merged %d cycles into one circuit over %d edges with %d swips",
        partition.max_partition,
        graph.num_edges,
        len(swips),
    )
    return EulerCircuit(
        graph=graph,
        successors=spliced,
        swips=swips,
        initial_partitions=partition.max_partition,
    )
