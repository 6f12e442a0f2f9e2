"""Tests for the cycle graph spanning tree, swip generation and scheduling."""

import numpy as np
import pytest

from euler_circuit.circuit.contraction import contract_cycles
from euler_circuit.circuit.partition import partition_cycles
from euler_circuit.circuit.spanning import (
    generate_swips,
    schedule_swips,
    spanning_tree,
)
from euler_circuit.circuit.types import Swip, SwipPlan
from euler_circuit.errors import DisconnectedCycleGraphError
from euler_circuit.graph.generators import generate_euler_graph
from euler_circuit.graph.reverse import edge_successors
from euler_circuit.graph.types import Graph


def _cycle_graph(graph: Graph):
    partition = partition_cycles(edge_successors(graph))
    return contract_cycles(graph, partition)


def _plan(pairs: list[tuple[int, int]]) -> SwipPlan:
    first = np.array([p[0] for p in pairs], dtype=np.int64)
    second = np.array([p[1] for p in pairs], dtype=np.int64)
    zeros = np.zeros(len(pairs), dtype=np.int64)
    return SwipPlan(first, second, zeros, zeros, zeros)


class TestSpanningTree:
    """BFS spanning tree over valid links."""

    def test_two_triangles_one_swip(self) -> None:
        graph = Graph.from_arrays([0, 2, 3, 4, 5, 6], [1, 3, 2, 0, 4, 0])
        plan = generate_swips(_cycle_graph(graph))
        assert len(plan) == 1
        assert list(plan) == [Swip(first=3, second=5, at_vertex=0, parent=0, child=1)]

    def test_chain_of_self_loops(self) -> None:
        graph = Graph.from_arrays([0, 3], [0, 0, 0])
        links, parents, children = spanning_tree(_cycle_graph(graph))
        assert parents.tolist() == [0, 1]
        assert children.tolist() == [1, 2]
        assert links.tolist() == [0, 1]

    def test_root_choice(self) -> None:
        graph = Graph.from_arrays([0, 3], [0, 0, 0])
        _, parents, children = spanning_tree(_cycle_graph(graph), root=2)
        assert parents.tolist() == [2, 1]
        assert children.tolist() == [1, 0]

    def test_root_out_of_range(self) -> None:
        graph = Graph.from_arrays([0, 3], [0, 0, 0])
        with pytest.raises(ValueError, match="root"):
            spanning_tree(_cycle_graph(graph), root=3)

    def test_single_partition_no_swips(self) -> None:
        graph = Graph.from_arrays([0, 1, 2, 3], [1, 2, 0])
        plan = generate_swips(_cycle_graph(graph))
        assert len(plan) == 0
        assert plan.pairs.shape == (0, 2)

    def test_swip_count_is_partitions_minus_one(self) -> None:
        graph = generate_euler_graph(300, 5, np.random.default_rng(31))
        cg = _cycle_graph(graph)
        plan = generate_swips(cg)
        assert len(plan) == cg.num_partitions - 1

    def test_tree_reaches_every_partition_once(self) -> None:
        graph = generate_euler_graph(300, 5, np.random.default_rng(32))
        cg = _cycle_graph(graph)
        plan = generate_swips(cg)
        assert sorted(plan.child.tolist()) == list(range(1, cg.num_partitions))

    def test_swips_use_valid_links(self) -> None:
        graph = generate_euler_graph(300, 5, np.random.default_rng(33))
        partition = partition_cycles(edge_successors(graph))
        cg = contract_cycles(graph, partition)
        plan = generate_swips(cg)
        assert np.all(
            partition.partition_of[plan.first]
            != partition.partition_of[plan.second]
        )
        assert np.array_equal(graph.col_indices[plan.first], plan.at_vertex)

    def test_disconnected_raises_with_partitions(self) -> None:
        graph = Graph.from_arrays([0, 1, 2, 3, 4, 5, 6], [1, 2, 0, 4, 5, 3])
        with pytest.raises(DisconnectedCycleGraphError) as excinfo:
            generate_swips(_cycle_graph(graph))
        err = excinfo.value
        assert err.reached == (0,)
        assert err.unreached == (1,)
        assert err.n_components == 2


class TestScheduleSwips:
    """Batches hold pairwise disjoint swips and keep dependent order."""

    def test_disjoint_swips_share_a_batch(self) -> None:
        batches = schedule_swips(_plan([(0, 1), (2, 3), (4, 5)]))
        assert [b.tolist() for b in batches] == [[0, 1, 2]]

    def test_shared_edge_sequenced(self) -> None:
        batches = schedule_swips(_plan([(0, 1), (1, 2), (3, 4)]))
        assert [b.tolist() for b in batches] == [[0, 2], [1]]

    def test_chain_is_fully_sequential(self) -> None:
        batches = schedule_swips(_plan([(0, 1), (1, 2), (2, 3)]))
        assert [b.tolist() for b in batches] == [[0], [1], [2]]

    def test_empty_plan(self) -> None:
        assert schedule_swips(SwipPlan.empty()) == []

    def test_batches_are_disjoint(self) -> None:
        graph = generate_euler_graph(400, 6, np.random.default_rng(34))
        plan = generate_swips(_cycle_graph(graph))
        batches = schedule_swips(plan)
        assert sum(b.size for b in batches) == len(plan)
        for batch in batches:
            touched = np.concatenate((plan.first[batch], plan.second[batch]))
            assert np.unique(touched).size == touched.size
