"""Tests for random Eulerian graph generation, validation, and retry."""

from unittest.mock import patch

import numpy as np
import pytest

from euler_circuit.config.experiment import GeneratorConfig, RunConfig
from euler_circuit.errors import GraphGenerationError
from euler_circuit.graph.generators import (
    generate_euler_graph,
    generate_from_config,
    validate_generated,
)
from euler_circuit.graph.types import GeneratedGraph, Graph


class TestGenerateEulerGraph:
    """Tests for the greedy forward-scan wiring."""

    def test_balanced_degrees(self) -> None:
        graph = generate_euler_graph(200, 5, np.random.default_rng(42))
        assert graph.is_balanced

    def test_out_degree_bounds(self) -> None:
        graph = generate_euler_graph(200, 5, np.random.default_rng(42))
        assert graph.num_vertices == 200
        assert graph.out_degrees.min() >= 1
        assert graph.out_degrees.max() <= 5

    def test_weakly_connected(self) -> None:
        for seed in range(5):
            graph = generate_euler_graph(150, 3, np.random.default_rng(seed))
            assert graph.is_weakly_connected()

    def test_identity_labels(self) -> None:
        graph = generate_euler_graph(4, 2, np.random.default_rng(0))
        assert graph.labels.labels == ("0", "1", "2", "3")

    def test_reproducibility_same_seed(self) -> None:
        g1 = generate_euler_graph(100, 4, np.random.default_rng(7))
        g2 = generate_euler_graph(100, 4, np.random.default_rng(7))
        assert np.array_equal(g1.row_offsets, g2.row_offsets)
        assert np.array_equal(g1.col_indices, g2.col_indices)

    def test_single_vertex_self_loops(self) -> None:
        graph = generate_euler_graph(1, 3, np.random.default_rng(0))
        assert graph.num_vertices == 1
        assert np.all(graph.col_indices == 0)

    def test_open_path_unbalances_one_pair(self) -> None:
        graph = generate_euler_graph(
            100, 4, np.random.default_rng(3), open_path=True
        )
        surplus = graph.out_degrees - graph.in_degrees
        assert sorted(surplus[surplus != 0].tolist()) == [-1, 1]

    def test_invalid_arguments(self) -> None:
        rng = np.random.default_rng(0)
        with pytest.raises(ValueError):
            generate_euler_graph(0, 3, rng)
        with pytest.raises(ValueError):
            generate_euler_graph(5, 0, rng)
        with pytest.raises(ValueError):
            generate_euler_graph(1, 3, rng, open_path=True)


class TestValidateGenerated:
    """Validation error lists."""

    def test_valid_graph(self) -> None:
        graph = generate_euler_graph(50, 3, np.random.default_rng(1))
        assert validate_generated(graph) == []

    def test_rejects_disconnected(self) -> None:
        graph = Graph.from_arrays([0, 1, 2, 3, 4, 5, 6], [1, 2, 0, 4, 5, 3])
        errors = validate_generated(graph)
        assert any("Not weakly connected" in e for e in errors)

    def test_rejects_unbalanced(self) -> None:
        graph = Graph.from_arrays([0, 1, 1], [1])
        errors = validate_generated(graph)
        assert any("Unbalanced" in e for e in errors)

    def test_open_path_needs_exact_imbalance(self) -> None:
        balanced = Graph.from_arrays([0, 1, 2, 3], [1, 2, 0])
        assert validate_generated(balanced, open_path=True)
        path = Graph.from_arrays([0, 1, 2, 2], [1, 2])
        assert validate_generated(path, open_path=True) == []


class TestGenerateFromConfig:
    """Retry loop around generation and validation."""

    def test_returns_generated_graph(self) -> None:
        config = RunConfig(generator=GeneratorConfig(n=120, k=4), seed=5)
        generated = generate_from_config(config)
        assert isinstance(generated, GeneratedGraph)
        assert generated.attempt == 0
        assert generated.generation_seed == 5
        assert generated.graph.num_vertices == 120
        assert not generated.open_path

    def test_open_path_config(self) -> None:
        config = RunConfig(
            generator=GeneratorConfig(n=120, k=4, open_path=True, max_retries=20),
            seed=5,
        )
        generated = generate_from_config(config)
        assert generated.open_path
        assert not generated.graph.is_balanced

    def test_retry_on_failure(self) -> None:
        """Verify retry logic is invoked when validation fails."""
        call_count = 0
        original_validate = validate_generated

        def mock_validate(*args, **kwargs):
            nonlocal call_count
            call_count += 1
            if call_count <= 2:
                return ["Simulated failure"]
            return original_validate(*args, **kwargs)

        config = RunConfig(generator=GeneratorConfig(n=60, k=3), seed=10)
        with patch(
            "euler_circuit.graph.generators.validate_generated",
            side_effect=mock_validate,
        ):
            generated = generate_from_config(config)

        assert call_count == 3
        assert generated.attempt == 2
        assert generated.generation_seed == 12

    def test_raises_after_max_retries(self) -> None:
        config = RunConfig(
            generator=GeneratorConfig(n=20, k=2, max_retries=3), seed=1
        )
        with patch(
            "euler_circuit.graph.generators.validate_generated",
            return_value=["Simulated failure"],
        ):
            with pytest.raises(GraphGenerationError, match="after 3 attempts"):
                generate_from_config(config)
