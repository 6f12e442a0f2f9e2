"""Tests for generated-graph caching by config hash."""

import json
from dataclasses import replace
from pathlib import Path

import numpy as np

from euler_circuit.config.experiment import GeneratorConfig, PipelineConfig, RunConfig
from euler_circuit.config.hashing import generator_config_hash
from euler_circuit.graph.cache import (
    generate_or_load_graph,
    graph_cache_key,
    load_graph,
    save_graph,
)
from euler_circuit.graph.generators import generate_from_config

SMALL_CONFIG = RunConfig(generator=GeneratorConfig(n=80, k=4), seed=42)


class TestCacheKey:
    """Tests for cache key computation."""

    def test_cache_key_includes_seed(self) -> None:
        key = graph_cache_key(SMALL_CONFIG)
        assert key.endswith(f"_s{SMALL_CONFIG.seed}")

    def test_cache_key_includes_generator_hash(self) -> None:
        key = graph_cache_key(SMALL_CONFIG)
        assert generator_config_hash(SMALL_CONFIG) in key

    def test_cache_key_differs_for_different_seed(self) -> None:
        cfg2 = replace(SMALL_CONFIG, seed=99)
        assert graph_cache_key(SMALL_CONFIG) != graph_cache_key(cfg2)

    def test_cache_key_differs_for_different_generator_params(self) -> None:
        cfg2 = replace(SMALL_CONFIG, generator=GeneratorConfig(n=90, k=4))
        assert graph_cache_key(SMALL_CONFIG) != graph_cache_key(cfg2)

    def test_cache_key_ignores_non_generator_params(self) -> None:
        cfg2 = replace(SMALL_CONFIG, description="test run")
        assert graph_cache_key(SMALL_CONFIG) == graph_cache_key(cfg2)

        cfg3 = replace(SMALL_CONFIG, tags=("foo", "bar"))
        assert graph_cache_key(SMALL_CONFIG) == graph_cache_key(cfg3)

        cfg4 = replace(SMALL_CONFIG, pipeline=PipelineConfig(verify=False))
        assert graph_cache_key(SMALL_CONFIG) == graph_cache_key(cfg4)


class TestSaveLoad:
    """Tests for graph save/load round-trip."""

    def test_save_and_load_roundtrip(self, tmp_path: Path) -> None:
        generated = generate_from_config(SMALL_CONFIG)
        save_graph(generated, SMALL_CONFIG, tmp_path)
        loaded = load_graph(SMALL_CONFIG, tmp_path)

        assert loaded is not None
        assert np.array_equal(
            loaded.graph.row_offsets, generated.graph.row_offsets
        )
        assert np.array_equal(
            loaded.graph.col_indices, generated.graph.col_indices
        )
        assert loaded.graph.labels == generated.graph.labels
        assert loaded.generation_seed == generated.generation_seed
        assert loaded.attempt == generated.attempt
        assert loaded.open_path == generated.open_path

    def test_load_returns_none_for_missing_cache(self, tmp_path: Path) -> None:
        assert load_graph(SMALL_CONFIG, tmp_path) is None

    def test_cache_metadata_contains_expected_fields(
        self, tmp_path: Path
    ) -> None:
        generated = generate_from_config(SMALL_CONFIG)
        cache_path = save_graph(generated, SMALL_CONFIG, tmp_path)

        with open(cache_path / "metadata.json") as f:
            metadata = json.load(f)

        expected_fields = {
            "n", "k", "open_path", "generation_seed", "attempt",
            "labels", "config_hash", "seed", "timestamp",
        }
        assert set(metadata.keys()) == expected_fields


class TestGenerateOrLoad:
    """Tests for the generate-or-load API."""

    def test_caches_on_first_call(self, tmp_path: Path) -> None:
        generate_or_load_graph(SMALL_CONFIG, tmp_path)

        cache_path = tmp_path / graph_cache_key(SMALL_CONFIG)
        assert (cache_path / "graph.npz").exists()
        assert (cache_path / "metadata.json").exists()

    def test_cache_hit_on_second_call(self, tmp_path: Path) -> None:
        g1 = generate_or_load_graph(SMALL_CONFIG, tmp_path)
        g2 = generate_or_load_graph(SMALL_CONFIG, tmp_path)
        assert np.array_equal(g1.graph.col_indices, g2.graph.col_indices)
        assert np.array_equal(g1.graph.row_offsets, g2.graph.row_offsets)

    def test_different_seed_generates_different_graph(
        self, tmp_path: Path
    ) -> None:
        cfg2 = replace(SMALL_CONFIG, seed=99)
        g1 = generate_or_load_graph(SMALL_CONFIG, tmp_path)
        g2 = generate_or_load_graph(cfg2, tmp_path)
        assert not (
            np.array_equal(g1.graph.row_offsets, g2.graph.row_offsets)
            and np.array_equal(g1.graph.col_indices, g2.graph.col_indices)
        )
