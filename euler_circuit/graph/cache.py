"""Generated-graph caching by config hash.

Large random graphs are slow to wire vertex by vertex, so generated
graphs are stored on disk keyed by the generator config and seed.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

import numpy as np

from euler_circuit.config.experiment import RunConfig
from euler_circuit.config.hashing import generator_config_hash
from euler_circuit.graph.generators import generate_from_config
from euler_circuit.graph.types import GeneratedGraph, Graph, LabelMap

log = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path(".cache/graphs")


def graph_cache_key(config: RunConfig) -> str:
    """Compute cache key for a generator configuration.

    Key = generator_config_hash + seed. Pipeline settings, description
    and tags don't affect the key.

    Returns:
        Cache key string like "a1b2c3d4e5f6a7b8_s42".
    """
    return f"{generator_config_hash(config)}_s{config.seed}"


def _cache_path(config: RunConfig, cache_dir: Path = DEFAULT_CACHE_DIR) -> Path:
    return Path(cache_dir) / graph_cache_key(config)


def save_graph(
    generated: GeneratedGraph,
    config: RunConfig,
    cache_dir: Path = DEFAULT_CACHE_DIR,
) -> Path:
    """Save a generated graph to the cache.

    Stores:
    - graph.npz: row_offsets and col_indices
    - metadata.json: labels and generation provenance

    Returns:
        Path to the cache directory for this graph.
    """
    cache_path = _cache_path(config, cache_dir)
    cache_path.mkdir(parents=True, exist_ok=True)

    graph = generated.graph
    np.savez_compressed(
        cache_path / "graph.npz",
        row_offsets=graph.row_offsets,
        col_indices=graph.col_indices,
    )

    metadata = {
        "n": config.generator.n,
        "k": config.generator.k,
        "open_path": generated.open_path,
        "generation_seed": generated.generation_seed,
        "attempt": generated.attempt,
        "labels": list(graph.labels.labels),
        "config_hash": generator_config_hash(config),
        "seed": config.seed,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    with open(cache_path / "metadata.json", "w") as f:
        json.dump(metadata, f, indent=2)

    log.info("Graph cached at %s", cache_path)
    return cache_path


def load_graph(
    config: RunConfig, cache_dir: Path = DEFAULT_CACHE_DIR
) -> GeneratedGraph | None:
    """Load a cached graph if it exists.

    Returns:
        GeneratedGraph on cache hit, None on cache miss.
    """
    cache_path = _cache_path(config, cache_dir)

    for fname in ("graph.npz", "metadata.json"):
        if not (cache_path / fname).exists():
            return None

    with np.load(cache_path / "graph.npz") as arrays:
        row_offsets = arrays["row_offsets"]
        col_indices = arrays["col_indices"]

    with open(cache_path / "metadata.json") as f:
        metadata = json.load(f)

    graph = Graph(
        row_offsets, col_indices, LabelMap.from_labels(metadata["labels"])
    )
    log.info("Graph loaded from cache: %s", cache_path)
    return GeneratedGraph(
        graph=graph,
        generation_seed=metadata["generation_seed"],
        attempt=metadata["attempt"],
        open_path=metadata["open_path"],
    )


def generate_or_load_graph(
    config: RunConfig, cache_dir: Path = DEFAULT_CACHE_DIR
) -> GeneratedGraph:
    """Generate a graph or load it from cache if available."""
    key = graph_cache_key(config)

    cached = load_graph(config, cache_dir)
    if cached is not None:
        log.info("Cache hit for %s", key)
        return cached

    log.info("Cache miss for %s, generating...", key)
    generated = generate_from_config(config)
    save_graph(generated, config, cache_dir)
    return generated
