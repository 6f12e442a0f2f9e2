#!/usr/bin/env python3
"""Entry point for building an Eulerian circuit from the command line.

Chains the stages into a single command:
graph loading or generation -> cycle merge pipeline -> circuit output.

Usage:
    python run_euler.py --input graph.txt --output circuit.txt
    python run_euler.py --config config.json
    python run_euler.py --config config.json --dry-run
    python run_euler.py --config config.json --verbose
"""

import argparse
import logging
import sys
import time
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from euler_circuit.config import (
    DEFAULT_CONFIG,
    RunConfig,
    config_from_json,
    full_config_hash,
    generator_config_hash,
)

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that prints stage banners with elapsed time."""
    print(f"\n=== {name} ===")
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    elapsed = time.monotonic() - t0
    print(f"... done in {elapsed:.1f}s")
    log.info("Completed: %s in %.1fs", name, elapsed)


def run_pipeline(
    config: RunConfig,
    input_path: Path | None = None,
    output_path: Path | None = None,
    cache_dir: Path | None = None,
) -> list[str]:
    """Load or generate a graph, build its circuit, optionally write it out.

    Args:
        config: Run configuration.
        input_path: Graph file in adjacency-line format; generate a random
            graph from config.generator when omitted.
        output_path: File receiving the circuit, one vertex label per line.
        cache_dir: Generated-graph cache directory; no caching when omitted.

    Returns:
        The closed circuit as a list of vertex labels.
    """
    # Lazy imports to keep --dry-run fast
    from euler_circuit.circuit import find_euler_circuit
    from euler_circuit.graph import (
        generate_from_config,
        generate_or_load_graph,
        read_graph,
    )

    pipeline_start = time.monotonic()

    with stage_timer("Graph Loading"):
        if input_path is not None:
            graph = read_graph(input_path)
        elif cache_dir is not None:
            graph = generate_or_load_graph(config, cache_dir).graph
        else:
            graph = generate_from_config(config).graph
        log.info(
            "Graph: vertices=%d, edges=%d",
            graph.num_vertices,
            graph.num_edges,
        )

    with stage_timer("Circuit Construction"):
        circuit = find_euler_circuit(graph, config.pipeline)
        log.info(
            "Circuit: %d initial cycles, %d swips",
            circuit.initial_partitions,
            circuit.num_swips,
        )

    walk = circuit.walk_labels()

    if output_path is not None:
        with stage_timer("Writing Circuit"):
            with open(output_path, "w") as f:
                for label in walk:
                    f.write(label + "\n")
            log.info("Circuit written to %s", output_path)

    total_elapsed = time.monotonic() - pipeline_start
    print(f"\n{'=' * 60}")
    print(f"Pipeline complete in {total_elapsed:.1f}s")
    print(f"  Vertices:       {graph.num_vertices}")
    print(f"  Edges:          {graph.num_edges}")
    print(f"  Initial cycles: {circuit.initial_partitions}")
    print(f"  Swips:          {circuit.num_swips}")
    if output_path is not None:
        print(f"  Output:         {output_path}")
    print(f"{'=' * 60}")

    return walk


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Build an Eulerian circuit by cycle decomposition and merge"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to run config JSON file (defaults built in)",
    )
    parser.add_argument(
        "--input",
        type=str,
        default=None,
        help="Graph file with 'label -> a,b,c' lines; random graph if omitted",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the circuit, one vertex label per line",
    )
    parser.add_argument(
        "--cache-dir",
        type=str,
        default=None,
        help="Cache generated graphs in this directory",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show pipeline plan without running it",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable DEBUG-level logging",
    )
    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.config is not None:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        config = config_from_json(config_path.read_text())
    else:
        config = DEFAULT_CONFIG

    input_path = Path(args.input) if args.input else None
    if input_path is not None and not input_path.exists():
        print(f"Error: input file not found: {input_path}", file=sys.stderr)
        sys.exit(1)

    print(f"Config hash:    {full_config_hash(config)}")
    print(f"Generator hash: {generator_config_hash(config)}")
    print()
    if input_path is not None:
        print(f"Graph:    {input_path}")
    else:
        print(f"Graph:    random n={config.generator.n}, k={config.generator.k}, "
              f"open_path={config.generator.open_path}")
    print(f"Pipeline: partition={config.pipeline.partition_method}, "
          f"batched_splice={config.pipeline.batched_splice}, "
          f"verify={config.pipeline.verify}")
    print(f"Seed:     {config.seed}")

    if args.dry_run:
        print("\nPipeline plan:")
        print("  1. Load or generate graph")
        print("  2. Degree check and successor permutation")
        print("  3. Cycle partition")
        print("  4. Cycle graph contraction and spanning tree")
        print("  5. Swip splice and single-circuit verification")
        print("\n[dry-run] Config loaded successfully. Exiting.")
        return

    try:
        run_pipeline(
            config,
            input_path=input_path,
            output_path=Path(args.output) if args.output else None,
            cache_dir=Path(args.cache_dir) if args.cache_dir else None,
        )
    except Exception:
        log.exception("Pipeline failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
