"""Graph container, reversal, text format, random generation and caching."""

from euler_circuit.graph.cache import (
    generate_or_load_graph,
    graph_cache_key,
    load_graph,
    save_graph,
)
from euler_circuit.graph.generators import (
    generate_euler_graph,
    generate_from_config,
    validate_generated,
)
from euler_circuit.graph.reverse import (
    as_permutation,
    edge_predecessors,
    edge_successors,
    incoming_edges,
    invert_permutation,
    reverse_graph,
    successors_from_incoming,
)
from euler_circuit.graph.text import (
    format_lines,
    parse_lines,
    read_graph,
    write_graph,
)
from euler_circuit.graph.types import GeneratedGraph, Graph, LabelMap, readonly

__all__ = [
    "GeneratedGraph",
    "Graph",
    "LabelMap",
    "as_permutation",
    "edge_predecessors",
    "edge_successors",
    "format_lines",
    "generate_euler_graph",
    "generate_from_config",
    "generate_or_load_graph",
    "graph_cache_key",
    "incoming_edges",
    "invert_permutation",
    "load_graph",
    "parse_lines",
    "read_graph",
    "readonly",
    "reverse_graph",
    "save_graph",
    "successors_from_incoming",
    "validate_generated",
    "write_graph",
]
