"""Line-oriented text format for graphs.

Each line reads ``label -> target1,target2,...``; a line holding only a
label declares a vertex with no out-edges. Blank lines are skipped.
Labels may not contain ``->`` or ``,`` and carry no surrounding
whitespace, so every graph that formats also parses back unchanged.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from euler_circuit.errors import MalformedGraphError
from euler_circuit.graph.types import Graph

log = logging.getLogger(__name__)

ARROW = "->"
SEPARATOR = ","


def _label_problem(label: str) -> str | None:
    """Why label cannot be written as a line, or None if it can."""
    if not label:
        return "empty label"
    if ARROW in label:
        return f"label {label!r} contains {ARROW!r}"
    if SEPARATOR in label:
        return f"label {label!r} contains {SEPARATOR!r}"
    if label != label.strip():
        return f"label {label!r} has surrounding whitespace"
    return None


def parse_lines(lines: Iterable[str]) -> Graph:
    """Parse adjacency lines into a Graph.

    A label listed as a source on several lines accumulates all of its
    targets. Ordinals follow first appearance.

    Raises:
        MalformedGraphError: If a line has an empty source label, or a
            label contains the arrow or the separator.
    """
    adjacency: dict[str, list[str]] = {}
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            continue
        if ARROW in line:
            vertex, _, rest = line.partition(ARROW)
            targets = [t.strip() for t in rest.split(SEPARATOR) if t.strip()]
        else:
            vertex, targets = line, []
        vertex = vertex.strip()
        if not vertex:
            raise MalformedGraphError(f"Line {lineno}: missing source label")
        for label in (vertex, *targets):
            problem = _label_problem(label)
            if problem is not None:
                raise MalformedGraphError(f"Line {lineno}: {problem}")
        adjacency.setdefault(vertex, []).extend(targets)
    return Graph.from_adjacency(adjacency)


def format_lines(graph: Graph) -> list[str]:
    """Serialize a Graph to one adjacency line per vertex.

    Raises:
        MalformedGraphError: If a label cannot be parsed back as written.
    """
    labels = [graph.labels.label(v) for v in range(graph.num_vertices)]
    for v, label in enumerate(labels):
        problem = _label_problem(label)
        if problem is not None:
            raise MalformedGraphError(f"Vertex {v}: {problem}")

    lines = []
    for v, label in enumerate(labels):
        targets = [labels[int(t)] for t in graph.neighbors(v)]
        if targets:
            lines.append(f"{label} {ARROW} {SEPARATOR.join(targets)}")
        else:
            lines.append(label)
    return lines


def read_graph(path: str | Path) -> Graph:
    path = Path(path)
    with open(path) as f:
        graph = parse_lines(f)
    log.info(
        "Graph read from %s (vertices=%d, edges=%d)",
        path,
        graph.num_vertices,
        graph.num_edges,
    )
    return graph


def write_graph(graph: Graph, path: str | Path) -> Path:
    path = Path(path)
    with open(path, "w") as f:
        for line in format_lines(graph):
            f.write(line + "\n")
    log.info("Graph written to %s", path)
    return path
