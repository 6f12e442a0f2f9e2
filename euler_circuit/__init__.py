"""Eulerian circuits of large directed multigraphs by cycle decomposition and merge."""

from euler_circuit.circuit import EulerCircuit, find_euler_circuit
from euler_circuit.errors import (
    DisconnectedCycleGraphError,
    EulerCircuitError,
    GraphGenerationError,
    MalformedGraphError,
    SpliceIncompleteError,
    UnbalancedDegreeError,
)
from euler_circuit.graph import Graph, LabelMap

__all__ = [
    "DisconnectedCycleGraphError",
    "EulerCircuit",
    "EulerCircuitError",
    "Graph",
    "GraphGenerationError",
    "LabelMap",
    "MalformedGraphError",
    "SpliceIncompleteError",
    "UnbalancedDegreeError",
    "find_euler_circuit",
]
