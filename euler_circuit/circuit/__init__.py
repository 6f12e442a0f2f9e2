"""Cycle decomposition, contraction, spanning-tree merge and splice."""

from euler_circuit.circuit.contraction import contract_cycles
from euler_circuit.circuit.partition import (
    PARTITIONERS,
    partition_cycles,
    partition_cycles_sequential,
)
from euler_circuit.circuit.pipeline import find_euler_circuit
from euler_circuit.circuit.spanning import (
    generate_swips,
    schedule_swips,
    spanning_tree,
)
from euler_circuit.circuit.splice import apply_swips, splice_circuit
from euler_circuit.circuit.types import (
    CycleGraph,
    EulerCircuit,
    Partition,
    Swip,
    SwipPlan,
)

__all__ = [
    "CycleGraph",
    "EulerCircuit",
    "PARTITIONERS",
    "Partition",
    "Swip",
    "SwipPlan",
    "apply_swips",
    "contract_cycles",
    "find_euler_circuit",
    "generate_swips",
    "partition_cycles",
    "partition_cycles_sequential",
    "schedule_swips",
    "spanning_tree",
    "splice_circuit",
]
