"""Exception types raised by graph construction and the circuit pipeline."""


class EulerCircuitError(Exception):
    """Base class for all errors raised by this package."""


class MalformedGraphError(EulerCircuitError, ValueError):
    """Raised when adjacency arrays violate the row-offset/column-index invariants."""


class UnbalancedDegreeError(EulerCircuitError):
    """Raised when some vertex has in-degree different from out-degree.

    Attributes:
        vertices: Ordinals of the offending vertices.
    """

    def __init__(self, message: str, vertices: tuple[int, ...] = ()) -> None:
        super().__init__(message)
        self.vertices = vertices


class DisconnectedCycleGraphError(EulerCircuitError):
    """Raised when the cycle graph has no spanning tree.

    Either the input graph is not weakly connected or no valid merge
    point exists between some cycles. The attributes say which
    partitions could not be reached so the two cases can be told apart.

    Attributes:
        reached: Partition ids reached from the root.
        unreached: Partition ids the traversal never reached.
        n_components: Number of connected components of the cycle graph.
    """

    def __init__(
        self,
        message: str,
        reached: tuple[int, ...] = (),
        unreached: tuple[int, ...] = (),
        n_components: int = 0,
    ) -> None:
        super().__init__(message)
        self.reached = reached
        self.unreached = unreached
        self.n_components = n_components


class SpliceIncompleteError(EulerCircuitError):
    """Raised when applying the swips did not leave a single cycle.

    Always an internal bug, never expected from valid input.
    """

    def __init__(self, message: str, max_partition: int) -> None:
        super().__init__(message)
        self.max_partition = max_partition


class GraphGenerationError(EulerCircuitError):
    """Raised when random graph generation fails after all retry attempts."""
