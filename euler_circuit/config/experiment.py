"""Run configuration dataclasses, all frozen and slotted."""

from dataclasses import dataclass, field

PARTITION_METHODS = ("parallel", "sequential")


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Random Eulerian graph generation parameters."""

    n: int = 1000  # number of vertices
    k: int = 5  # max out-degree per vertex
    open_path: bool = False  # unbalance one vertex pair (Eulerian path input)
    max_retries: int = 10


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Cycle-merge pipeline parameters."""

    partition_method: str = "parallel"  # "parallel" or "sequential"
    batched_splice: bool = True  # apply disjoint swips as one scatter
    verify: bool = True  # re-partition after splicing
    root: int = 0  # BFS root partition of the spanning tree


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Top-level run configuration composing all sub-configs.

    All fields are frozen and typed. Cross-parameter validation runs
    in __post_init__ to reject invalid configurations early.
    """

    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    seed: int = 42
    description: str = ""
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.generator.n < 1:
            raise ValueError(f"n must be >= 1, got {self.generator.n}")
        if self.generator.k < 1:
            raise ValueError(f"k must be >= 1, got {self.generator.k}")
        if self.generator.open_path and self.generator.n < 2:
            raise ValueError(
                f"open_path requires n >= 2, got n={self.generator.n}"
            )
        if self.generator.max_retries < 1:
            raise ValueError(
                f"max_retries must be >= 1, got {self.generator.max_retries}"
            )
        if self.pipeline.partition_method not in PARTITION_METHODS:
            raise ValueError(
                f"partition_method must be one of {PARTITION_METHODS}, "
                f"got {self.pipeline.partition_method!r}"
            )
        if self.pipeline.root < 0:
            raise ValueError(f"root must be >= 0, got {self.pipeline.root}")
