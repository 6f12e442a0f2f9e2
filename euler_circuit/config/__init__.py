"""Run configuration system with frozen, hashable, serializable dataclasses."""

from euler_circuit.config.experiment import (
    PARTITION_METHODS,
    GeneratorConfig,
    PipelineConfig,
    RunConfig,
)
from euler_circuit.config.defaults import DEFAULT_CONFIG
from euler_circuit.config.hashing import (
    config_hash,
    full_config_hash,
    generator_config_hash,
)
from euler_circuit.config.serialization import (
    config_from_dict,
    config_from_json,
    config_to_dict,
    config_to_json,
)

__all__ = [
    "GeneratorConfig",
    "PipelineConfig",
    "RunConfig",
    "PARTITION_METHODS",
    "DEFAULT_CONFIG",
    "config_hash",
    "generator_config_hash",
    "full_config_hash",
    "config_to_json",
    "config_from_json",
    "config_to_dict",
    "config_from_dict",
]
