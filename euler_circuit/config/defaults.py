"""Default configuration used when no config file is given."""

from euler_circuit.config.experiment import RunConfig

# n=1000, k=5, closed circuit, parallel partitioner, batched splice, seed=42.
DEFAULT_CONFIG = RunConfig()
