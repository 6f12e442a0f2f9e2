"""Deterministic config hashing using SHA-256 over sorted JSON."""

import hashlib
import json
from dataclasses import asdict
from typing import Any

from euler_circuit.config.experiment import RunConfig


def config_hash(config: Any) -> str:
    """Deterministic SHA-256 hash of a config object.

    Args:
        config: Any dataclass instance (or sub-config).

    Returns:
        First 16 hex characters of the SHA-256 hash.
    """
    serialized = json.dumps(
        asdict(config),
        sort_keys=True,
        ensure_ascii=True,
        separators=(",", ":"),
        indent=None,
    )
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()[:16]


def generator_config_hash(config: RunConfig) -> str:
    """Hash for graph caching over config.generator only (excludes seed).

    max_retries is part of the hash: a different retry budget can land
    on a different attempt and therefore a different graph.
    """
    return config_hash(config.generator)


def full_config_hash(config: RunConfig) -> str:
    """Hash for full run identity, seed included."""
    return config_hash(config)
