"""
Argon2id Parameter Profile
==========================

Immutable cost parameters for password hashing.

Also holds the ceilings applied to parameters decoded from storage.

The default profile is a module-level constant built once at import time.
It is never mutated; components receive it (or another profile) explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Final

from credhash.security.constants import (
    ARGON2_HASH_LENGTH,
    ARGON2_MEMORY_COST,
    ARGON2_PARALLELISM,
    ARGON2_SALT_LENGTH,
    ARGON2_TIME_COST,
    MAX_PARALLELISM,
    MAX_UINT32,
    MAX_VERIFY_MEMORY_COST,
    MAX_VERIFY_TIME_COST,
)


_UPPER_BOUNDS: Final[dict[str, int]] = {
    "memory_cost_kib": MAX_UINT32,
    "iterations": MAX_UINT32,
    "parallelism": MAX_PARALLELISM,
    "salt_length": MAX_UINT32,
    "key_length": MAX_UINT32,
}


@dataclass(frozen=True, slots=True)
class HashParameters:
    """
    Cost parameters for one Argon2id derivation.

    Attributes:
        memory_cost_kib: Memory usage in KiB
        iterations: Number of passes over memory
        parallelism: Number of lanes (1-255)
        salt_length: Salt length in bytes
        key_length: Derived key length in bytes
    """
    memory_cost_kib: int = ARGON2_MEMORY_COST
    iterations: int = ARGON2_TIME_COST
    parallelism: int = ARGON2_PARALLELISM
    salt_length: int = ARGON2_SALT_LENGTH
    key_length: int = ARGON2_HASH_LENGTH

    def __post_init__(self) -> None:
        """Validate that every field is a positive integer within range."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{f.name} must be an integer")
            if value <= 0:
                raise ValueError(f"{f.name} must be greater than zero")
            if value > _UPPER_BOUNDS[f.name]:
                raise ValueError(f"{f.name} must be at most {_UPPER_BOUNDS[f.name]}")

    def as_dict(self) -> dict[str, int]:
        """Get the parameters as a plain dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_PARAMETERS: Final[HashParameters] = HashParameters()


@dataclass(frozen=True, slots=True)
class VerifyLimits:
    """
    Upper bounds on cost parameters read back from stored hashes.

    A tampered hash with ``m=4294967295`` would otherwise make a single
    verification try to allocate about 4 TiB.
    """
    max_memory_cost_kib: int = MAX_VERIFY_MEMORY_COST
    max_iterations: int = MAX_VERIFY_TIME_COST

    def __post_init__(self) -> None:
        """Validate that both ceilings are positive integers."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{f.name} must be a positive integer")

    def allows(self, parameters: HashParameters) -> bool:
        """Check whether a derivation with these parameters stays within the limits."""
        return (
            parameters.memory_cost_kib <= self.max_memory_cost_kib
            and parameters.iterations <= self.max_iterations
        )


DEFAULT_LIMITS: Final[VerifyLimits] = VerifyLimits()
