"""Utilities for creating deterministic instance identifiers."""
from __future__ import annotations

from questforge.core.rng import RandomSource


def make_instance_id(prefix: str, rng: RandomSource) -> str:
    """Generate an identifier from the provided RNG.

    Id draws use their own RNG so they never shift a simulation's roll stream.
    """
    suffix = rng.randint(100000, 999999)
    return f"{prefix}_{suffix}"
