"""
Pseudo-random generator handles.

Randomness is never ambient: every computation receives an explicit
numpy Generator, built here from whatever seed-like value the caller
supplied. Independent streams are derived with SeedSequence.spawn so
that parallel replicates never share generator state.
"""

from __future__ import annotations

import numbers
from typing import Union

import numpy as np

from mcmle.core.exceptions import InvalidArgumentError

SeedLike = Union[None, int, np.random.SeedSequence, np.random.Generator]


def make_rng(seed: SeedLike = None) -> np.random.Generator:
    """
    Build a Generator from a seed-like value.

    Args:
        seed: None (fresh OS entropy), a non-negative int, a SeedSequence,
            or an existing Generator. A Generator is returned unchanged so
            callers can thread one handle through a sequence of calls.

    Raises:
        InvalidArgumentError: If seed has an unsupported type or is negative
    """
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(as_seed_sequence(seed))


def as_seed_sequence(seed: SeedLike) -> np.random.SeedSequence:
    """
    Normalise a seed-like value to a SeedSequence.

    A SeedSequence is copied, so spawning from the result never advances
    the caller's sequence and the same seed always gives the same streams.
    A Generator contributes fresh entropy drawn from itself, which advances
    that generator by exactly one draw.
    """
    if seed is None:
        return np.random.SeedSequence()
    if isinstance(seed, np.random.SeedSequence):
        return np.random.SeedSequence(
            seed.entropy, spawn_key=seed.spawn_key, pool_size=seed.pool_size
        )
    if isinstance(seed, np.random.Generator):
        return np.random.SeedSequence(
            int(seed.integers(0, 2**63 - 1, dtype=np.int64))
        )
    if isinstance(seed, bool) or not isinstance(seed, numbers.Integral):
        raise InvalidArgumentError(
            f"seed: expected None, int, SeedSequence or Generator, "
            f"got {type(seed).__name__}"
        )
    if seed < 0:
        raise InvalidArgumentError(f"seed: must be non-negative, got {seed}")
    return np.random.SeedSequence(int(seed))


def spawn_rngs(seed: SeedLike, k: int) -> list[np.random.Generator]:
    """
    Derive k statistically independent generators from one seed.

    The same seed always yields the same k streams, in the same order.
    """
    children = as_seed_sequence(seed).spawn(k)
    return [np.random.default_rng(child) for child in children]


def spawn_grid_rngs(
    seed: SeedLike,
    n_configs: int,
    n_replicates: int,
) -> list[list[np.random.Generator]]:
    """
    One independent generator per (grid point, replicate) pair.

    The root sequence spawns one child per grid point and each of those
    spawns one child per replicate, so adding replicates to a grid point
    does not change the streams of earlier replicates or other points.

    Returns:
        Nested list indexed as rngs[config_index][replicate_index]
    """
    config_seqs = as_seed_sequence(seed).spawn(n_configs)
    return [
        [np.random.default_rng(child) for child in seq.spawn(n_replicates)]
        for seq in config_seqs
    ]
