"""
Random variate generation.

Public API: draw(design, seed) plus R-named shortcuts rnorm(), runif(),
rbinom(), rcategorical().

Every function takes an explicit seed-like handle. Passing the same
Generator through a sequence of calls reproduces the whole sequence;
passing the same integer seed reproduces a single call.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from mcmle.core.compute.rng import SeedLike, make_rng
from mcmle.variates.design import VariateDesign


def draw(design: VariateDesign, seed: SeedLike = None) -> NDArray:
    """
    Draw design.n independent values from the design's distribution.

    Parameters
    ----------
    design : VariateDesign
        Validated distribution and sample count.
    seed : None, int, SeedSequence or Generator
        Source of randomness.

    Returns
    -------
    ndarray
        Read-only 1D array of length design.n. Binomial draws are integers,
        every other family is float64.
    """
    rng = make_rng(seed)
    p = design.params
    n = design.n

    if design.family == 'normal':
        out = rng.normal(p['mean'], p['sd'], size=n)
    elif design.family == 'uniform':
        out = rng.uniform(p['low'], p['high'], size=n)
    elif design.family == 'binomial':
        out = rng.binomial(p['size'], p['prob'], size=n)
    elif design.family == 'categorical':
        out = rng.choice(p['values'], size=n, replace=True, p=p['probs'])
    else:
        raise ValueError(f"Unknown family: {design.family!r}")

    out.flags.writeable = False
    return out


def rnorm(n: int, mean: float = 0.0, sd: float = 1.0, *, seed: SeedLike = None) -> NDArray:
    """n normal draws. Matches R rnorm(n, mean, sd)."""
    return draw(VariateDesign.normal(mean, sd, n), seed)


def runif(n: int, low: float = 0.0, high: float = 1.0, *, seed: SeedLike = None) -> NDArray:
    """n uniform draws on [low, high). Matches R runif(n, min, max)."""
    return draw(VariateDesign.uniform(low, high, n), seed)


def rbinom(n: int, size: int, prob: float, *, seed: SeedLike = None) -> NDArray:
    """n binomial draws. Matches R rbinom(n, size, prob)."""
    return draw(VariateDesign.binomial(size, prob, n), seed)


def rcategorical(
    n: int,
    values: ArrayLike,
    weights: ArrayLike | None = None,
    *,
    seed: SeedLike = None,
) -> NDArray:
    """
    n weighted draws with replacement from values.

    Equivalent to R sample(values, n, replace=TRUE, prob=weights).
    """
    return draw(VariateDesign.categorical(values, weights, n), seed)


def sampler(design_factory, **params):
    """
    Adapt a VariateDesign constructor into a (rng, n) -> draws callable.

    The returned callable validates its parameters once, up front, and is
    the form Monte Carlo designs expect for their sampler argument:

        normal = sampler(VariateDesign.normal, mean=0.0, sd=2.0)
        x = normal(rng, 1000)
    """
    design_factory(n=0, **params)

    def _sample(rng: np.random.Generator, n: int) -> NDArray:
        return draw(design_factory(n=n, **params), rng)

    return _sample
