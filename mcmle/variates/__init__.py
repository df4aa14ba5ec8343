"""
Random variate sources.

Independent draws from normal, uniform, binomial and weighted categorical
distributions, always from an explicitly supplied generator or seed.

Usage:
    from mcmle.variates import rnorm, rcategorical

    x = rnorm(100, mean=0.0, sd=2.0, seed=42)
    spins = rcategorical(20, [-1, 1, 5], weights=[18, 17, 2], seed=42)
"""

from mcmle.variates.design import VariateDesign
from mcmle.variates.solvers import draw, rnorm, runif, rbinom, rcategorical, sampler

__all__ = [
    "VariateDesign",
    "draw",
    "rnorm",
    "runif",
    "rbinom",
    "rcategorical",
    "sampler",
]
