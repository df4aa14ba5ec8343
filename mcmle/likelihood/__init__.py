"""
Negative log-likelihood evaluators.

Pure functions of (params, *data) plus NegLogLik, which binds an
evaluator to a read-only dataset, and likelihood_grid for grid searches.

Usage:
    from mcmle.likelihood import NegLogLik, normal_nll, likelihood_grid

    normal_nll([0.0, 1.0], x)          # explicit data, no hidden state
    nll = NegLogLik.normal(x)          # params -> float
    surface = likelihood_grid(nll, [mu_axis, sigma2_axis])
"""

from mcmle.likelihood.evaluators import (
    binomial_nll,
    binomial_nll_grad,
    linear_nll,
    linear_nll_grad,
    normal_nll,
    normal_nll_grad,
    poisson_nll,
    poisson_nll_grad,
)
from mcmle.likelihood.grid import LikelihoodSurface, likelihood_grid
from mcmle.likelihood.objective import NegLogLik

__all__ = [
    "normal_nll",
    "linear_nll",
    "poisson_nll",
    "binomial_nll",
    "normal_nll_grad",
    "linear_nll_grad",
    "poisson_nll_grad",
    "binomial_nll_grad",
    "NegLogLik",
    "LikelihoodSurface",
    "likelihood_grid",
]
