"""
Maximum-likelihood estimation.

Minimises negative log-likelihoods with scipy.optimize under box
constraints and surfaces non-convergence as ConvergenceError.

Usage:
    from mcmle.mle import fit_normal, minimize_nll
    from mcmle.likelihood import NegLogLik

    result = fit_normal(x)                    # (mean, biased variance)
    print(result.estimates, result.loglik)

    result = minimize_nll(NegLogLik.normal(x), [0.0, 1.0],
                          bounds=[(None, None), (1e-8, None)])
"""

from mcmle.mle.design import MLEDesign
from mcmle.mle.solution import MLEParams, MLESolution
from mcmle.mle.solvers import (
    fit_binomial,
    fit_linear_mle,
    fit_normal,
    fit_poisson,
    minimize_nll,
)

__all__ = [
    "minimize_nll",
    "fit_normal",
    "fit_linear_mle",
    "fit_poisson",
    "fit_binomial",
    "MLEDesign",
    "MLEParams",
    "MLESolution",
]
