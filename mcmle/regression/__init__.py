"""
Simple linear regression.

The fitting step of simulate-and-fit studies: generate (x, y) from a known
line, fit it, and compare the estimates with the truth.

Usage:
    from mcmle.regression import fit_linear

    fit = fit_linear(x, y)
    print(fit.intercept, fit.slope, fit.sigma2)
"""

from mcmle.regression.design import LinearDesign
from mcmle.regression.solution import LinearParams, LinearSolution
from mcmle.regression.solvers import fit_linear

__all__ = [
    "fit_linear",
    "LinearDesign",
    "LinearParams",
    "LinearSolution",
]
