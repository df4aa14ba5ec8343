"""
Solver dispatch for simple linear regression.

Public API: fit_linear(x, y) -> LinearSolution
"""

from __future__ import annotations

from numpy.typing import ArrayLike

from mcmle.regression.backends.cpu import CPUQRBackend
from mcmle.regression.design import LinearDesign
from mcmle.regression.solution import LinearSolution


def fit_linear(x: ArrayLike | LinearDesign, y: ArrayLike | None = None) -> LinearSolution:
    """
    Least-squares fit of y = intercept + slope * x. Matches R lm(y ~ x).

    Parameters
    ----------
    x : array-like or LinearDesign
        Covariate vector, or a pre-built design (then y is ignored).
    y : array-like
        Response vector of the same length as x.

    Returns
    -------
    LinearSolution
    """
    if isinstance(x, LinearDesign):
        design = x
    else:
        design = LinearDesign.from_arrays(x, y)

    result = CPUQRBackend().solve(design)
    return LinearSolution(_result=result, _design=design)
