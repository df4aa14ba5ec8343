"""
Solver dispatch for maximum-likelihood estimation.

Public API:
    minimize_nll(nll, x0, bounds)   - any objective, box-constrained
    fit_normal(x, sigma2=None)      - normal mean (and variance)
    fit_linear_mle(x, y)            - Gaussian simple linear regression
    fit_poisson(counts)             - Poisson rate
    fit_binomial(successes, trials) - binomial probability
"""

from __future__ import annotations

import warnings
from typing import Callable, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from mcmle.likelihood.objective import NegLogLik
from mcmle.mle.backends.cpu import CPUScipyBackend
from mcmle.mle.design import Bound, MLEDesign
from mcmle.mle.solution import MLESolution

# Smallest variance / rate the built-in fits will try; keeps L-BFGS-B
# away from the boundary where the likelihood is undefined.
_POSITIVE_FLOOR = 1e-12


def minimize_nll(
    nll: Callable[[NDArray], float] | MLEDesign,
    x0: ArrayLike | None = None,
    bounds: Sequence[Bound] | None = None,
    *,
    method: str = 'L-BFGS-B',
    tol: float | None = None,
    max_iter: int = 1000,
    jac: Callable[[NDArray], NDArray] | None = None,
    verbose: bool = False,
) -> MLESolution:
    """
    Minimise a negative log-likelihood.

    Parameters
    ----------
    nll : callable or MLEDesign
        fn(params) -> float, typically a NegLogLik; or a pre-built design.
    x0 : array-like
        Finite starting point inside the bounds.
    bounds : sequence of (lower, upper) or None
        Per-parameter box; None on either side means unbounded.
    method : str
        scipy.optimize.minimize method. Default 'L-BFGS-B'.
    tol : float or None
        Convergence tolerance; None picks a default suited to the gradient.
    max_iter : int
        Iteration budget.
    jac : callable or None
        Gradient, if the objective does not provide one.
    verbose : bool
        Print progress information.

    Returns
    -------
    MLESolution

    Raises
    ------
    ConvergenceError
        If the optimizer reports non-convergence.
    """
    if isinstance(nll, MLEDesign):
        design = nll
    else:
        design = MLEDesign.for_objective(
            nll, x0, bounds, method=method, tol=tol, max_iter=max_iter, jac=jac,
        )

    backend = CPUScipyBackend()
    if verbose:
        print(f"MLE: {design.n_params} parameters, method {design.method}, "
              f"backend {backend.name}")

    result = backend.solve(design)

    for w in result.warnings:
        warnings.warn(w)

    if verbose:
        print(f"Converged in {result.params.n_iter} iterations "
              f"(nll: {result.params.min_value:.6f})")

    return MLESolution(_result=result, _design=design)


def fit_normal(
    x: ArrayLike,
    sigma2: float | None = None,
    *,
    x0: ArrayLike | None = None,
    **kwargs,
) -> MLESolution:
    """
    Maximum-likelihood fit of a normal model.

    With sigma2 known only the mean is estimated; otherwise (mu, sigma2)
    are estimated jointly. The estimates are the sample mean and the
    biased (divide-by-n) sample variance.

    Examples
    --------
    >>> x = [-0.5, 1.0, 0.2, -0.3, 0.5, 0.89, -0.11, -0.71, 1.0, -1.3, 0.84]
    >>> fit_normal(x, sigma2=1.0).argmin      # ~ mean(x)
    """
    nll = NegLogLik.normal(x, sigma2=sigma2)
    data = nll.data[0]
    if x0 is None:
        center = float(np.median(data))
        x0 = [center] if sigma2 is not None else [center, _robust_variance(data)]
    if sigma2 is None:
        bounds = [(None, None), (_POSITIVE_FLOOR, None)]
    else:
        bounds = [(None, None)]
    return minimize_nll(nll, x0, bounds, **kwargs)


def fit_linear_mle(
    x: ArrayLike,
    y: ArrayLike,
    *,
    x0: ArrayLike | None = None,
    **kwargs,
) -> MLESolution:
    """
    Maximum-likelihood fit of y = a + b x + e, e ~ N(0, sigma2).

    The coefficients match least squares; sigma2 is RSS / n.
    """
    nll = NegLogLik.linear(x, y)
    if x0 is None:
        # Closed-form optimum: least-squares coefficients, sigma2 = RSS / n
        xx, yy = nll.data
        X = np.column_stack([np.ones_like(xx), xx])
        coef, *_ = np.linalg.lstsq(X, yy, rcond=None)
        rss = float(np.sum((yy - X @ coef) ** 2))
        x0 = [float(coef[0]), float(coef[1]), max(rss / len(yy), _POSITIVE_FLOOR)]
    bounds = [(None, None), (None, None), (_POSITIVE_FLOOR, None)]
    return minimize_nll(nll, x0, bounds, **kwargs)


def fit_poisson(counts: ArrayLike, *, x0: ArrayLike | None = None, **kwargs) -> MLESolution:
    """Maximum-likelihood Poisson rate (the sample mean)."""
    nll = NegLogLik.poisson(counts)
    if x0 is None:
        x0 = [max(float(np.median(nll.data[0])), 1.0)]
    return minimize_nll(nll, x0, [(_POSITIVE_FLOOR, None)], **kwargs)


def fit_binomial(
    successes: ArrayLike,
    trials: ArrayLike,
    *,
    x0: ArrayLike | None = None,
    **kwargs,
) -> MLESolution:
    """Maximum-likelihood binomial probability (pooled success rate)."""
    nll = NegLogLik.binomial(successes, trials)
    if x0 is None:
        x0 = [0.5]
    return minimize_nll(nll, x0, [(_POSITIVE_FLOOR, 1.0 - _POSITIVE_FLOOR)], **kwargs)


def _robust_variance(data: NDArray) -> float:
    """Starting variance from the interquartile range; 1.0 if degenerate."""
    q75, q25 = np.percentile(data, [75, 25])
    v = ((q75 - q25) / 1.349) ** 2
    return float(v) if v > 0 else 1.0
