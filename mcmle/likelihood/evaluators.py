"""
Negative log-likelihood evaluators.

Every evaluator is a pure function of (params, *data): the dataset is an
explicit argument, never captured from an enclosing scope, so two calls
with the same arguments always agree and evaluators can be tested alone.

Points outside a model's support (variance <= 0, rate <= 0, probability
outside [0, 1], non-finite parameters) evaluate to +inf. Both bounded and
unbounded scipy optimizers treat +inf as "reject this step". Pass
strict=True to raise DomainViolationError instead.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats

from mcmle.core.exceptions import DimensionError, DomainViolationError
from mcmle.core.validation import check_1d, check_array, check_consistent_length, check_positive


def normal_nll(
    params: ArrayLike,
    x: ArrayLike,
    *,
    sigma2: float | None = None,
    strict: bool = False,
) -> float:
    """
    Normal negative log-likelihood in the variance parameterisation.

    Parameters
    ----------
    params : array-like
        (mu,) when sigma2 is fixed, otherwise (mu, sigma2).
    x : array-like
        Observations.
    sigma2 : float or None
        Known variance. Must be > 0 when given.
    strict : bool
        Raise DomainViolationError instead of returning +inf.

    Returns
    -------
    float
        -sum(log N(x_i; mu, sigma2)).
    """
    if sigma2 is None:
        mu, s2 = _unpack(params, 2, "normal_nll")
    else:
        sigma2 = check_positive(sigma2, "sigma2")
        (mu,) = _unpack(params, 1, "normal_nll")
        s2 = sigma2
    x = _vector(x, "x")

    if not (np.isfinite(mu) and np.isfinite(s2) and s2 > 0):
        return _outside(params, "normal_nll requires finite mu and sigma2 > 0", strict)

    return float(-np.sum(stats.norm.logpdf(x, loc=mu, scale=np.sqrt(s2))))


def linear_nll(
    params: ArrayLike,
    x: ArrayLike,
    y: ArrayLike,
    *,
    strict: bool = False,
) -> float:
    """
    Simple linear regression y = a + b x + e, e ~ N(0, sigma2).

    params is (intercept, slope, sigma2).
    """
    a, b, s2 = _unpack(params, 3, "linear_nll")
    x = _vector(x, "x")
    y = _vector(y, "y")
    check_consistent_length(x, y, names=("x", "y"))

    if not (np.isfinite(a) and np.isfinite(b) and np.isfinite(s2) and s2 > 0):
        return _outside(params, "linear_nll requires finite coefficients and sigma2 > 0", strict)

    resid = y - a - b * x
    return float(-np.sum(stats.norm.logpdf(resid, loc=0.0, scale=np.sqrt(s2))))


def poisson_nll(params: ArrayLike, counts: ArrayLike, *, strict: bool = False) -> float:
    """Poisson negative log-likelihood; params is (lam,)."""
    (lam,) = _unpack(params, 1, "poisson_nll")
    counts = _vector(counts, "counts")

    if not (np.isfinite(lam) and lam > 0):
        return _outside(params, "poisson_nll requires lam > 0", strict)

    return float(-np.sum(stats.poisson.logpmf(counts, lam)))


def binomial_nll(
    params: ArrayLike,
    successes: ArrayLike,
    trials: ArrayLike,
    *,
    strict: bool = False,
) -> float:
    """Binomial negative log-likelihood; params is (p,)."""
    (p,) = _unpack(params, 1, "binomial_nll")
    k = _vector(successes, "successes")
    m = _vector(trials, "trials")
    check_consistent_length(k, m, names=("successes", "trials"))

    if not (np.isfinite(p) and 0.0 <= p <= 1.0):
        return _outside(params, "binomial_nll requires 0 <= p <= 1", strict)

    return float(-np.sum(stats.binom.logpmf(k, m, p)))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _unpack(params: ArrayLike, k: int, name: str) -> NDArray[np.floating[Any]]:
    theta = np.atleast_1d(np.asarray(params, dtype=np.float64))
    if theta.ndim != 1 or theta.shape[0] != k:
        raise DimensionError(
            f"{name}: expected a parameter vector of length {k}, got shape {theta.shape}"
        )
    return theta


def _vector(data: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    arr = check_array(data, name)
    check_1d(arr, name)
    return arr


def _outside(params: ArrayLike, message: str, strict: bool) -> float:
    if strict:
        raise DomainViolationError(
            f"{message}; got params={np.asarray(params).tolist()}", params=params
        )
    return float('inf')


# ---------------------------------------------------------------------------
# Analytic gradients (same signatures as the evaluators)
# ---------------------------------------------------------------------------

def normal_nll_grad(
    params: ArrayLike,
    x: ArrayLike,
    *,
    sigma2: float | None = None,
    strict: bool = False,
) -> NDArray[np.floating[Any]]:
    """Gradient of normal_nll with respect to params."""
    x = _vector(x, "x")
    n = x.shape[0]
    if sigma2 is None:
        mu, s2 = _unpack(params, 2, "normal_nll_grad")
    else:
        (mu,) = _unpack(params, 1, "normal_nll_grad")
        s2 = check_positive(sigma2, "sigma2")
    if not (np.isfinite(mu) and np.isfinite(s2) and s2 > 0):
        _outside(params, "normal_nll_grad requires finite mu and sigma2 > 0", strict)
        return np.full(1 if sigma2 is not None else 2, np.nan)

    resid = x - mu
    d_mu = -np.sum(resid) / s2
    if sigma2 is not None:
        return np.array([d_mu])
    d_s2 = n / (2.0 * s2) - np.sum(resid ** 2) / (2.0 * s2 ** 2)
    return np.array([d_mu, d_s2])


def linear_nll_grad(
    params: ArrayLike,
    x: ArrayLike,
    y: ArrayLike,
    *,
    strict: bool = False,
) -> NDArray[np.floating[Any]]:
    """Gradient of linear_nll with respect to (intercept, slope, sigma2)."""
    a, b, s2 = _unpack(params, 3, "linear_nll_grad")
    x = _vector(x, "x")
    y = _vector(y, "y")
    if not (np.isfinite(a) and np.isfinite(b) and np.isfinite(s2) and s2 > 0):
        _outside(params, "linear_nll_grad requires sigma2 > 0", strict)
        return np.full(3, np.nan)

    resid = y - a - b * x
    n = x.shape[0]
    return np.array([
        -np.sum(resid) / s2,
        -np.sum(resid * x) / s2,
        n / (2.0 * s2) - np.sum(resid ** 2) / (2.0 * s2 ** 2),
    ])


def poisson_nll_grad(
    params: ArrayLike,
    counts: ArrayLike,
    *,
    strict: bool = False,
) -> NDArray[np.floating[Any]]:
    """Gradient of poisson_nll with respect to lam."""
    (lam,) = _unpack(params, 1, "poisson_nll_grad")
    counts = _vector(counts, "counts")
    if not (np.isfinite(lam) and lam > 0):
        _outside(params, "poisson_nll_grad requires lam > 0", strict)
        return np.full(1, np.nan)
    return np.array([counts.shape[0] - np.sum(counts) / lam])


def binomial_nll_grad(
    params: ArrayLike,
    successes: ArrayLike,
    trials: ArrayLike,
    *,
    strict: bool = False,
) -> NDArray[np.floating[Any]]:
    """Gradient of binomial_nll with respect to p, on the open interval (0, 1)."""
    (p,) = _unpack(params, 1, "binomial_nll_grad")
    k = _vector(successes, "successes")
    m = _vector(trials, "trials")
    if not (np.isfinite(p) and 0.0 < p < 1.0):
        _outside(params, "binomial_nll_grad requires 0 < p < 1", strict)
        return np.full(1, np.nan)
    return np.array([-np.sum(k) / p + np.sum(m - k) / (1.0 - p)])
