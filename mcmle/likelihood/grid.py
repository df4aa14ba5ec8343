"""
Grid evaluation of a likelihood surface.

Evaluates a negative log-likelihood over the Cartesian product of one or
two parameter axes. The grid minimum is a coarse maximum-likelihood
estimate and a sensible starting point for a numerical optimizer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from mcmle.core.exceptions import DomainViolationError, InvalidArgumentError
from mcmle.core.validation import check_1d, check_array, check_finite, check_min_samples


@dataclass(frozen=True)
class LikelihoodSurface:
    """
    Negative log-likelihood evaluated on a grid.

    Attributes:
        axes: One 1D array per parameter
        values: nll values, shape (len(axes[0]), len(axes[1]), ...)
        argmin: Grid point with the smallest nll
        min_value: nll at argmin
    """
    axes: tuple[NDArray[np.floating[Any]], ...]
    values: NDArray[np.floating[Any]]
    argmin: tuple[float, ...]
    min_value: float

    @property
    def loglik(self) -> NDArray[np.floating[Any]]:
        """Log-likelihood surface (negated values)."""
        return -self.values

    @property
    def shape(self) -> tuple[int, ...]:
        return self.values.shape


def likelihood_grid(
    nll: Callable[[NDArray], float],
    axes: Sequence[ArrayLike],
) -> LikelihoodSurface:
    """
    Evaluate nll at every point of the grid spanned by axes.

    Parameters
    ----------
    nll : callable
        fn(params) -> float, e.g. a NegLogLik.
    axes : sequence of array-like
        One or two 1D parameter axes, each with at least one point.

    Returns
    -------
    LikelihoodSurface

    Raises
    ------
    InvalidArgumentError
        If there are not one or two axes.
    DomainViolationError
        If nll is +inf at every grid point.

    Examples
    --------
    >>> nll = NegLogLik.normal(x)
    >>> surface = likelihood_grid(nll, [np.linspace(-1, 1, 201),
    ...                                 np.linspace(0.1, 2, 191)])
    >>> surface.argmin
    """
    if len(axes) not in (1, 2):
        raise InvalidArgumentError(
            f"likelihood_grid supports 1 or 2 axes, got {len(axes)}"
        )

    grid_axes = []
    for i, axis in enumerate(axes):
        a = check_array(axis, f"axes[{i}]")
        check_1d(a, f"axes[{i}]")
        check_min_samples(a, 1, f"axes[{i}]")
        check_finite(a, f"axes[{i}]")
        a = np.array(a, copy=True)
        a.flags.writeable = False
        grid_axes.append(a)

    shape = tuple(len(a) for a in grid_axes)
    values = np.empty(shape, dtype=np.float64)
    for index in np.ndindex(*shape):
        point = np.array([grid_axes[k][j] for k, j in enumerate(index)])
        values[index] = nll(point)

    finite = np.isfinite(values)
    if not np.any(finite):
        raise DomainViolationError(
            "negative log-likelihood is not finite anywhere on the grid"
        )

    masked = np.where(finite, values, np.inf)
    best = np.unravel_index(int(np.argmin(masked)), shape)
    argmin = tuple(float(grid_axes[k][j]) for k, j in enumerate(best))

    values.flags.writeable = False
    return LikelihoodSurface(
        axes=tuple(grid_axes),
        values=values,
        argmin=argmin,
        min_value=float(values[best]),
    )
