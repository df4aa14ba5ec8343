"""
MLEDesign: a validated minimisation problem for the optimizer adapter.

Holds the objective, starting point, per-parameter box bounds and solver
settings. Every structural problem (length mismatches, a start outside
the box, a start where the likelihood is not finite) is caught here,
before scipy is ever called.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from mcmle.core.exceptions import DimensionError, DomainViolationError, InvalidArgumentError
from mcmle.core.validation import check_count

Bound = tuple[float | None, float | None]

# Methods of scipy.optimize.minimize that accept bounds
BOUNDED_METHODS = ('L-BFGS-B', 'TNC', 'SLSQP', 'Powell', 'Nelder-Mead', 'trust-constr')
UNBOUNDED_METHODS = ('BFGS', 'CG')
GRADIENT_METHODS = ('L-BFGS-B', 'TNC', 'SLSQP', 'trust-constr', 'BFGS', 'CG')


@dataclass(frozen=True)
class MLEDesign:
    """
    Frozen description of a negative log-likelihood minimisation.

    Attributes:
        objective: fn(params) -> float
        jac: Analytic gradient fn(params) -> array, or None for finite differences
        x0: Starting point (read-only)
        bounds: One (lower, upper) pair per parameter; None means unbounded
        method: scipy.optimize.minimize method name
        tol: Convergence tolerance passed to scipy
        max_iter: Iteration budget
        names: Parameter names, for summaries
        n_observations: Data size, for BIC; None if unknown
    """
    objective: Callable[[NDArray], float]
    jac: Callable[[NDArray], NDArray] | None
    x0: NDArray[np.floating[Any]]
    bounds: tuple[Bound, ...]
    method: str
    tol: float
    max_iter: int
    names: tuple[str, ...]
    n_observations: int | None

    @classmethod
    def for_objective(
        cls,
        objective: Callable[[NDArray], float],
        x0: ArrayLike,
        bounds: Sequence[Bound] | None = None,
        *,
        method: str = 'L-BFGS-B',
        tol: float | None = None,
        max_iter: int = 1000,
        jac: Callable[[NDArray], NDArray] | None = None,
    ) -> MLEDesign:
        """
        Build and validate a minimisation problem.

        A NegLogLik objective contributes its analytic gradient, parameter
        names and observation count automatically.

        Args:
            objective: fn(params) -> float.
            x0: Finite starting point.
            bounds: Sequence of (lower, upper) pairs, one per parameter.
                None (or +/-inf) leaves a side unbounded.
            method: scipy.optimize.minimize method.
            tol: Tolerance; default 1e-10 with an analytic gradient,
                1e-8 with finite differences.
            max_iter: Maximum iterations (>= 1).
            jac: Explicit gradient, overriding the objective's own.

        Raises:
            InvalidArgumentError: Unknown method, non-finite x0, x0 outside
                bounds, lower > upper, bounds given to an unbounded method.
            DimensionError: x0, bounds and the objective disagree on the
                number of parameters.
            DomainViolationError: The objective is not finite at x0.
        """
        if not callable(objective):
            raise InvalidArgumentError("objective must be callable fn(params) -> float")

        if method not in BOUNDED_METHODS + UNBOUNDED_METHODS:
            raise InvalidArgumentError(
                f"Unknown method: {method!r}. "
                f"Use one of {', '.join(BOUNDED_METHODS + UNBOUNDED_METHODS)}."
            )

        start = np.atleast_1d(np.asarray(x0, dtype=np.float64))
        if start.ndim != 1 or start.size == 0:
            raise DimensionError(f"x0: expected a non-empty 1D vector, got shape {start.shape}")
        if not np.all(np.isfinite(start)):
            raise InvalidArgumentError(f"x0: must be finite, got {start.tolist()}")
        k = start.shape[0]

        n_params = getattr(objective, 'n_params', None)
        if n_params is not None and n_params != k:
            raise DimensionError(
                f"objective expects {n_params} parameters but x0 has {k}"
            )

        box = _normalise_bounds(bounds, k)
        if method in UNBOUNDED_METHODS and any(lo is not None or hi is not None for lo, hi in box):
            raise InvalidArgumentError(
                f"method {method!r} does not support bounds; use 'L-BFGS-B'"
            )
        for i, ((lo, hi), v) in enumerate(zip(box, start)):
            if (lo is not None and v < lo) or (hi is not None and v > hi):
                raise InvalidArgumentError(
                    f"x0[{i}]={v} lies outside its bounds ({lo}, {hi})"
                )

        max_iter = check_count(max_iter, "max_iter", minimum=1)

        if jac is None and getattr(objective, 'has_gradient', False):
            jac = objective.gradient
        if jac is not None and method not in GRADIENT_METHODS:
            jac = None

        if tol is None:
            tol = 1e-10 if jac is not None else 1e-8
        elif not (np.isfinite(tol) and tol > 0):
            raise InvalidArgumentError(f"tol must be finite and > 0, got {tol}")

        f0 = objective(start)
        if not np.isfinite(f0):
            raise DomainViolationError(
                f"objective is not finite at x0={start.tolist()} (value {f0})",
                params=start,
            )

        names = tuple(getattr(objective, 'names', ()) or ())
        if len(names) != k:
            names = tuple(f"theta{i + 1}" for i in range(k))

        start.flags.writeable = False
        return cls(
            objective=objective,
            jac=jac,
            x0=start,
            bounds=box,
            method=method,
            tol=float(tol),
            max_iter=max_iter,
            names=names,
            n_observations=getattr(objective, 'n_observations', None),
        )

    @property
    def n_params(self) -> int:
        return int(self.x0.shape[0])

    @property
    def scipy_bounds(self) -> list[Bound] | None:
        """Bounds in scipy's format, or None when the method takes none."""
        if self.method in UNBOUNDED_METHODS:
            return None
        return list(self.bounds)


def _normalise_bounds(bounds: Sequence[Bound] | None, k: int) -> tuple[Bound, ...]:
    if bounds is None:
        return tuple((None, None) for _ in range(k))

    bounds = list(bounds)
    if len(bounds) != k:
        raise DimensionError(
            f"bounds has {len(bounds)} entries but there are {k} parameters"
        )

    out = []
    for i, pair in enumerate(bounds):
        if pair is None:
            out.append((None, None))
            continue
        try:
            lo, hi = pair
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(
                f"bounds[{i}]: expected a (lower, upper) pair, got {pair!r}"
            ) from e
        lo = _side(lo, i, "lower")
        hi = _side(hi, i, "upper")
        if lo is not None and hi is not None and lo > hi:
            raise InvalidArgumentError(f"bounds[{i}]: lower {lo} > upper {hi}")
        out.append((lo, hi))
    return tuple(out)


def _side(value: Any, i: int, which: str) -> float | None:
    if value is None:
        return None
    value = float(value)
    if np.isnan(value):
        raise InvalidArgumentError(f"bounds[{i}]: {which} bound is NaN")
    if np.isinf(value):
        return None
    return value
